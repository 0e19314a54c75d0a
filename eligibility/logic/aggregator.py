"""
University Aggregator

Groups catalog rows by university and combines the classifications of the
requested courses into one UniversityRecommendation per university.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .contracts import CourseMappingRow, UniversityCourseMatch, UniversityRecommendation
from .classifier import normalize_code, classify_mapping, prefers
from .constants import MatchStatus, STATUS_PRIORITY, SCORE_WEIGHTS, RECOMMENDATION_POLICY


@dataclass
class UniversityAggregate:
    """Working state for one university while rows are folded in."""
    display_name: str
    country: str
    per_course: Dict[str, UniversityCourseMatch] = field(default_factory=dict)


def requested_code_set(codes: Iterable[str]) -> List[str]:
    """Normalize and dedupe codes, keeping first-seen order."""
    seen: Dict[str, None] = {}
    for code in codes:
        normalized = normalize_code(code)
        if normalized:
            seen.setdefault(normalized, None)
    return list(seen)


def _priority(status) -> int:
    return STATUS_PRIORITY[MatchStatus(status)]


def group_by_university(
    catalog: Sequence[CourseMappingRow],
    requested: Sequence[str]
) -> Dict[str, UniversityAggregate]:
    """
    Fold catalog rows for the requested codes into per-university aggregates.

    Universities are keyed by trimmed, lowercased name. Display name and
    country come from the first row seen for that key. When several rows map
    the same code at one university the highest-priority status wins; on a
    tie the earlier row is kept.

    Args:
        catalog: Catalog snapshot
        requested: Normalized, deduplicated requested codes

    Returns:
        Dict of university key -> UniversityAggregate, in first-seen order
    """
    wanted = set(requested)
    aggregates: Dict[str, UniversityAggregate] = {}

    for row in catalog:
        course_code = normalize_code(row.home_course_code)
        if not course_code or course_code not in wanted:
            continue

        university = (row.university or "").strip()
        if not university:
            continue

        key = university.lower()
        aggregate = aggregates.get(key)
        if aggregate is None:
            aggregate = UniversityAggregate(display_name=university, country=row.country)
            aggregates[key] = aggregate

        candidate = UniversityCourseMatch(
            course_code=course_code,
            status=classify_mapping(row),
            host_course_title=row.host_course_title,
            notes=row.notes,
        )

        current = aggregate.per_course.get(course_code)
        if prefers(candidate.status, current.status if current else None, RECOMMENDATION_POLICY):
            aggregate.per_course[course_code] = candidate

    return aggregates


def build_recommendation(
    aggregate: UniversityAggregate,
    requested: Sequence[str]
) -> UniversityRecommendation:
    """Compute counts, coverage and score for one university."""
    matched = sorted(
        aggregate.per_course.values(),
        key=lambda match: _priority(match.status),
        reverse=True
    )

    counts = {status: 0 for status in MatchStatus}
    for match in matched:
        counts[MatchStatus(match.status)] += 1

    score = sum(SCORE_WEIGHTS[status] * count for status, count in counts.items())
    missing = [code for code in requested if code not in aggregate.per_course]

    return UniversityRecommendation(
        university=aggregate.display_name,
        country=aggregate.country,
        approved_count=counts[MatchStatus.APPROVED],
        conditional_count=counts[MatchStatus.CONDITIONAL],
        pending_count=counts[MatchStatus.PENDING],
        not_approved_count=counts[MatchStatus.NOT_APPROVED],
        score=score,
        coverage=len(matched) / len(requested),
        matched_courses=matched,
        missing_courses=missing,
        total_requested=len(requested),
    )


def batch_aggregate(
    catalog: Sequence[CourseMappingRow],
    requested: Sequence[str]
) -> List[UniversityRecommendation]:
    """
    Build recommendations for every university with at least one match.

    Args:
        catalog: Catalog snapshot
        requested: Normalized, deduplicated requested codes (non-empty)

    Returns:
        Unranked list of UniversityRecommendation
    """
    return [
        build_recommendation(aggregate, requested)
        for aggregate in group_by_university(catalog, requested).values()
        if aggregate.per_course
    ]
