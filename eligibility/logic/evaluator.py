"""
Single-University Evaluator

Evaluates requested course codes against one partner university and tallies
the verdicts. Pure functions: no I/O, no exceptions for data problems.
"""

from typing import Iterable, List, Optional, Sequence

from .contracts import CourseMappingRow, EvaluatedCourse, EligibilitySummary
from .classifier import normalize_code, classify_mapping, prefers
from .constants import (
    CourseStatus,
    MatchStatus,
    DuplicateRowPolicy,
    EVALUATION_POLICY,
    COURSE_STATUS_FOR_MATCH,
    APPROVED_MESSAGE,
    FALLBACK_MESSAGES,
    MISSING_ELSEWHERE_MESSAGE,
    MISSING_EVERYWHERE_MESSAGE,
)


def _university_key(name: str) -> str:
    return (name or "").strip().lower()


def find_mapping(
    catalog: Sequence[CourseMappingRow],
    university: str,
    normalized_code: str,
    policy: DuplicateRowPolicy = EVALUATION_POLICY
) -> Optional[CourseMappingRow]:
    """
    Find the row for a university and course code.

    Args:
        catalog: Catalog snapshot
        university: University name, compared trimmed and case-insensitively
        normalized_code: Already-normalized course code
        policy: How duplicate rows are resolved (first row by default)

    Returns:
        The selected row, or None
    """
    target = _university_key(university)
    selected: Optional[CourseMappingRow] = None
    selected_status: Optional[MatchStatus] = None

    for row in catalog:
        if _university_key(row.university) != target or normalize_code(row.home_course_code) != normalized_code:
            continue
        if policy == DuplicateRowPolicy.FIRST_MATCH:
            return row
        status = classify_mapping(row)
        if prefers(status, selected_status, policy):
            selected, selected_status = row, status

    return selected


def code_exists_anywhere(catalog: Sequence[CourseMappingRow], normalized_code: str) -> bool:
    return any(normalize_code(row.home_course_code) == normalized_code for row in catalog)


def evaluate_course(
    input_code: str,
    catalog: Sequence[CourseMappingRow],
    university: str
) -> EvaluatedCourse:
    """Evaluate a single course code at one university."""
    code = normalize_code(input_code)
    mapping = find_mapping(catalog, university, code)

    if mapping is None:
        template = (
            MISSING_ELSEWHERE_MESSAGE
            if code_exists_anywhere(catalog, code)
            else MISSING_EVERYWHERE_MESSAGE
        )
        return EvaluatedCourse(
            input_code=code,
            normalized_code=code,
            status=CourseStatus.MISSING,
            message=template.format(code=code, university=university),
        )

    classification = classify_mapping(mapping)

    if classification == MatchStatus.APPROVED:
        message = APPROVED_MESSAGE
    else:
        message = mapping.notes if mapping.notes is not None else FALLBACK_MESSAGES[classification]

    return EvaluatedCourse(
        input_code=code,
        normalized_code=code,
        status=COURSE_STATUS_FOR_MATCH[classification],
        mapping=mapping,
        message=message,
    )


def evaluate_course_codes(
    codes: Iterable[str],
    catalog: Sequence[CourseMappingRow],
    country: str,
    university: str
) -> List[EvaluatedCourse]:
    """
    Evaluate every requested code at the chosen university.

    Codes that normalize to an empty string are dropped. Duplicates are kept:
    each remaining input position yields one result, in input order.

    Args:
        codes: Raw course codes as typed by the student
        catalog: Catalog snapshot
        country: Chosen country (informational; universities are unique per country)
        university: Chosen partner university

    Returns:
        List of EvaluatedCourse
    """
    return [
        evaluate_course(code, catalog, university)
        for code in codes
        if normalize_code(code)
    ]


def summarise_eligibility(evaluations: Iterable[EvaluatedCourse]) -> EligibilitySummary:
    """
    Count evaluations per status.

    all_approved is True only when nothing is conditional, pending or missing,
    so an empty list counts as all approved.
    """
    counts = {status: 0 for status in CourseStatus}
    for evaluation in evaluations:
        counts[CourseStatus(evaluation.status)] += 1

    return EligibilitySummary(
        all_approved=(
            counts[CourseStatus.CONDITIONAL] == 0
            and counts[CourseStatus.PENDING] == 0
            and counts[CourseStatus.MISSING] == 0
        ),
        approved_count=counts[CourseStatus.APPROVED],
        conditional_count=counts[CourseStatus.CONDITIONAL],
        pending_count=counts[CourseStatus.PENDING],
        missing_count=counts[CourseStatus.MISSING],
    )
