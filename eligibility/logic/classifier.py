"""
Classifier

Normalizes course codes and classifies free-text approval statuses from the
course-mapping spreadsheet into the fixed match taxonomy:
- Approved
- Conditional
- Pending (also the default for unrecognised text)
- Not Approved
"""

from typing import Dict, Optional

from .contracts import CourseMappingRow
from .constants import (
    MatchStatus,
    DuplicateRowPolicy,
    STATUS_KEYWORDS,
    STATUS_PRIORITY,
    DEFAULT_MATCH_STATUS,
)


def normalize_code(code: str) -> str:
    """Trim whitespace and uppercase a course code."""
    return (code or "").strip().upper()


def _matches(status_value: str, category: MatchStatus) -> bool:
    exact, keywords = STATUS_KEYWORDS[category]
    return status_value in exact or any(keyword in status_value for keyword in keywords)


def status_flags(text: str) -> Dict[MatchStatus, bool]:
    """
    Evaluate every keyword predicate against the normalized status text.

    Returns:
        Dict mapping each keyword category to whether it matched
    """
    status_value = (text or "").strip().lower()
    return {category: _matches(status_value, category) for category in STATUS_KEYWORDS}


def classify_status(text: str) -> MatchStatus:
    """
    Classify free-text status into a MatchStatus.

    Resolution order (first wins):
    1. approved keywords without any not-approved keyword -> APPROVED
    2. not-approved keywords -> NOT_APPROVED
    3. conditional keywords -> CONDITIONAL
    4. anything else, including empty text -> PENDING

    Args:
        text: Free-text status, e.g. "Approved", "Rejected by dept"

    Returns:
        MatchStatus enum value
    """
    if not (text or "").strip():
        return DEFAULT_MATCH_STATUS

    flags = status_flags(text)

    if flags[MatchStatus.APPROVED] and not flags[MatchStatus.NOT_APPROVED]:
        return MatchStatus.APPROVED

    if flags[MatchStatus.NOT_APPROVED]:
        return MatchStatus.NOT_APPROVED

    if flags[MatchStatus.CONDITIONAL]:
        return MatchStatus.CONDITIONAL

    return DEFAULT_MATCH_STATUS


def classify_mapping(row: CourseMappingRow) -> MatchStatus:
    """Classify the status text of a catalog row."""
    return classify_status(row.status)


def prefers(
    candidate: MatchStatus,
    current: Optional[MatchStatus],
    policy: DuplicateRowPolicy
) -> bool:
    """Whether a later duplicate row should replace the one already kept."""
    if current is None:
        return True
    if policy == DuplicateRowPolicy.FIRST_MATCH:
        return False
    return STATUS_PRIORITY[MatchStatus(candidate)] > STATUS_PRIORITY[MatchStatus(current)]
