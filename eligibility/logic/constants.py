"""
Eligibility Engine Constants

Defines the status vocabularies, classifier keyword tables, priorities,
score weights and fallback messages used by the eligibility engine.
All values are deterministic; extend the keyword tables here, not at call sites.
"""

from enum import Enum
from typing import Dict, Tuple


# =============================================================================
# STATUS VOCABULARIES
# =============================================================================

class CourseStatus(str, Enum):
    """Per-course eligibility verdict for a chosen partner university."""
    APPROVED = "approved"
    CONDITIONAL = "conditional"
    PENDING = "pending"
    MISSING = "missing"


class MatchStatus(str, Enum):
    """Classification of a single catalog mapping row."""
    APPROVED = "approved"
    CONDITIONAL = "conditional"
    PENDING = "pending"
    NOT_APPROVED = "notApproved"


# =============================================================================
# CLASSIFIER KEYWORDS
# =============================================================================

# Each entry: (exact values, substring keywords)
STATUS_KEYWORDS: Dict[MatchStatus, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    MatchStatus.APPROVED: (
        ("approved", "yes", "pre-approved"),
        ("approved", "pre-approved", "confirmed"),
    ),
    MatchStatus.NOT_APPROVED: (
        ("notapproved", "no"),
        ("not approved", "rejected", "denied"),
    ),
    MatchStatus.CONDITIONAL: (
        ("conditional",),
        ("conditional", "provisional", "pending syllabus"),
    ),
}

# Status used when the free text is empty or unrecognised
DEFAULT_MATCH_STATUS = MatchStatus.PENDING


# =============================================================================
# PRIORITIES & SCORING
# =============================================================================

STATUS_PRIORITY: Dict[MatchStatus, int] = {
    MatchStatus.APPROVED: 4,
    MatchStatus.CONDITIONAL: 3,
    MatchStatus.PENDING: 2,
    MatchStatus.NOT_APPROVED: 1,
}

# Weights for the recommendation quality score
SCORE_WEIGHTS: Dict[MatchStatus, int] = {
    MatchStatus.APPROVED: 4,
    MatchStatus.CONDITIONAL: 2,
    MatchStatus.PENDING: 1,
    MatchStatus.NOT_APPROVED: -2,
}

# Row classification -> course verdict at the chosen university.
# A rejected row is surfaced as pending so the student can follow up.
COURSE_STATUS_FOR_MATCH: Dict[MatchStatus, CourseStatus] = {
    MatchStatus.APPROVED: CourseStatus.APPROVED,
    MatchStatus.CONDITIONAL: CourseStatus.CONDITIONAL,
    MatchStatus.PENDING: CourseStatus.PENDING,
    MatchStatus.NOT_APPROVED: CourseStatus.PENDING,
}


# =============================================================================
# DUPLICATE-ROW POLICIES
# =============================================================================

class DuplicateRowPolicy(str, Enum):
    """How several rows for the same (university, course code) are resolved."""
    FIRST_MATCH = "first_match"            # first row in catalog order
    HIGHEST_PRIORITY = "highest_priority"  # best status; first row on ties


EVALUATION_POLICY = DuplicateRowPolicy.FIRST_MATCH
RECOMMENDATION_POLICY = DuplicateRowPolicy.HIGHEST_PRIORITY


# =============================================================================
# MESSAGES
# =============================================================================

APPROVED_MESSAGE = "Approved match found."

FALLBACK_MESSAGES: Dict[MatchStatus, str] = {
    MatchStatus.NOT_APPROVED: "This course is not approved for credit transfer.",
    MatchStatus.CONDITIONAL: "Conditional approval. Please attach supporting documents.",
    MatchStatus.PENDING: "Awaiting final approval from department.",
}

MISSING_ELSEWHERE_MESSAGE = (
    "{code} is not offered at {university}. "
    "This course may be available at other partner universities."
)
MISSING_EVERYWHERE_MESSAGE = (
    "{code} is not found in our course database. "
    "Please verify the course code or contact your advisor."
)
