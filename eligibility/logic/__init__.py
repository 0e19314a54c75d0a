"""
Eligibility Logic Module

Provides the deterministic course eligibility and university recommendation engine.
"""

from .contracts import (
    CourseMappingRow,
    EvaluatedCourse,
    UniversityCourseMatch,
    UniversityRecommendation,
    EligibilitySummary,
)
from .constants import CourseStatus, MatchStatus, DuplicateRowPolicy
from .classifier import normalize_code, classify_status, classify_mapping
from .evaluator import evaluate_course_codes, summarise_eligibility
from .engine import (
    EligibilityEngine,
    recommend_universities,
    list_countries,
    list_universities,
)

__all__ = [
    # Main engine
    "EligibilityEngine",
    "evaluate_course_codes",
    "recommend_universities",
    "summarise_eligibility",
    "list_countries",
    "list_universities",

    # Classification
    "normalize_code",
    "classify_status",
    "classify_mapping",

    # Contracts
    "CourseMappingRow",
    "EvaluatedCourse",
    "UniversityCourseMatch",
    "UniversityRecommendation",
    "EligibilitySummary",

    # Enums
    "CourseStatus",
    "MatchStatus",
    "DuplicateRowPolicy",
]
