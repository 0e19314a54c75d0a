"""
Data Contracts for the Eligibility Engine

Defines Pydantic models for catalog rows (input) and evaluations,
recommendations and summaries (output). These contracts are the API boundary
shared with the HTTP layer, the application store and email templates.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .constants import CourseStatus, MatchStatus


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class CourseMappingRow(BaseModel):
    """
    One catalog record: a home course mapped to a course at a partner university.
    Many rows share a university.
    """
    model_config = ConfigDict(frozen=True)

    country: str = ""
    university: str = ""
    home_course_code: str = ""
    host_course_title: str = ""
    status: str = ""  # free text from the spreadsheet
    notes: Optional[str] = None


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class EvaluatedCourse(BaseModel):
    """Verdict for one requested course code at the chosen university."""
    model_config = ConfigDict(use_enum_values=True)

    input_code: str
    normalized_code: str
    status: CourseStatus
    mapping: Optional[CourseMappingRow] = None
    message: str


class UniversityCourseMatch(BaseModel):
    """Best classification of one requested course at one university."""
    model_config = ConfigDict(use_enum_values=True)

    course_code: str
    status: MatchStatus
    host_course_title: Optional[str] = None
    notes: Optional[str] = None


class UniversityRecommendation(BaseModel):
    """
    Scored summary of how well one university covers the requested courses.
    """
    university: str
    country: str

    # Counts by status
    approved_count: int = 0
    conditional_count: int = 0
    pending_count: int = 0
    not_approved_count: int = 0

    # Scoring
    score: int = 0
    coverage: float = Field(default=0.0, ge=0.0, le=1.0)

    matched_courses: List[UniversityCourseMatch] = Field(default_factory=list)
    missing_courses: List[str] = Field(default_factory=list)
    total_requested: int = 0

    @property
    def matched_count(self) -> int:
        return len(self.matched_courses)


class EligibilitySummary(BaseModel):
    """Tally of evaluated courses."""
    all_approved: bool = True
    approved_count: int = 0
    conditional_count: int = 0
    pending_count: int = 0
    missing_count: int = 0
