from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, constr, field_validator

from eligibility.logic.constants import CourseStatus


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    AWAITING_NOMINATION = "awaiting_nomination"
    NOMINATED = "nominated"
    SESSION_BOOKED = "session_booked"
    SESSION_COMPLETED = "session_completed"
    APPROVED = "approved"
    REJECTED = "rejected"


class NextStepAction(str, Enum):
    BOOK_ADVISING = "book_advising"
    NOMINATION_REQUEST = "nomination_request"


class AdminCommentType(str, Enum):
    NOTE = "note"
    DOCUMENT_REQUEST = "document_request"
    PROCESS_UPDATE = "process_update"


class AdminCommentPage(str, Enum):
    STEP_0 = "step_0"
    STEP_1 = "step_1"
    STEP_2 = "step_2"
    STEP_3 = "step_3"
    SUCCESS_PAGE = "success_page"


# Statuses that trigger the nomination email when reached
NOMINATION_STATUSES = {ApplicationStatus.NOMINATED.value, ApplicationStatus.APPROVED.value}


def _check_cgpa(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return value
    try:
        cgpa = float(value)
    except ValueError:
        raise ValueError("CGPA must be between 0.0 and 4.0")
    if not 0.0 <= cgpa <= 4.0:
        raise ValueError("CGPA must be between 0.0 and 4.0")
    return value


class CourseEvaluationIn(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    code: str
    status: CourseStatus
    host_course_title: Optional[str] = None
    message: str
    notes: Optional[str] = None


class ApplicationSubmit(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    student_name: constr(min_length=1, max_length=100)
    student_id: constr(min_length=1, max_length=50)
    student_email: EmailStr
    student_nationality: constr(min_length=1, max_length=100)
    student_college: constr(min_length=1, max_length=200)
    student_major: constr(min_length=1, max_length=200)
    student_cgpa: str
    personal_statement: Optional[constr(max_length=2000)] = None
    country: constr(min_length=1, max_length=100)
    university: constr(min_length=1, max_length=200)
    courses: List[CourseEvaluationIn] = Field(..., min_length=1)
    all_approved: bool
    next_step_action: Optional[NextStepAction] = None
    student_notes: Optional[str] = None

    @field_validator("student_email")
    @classmethod
    def validate_email_length(cls, v):
        if v is not None and len(v) > 100:
            raise ValueError("Email must be at most 100 characters")
        return v

    @field_validator("student_cgpa")
    @classmethod
    def validate_cgpa(cls, v: str) -> str:
        if not v:
            raise ValueError("CGPA must be between 0.0 and 4.0")
        return _check_cgpa(v)


class DraftSave(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None
    student_name: Optional[constr(max_length=100)] = None
    student_id: Optional[constr(max_length=50)] = None
    student_email: Optional[EmailStr] = None
    student_nationality: Optional[constr(max_length=100)] = None
    student_college: Optional[constr(max_length=200)] = None
    student_major: Optional[constr(max_length=200)] = None
    student_cgpa: Optional[str] = None
    personal_statement: Optional[constr(max_length=2000)] = None
    country: Optional[constr(max_length=100)] = None
    university: Optional[constr(max_length=200)] = None
    courses: Optional[List[CourseEvaluationIn]] = None
    current_step: Optional[int] = None

    @field_validator("student_email")
    @classmethod
    def validate_email_length(cls, v):
        if v is not None and len(v) > 100:
            raise ValueError("Email must be at most 100 characters")
        return v

    @field_validator("student_cgpa")
    @classmethod
    def validate_cgpa(cls, v: Optional[str]) -> Optional[str]:
        return _check_cgpa(v)


class AdminComment(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    type: AdminCommentType
    message: str
    page: AdminCommentPage
    created_at: datetime
    created_by: str


class AdminCommentIn(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    type: AdminCommentType
    message: constr(min_length=1)
    page: AdminCommentPage


class ApplicationUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: Optional[ApplicationStatus] = None
    admin_notes: Optional[str] = None


class ApplicationOut(BaseModel):
    id: str
    status: str
    student_name: str
    student_id: str
    student_email: str
    student_nationality: str
    student_college: str
    student_major: str
    student_cgpa: str
    personal_statement: Optional[str] = None
    country: str
    university: str
    courses: List[dict] = Field(default_factory=list)
    all_approved: bool
    next_step_action: Optional[str] = None
    student_notes: Optional[str] = None
    admin_notes: Optional[str] = None
    admin_comments: List[dict] = Field(default_factory=list)
    current_step: Optional[int] = None
    submitted_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ApplicationStatusOut(BaseModel):
    status: str
    updated_at: datetime


class AdminLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
