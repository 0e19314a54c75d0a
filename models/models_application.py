from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, JSON
from db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeApplication(Base):
    __tablename__ = "exchange_applications"
    __table_args__ = {'extend_existing': True}

    id = Column(String(32), primary_key=True)
    status = Column(String(32), nullable=False, default="submitted", index=True)

    # Student
    student_name = Column(String(100), nullable=False, default="")
    student_id = Column(String(50), nullable=False, default="")
    student_email = Column(String(100), nullable=False, default="", index=True)
    student_nationality = Column(String(100), nullable=False, default="")
    student_college = Column(String(200), nullable=False, default="")
    student_major = Column(String(200), nullable=False, default="")
    student_cgpa = Column(String(10), nullable=False, default="")
    personal_statement = Column(Text)

    # Destination
    country = Column(String(100), nullable=False, default="")
    university = Column(String(200), nullable=False, default="")
    courses = Column(JSON, nullable=False, default=list)
    all_approved = Column(Boolean, nullable=False, default=False)

    # Workflow
    next_step_action = Column(String(32))
    student_notes = Column(Text)
    admin_notes = Column(Text)
    admin_comments = Column(JSON, nullable=False, default=list)
    current_step = Column(Integer)

    submitted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def touch(self):
        self.updated_at = utcnow()
