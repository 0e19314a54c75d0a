import secrets
from typing import Any
from sqlalchemy.orm import Session
from sqlalchemy import select
from models.models_application import ExchangeApplication, utcnow
from models.schemas_application import ApplicationStatus

DRAFT_PREFIX = "draft-"

def generate_application_id() -> str:
    return secrets.token_hex(8)

def generate_draft_id() -> str:
    return f"{DRAFT_PREFIX}{secrets.token_hex(6)}"

def generate_comment_id() -> str:
    return secrets.token_hex(6)

def get_application(db: Session, application_id: str) -> ExchangeApplication | None:
    return db.get(ExchangeApplication, application_id)

def list_applications(db: Session) -> list[ExchangeApplication]:
    stmt = select(ExchangeApplication).order_by(ExchangeApplication.submitted_at.desc())
    return list(db.execute(stmt).scalars())

def create_application(db: Session, **fields: Any) -> ExchangeApplication:
    now = utcnow()
    application = ExchangeApplication(
        id=fields.pop("id", None) or generate_application_id(),
        status=fields.pop("status", ApplicationStatus.SUBMITTED.value),
        submitted_at=now,
        updated_at=now,
        **fields,
    )
    db.add(application)
    db.flush()
    return application

def update_application(db: Session, application_id: str, **changes: Any) -> ExchangeApplication | None:
    application = get_application(db, application_id)
    if not application:
        return None
    for key, value in changes.items():
        setattr(application, key, value)
    application.touch()
    db.flush()
    return application

def delete_application(db: Session, application_id: str) -> bool:
    application = get_application(db, application_id)
    if not application:
        return False
    db.delete(application)
    db.flush()
    return True

def add_comment(db: Session, application_id: str, *, comment_type: str, message: str, page: str, created_by: str) -> tuple[ExchangeApplication, dict] | None:
    application = get_application(db, application_id)
    if not application:
        return None
    comment = {
        "id": generate_comment_id(),
        "type": comment_type,
        "message": message,
        "page": page,
        "created_at": utcnow().isoformat(),
        "created_by": created_by,
    }
    # reassign so the JSON column is flagged dirty
    application.admin_comments = [*(application.admin_comments or []), comment]
    application.touch()
    db.flush()
    return application, comment

def save_draft(db: Session, draft_id: str | None, **fields: Any) -> ExchangeApplication:
    """Update the draft when it exists and is still a draft; otherwise start a new one."""
    provided = {k: v for k, v in fields.items() if v is not None}
    if draft_id:
        existing = get_application(db, draft_id)
        if existing and existing.status == ApplicationStatus.DRAFT.value:
            return update_application(db, draft_id, **provided)

    defaults = {
        "student_name": "",
        "student_id": "",
        "student_email": "",
        "student_nationality": "",
        "student_college": "",
        "student_major": "",
        "student_cgpa": "",
        "country": "",
        "university": "",
        "courses": [],
    }
    defaults.update(provided)
    return create_application(
        db,
        id=generate_draft_id(),
        status=ApplicationStatus.DRAFT.value,
        all_approved=False,
        **defaults,
    )

def get_draft(db: Session, draft_id: str) -> ExchangeApplication | None:
    application = get_application(db, draft_id)
    if application and application.status == ApplicationStatus.DRAFT.value:
        return application
    return None
