"""
Admin API Routes

Review endpoints for the international office: login, list/update/delete
applications and attach comments. Every endpoint except login requires a
bearer token issued by /api/admin/login.
"""

import logging
from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from db import get_db
from models.schemas_application import (
    AdminLogin,
    AdminCommentIn,
    ApplicationOut,
    ApplicationUpdate,
    TokenResponse,
    NOMINATION_STATUSES,
)
from utils.auth_utils import validate_admin_credentials, create_token, decode_token
from utils.crud_application import (
    get_application,
    list_applications,
    update_application,
    delete_application,
    add_comment,
)
from utils.email_service import send_nomination_approved_email, smtp_diagnostics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def admin_user(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")
    token = authorization.split(" ", 1)[1]
    try:
        data = decode_token(token)
    except Exception as e:
        logger.error("Token decode failed: %s", e)
        raise HTTPException(status_code=401, detail="Unauthorized")
    if data.get("role") != "admin":
        raise HTTPException(status_code=401, detail="Unauthorized")
    return data.get("sub")


def _notify_nomination(application: ApplicationOut) -> None:
    try:
        if not send_nomination_approved_email(application):
            logger.error("Nomination email failed for %s", application.id)
    except Exception as e:
        logger.error("Email system error: %s", e)


@router.post("/login", response_model=TokenResponse, summary="Admin login")
def login(payload: AdminLogin):
    if not validate_admin_credentials(payload.email, payload.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenResponse(access_token=create_token(payload.email.lower()))


@router.get("/verify", summary="Check admin token")
def verify(admin_email: str = Depends(admin_user)):
    return {"authenticated": True, "email": admin_email}


@router.get("/applications", summary="List applications, newest first")
def get_applications(admin_email: str = Depends(admin_user), db_session=Depends(get_db)):
    db: Session
    with db_session as db:
        return {"applications": [ApplicationOut.model_validate(a) for a in list_applications(db)]}


@router.patch("/applications/{application_id}", summary="Update status or admin notes")
def patch_application(
    application_id: str,
    payload: ApplicationUpdate,
    background_tasks: BackgroundTasks,
    admin_email: str = Depends(admin_user),
    db_session=Depends(get_db)
):
    changes = payload.model_dump(exclude_none=True)

    db: Session
    with db_session as db:
        existing = get_application(db, application_id)
        if not existing:
            raise HTTPException(status_code=404, detail="Application not found")
        old_status = existing.status
        application = update_application(db, application_id, **changes)
        snapshot = ApplicationOut.model_validate(application)

    if snapshot.status != old_status and snapshot.status in NOMINATION_STATUSES:
        background_tasks.add_task(_notify_nomination, snapshot)

    logger.info("Application %s updated by %s: %s", application_id, admin_email, changes)
    return {"success": True, "application": snapshot}


@router.delete("/applications/{application_id}", summary="Delete an application")
def remove_application(application_id: str, admin_email: str = Depends(admin_user), db_session=Depends(get_db)):
    db: Session
    with db_session as db:
        if not delete_application(db, application_id):
            raise HTTPException(status_code=404, detail="Application not found")
    logger.info("Application %s deleted by %s", application_id, admin_email)
    return {"success": True}


@router.post("/applications/{application_id}/comments", summary="Add an admin comment")
def post_comment(
    application_id: str,
    payload: AdminCommentIn,
    admin_email: str = Depends(admin_user),
    db_session=Depends(get_db)
):
    db: Session
    with db_session as db:
        result = add_comment(
            db,
            application_id,
            comment_type=payload.type,
            message=payload.message,
            page=payload.page,
            created_by=admin_email,
        )
        if result is None:
            raise HTTPException(status_code=404, detail="Application not found")
        application, comment = result
        snapshot = ApplicationOut.model_validate(application)

    return {"success": True, "comment": comment, "application": snapshot}


@router.get("/smtp", summary="SMTP diagnostics")
def smtp_debug(admin_email: str = Depends(admin_user)):
    return smtp_diagnostics()
