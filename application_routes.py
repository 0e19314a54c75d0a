"""
Application API Routes

Endpoints for students: submit a finalized application, save/resume drafts
and check the status of a submission.
"""

import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from models.schemas_application import (
    ApplicationSubmit,
    ApplicationOut,
    ApplicationStatusOut,
    DraftSave,
)
from utils.crud_application import create_application, get_application, save_draft, get_draft
from utils.email_service import send_submission_emails

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


def _notify_submission(application: ApplicationOut) -> None:
    # Runs after the response; a mail failure must never surface to the student.
    try:
        if send_submission_emails(application):
            logger.info("[Email] Submission emails sent for %s", application.id)
        else:
            logger.warning("[Email] Submission emails failed for %s", application.id)
    except Exception as e:
        logger.error("[Email] Skipped due to error: %s", e)


# ─────────────────────────────────────────────
# POST /api/applications
# ─────────────────────────────────────────────
@router.post("", summary="Submit an exchange application")
def submit_application(payload: ApplicationSubmit, background_tasks: BackgroundTasks, db_session=Depends(get_db)):
    data = payload.model_dump()

    db: Session
    try:
        with db_session as db:
            application = create_application(db, **data)
            snapshot = ApplicationOut.model_validate(application)
    except SQLAlchemyError as e:
        logger.error("[Course Mapping Application] Save failed: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to submit application"})

    logger.info("[Course Mapping Application] Saved: %s", snapshot.id)
    background_tasks.add_task(_notify_submission, snapshot)
    return {"ok": True, "application_id": snapshot.id}


# ─────────────────────────────────────────────
# Drafts
# ─────────────────────────────────────────────
@router.post("/draft", summary="Create or update a draft")
def upsert_draft(payload: DraftSave, db_session=Depends(get_db)):
    data = payload.model_dump(exclude={"id"})

    db: Session
    try:
        with db_session as db:
            draft = save_draft(db, payload.id, **data)
            snapshot = ApplicationOut.model_validate(draft)
    except SQLAlchemyError as e:
        logger.error("Draft save failed: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to save draft"})

    return {"success": True, "draft_id": snapshot.id, "draft": snapshot}


@router.get("/draft", summary="Resume a draft")
def fetch_draft(id: str | None = Query(default=None), db_session=Depends(get_db)):
    if not id:
        raise HTTPException(status_code=400, detail="Draft ID required")

    db: Session
    with db_session as db:
        draft = get_draft(db, id)
        if not draft:
            raise HTTPException(status_code=404, detail="Draft not found")
        return {"draft": ApplicationOut.model_validate(draft)}


# ─────────────────────────────────────────────
# GET /api/applications/{id}
# ─────────────────────────────────────────────
@router.get("/{application_id}", response_model=ApplicationOut, summary="Fetch an application")
def fetch_application(application_id: str, db_session=Depends(get_db)):
    db: Session
    with db_session as db:
        application = get_application(db, application_id)
        if not application:
            raise HTTPException(status_code=404, detail="Application not found")
        return ApplicationOut.model_validate(application)


@router.get("/{application_id}/status", response_model=ApplicationStatusOut, summary="Application status")
def fetch_application_status(application_id: str, db_session=Depends(get_db)):
    db: Session
    with db_session as db:
        application = get_application(db, application_id)
        if not application:
            raise HTTPException(status_code=404, detail="Application not found")
        return ApplicationStatusOut(status=application.status, updated_at=application.updated_at)
