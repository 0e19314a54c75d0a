"""
Tests for email settings, sending fallbacks, templates and admin auth helpers.
"""

from datetime import datetime, timezone

import jwt
import pytest

from models.schemas_application import ApplicationOut
from utils import email_service
from utils.auth_utils import hash_password, verify_password, create_token, decode_token, validate_admin_credentials
from utils.email_templates import student_submission_email, admin_notification_email, nomination_approved_email


@pytest.fixture
def application():
    now = datetime.now(timezone.utc)
    return ApplicationOut(
        id="0123456789abcdef",
        status="submitted",
        student_name="Lina Haddad",
        student_id="202112345",
        student_email="lina@example.edu",
        student_nationality="Jordanian",
        student_college="Business Administration",
        student_major="Finance",
        student_cgpa="3.6",
        country="Japan",
        university="Keio University",
        courses=[
            {"code": "MGT101", "status": "approved", "host_course_title": "Global Management", "message": ""},
            {"code": "FIN201", "status": "pending", "host_course_title": "Investment Theory", "message": ""},
            {"code": "ECO110", "status": "missing", "host_course_title": None, "message": ""},
        ],
        all_approved=False,
        submitted_at=now,
        updated_at=now,
    )


@pytest.fixture
def smtp_env(monkeypatch):
    for name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM", "SMTP_SSL", "SMTP_PORT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SMTP_DISABLE", "0")
    return monkeypatch


def test_disabled_smtp_always_succeeds(monkeypatch):
    monkeypatch.setenv("SMTP_DISABLE", "1")
    assert email_service.send_email("lina@example.edu", "Hi", "Body") is True


def test_incomplete_config_depends_on_strict_mode(smtp_env):
    smtp_env.setenv("SMTP_STRICT", "0")
    assert email_service.send_email("lina@example.edu", "Hi", "Body") is True

    smtp_env.setenv("SMTP_STRICT", "1")
    assert email_service.send_email("lina@example.edu", "Hi", "Body") is False


def test_settings_defaults(smtp_env):
    smtp_env.setenv("SMTP_USER", "mailer@example.edu")
    settings = email_service.load_smtp_settings()

    assert settings.port == 587
    assert settings.sender == "mailer@example.edu"
    assert settings.use_ssl is False
    assert settings.complete is False


def test_port_465_implies_ssl(smtp_env):
    smtp_env.setenv("SMTP_PORT", "465")
    assert email_service.load_smtp_settings().use_ssl is True


def test_diagnostics_without_host(smtp_env):
    diag = email_service.smtp_diagnostics()
    assert diag["host"] is None
    assert diag["resolves"] is None
    assert diag["complete_config"] is False


def test_submission_emails_go_to_student_and_admin(monkeypatch, application):
    sent = []
    monkeypatch.setattr(
        email_service, "send_email",
        lambda to, subject, body, reply_to=None: sent.append((to, subject, reply_to)) or True,
    )

    assert email_service.send_submission_emails(application) is True
    assert sent[0][0] == "lina@example.edu"
    assert sent[1][0] == "admin@example.edu"
    assert sent[1][2] == "lina@example.edu"


def test_submission_templates(application):
    subject, body = student_submission_email(application)
    assert "Received" in subject
    assert "Courses Submitted: 3" in body
    assert "Pre-Approved:      1 courses" in body

    subject, body = admin_notification_email(application)
    assert subject == "New Application: Lina Haddad - Keio University"
    assert "Missing:     1" in body
    assert "FIN201" in body

    subject, body = nomination_approved_email(application)
    assert "Keio University, Japan" in body


def test_password_hashing():
    hashed = hash_password("s3cret-pass")
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret-pass", "not-a-bcrypt-hash")


def test_token_carries_admin_role():
    claims = decode_token(create_token("admin@example.edu"))
    assert claims["sub"] == "admin@example.edu"
    assert claims["role"] == "admin"

    with pytest.raises(jwt.InvalidTokenError):
        decode_token(create_token("admin@example.edu") + "x")


def test_admin_credentials():
    assert validate_admin_credentials(" Admin@Example.edu ", "s3cret-pass")
    assert not validate_admin_credentials("admin@example.edu", "nope")
    assert not validate_admin_credentials("someone@example.edu", "s3cret-pass")
