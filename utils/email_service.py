import os, smtplib, logging, socket
from dataclasses import dataclass
from email.message import EmailMessage
from contextlib import closing
from dotenv import load_dotenv

from models.schemas_application import ApplicationOut
from utils.email_templates import (
    student_submission_email,
    admin_notification_email,
    nomination_approved_email,
)

load_dotenv()

logger = logging.getLogger("application_mail")


@dataclass(frozen=True)
class SmtpSettings:
    host: str | None
    port: int
    user: str | None
    password: str | None
    sender: str | None
    reply_to: str | None
    admin_email: str
    use_ssl: bool
    disabled: bool   # SMTP_DISABLE=1: log instead of sending (dev)
    strict: bool     # SMTP_STRICT=1: any failure => False (production)

    @property
    def complete(self) -> bool:
        return all([self.host, self.port, self.user, self.password, self.sender])


def load_smtp_settings() -> SmtpSettings:
    port = int(os.getenv("SMTP_PORT", "587"))
    user = os.getenv("SMTP_USER")
    return SmtpSettings(
        host=os.getenv("SMTP_HOST"),
        port=port,
        user=user,
        password=os.getenv("SMTP_PASSWORD"),
        sender=os.getenv("SMTP_FROM") or user,
        reply_to=os.getenv("SMTP_REPLY_TO"),
        admin_email=os.getenv("ADMIN_EMAIL", "international@ajman.ac.ae"),
        use_ssl=os.getenv("SMTP_SSL", "1" if port == 465 else "0") == "1",
        disabled=os.getenv("SMTP_DISABLE", "0") == "1",
        strict=os.getenv("SMTP_STRICT", "0") == "1",
    )


def smtp_diagnostics(settings: SmtpSettings | None = None) -> dict:
    """
    Configuration summary plus DNS and TCP reachability of the SMTP host.
    Never authenticates; the password itself is not reported.
    """
    settings = settings or load_smtp_settings()
    diag = {
        "host": settings.host,
        "port": settings.port,
        "ssl": settings.use_ssl,
        "from": settings.sender,
        "user_present": bool(settings.user),
        "password_present": bool(settings.password),
        "complete_config": settings.complete,
        "disabled": settings.disabled,
        "strict": settings.strict,
        "resolves": None,
        "can_connect": None,
    }
    if not settings.host:
        return diag

    try:
        socket.gethostbyname(settings.host)
    except socket.gaierror:
        diag["resolves"] = False
        return diag
    diag["resolves"] = True

    try:
        with closing(socket.create_connection((settings.host, settings.port), timeout=5)):
            diag["can_connect"] = True
    except OSError:
        diag["can_connect"] = False
    return diag


def _preflight_error(settings: SmtpSettings) -> str | None:
    if not settings.complete:
        return "incomplete SMTP config"
    diag = smtp_diagnostics(settings)
    if not diag["resolves"]:
        return f"cannot resolve {settings.host}"
    if diag["can_connect"] is False:
        return f"{settings.host}:{settings.port} unreachable"
    return None


def _deliver(settings: SmtpSettings, msg: EmailMessage) -> None:
    if settings.use_ssl:
        with smtplib.SMTP_SSL(settings.host, settings.port, timeout=15) as smtp:
            smtp.login(settings.user, settings.password)
            smtp.send_message(msg)
        return
    with smtplib.SMTP(settings.host, settings.port, timeout=15) as smtp:
        smtp.starttls()
        smtp.login(settings.user, settings.password)
        smtp.send_message(msg)


def send_email(to_email: str, subject: str, message: str, reply_to: str | None = None) -> bool:
    """
    Send a plain text email. Returns True if we consider it 'sent'.

    Misconfiguration and delivery failures are logged, not raised; outside
    strict mode they still count as sent so callers never block on mail.
    """
    settings = load_smtp_settings()
    if settings.disabled:
        logger.warning("[SMTP_DISABLED] Email for %s -> %s", to_email, subject)
        return True

    problem = _preflight_error(settings)
    if problem:
        logger.error("[SMTP_FALLBACK] %s; email=%s subject=%s", problem, to_email, subject)
        return not settings.strict

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.sender
    msg["To"] = to_email
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(message)

    try:
        _deliver(settings, msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed sending email to %s: %s", to_email, e)
        return not settings.strict
    logger.info("Sent email to %s", to_email)
    return True


def send_submission_emails(application: ApplicationOut) -> bool:
    """
    Receipt to the student and notification to the admin inbox.
    The admin can reply straight to the student.
    """
    settings = load_smtp_settings()

    subject, body = student_submission_email(application)
    student_ok = send_email(application.student_email, subject, body, reply_to=settings.reply_to)
    if not student_ok:
        logger.error("Student email failed for application %s", application.id)

    subject, body = admin_notification_email(application)
    admin_ok = send_email(settings.admin_email, subject, body, reply_to=application.student_email)
    if not admin_ok:
        logger.error("Admin email failed for application %s", application.id)

    return student_ok and admin_ok


def send_nomination_approved_email(application: ApplicationOut) -> bool:
    subject, body = nomination_approved_email(application)
    sent = send_email(application.student_email, subject, body, reply_to=load_smtp_settings().reply_to)
    if sent:
        logger.info("[Nomination Approved] Email sent to %s", application.student_email)
    return sent
