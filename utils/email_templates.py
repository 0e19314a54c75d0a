"""
Plain-text email bodies for application notifications.

Each builder takes an ApplicationOut snapshot and returns (subject, body).
"""

from models.schemas_application import ApplicationOut

OFFICE_NAME = "Office of International Academic Affairs"
OFFICE_FOOTER = f"{OFFICE_NAME}\nAjman University | international@ajman.ac.ae"


def _count(application: ApplicationOut, status: str) -> int:
    return sum(1 for c in application.courses if c.get("status") == status)


def _course_lines(application: ApplicationOut) -> str:
    lines = []
    for course in application.courses:
        title = course.get("host_course_title") or "-"
        lines.append(f"  {course.get('code', ''):<10} {course.get('status', ''):<12} {title}")
    return "\n".join(lines)


def student_submission_email(application: ApplicationOut) -> tuple[str, str]:
    subject = "Exchange Application Received - Ajman University"
    body = (
        f"Dear {application.student_name},\n\n"
        f"Thank you for submitting your exchange application to {application.university}, "
        f"{application.country}. We have received your application and it is now under review.\n\n"
        "Application Summary\n"
        f"  Application ID:    {application.id}\n"
        f"  University:        {application.university}\n"
        f"  Country:           {application.country}\n"
        f"  Courses Submitted: {len(application.courses)}\n"
        f"  Pre-Approved:      {_count(application, 'approved')} courses\n\n"
        "What happens next?\n"
        "  1. Our team will review your application within 2-3 business days\n"
        "  2. You'll receive an email once your application is processed\n"
        "  3. If needed, we may contact you for additional information\n\n"
        f"{OFFICE_FOOTER}"
    )
    return subject, body


def admin_notification_email(application: ApplicationOut) -> tuple[str, str]:
    subject = f"New Application: {application.student_name} - {application.university}"
    body = (
        "A new exchange application was submitted.\n\n"
        "Student\n"
        f"  Name:       {application.student_name}\n"
        f"  Student ID: {application.student_id}\n"
        f"  Email:      {application.student_email}\n"
        f"  CGPA:       {application.student_cgpa}\n\n"
        "Destination\n"
        f"  {application.university}, {application.country}\n\n"
        "Courses\n"
        f"  Approved:    {_count(application, 'approved')}\n"
        f"  Conditional: {_count(application, 'conditional')}\n"
        f"  Pending:     {_count(application, 'pending')}\n"
        f"  Missing:     {_count(application, 'missing')}\n\n"
        f"{_course_lines(application)}\n\n"
        f"Application ID: {application.id}\n"
    )
    return subject, body


def nomination_approved_email(application: ApplicationOut) -> tuple[str, str]:
    subject = "Nomination Approved - Exchange Program"
    body = (
        f"Dear {application.student_name},\n\n"
        f"Congratulations! Your nomination for the exchange program at {application.university}, "
        f"{application.country} has been approved.\n\n"
        "The partner university will contact you with the next steps of the host application.\n\n"
        f"{OFFICE_FOOTER}"
    )
    return subject, body
