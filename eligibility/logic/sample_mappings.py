"""
Sample course mappings.

SAMPLE_COURSE_MAPPINGS is the demo catalog used when no spreadsheet is
configured. FALLBACK_COURSE_MAPPINGS is the minimal list served when the
spreadsheet is unreachable and nothing has been cached yet.
"""

from typing import Tuple

from .contracts import CourseMappingRow


SAMPLE_COURSE_MAPPINGS: Tuple[CourseMappingRow, ...] = (
    CourseMappingRow(
        country="Canada",
        university="University of Toronto",
        home_course_code="MGT101",
        host_course_title="Introduction to Management",
        status="Approved",
        notes="Counts as core management credit.",
    ),
    CourseMappingRow(
        country="Canada",
        university="University of Toronto",
        home_course_code="FIN201",
        host_course_title="Corporate Finance",
        status="Approved",
    ),
    CourseMappingRow(
        country="Canada",
        university="University of Toronto",
        home_course_code="MKT205",
        host_course_title="Consumer Behaviour",
        status="Conditionally Approved",
        notes="Attach syllabus for final confirmation.",
    ),
    CourseMappingRow(
        country="Canada",
        university="McGill University",
        home_course_code="MGT101",
        host_course_title="Foundations of Management",
        status="Approved",
    ),
    CourseMappingRow(
        country="Canada",
        university="McGill University",
        home_course_code="ACC210",
        host_course_title="Intermediate Accounting I",
        status="Approved",
    ),
    CourseMappingRow(
        country="Canada",
        university="McGill University",
        home_course_code="ECO110",
        host_course_title="Microeconomic Analysis",
        status="Pending",
    ),
    CourseMappingRow(
        country="Spain",
        university="IE University",
        home_course_code="MGT101",
        host_course_title="Principles of Management",
        status="Approved",
    ),
    CourseMappingRow(
        country="Spain",
        university="IE University",
        home_course_code="FIN201",
        host_course_title="Financial Decision Making",
        status="Approved",
    ),
    CourseMappingRow(
        country="Spain",
        university="IE University",
        home_course_code="STM120",
        host_course_title="Statistics for Business",
        status="Approved",
    ),
    CourseMappingRow(
        country="Spain",
        university="ESADE Business School",
        home_course_code="MGT101",
        host_course_title="Business Foundations",
        status="Approved",
    ),
    CourseMappingRow(
        country="Spain",
        university="ESADE Business School",
        home_course_code="MKT205",
        host_course_title="International Marketing",
        status="Approved",
    ),
    CourseMappingRow(
        country="Spain",
        university="ESADE Business School",
        home_course_code="FIN201",
        host_course_title="Financial Markets",
        status="Approved",
    ),
    CourseMappingRow(
        country="Japan",
        university="Keio University",
        home_course_code="MGT101",
        host_course_title="Global Management",
        status="Approved",
    ),
    CourseMappingRow(
        country="Japan",
        university="Keio University",
        home_course_code="FIN201",
        host_course_title="Investment Theory",
        status="Pending",
        notes="Awaiting updated syllabus.",
    ),
    CourseMappingRow(
        country="Japan",
        university="Waseda University",
        home_course_code="MGT101",
        host_course_title="Strategic Management",
        status="Approved",
    ),
    CourseMappingRow(
        country="Japan",
        university="Waseda University",
        home_course_code="MKT205",
        host_course_title="Brand Strategy",
        status="Pending",
    ),
)


FALLBACK_COURSE_MAPPINGS: Tuple[CourseMappingRow, ...] = (
    CourseMappingRow(
        country="Canada",
        university="University of Toronto",
        home_course_code="MGT101",
        host_course_title="Introduction to Management",
        status="Approved",
        notes="Pre-approved course",
    ),
    CourseMappingRow(
        country="Canada",
        university="McGill University",
        home_course_code="MGT101",
        host_course_title="Foundations of Management",
        status="Approved",
        notes="Pre-approved course",
    ),
)
