"""
Spreadsheet Adapter for the Eligibility Engine

Transforms raw rows of the "Course Mappings" worksheet into CourseMappingRow
records.

This is a pure TRANSFORM layer:
- NO classification
- NO ranking
- NO network access
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .contracts import CourseMappingRow

logger = logging.getLogger(__name__)


# Keyword -> country for partner universities (checked in order)
COUNTRY_KEYWORDS: Sequence = (
    ("USA", ("south carolina", "west alabama", "california", "colorado", "csu", "dominguez")),
    ("Canada", ("toronto", "mcgill")),
    ("Spain", ("madrid", "barcelona", "esade", "ie university")),
    ("Japan", ("tokyo", "keio", "waseda")),
)
UNKNOWN_COUNTRY = "Other"

# Column names in the worksheet
CODE_COLUMNS = ("Ajman Course Code", "ajmanCourseCode")
HOME_NAME_COLUMN = "Ajman Course Name"
PARTNER_NAME_COLUMN = "Partner Course Name"
PARTNER_UNIVERSITY_COLUMN = "Partner University"
APPROVAL_COLUMN = "IsApproved"
MATCH_QUALITY_COLUMN = "Match Quality"

APPROVED_FLAGS = {"YES", "Y"}
APPROVED_QUALITIES = {"excellent", "good"}

APPROVED_STATUS = "Approved"
NOT_APPROVED_STATUS = "NotApproved"
APPROVED_NOTE = "This course is approved for credit transfer"
NOT_APPROVED_NOTE = "This course is NOT approved for credit transfer - please consult with your advisor"


def detect_country(university_name: str) -> str:
    """Guess a partner university's country from its name."""
    name = (university_name or "").lower()
    for country, keywords in COUNTRY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return country
    return UNKNOWN_COUNTRY


def _cell(raw: Dict[str, Any], column: str) -> str:
    value = raw.get(column)
    if value is None:
        return ""
    return str(value).strip()


def _course_code(raw: Dict[str, Any]) -> str:
    for column in CODE_COLUMNS:
        value = _cell(raw, column)
        if value:
            return value
    return ""


def is_row_approved(raw: Dict[str, Any]) -> bool:
    """
    Read approval from IsApproved (Yes/Y) when present,
    otherwise from Match Quality (excellent/good).
    """
    flag = _cell(raw, APPROVAL_COLUMN)
    if flag:
        return flag.upper() in APPROVED_FLAGS

    quality = _cell(raw, MATCH_QUALITY_COLUMN)
    if quality:
        return quality.lower() in APPROVED_QUALITIES

    return False


def map_sheet_row(
    raw: Dict[str, Any],
    country: Optional[str] = None,
    university: Optional[str] = None
) -> CourseMappingRow:
    """
    Convert one worksheet record into a CourseMappingRow.

    Args:
        raw: Worksheet record keyed by header
        country: Override for the detected country
        university: Override for the "Partner University" column

    Returns:
        CourseMappingRow (home_course_code may be empty)
    """
    code = _course_code(raw)
    partner_university = university if university is not None else _cell(raw, PARTNER_UNIVERSITY_COLUMN)
    partner_country = country if country is not None else detect_country(partner_university)
    approved = is_row_approved(raw)

    title = _cell(raw, PARTNER_NAME_COLUMN) or _cell(raw, HOME_NAME_COLUMN) or f"{code} - Course"

    return CourseMappingRow(
        country=partner_country,
        university=partner_university,
        home_course_code=code,
        host_course_title=title,
        status=APPROVED_STATUS if approved else NOT_APPROVED_STATUS,
        notes=APPROVED_NOTE if approved else NOT_APPROVED_NOTE,
    )


def fetch_and_transform_rows(records: Iterable[Dict[str, Any]]) -> List[CourseMappingRow]:
    """
    Map worksheet records, dropping rows without a course code.

    Args:
        records: Output of gspread's get_all_records()

    Returns:
        List of CourseMappingRow in worksheet order
    """
    rows: List[CourseMappingRow] = []
    skipped = 0
    for raw in records:
        mapping = map_sheet_row(raw)
        if mapping.home_course_code:
            rows.append(mapping)
        else:
            skipped += 1

    if skipped:
        logger.info("Skipped %d worksheet rows without a course code", skipped)
    return rows
