"""
Tests for multi-university recommendation and ranking.
"""

import pytest

from eligibility.logic import (
    CourseMappingRow,
    MatchStatus,
    recommend_universities,
    list_countries,
    list_universities,
)
from eligibility.logic.sample_mappings import SAMPLE_COURSE_MAPPINGS


def row(university, code, status, country="Nowhere", title="", notes=None):
    return CourseMappingRow(
        country=country,
        university=university,
        home_course_code=code,
        host_course_title=title or f"{code} at {university}",
        status=status,
        notes=notes,
    )


def test_all_approved_university_ranks_first_on_coverage_tie():
    catalog = [
        row("Mixed U", "A1", "Approved"),
        row("Mixed U", "B2", "Conditional"),
        row("Mixed U", "C3", "Conditional"),
        row("Clean U", "A1", "Approved"),
        row("Clean U", "B2", "Approved"),
        row("Clean U", "C3", "Approved"),
    ]
    recs = recommend_universities(["A1", "B2", "C3"], catalog)

    assert [r.university for r in recs] == ["Clean U", "Mixed U"]
    assert recs[0].approved_count == 3
    assert recs[0].score == 12
    assert recs[1].score == 4 + 2 + 2


def test_coverage_beats_match_quality():
    catalog = [
        row("Narrow", "A1", "Approved"),
        row("Wide", "A1", "Pending"),
        row("Wide", "B2", "Rejected"),
    ]
    recs = recommend_universities(["A1", "B2"], catalog)

    assert [r.university for r in recs] == ["Wide", "Narrow"]
    assert recs[0].score == 1 - 2
    assert recs[0].coverage == 1.0
    assert recs[1].coverage == 0.5
    assert recs[1].missing_courses == ["B2"]


def test_score_then_name_break_ties():
    catalog = [
        row("Beta", "A1", "Approved"),
        row("Beta", "B2", "Pending"),
        row("Alpha", "A1", "Approved"),
        row("Alpha", "B2", "Pending"),
        row("Gamma", "A1", "Approved"),
        row("Gamma", "B2", "Conditional"),
    ]
    recs = recommend_universities(["A1", "B2"], catalog)

    assert [r.university for r in recs] == ["Gamma", "Alpha", "Beta"]


def test_name_tie_break_ignores_case():
    catalog = [
        row("Zeta U", "A1", "Approved"),
        row("alpha U", "A1", "Approved"),
        row("Beta U", "A1", "Approved"),
    ]
    recs = recommend_universities(["A1"], catalog)

    assert [r.university for r in recs] == ["alpha U", "Beta U", "Zeta U"]


def test_empty_request_returns_nothing():
    assert recommend_universities([], SAMPLE_COURSE_MAPPINGS) == []
    assert recommend_universities(["", "   "], SAMPLE_COURSE_MAPPINGS) == []


def test_universities_without_matches_are_skipped():
    catalog = [row("Only Other", "Z9", "Approved"), row("Has It", "A1", "Pending")]
    recs = recommend_universities(["A1"], catalog)

    assert [r.university for r in recs] == ["Has It"]


def test_highest_priority_row_wins_per_course():
    catalog = [
        row("U", "A1", "Rejected", notes="old"),
        row("U", "A1", "Approved", notes="new"),
        row("U", "A1", "Conditional"),
    ]
    [rec] = recommend_universities(["a1"], catalog)

    assert rec.approved_count == 1
    assert rec.not_approved_count == 0
    assert rec.matched_courses[0].status == MatchStatus.APPROVED
    assert rec.matched_courses[0].notes == "new"


def test_requested_codes_are_deduplicated():
    catalog = [row("U", "A1", "Approved")]
    [rec] = recommend_universities(["A1", "a1", " A1 ", "B2"], catalog)

    assert rec.total_requested == 2
    assert rec.missing_courses == ["B2"]
    assert rec.coverage == 0.5


def test_matched_courses_sorted_by_status_priority():
    catalog = [
        row("U", "A1", "Rejected"),
        row("U", "B2", "Pending"),
        row("U", "C3", "Approved"),
        row("U", "D4", "Provisional"),
    ]
    [rec] = recommend_universities(["A1", "B2", "C3", "D4"], catalog)

    assert [m.status for m in rec.matched_courses] == ["approved", "conditional", "pending", "notApproved"]


def test_university_grouping_uses_first_seen_name_and_country():
    catalog = [
        row("  McGill University ", "A1", "Approved", country="Canada"),
        row("mcgill university", "B2", "Approved", country="Elsewhere"),
    ]
    [rec] = recommend_universities(["A1", "B2"], catalog)

    assert rec.university == "McGill University"
    assert rec.country == "Canada"
    assert rec.approved_count == 2


def test_limit_truncates():
    recs = recommend_universities(["MGT101"], SAMPLE_COURSE_MAPPINGS, limit=2)
    assert len(recs) == 2


@pytest.mark.parametrize("codes", [["MGT101"], ["MGT101", "FIN201", "MKT205"], ["XXX000", "STM120"]])
def test_matched_count_bounds(codes):
    for rec in recommend_universities(codes, SAMPLE_COURSE_MAPPINGS):
        assert 1 <= len(rec.matched_courses) <= rec.total_requested


def test_recommendation_is_repeatable():
    codes = ["MGT101", "FIN201", "MKT205"]
    first = recommend_universities(codes, SAMPLE_COURSE_MAPPINGS)
    second = recommend_universities(codes, SAMPLE_COURSE_MAPPINGS)
    assert [r.model_dump() for r in first] == [r.model_dump() for r in second]


def test_sample_catalog_ranking():
    recs = recommend_universities(["MGT101", "FIN201", "MKT205"], SAMPLE_COURSE_MAPPINGS)

    # ESADE and Toronto both map all three as approved; the name breaks the tie
    assert recs[0].university == "ESADE Business School"
    assert recs[1].university == "University of Toronto"


def test_listings():
    assert list_countries(SAMPLE_COURSE_MAPPINGS) == ["Canada", "Japan", "Spain"]
    assert list_universities(SAMPLE_COURSE_MAPPINGS, "Spain") == ["ESADE Business School", "IE University"]
    assert list_universities(SAMPLE_COURSE_MAPPINGS, "Atlantis") == []
