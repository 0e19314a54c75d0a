"""
Tests for the catalog provider cache and the worksheet row adapter.
"""

import pytest

from eligibility.catalog import CatalogProvider, StaticCatalogSource
from eligibility.logic.adapter import detect_country, map_sheet_row, fetch_and_transform_rows
from eligibility.logic.classifier import classify_mapping
from eligibility.logic.constants import MatchStatus
from eligibility.logic.contracts import CourseMappingRow
from eligibility.logic.sample_mappings import FALLBACK_COURSE_MAPPINGS


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class CountingSource:
    def __init__(self, batches):
        self.batches = list(batches)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        batch = self.batches.pop(0)
        if isinstance(batch, Exception):
            raise batch
        return batch


ROW_A = CourseMappingRow(country="Canada", university="X", home_course_code="A1", status="Approved")
ROW_B = CourseMappingRow(country="Canada", university="X", home_course_code="B2", status="Pending")


def test_cached_within_ttl():
    clock = FakeClock()
    source = CountingSource([[ROW_A], [ROW_B]])
    provider = CatalogProvider(source, ttl_seconds=60, clock=clock)

    assert provider.get_rows() == (ROW_A,)
    clock.now += 30
    assert provider.get_rows() == (ROW_A,)
    assert source.calls == 1


def test_refetch_after_ttl():
    clock = FakeClock()
    source = CountingSource([[ROW_A], [ROW_B]])
    provider = CatalogProvider(source, ttl_seconds=60, clock=clock)

    provider.get_rows()
    clock.now += 61
    assert provider.get_rows() == (ROW_B,)
    assert source.calls == 2


def test_refresh_bypasses_cache():
    source = CountingSource([[ROW_A], [ROW_B]])
    provider = CatalogProvider(source, ttl_seconds=60, clock=FakeClock())

    provider.get_rows()
    assert provider.refresh() == (ROW_B,)


def test_failure_serves_last_good_snapshot():
    source = CountingSource([[ROW_A], RuntimeError("sheet unreachable")])
    provider = CatalogProvider(source, ttl_seconds=60, clock=FakeClock())

    provider.get_rows()
    assert provider.refresh() == (ROW_A,)


def test_cold_failure_serves_fallback():
    source = CountingSource([ConnectionError("offline")])
    provider = CatalogProvider(source, clock=FakeClock())

    assert provider.get_rows() == FALLBACK_COURSE_MAPPINGS


def test_empty_source_serves_fallback():
    provider = CatalogProvider(CountingSource([[]]), clock=FakeClock())
    assert provider.get_rows() == FALLBACK_COURSE_MAPPINGS


def test_static_source_returns_copy():
    source = StaticCatalogSource([ROW_A])
    rows = source.fetch()
    rows.append(ROW_B)
    assert source.fetch() == [ROW_A]


@pytest.mark.parametrize("name, country", [
    ("University of South Carolina", "USA"),
    ("CSU Dominguez Hills", "USA"),
    ("University of Toronto", "Canada"),
    ("ESADE Business School", "Spain"),
    ("Keio University", "Japan"),
    ("Sorbonne", "Other"),
    ("", "Other"),
])
def test_detect_country(name, country):
    assert detect_country(name) == country


def test_is_approved_column_drives_status():
    row = map_sheet_row({
        "Ajman Course Code": "MGT101",
        "Partner University": "McGill University",
        "Partner Course Name": "Foundations of Management",
        "IsApproved": "yes",
        "Match Quality": "poor",
    })

    assert row.country == "Canada"
    assert row.university == "McGill University"
    assert row.host_course_title == "Foundations of Management"
    assert row.status == "Approved"
    assert classify_mapping(row) == MatchStatus.APPROVED


def test_match_quality_used_when_is_approved_blank():
    good = map_sheet_row({"Ajman Course Code": "FIN201", "IsApproved": "", "Match Quality": "Good"})
    weak = map_sheet_row({"Ajman Course Code": "FIN201", "IsApproved": "", "Match Quality": "fair"})

    assert good.status == "Approved"
    assert weak.status == "NotApproved"
    assert classify_mapping(weak) == MatchStatus.NOT_APPROVED
    assert "NOT approved" in weak.notes


def test_title_falls_back_to_home_name_then_code():
    named = map_sheet_row({"Ajman Course Code": "ECO110", "Ajman Course Name": "Microeconomics"})
    bare = map_sheet_row({"ajmanCourseCode": "ECO110"})

    assert named.host_course_title == "Microeconomics"
    assert bare.host_course_title == "ECO110 - Course"
    assert bare.status == "NotApproved"


def test_rows_without_code_are_dropped():
    rows = fetch_and_transform_rows([
        {"Ajman Course Code": "MGT101", "IsApproved": "Y", "Partner University": "IE University"},
        {"Ajman Course Code": "", "IsApproved": "Y"},
        {"Partner University": "Keio University"},
    ])

    assert [r.home_course_code for r in rows] == ["MGT101"]
    assert rows[0].country == "Spain"


def test_failed_fetch_backs_off_before_retrying():
    clock = FakeClock()
    source = CountingSource([ConnectionError("offline"), [ROW_A]])
    provider = CatalogProvider(source, clock=clock, retry_seconds=15)

    assert provider.get_rows() == FALLBACK_COURSE_MAPPINGS
    clock.now += 5
    assert provider.get_rows() == FALLBACK_COURSE_MAPPINGS
    assert source.calls == 1

    clock.now += 11
    assert provider.get_rows() == (ROW_A,)
    assert source.calls == 2


def test_backoff_serves_last_good_snapshot():
    clock = FakeClock()
    source = CountingSource([[ROW_A], RuntimeError("sheet unreachable"), [ROW_B]])
    provider = CatalogProvider(source, ttl_seconds=60, clock=clock, retry_seconds=15)

    provider.get_rows()
    clock.now += 61
    assert provider.get_rows() == (ROW_A,)
    clock.now += 1
    assert provider.get_rows() == (ROW_A,)
    assert source.calls == 2


def test_forced_refresh_ignores_backoff():
    source = CountingSource([RuntimeError("sheet unreachable"), [ROW_B]])
    provider = CatalogProvider(source, clock=FakeClock(), retry_seconds=15)

    provider.get_rows()
    assert provider.refresh() == (ROW_B,)
    assert source.calls == 2
