"""
Catalog Provider

Supplies immutable snapshots of the course-mapping catalog to the engine.
Sources are pluggable; the provider adds a time-based cache, forced refresh
and degradation to the last good snapshot or a built-in fallback list.
"""

import logging
import os
import threading
import time
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

import gspread
from dotenv import load_dotenv
from fastapi import Request
from google.oauth2 import service_account

from .logic.adapter import fetch_and_transform_rows, CODE_COLUMNS, APPROVAL_COLUMN
from .logic.contracts import CourseMappingRow
from .logic.sample_mappings import SAMPLE_COURSE_MAPPINGS, FALLBACK_COURSE_MAPPINGS

load_dotenv()

logger = logging.getLogger(__name__)

CATALOG_SPREADSHEET_ID = os.getenv("CATALOG_SPREADSHEET_ID")
CATALOG_WORKSHEET = os.getenv("CATALOG_WORKSHEET", "Course Mappings")
CATALOG_CACHE_SECONDS = float(os.getenv("CATALOG_CACHE_SECONDS", "60"))
CATALOG_RETRY_SECONDS = float(os.getenv("CATALOG_RETRY_SECONDS", "15"))
GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE")

SHEET_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

CatalogSnapshot = Tuple[CourseMappingRow, ...]


class CatalogSource(Protocol):
    def fetch(self) -> List[CourseMappingRow]:
        ...


class StaticCatalogSource:
    """Serves a fixed list of rows."""

    def __init__(self, rows: Sequence[CourseMappingRow] = SAMPLE_COURSE_MAPPINGS):
        self.rows = tuple(rows)

    def fetch(self) -> List[CourseMappingRow]:
        return list(self.rows)


class GoogleSheetCatalogSource:
    """
    Reads the course-mapping worksheet from a Google spreadsheet.

    The named worksheet is used when present; otherwise the first worksheet
    whose header row carries a course-code or approval column.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        service_account_file: str,
        worksheet_title: str = CATALOG_WORKSHEET
    ):
        self.spreadsheet_id = spreadsheet_id
        self.service_account_file = service_account_file
        self.worksheet_title = worksheet_title

    def _client(self) -> gspread.Client:
        creds = service_account.Credentials.from_service_account_file(
            self.service_account_file,
            scopes=SHEET_SCOPES
        )
        return gspread.authorize(creds)

    def _find_worksheet(self, sh: gspread.Spreadsheet) -> Optional[gspread.Worksheet]:
        try:
            return sh.worksheet(self.worksheet_title)
        except gspread.exceptions.WorksheetNotFound:
            logger.warning("Worksheet %r not found, scanning headers", self.worksheet_title)

        wanted = set(CODE_COLUMNS) | {APPROVAL_COLUMN}
        for worksheet in sh.worksheets():
            if wanted.intersection(worksheet.row_values(1)):
                logger.info("Found course data in worksheet: %s", worksheet.title)
                return worksheet
        return None

    def fetch(self) -> List[CourseMappingRow]:
        sh = self._client().open_by_key(self.spreadsheet_id)
        worksheet = self._find_worksheet(sh)
        if worksheet is None:
            logger.warning("No worksheet with course mapping columns in %s", self.spreadsheet_id)
            return []

        rows = fetch_and_transform_rows(worksheet.get_all_records(default_blank=""))
        logger.info("Fetched %d course mappings from worksheet %s", len(rows), worksheet.title)
        return rows


class CatalogProvider:
    """
    Caches catalog snapshots for ttl_seconds.

    get_rows() returns the cached snapshot while it is fresh. A stale cache or
    force_refresh triggers a fetch; if the source fails or returns nothing,
    the last good snapshot is served, else the fallback list. After a failed
    fetch, further fetches wait retry_seconds unless a refresh is forced.
    """

    def __init__(
        self,
        source: CatalogSource,
        ttl_seconds: float = CATALOG_CACHE_SECONDS,
        fallback: Sequence[CourseMappingRow] = FALLBACK_COURSE_MAPPINGS,
        clock: Callable[[], float] = time.monotonic,
        retry_seconds: float = CATALOG_RETRY_SECONDS
    ):
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.retry_seconds = retry_seconds
        self.fallback: CatalogSnapshot = tuple(fallback)
        self._clock = clock
        self._lock = threading.Lock()
        self._cached: Optional[CatalogSnapshot] = None
        self._fetched_at: float = 0.0
        self._failed_at: Optional[float] = None

    def _is_fresh(self, now: float) -> bool:
        return self._cached is not None and (now - self._fetched_at) < self.ttl_seconds

    def _in_backoff(self, now: float) -> bool:
        return self._failed_at is not None and (now - self._failed_at) < self.retry_seconds

    def get_rows(self, force_refresh: bool = False) -> CatalogSnapshot:
        with self._lock:
            now = self._clock()
            if not force_refresh:
                if self._is_fresh(now):
                    return self._cached
                if self._in_backoff(now):
                    return self._cached_or_fallback()

            try:
                rows = self.source.fetch()
            except Exception as e:
                logger.error("Catalog fetch failed: %s", e)
                self._failed_at = now
                return self._cached_or_fallback()

            if not rows:
                logger.warning("Catalog source returned no rows")
                self._failed_at = now
                return self._cached_or_fallback()

            self._cached = tuple(rows)
            self._fetched_at = now
            self._failed_at = None
            return self._cached

    def refresh(self) -> CatalogSnapshot:
        return self.get_rows(force_refresh=True)

    def _cached_or_fallback(self) -> CatalogSnapshot:
        if self._cached is not None:
            return self._cached
        logger.warning("Serving built-in fallback catalog (%d rows)", len(self.fallback))
        return self.fallback


def default_source() -> CatalogSource:
    """Google Sheet when configured, otherwise the sample catalog."""
    if CATALOG_SPREADSHEET_ID and GOOGLE_SERVICE_ACCOUNT_FILE:
        return GoogleSheetCatalogSource(CATALOG_SPREADSHEET_ID, GOOGLE_SERVICE_ACCOUNT_FILE)
    logger.info("CATALOG_SPREADSHEET_ID not set, using sample course mappings")
    return StaticCatalogSource()


def get_catalog_provider(request: Request) -> CatalogProvider:
    """FastAPI dependency: the provider the app was started with."""
    return request.app.state.catalog_provider
