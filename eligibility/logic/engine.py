"""
Eligibility Engine

Main orchestrator that combines normalization, classification, evaluation and
ranking. This is the primary entry point used by the HTTP layer.
"""

import logging
import time
from typing import Iterable, List, Optional, Protocol, Sequence

from .contracts import (
    CourseMappingRow,
    EvaluatedCourse,
    EligibilitySummary,
    UniversityRecommendation,
)
from .evaluator import evaluate_course_codes, summarise_eligibility
from .aggregator import requested_code_set, batch_aggregate
from .ranker import rank_recommendations, get_final_ranked_list

logger = logging.getLogger(__name__)


def recommend_universities(
    codes: Iterable[str],
    catalog: Sequence[CourseMappingRow],
    limit: Optional[int] = None
) -> List[UniversityRecommendation]:
    """
    Rank every partner university against the requested course codes.

    Pipeline flow:
    1. Normalize + dedupe requested codes (empty -> no recommendations)
    2. Aggregation - group rows per university, keep best status per code
    3. Ranking - matched count, approved count, score, name
    4. Truncation to limit

    Args:
        codes: Raw requested course codes
        catalog: Catalog snapshot
        limit: Maximum number of universities to return

    Returns:
        Ranked list of UniversityRecommendation
    """
    requested = requested_code_set(codes)
    if not requested:
        return []

    recommendations = batch_aggregate(catalog, requested)
    return get_final_ranked_list(rank_recommendations(recommendations), limit)


def list_countries(catalog: Sequence[CourseMappingRow]) -> List[str]:
    """Sorted distinct countries in the catalog."""
    return sorted({row.country for row in catalog if row.country})


def list_universities(catalog: Sequence[CourseMappingRow], country: str) -> List[str]:
    """Sorted distinct (trimmed) university names for one country."""
    return sorted({
        row.university.strip()
        for row in catalog
        if row.country == country and row.university.strip()
    })


class CatalogSnapshotProvider(Protocol):
    def get_rows(self, force_refresh: bool = False) -> Sequence[CourseMappingRow]:
        ...


class EligibilityEngine:
    """
    Eligibility engine bound to a catalog provider.

    Every call reads one snapshot from the provider and runs pure functions
    over it; the engine keeps no other state.
    """

    def __init__(self, provider: CatalogSnapshotProvider):
        self.provider = provider
        self.version = "1.0.0"

    def catalog(self) -> Sequence[CourseMappingRow]:
        return self.provider.get_rows()

    def evaluate(
        self,
        codes: Iterable[str],
        country: str,
        university: str
    ) -> List[EvaluatedCourse]:
        """Evaluate course codes at one partner university."""
        start_time = time.perf_counter()
        results = evaluate_course_codes(codes, self.catalog(), country, university)
        logger.debug(
            "Evaluated %d codes at %s in %.2fms",
            len(results), university, (time.perf_counter() - start_time) * 1000
        )
        return results

    def recommend(
        self,
        codes: Iterable[str],
        limit: Optional[int] = None
    ) -> List[UniversityRecommendation]:
        """Rank partner universities for a set of course codes."""
        return recommend_universities(codes, self.catalog(), limit=limit)

    def summarise(self, evaluations: Iterable[EvaluatedCourse]) -> EligibilitySummary:
        return summarise_eligibility(evaluations)

    def countries(self) -> List[str]:
        return list_countries(self.catalog())

    def universities(self, country: str) -> List[str]:
        return list_universities(self.catalog(), country)
