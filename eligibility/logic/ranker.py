"""
Ranker

Orders university recommendations. Coverage comes first: a university that
maps more of the requested courses, even conditionally, ranks above one with
fewer but cleaner matches.
"""

from typing import List, Optional, Tuple

from .contracts import UniversityRecommendation


def ranking_key(rec: UniversityRecommendation) -> Tuple[int, int, int, str, str]:
    """
    Sort key:
    1. matched course count (desc)
    2. approved count (desc)
    3. score (desc)
    4. university name, case-insensitive (asc), then exact name
    """
    return (-rec.matched_count, -rec.approved_count, -rec.score, rec.university.casefold(), rec.university)


def rank_recommendations(
    recommendations: List[UniversityRecommendation]
) -> List[UniversityRecommendation]:
    """Return recommendations sorted by ranking_key."""
    return sorted(recommendations, key=ranking_key)


def get_final_ranked_list(
    ranked: List[UniversityRecommendation],
    limit: Optional[int] = None
) -> List[UniversityRecommendation]:
    """
    Truncate a ranked list.

    Args:
        ranked: Ranked recommendations
        limit: Maximum number to keep; None keeps all

    Returns:
        Final ranked list
    """
    if limit is None:
        return list(ranked)
    return ranked[:max(0, limit)]
