"""
Eligibility API Routes

Exposes the eligibility engine via REST API:
- course evaluation against one partner university
- university recommendations across the catalog
- catalog, country and university listings
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from .catalog import CatalogProvider, get_catalog_provider
from .logic.engine import EligibilityEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class EvaluationRequest(BaseModel):
    """Request body for the evaluation endpoint."""
    codes: List[str] = Field(
        ...,
        description="Home course codes as entered by the student",
        json_schema_extra={"example": ["MGT101", "fin201"]}
    )
    country: str = Field(..., min_length=1, max_length=100)
    university: str = Field(..., min_length=1, max_length=200)


class RecommendationRequest(BaseModel):
    """Request body for the recommendation endpoint."""
    codes: List[str] = Field(..., description="Home course codes to place")
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        le=100,
        description="Max universities to return (all when omitted)"
    )


def get_engine(provider: CatalogProvider = Depends(get_catalog_provider)) -> EligibilityEngine:
    return EligibilityEngine(provider)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/catalog", summary="List course mappings")
def get_catalog(
    refresh: bool = Query(default=False, description="Bypass the cache"),
    provider: CatalogProvider = Depends(get_catalog_provider)
):
    rows = provider.get_rows(force_refresh=refresh)
    return {
        "success": True,
        "data": [row.model_dump() for row in rows],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/countries", summary="List destination countries")
def get_countries(engine: EligibilityEngine = Depends(get_engine)):
    return {"countries": engine.countries()}


@router.get("/universities", summary="List partner universities in a country")
def get_universities(
    country: str = Query(..., min_length=1),
    engine: EligibilityEngine = Depends(get_engine)
):
    return {"country": country, "universities": engine.universities(country)}


@router.post("/evaluate", summary="Evaluate course codes at one partner university")
def evaluate_courses(
    request: EvaluationRequest,
    engine: EligibilityEngine = Depends(get_engine)
):
    """
    Evaluate each requested course code at the chosen university.

    **Response:**
    - `evaluations`: one entry per non-empty input code, in input order
    - `summary`: counts per status and whether everything is approved
    """
    evaluations = engine.evaluate(request.codes, request.country, request.university)
    summary = engine.summarise(evaluations)
    logger.info(
        "Evaluated %d courses at %s: %d approved",
        len(evaluations), request.university, summary.approved_count
    )
    return {
        "country": request.country,
        "university": request.university,
        "evaluations": [e.model_dump() for e in evaluations],
        "summary": summary.model_dump(),
    }


@router.post("/recommend", summary="Recommend partner universities")
def recommend(
    request: RecommendationRequest,
    engine: EligibilityEngine = Depends(get_engine)
):
    """
    Rank partner universities by how many requested courses they map.

    An empty list means no viable match, not an error.
    """
    recommendations = engine.recommend(request.codes, limit=request.limit)
    return {
        "recommendations": [r.model_dump() for r in recommendations],
        "count": len(recommendations),
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Eligibility engine health check")
def health_check():
    """Check if the eligibility engine is operational."""
    return {"status": "ok", "engine": "eligibility", "version": "1.0.0"}
