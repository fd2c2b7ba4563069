"""
Health Check Router - Assessment Platform
assessment_platform/routers/health.py

The scoring service has no external dependencies, so health is liveness
plus the scoring defaults currently in effect.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from assessment_platform.config import Settings, get_settings

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    scoring_defaults: Dict[str, float]


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        scoring_defaults={
            "objective_weight": settings.DEFAULT_OBJECTIVE_WEIGHT,
            "opinion_weight": settings.DEFAULT_OPINION_WEIGHT,
            "ungrouped_max_weight": settings.UNGROUPED_MAX_WEIGHT,
            "default_trait_weight": settings.DEFAULT_TRAIT_WEIGHT,
            "cutoff_score": settings.DEFAULT_CUTOFF_SCORE,
        },
    )
