"""Recommendation endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_recommendation_service
from core.exceptions import NoModelsAvailableError
from core.schemas import RecommendationConfig, RecommendationResponse
from services.recommendation import RecommendationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("", response_model=RecommendationResponse)
async def create_recommendation(
    config: RecommendationConfig,
    service: Annotated[RecommendationService, Depends(get_recommendation_service)],
) -> RecommendationResponse:
    """Recommend a primary model, up to two alternatives and a warning model."""
    try:
        return await service.recommend(config)
    except NoModelsAvailableError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
