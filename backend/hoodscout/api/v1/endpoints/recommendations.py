from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging
from typing import List, Optional

from hoodscout.config.settings import settings
from hoodscout.database.session import get_db, get_session_local
from hoodscout.models.schemas import (
    NeighborhoodRef,
    RecommendationResponse,
    UserProfile,
    WeightContribution,
    WeightsResponse,
)
from hoodscout.services.category_provider import (
    CategoryProvider,
    DatabaseCategoryProvider,
    get_all_neighborhoods,
)
from hoodscout.services.recommendation_service import (
    NeighborhoodRecommendationService,
    RecommendationRunError,
)
from hoodscout.services.weights_service import derive_weights, rule_contributions, weights_to_dict

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_neighborhoods(db: AsyncSession = Depends(get_db)) -> List[NeighborhoodRef]:
    """Dependency returning the neighborhood master list."""
    return await get_all_neighborhoods(db)


def get_category_provider() -> CategoryProvider:
    """Dependency returning the category provider used for scoring."""
    return DatabaseCategoryProvider(get_session_local())


@router.post(
    "",
    response_model=RecommendationResponse,
    summary="Get neighborhood recommendations",
    description="Rank every neighborhood for the submitted questionnaire profile"
)
async def recommend_neighborhoods(
    profile: UserProfile,
    top_k: Optional[int] = Query(None, ge=1, le=100, description="Number of recommendations to return"),
    neighborhoods: List[NeighborhoodRef] = Depends(get_neighborhoods),
    provider: CategoryProvider = Depends(get_category_provider),
):
    """
    Get personalized neighborhood recommendations.

    Neighborhoods outside the profile's budget tier are excluded; the rest are
    sorted by final score, highest first.
    """
    limit = top_k if top_k is not None else settings.DEFAULT_TOP_K
    logger.info(f"Getting neighborhood recommendations for {len(neighborhoods)} neighborhoods")

    if not neighborhoods:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No neighborhoods available. Populate the neighborhood tables first."
        )

    service = NeighborhoodRecommendationService(provider)
    try:
        return await service.recommend(profile, neighborhoods, limit=limit)
    except RecommendationRunError as e:
        logger.error(f"Recommendation run failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while generating recommendations."
        )


@router.post(
    "/weights",
    response_model=WeightsResponse,
    summary="Preview derived weights",
    description="Return the category weights a profile produces and the rules that fired"
)
async def preview_weights(profile: UserProfile):
    contributions = [
        WeightContribution(
            profile_field=c.field,
            value=c.value,
            category=c.category,
            delta=c.delta,
        )
        for c in rule_contributions(profile)
    ]
    return WeightsResponse(
        weights=weights_to_dict(derive_weights(profile)),
        contributions=contributions,
    )


@router.get(
    "/neighborhoods",
    response_model=List[NeighborhoodRef],
    summary="List neighborhoods",
    description="Return the neighborhood master list used for recommendations"
)
async def list_neighborhoods(neighborhoods: List[NeighborhoodRef] = Depends(get_neighborhoods)):
    return neighborhoods
