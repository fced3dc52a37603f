"""
Neighborhood Recommendation Service
Ranks neighborhoods for a user profile: derives weights, fetches every neighborhood's
category data concurrently, scores, breaks ties, filters by budget and sorts.
"""

import asyncio
import inspect
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..config.settings import settings
from ..models.enums import Category
from ..models.schemas import (
    NeighborhoodCategoryData,
    NeighborhoodRef,
    RecommendationResponse,
    RunMetadata,
    ScoredNeighborhood,
    UserProfile,
)
from .category_provider import CategoryProvider
from .ranking_service import filter_by_budget, new_run_seed, sort_by_final_score, tie_break_noise
from .scoring_service import score_breakdown, score_neighborhood
from .weights_service import derive_weights, weights_to_dict

logger = logging.getLogger(__name__)


class RecommendationRunError(Exception):
    """Raised when a recommendation run fails as a whole."""
    pass


class NeighborhoodRecommendationService:
    """Service for generating neighborhood recommendations from a user profile."""

    def __init__(self, provider: Optional[CategoryProvider] = None, timeout: Optional[float] = None):
        """
        Args:
            provider: Default category provider, sync or async callable
            timeout: Seconds allowed per neighborhood fetch; None or 0 disables it
        """
        self.provider = provider
        self.timeout = settings.PROVIDER_TIMEOUT_SECONDS if timeout is None else timeout

    async def recommend(
        self,
        profile: UserProfile,
        neighborhoods: Sequence[NeighborhoodRef],
        provider: Optional[CategoryProvider] = None,
        limit: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> RecommendationResponse:
        """
        Get ranked neighborhood recommendations for a profile.

        Args:
            profile: User profile
            neighborhoods: Neighborhood master list
            provider: Category provider overriding the service default
            limit: Maximum number of recommendations to return (all when None)
            seed: Tie-break seed; a fresh wall-clock seed is used when None

        Returns:
            Profile, weights, recommendations sorted by final score and run metadata

        Raises:
            RecommendationRunError: If the run fails as a whole
        """
        provider = provider or self.provider
        if provider is None:
            raise RecommendationRunError("No category provider configured")

        run_seed = new_run_seed() if seed is None else seed
        run_id = str(uuid.uuid4())
        timestamp = datetime.now(timezone.utc)

        try:
            logger.info(f"🔄 Run {run_id}: scoring {len(neighborhoods)} neighborhoods (seed={run_seed})")

            weights = derive_weights(profile)
            logger.debug(f"Run {run_id} weights: {weights_to_dict(weights)}")

            # Fetches only read shared inputs; results are joined before ranking
            fetched = await asyncio.gather(
                *(self._fetch_category_data(provider, neighborhood) for neighborhood in neighborhoods)
            )

            scored = [
                self._score(data, available, weights, run_seed)
                for data, available in fetched
            ]
            failed_fetches = sum(1 for _, available in fetched if not available)

            kept = filter_by_budget(scored, profile.budget)
            ranked = sort_by_final_score(kept)
            if limit is not None:
                ranked = ranked[:limit]

            metadata = RunMetadata(
                run_id=run_id,
                timestamp=timestamp,
                seed=run_seed,
                total_neighborhoods=len(neighborhoods),
                filtered_out=len(scored) - len(kept),
                failed_fetches=failed_fetches,
            )

            top = ', '.join(f"{n.name} ({n.final_score:.1f})" for n in ranked[:3])
            logger.info(
                f"🏆 Run {run_id}: {len(ranked)} recommendations "
                f"({metadata.filtered_out} filtered by budget, {failed_fetches} without data). Top 3: {top}"
            )

            return RecommendationResponse(
                profile=profile,
                weights=weights_to_dict(weights),
                recommendations=ranked,
                metadata=metadata,
            )

        except Exception as e:
            logger.error(f"Error generating recommendations for run {run_id}: {e}", exc_info=True)
            raise RecommendationRunError(f"Recommendation run {run_id} failed") from e

    async def _fetch_category_data(
        self,
        provider: CategoryProvider,
        neighborhood: NeighborhoodRef
    ) -> Tuple[NeighborhoodCategoryData, bool]:
        """
        Fetch one neighborhood's category data.

        Returns:
            The data and whether it came from the provider; a failed or timed out
            fetch falls back to zero values for that neighborhood only
        """
        try:
            result = provider(neighborhood)
            if inspect.isawaitable(result):
                result = await asyncio.wait_for(result, timeout=self.timeout or None)
            if not isinstance(result, NeighborhoodCategoryData):
                if isinstance(result, Mapping):
                    result = {"name": neighborhood.name, **result}
                result = NeighborhoodCategoryData.model_validate(result)
            return result, True
        except asyncio.TimeoutError:
            logger.warning(f"Timed out fetching category data for {neighborhood.name} - using zero values")
        except Exception as e:
            logger.warning(f"Error fetching category data for {neighborhood.name}: {e} - using zero values")

        return NeighborhoodCategoryData(name=neighborhood.name), False

    def _score(
        self,
        data: NeighborhoodCategoryData,
        available: bool,
        weights: Dict[Category, int],
        seed: int
    ) -> ScoredNeighborhood:
        base_score = score_neighborhood(data.category_values, data.lifestyle_extras, weights)
        noise = tie_break_noise(data.name, seed)
        breakdown = score_breakdown(data.category_values, data.lifestyle_extras, weights)

        return ScoredNeighborhood(
            name=data.name,
            base_score=base_score,
            applied_noise=noise,
            final_score=base_score + noise,
            category_values=data.category_values,
            lifestyle_extras=data.lifestyle_extras,
            match_details={category.value: round(term, 2) for category, term in breakdown.items()},
            data_available=available,
        )


# Convenience function for direct usage
async def get_neighborhood_recommendations(
    profile: UserProfile,
    neighborhoods: List[NeighborhoodRef],
    provider: CategoryProvider,
    limit: Optional[int] = None,
) -> RecommendationResponse:
    """
    Convenience function to get neighborhood recommendations for a profile.

    Args:
        profile: User profile
        neighborhoods: Neighborhood master list
        provider: Category provider
        limit: Maximum number of recommendations (default: all)

    Returns:
        Recommendation response
    """
    service = NeighborhoodRecommendationService(provider)
    return await service.recommend(profile, neighborhoods, limit=limit)
