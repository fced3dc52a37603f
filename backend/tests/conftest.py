import pytest

from hoodscout.models.enums import Category
from hoodscout.models.schemas import (
    CategoryValues,
    LifestyleExtras,
    NeighborhoodCategoryData,
    NeighborhoodRef,
    ScoredNeighborhood,
)


@pytest.fixture
def make_data():
    """Factory for provider output; extra keyword arguments go to LifestyleExtras."""
    def _make(name, salary_tier=None, values=None, **extras):
        return NeighborhoodCategoryData(
            name=name,
            category_values=CategoryValues(**(values or {})),
            lifestyle_extras=LifestyleExtras(salary_tier=salary_tier, **extras),
        )
    return _make


@pytest.fixture
def make_scored():
    def _make(name, final_score=0.0, salary_tier=None):
        return ScoredNeighborhood(
            name=name,
            base_score=final_score,
            applied_noise=0.0,
            final_score=final_score,
            category_values=CategoryValues(),
            lifestyle_extras=LifestyleExtras(salary_tier=salary_tier),
        )
    return _make


@pytest.fixture
def refs():
    def _make(*names):
        return [NeighborhoodRef(name=n, latitude=34.0, longitude=-118.0) for n in names]
    return _make


@pytest.fixture
def zero_weights():
    return {category: 0 for category in Category}
