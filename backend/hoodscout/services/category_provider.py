"""
Category providers
Supply the normalized category values and lifestyle record of a neighborhood.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Mapping, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from ..database.models import Neighborhood
from ..models.schemas import (
    CategoryValues,
    LifestyleExtras,
    NeighborhoodCategoryData,
    NeighborhoodRef,
)

logger = logging.getLogger(__name__)

CategoryProvider = Callable[
    [NeighborhoodRef],
    Union[NeighborhoodCategoryData, Awaitable[NeighborhoodCategoryData]],
]


class CategoryProviderError(Exception):
    """Raised when a provider cannot deliver a neighborhood's category data."""
    pass


class CategoryDataNotFound(CategoryProviderError):
    pass


class StaticCategoryProvider:
    """Provider backed by an in-memory mapping of neighborhood name -> data."""

    def __init__(self, data: Mapping[str, NeighborhoodCategoryData]):
        self._data: Dict[str, NeighborhoodCategoryData] = dict(data)

    def __call__(self, neighborhood: NeighborhoodRef) -> NeighborhoodCategoryData:
        try:
            return self._data[neighborhood.name]
        except KeyError:
            raise CategoryDataNotFound(f"No category data for neighborhood '{neighborhood.name}'")


class DatabaseCategoryProvider:
    """
    Provider reading the neighborhood lookup tables.

    Each call opens its own session so calls can run concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def __call__(self, neighborhood: NeighborhoodRef) -> NeighborhoodCategoryData:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Neighborhood)
                .options(selectinload(Neighborhood.categories), selectinload(Neighborhood.lifestyle))
                .where(Neighborhood.name == neighborhood.name)
            )
            row = result.scalar_one_or_none()

        if row is None or row.categories is None:
            raise CategoryDataNotFound(f"No category data stored for neighborhood '{neighborhood.name}'")

        return to_category_data(row)


def to_category_data(row: Neighborhood) -> NeighborhoodCategoryData:
    """Convert a Neighborhood row with loaded relationships into provider output."""
    categories = row.categories
    category_values = CategoryValues(
        security=categories.security,
        shops=categories.shops,
        schools=categories.schools,
        hospitals=categories.hospitals,
        fire_stations=categories.fire_stations,
        police_stations=categories.police_stations,
        night_leisure=categories.night_leisure,
        day_leisure=categories.day_leisure,
        universities=categories.universities,
        public_transport=categories.public_transport,
        taxis=categories.taxis,
        bike_lanes=categories.bike_lanes,
        walkability=categories.walkability,
        parking=categories.parking,
    )

    lifestyle = row.lifestyle
    if lifestyle is None:
        logger.warning(f"No lifestyle data stored for neighborhood '{row.name}', using zero values")
        lifestyle_extras = LifestyleExtras()
    else:
        lifestyle_extras = LifestyleExtras(
            connectivity=lifestyle.connectivity,
            green_zones=lifestyle.green_zones,
            noise=lifestyle.noise,
            air_quality=lifestyle.air_quality,
            occupability=lifestyle.occupability,
            accessibility=lifestyle.accessibility,
            salary_tier=lifestyle.salary_tier,
        )

    return NeighborhoodCategoryData(
        name=row.name,
        category_values=category_values,
        lifestyle_extras=lifestyle_extras,
    )


async def get_all_neighborhoods(db: AsyncSession) -> List[NeighborhoodRef]:
    """Load the neighborhood master list ordered by name."""
    result = await db.execute(select(Neighborhood).order_by(Neighborhood.name))
    return [
        NeighborhoodRef(name=n.name, latitude=n.latitude, longitude=n.longitude)
        for n in result.scalars().all()
    ]
