#!/usr/bin/env python3
"""
Script to create and populate the neighborhood lookup tables.

Seeds the neighborhood master list from data/sources/neighborhoods.json and,
when a CSV export of the normalized category values is given, loads those too.

CSV columns: name, the category names (Security ... Parking), connectivity,
greenZones, noise, airQuality, occupability, accessibility, salaryTier.
"""

import argparse
import asyncio
import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Add the parent directory to the path to import from hoodscout
import sys
sys.path.append(str(Path(__file__).parent.parent))

from hoodscout.database.session import create_tables, dispose_engine, get_session_local
from hoodscout.database.models import Neighborhood, NeighborhoodCategories, NeighborhoodLifestyle
from hoodscout.models.schemas import CategoryValues, LifestyleExtras

logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S')
logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data" / "sources"
NEIGHBORHOODS_JSON = DATA_DIR / "neighborhoods.json"


def load_neighborhood_list(path: Path = NEIGHBORHOODS_JSON) -> List[Dict]:
    """Load the neighborhood master list (name, lat, lon)."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_category_rows(csv_path: Path) -> List[Dict]:
    """
    Read and validate the category values CSV.

    Rows failing validation are skipped and logged.
    """
    df = pd.read_csv(csv_path)
    if 'name' not in df.columns:
        raise ValueError(f"{csv_path} has no 'name' column")

    rows = []
    for record in df.to_dict(orient='records'):
        # Empty cells come back as NaN
        record = {k: v for k, v in record.items() if not (isinstance(v, float) and math.isnan(v))}
        name = str(record.pop('name')).strip()
        try:
            values = CategoryValues.model_validate(record)
            extras = LifestyleExtras.model_validate(record)
        except ValidationError as e:
            logger.warning(f"Skipping category row for '{name}': {e}")
            continue
        rows.append({'name': name, 'values': values, 'extras': extras})

    logger.info(f"Loaded {len(rows)} category rows from {csv_path}")
    return rows


async def seed_neighborhoods(session: AsyncSession, neighborhoods: List[Dict]) -> int:
    """Insert neighborhoods missing from the master list."""
    result = await session.execute(select(Neighborhood.name))
    existing = set(result.scalars().all())

    inserted = 0
    for entry in neighborhoods:
        if entry['name'] in existing:
            continue
        session.add(Neighborhood(name=entry['name'], latitude=entry['lat'], longitude=entry['lon']))
        inserted += 1

    await session.commit()
    logger.info(f"✓ {inserted} neighborhoods inserted ({len(existing)} already present)")
    return inserted


async def upsert_category_rows(session: AsyncSession, rows: List[Dict]) -> int:
    """Create or replace the category and lifestyle rows of known neighborhoods."""
    result = await session.execute(select(Neighborhood))
    by_name = {n.name: n for n in result.scalars().all()}

    updated = 0
    for row in rows:
        neighborhood: Optional[Neighborhood] = by_name.get(row['name'])
        if neighborhood is None:
            logger.warning(f"Unknown neighborhood '{row['name']}' in category data, skipping")
            continue

        await session.merge(NeighborhoodCategories(
            neighborhood_id=neighborhood.id,
            **row['values'].model_dump(),
        ))
        await session.merge(NeighborhoodLifestyle(
            neighborhood_id=neighborhood.id,
            **row['extras'].model_dump(),
        ))
        updated += 1

    await session.commit()
    logger.info(f"✓ Category data stored for {updated} neighborhoods")
    return updated


async def main(categories_csv: Optional[Path] = None):
    await create_tables()
    try:
        async with get_session_local()() as session:
            await seed_neighborhoods(session, load_neighborhood_list())
            if categories_csv:
                await upsert_category_rows(session, load_category_rows(categories_csv))
    finally:
        await dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Populate the neighborhood lookup tables")
    parser.add_argument("--categories", type=Path, help="CSV export of normalized category values")
    args = parser.parse_args()
    asyncio.run(main(args.categories))
