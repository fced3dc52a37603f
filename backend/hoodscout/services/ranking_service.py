"""
Ranking helpers: tie-break noise, budget filtering and final ordering.
"""

import logging
import time
from typing import Dict, List, Optional, Set

from ..models.enums import SalaryTier
from ..models.schemas import ScoredNeighborhood
from ..utils.answer_mapping import normalize_answer

logger = logging.getLogger(__name__)

# Budget answer -> salary tiers allowed through. Budgets not listed are not filtered.
BUDGET_ALLOWED_TIERS: Dict[str, Set[SalaryTier]] = {
    'bajo': {SalaryTier.LOW},
    'medio-bajo': {SalaryTier.LOW, SalaryTier.MEDIUM},
    'medio': {SalaryTier.LOW, SalaryTier.MEDIUM},
}


def new_run_seed() -> int:
    """Seed for one recommendation run, derived from the wall clock in milliseconds."""
    return int(time.time() * 1000)


def tie_break_noise(name: str, seed: int) -> float:
    """
    Deterministic perturbation used to break exact score ties.

    Args:
        name: Neighborhood name
        seed: Run seed

    Returns:
        Noise in [-1.0, 1.0]; identical for identical (name, seed)
    """
    name_hash = sum(ord(ch) for ch in name)
    deterministic = ((name_hash + seed) % 100) / 100
    return (deterministic - 0.5) * 2.0


def allowed_salary_tiers(budget: Optional[str]) -> Optional[Set[SalaryTier]]:
    """Salary tiers a budget keeps, or None when the budget does not filter."""
    return BUDGET_ALLOWED_TIERS.get(normalize_answer(budget))


def filter_by_budget(
    scored: List[ScoredNeighborhood],
    budget: Optional[str]
) -> List[ScoredNeighborhood]:
    """
    Drop neighborhoods outside the user's affordability tier.

    Args:
        scored: Scored neighborhoods
        budget: Budget answer from the profile

    Returns:
        Neighborhoods whose salary tier the budget allows, in their original order
    """
    allowed = allowed_salary_tiers(budget)
    if allowed is None:
        return list(scored)

    kept = [n for n in scored if n.lifestyle_extras.salary_tier in allowed]
    logger.debug(f"Budget filter '{budget}' kept {len(kept)} of {len(scored)} neighborhoods")
    return kept


def sort_by_final_score(scored: List[ScoredNeighborhood]) -> List[ScoredNeighborhood]:
    """Order by final score, highest first; the name only settles exact collisions."""
    return sorted(scored, key=lambda n: (-n.final_score, n.name))
