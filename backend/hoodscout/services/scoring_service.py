"""
Neighborhood scoring service
Combines a neighborhood's normalized category values with a user's weight vector.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..models.enums import (
    Category,
    SalaryTier,
    CORE_CATEGORIES,
    LINEAR_LIFESTYLE_CATEGORIES,
    THRESHOLD_CATEGORIES,
)
from ..models.schemas import CategoryValues, LifestyleExtras

logger = logging.getLogger(__name__)

EXTREME = 'extreme'
STRONG = 'strong'
INVERTED = 'inverted'

# Ordered (upper_bound, adjustment) rows: the first row with value < upper_bound wins,
# the final row (upper_bound None) is the fallback.
ValueBrackets = List[Tuple[Optional[float], int]]

THRESHOLD_ADJUSTMENTS: Dict[Category, Dict[str, ValueBrackets]] = {
    Category.GREEN_ZONES: {
        EXTREME: [(30, -60), (50, -35), (70, -10), (None, 25)],
        STRONG: [(30, -35), (50, -15), (70, 0), (None, 15)],
        INVERTED: [(30, 15), (50, 5), (70, -5), (None, -15)],
    },
    # Noise values are inverted upstream: 100 is a quiet neighborhood
    Category.NOISE: {
        EXTREME: [(40, -50), (60, -25), (80, -5), (None, 20)],
        STRONG: [(40, -30), (60, -12), (80, 0), (None, 12)],
        INVERTED: [(40, 15), (60, 5), (80, -5), (None, -15)],
    },
    Category.AIR_QUALITY: {
        EXTREME: [(40, -45), (60, -20), (75, -5), (None, 20)],
        STRONG: [(40, -25), (60, -10), (75, 0), (None, 10)],
    },
}

EXTREME_WEIGHT = 100
STRONG_WEIGHT = 60
INVERTED_WEIGHT = 30

# Salary weight brackets, evaluated in order
SALARY_BRACKETS = (
    ('above_70', lambda w: w > 70),
    ('below_minus_70', lambda w: w < -70),
    ('above_40', lambda w: w > 40),
    ('below_minus_40', lambda w: w < -40),
    ('nonzero', lambda w: w != 0),
    ('zero', lambda w: True),
)

SALARY_ADJUSTMENTS: Dict[str, Dict[SalaryTier, int]] = {
    'above_70': {SalaryTier.LOW: -90, SalaryTier.MEDIUM: -40, SalaryTier.HIGH: 50},
    'below_minus_70': {SalaryTier.LOW: 50, SalaryTier.MEDIUM: -40, SalaryTier.HIGH: -90},
    'above_40': {SalaryTier.LOW: -45, SalaryTier.MEDIUM: 0, SalaryTier.HIGH: 35},
    'below_minus_40': {SalaryTier.LOW: 35, SalaryTier.MEDIUM: 0, SalaryTier.HIGH: -45},
    'nonzero': {SalaryTier.LOW: 15, SalaryTier.MEDIUM: 25, SalaryTier.HIGH: 15},
    'zero': {SalaryTier.LOW: 50, SalaryTier.MEDIUM: 50, SalaryTier.HIGH: 50},
}


def threshold_weight_bracket(category: Category, weight: int) -> Optional[str]:
    """Return the weight-magnitude bracket of a threshold category, or None when neutral."""
    table = THRESHOLD_ADJUSTMENTS[category]
    if weight >= EXTREME_WEIGHT:
        return EXTREME
    if weight > STRONG_WEIGHT:
        return STRONG
    if weight < INVERTED_WEIGHT and INVERTED in table:
        return INVERTED
    return None


def threshold_adjustment(category: Category, value: float, weight: int) -> int:
    """
    Additive bonus or penalty for GreenZones, Noise and AirQuality.

    Args:
        category: One of the threshold categories
        value: Neighborhood value (0-100)
        weight: User weight for the category

    Returns:
        Literal adjustment constant; 0 for the neutral weight bracket
    """
    bracket = threshold_weight_bracket(category, weight)
    if bracket is None:
        return 0

    for upper_bound, adjustment in THRESHOLD_ADJUSTMENTS[category][bracket]:
        if upper_bound is None or value < upper_bound:
            return adjustment
    return 0


def salary_bracket(weight: int) -> str:
    for name, matches in SALARY_BRACKETS:
        if matches(weight):
            return name
    return 'zero'


def salary_adjustment(salary_tier: Optional[SalaryTier], weight: int) -> int:
    """Categorical Salary term; an unknown tier contributes nothing."""
    if salary_tier is None:
        return 0
    return SALARY_ADJUSTMENTS[salary_bracket(weight)][SalaryTier(salary_tier)]


def score_breakdown(
    values: CategoryValues,
    extras: LifestyleExtras,
    weights: Dict[Category, int]
) -> Dict[Category, float]:
    """
    Raw contribution of every category to a neighborhood's score.

    Linear categories contribute value * weight / 100, threshold categories add
    their adjustment constant on top of the linear term, Salary contributes its
    categorical adjustment.
    """
    core_values = values.by_category()
    linear_categories = list(CORE_CATEGORIES) + list(LINEAR_LIFESTYLE_CATEGORIES)
    linear_values = np.array(
        [core_values[c] for c in CORE_CATEGORIES]
        + [getattr(extras, attr) for attr in LINEAR_LIFESTYLE_CATEGORIES.values()],
        dtype=float,
    )
    linear_weights = np.array([weights.get(c, 0) for c in linear_categories], dtype=float)
    linear_terms = linear_values * linear_weights / 100

    breakdown = {category: float(term) for category, term in zip(linear_categories, linear_terms)}

    for category, attr in THRESHOLD_CATEGORIES.items():
        value = getattr(extras, attr)
        weight = weights.get(category, 0)
        breakdown[category] = value * weight / 100 + threshold_adjustment(category, value, weight)

    breakdown[Category.SALARY] = float(
        salary_adjustment(extras.salary_tier, weights.get(Category.SALARY, 0))
    )
    return breakdown


def score_neighborhood(
    values: CategoryValues,
    extras: LifestyleExtras,
    weights: Dict[Category, int]
) -> float:
    """
    Compute a neighborhood's base score for a weight vector.

    Args:
        values: Normalized core category values
        extras: Lifestyle values and salary tier
        weights: Weight vector from the weights service

    Returns:
        Sum of contributions normalized by the total weight, times 100; 0.0 when
        the weights sum to zero
    """
    total_weight = sum(weights.values())
    if total_weight == 0:
        logger.debug("Weights sum to zero, scoring neighborhood as 0")
        return 0.0

    score = sum(score_breakdown(values, extras, weights).values())
    return (score / total_weight) * 100
