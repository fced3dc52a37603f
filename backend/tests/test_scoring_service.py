import pytest

from hoodscout.models.enums import Category, SalaryTier
from hoodscout.models.schemas import CategoryValues, LifestyleExtras, UserProfile
from hoodscout.services.scoring_service import (
    salary_adjustment,
    salary_bracket,
    score_breakdown,
    score_neighborhood,
    threshold_adjustment,
)
from hoodscout.services.weights_service import derive_weights


@pytest.mark.parametrize("category,value,weight,expected", [
    # extreme
    (Category.GREEN_ZONES, 20, 100, -60),
    (Category.GREEN_ZONES, 30, 100, -35),
    (Category.GREEN_ZONES, 65, 100, -10),
    (Category.GREEN_ZONES, 80, 100, 25),
    (Category.NOISE, 90, 100, 20),
    (Category.AIR_QUALITY, 10, 100, -45),
    # strong
    (Category.GREEN_ZONES, 40, 70, -15),
    (Category.NOISE, 70, 61, 0),
    (Category.AIR_QUALITY, 90, 80, 10),
    # inverted
    (Category.GREEN_ZONES, 10, 10, 15),
    (Category.GREEN_ZONES, 80, 10, -15),
    (Category.NOISE, 55, -50, 5),
    # neutral
    (Category.GREEN_ZONES, 80, 45, 0),
    (Category.NOISE, 10, 60, 0),
    (Category.AIR_QUALITY, 10, 10, 0),
])
def test_threshold_adjustment(category, value, weight, expected):
    assert threshold_adjustment(category, value, weight) == expected


@pytest.mark.parametrize("weight,expected", [
    (90, 'above_70'),
    (70, 'above_40'),
    (-75, 'below_minus_70'),
    (-70, 'below_minus_40'),
    (40, 'nonzero'),
    (-5, 'nonzero'),
    (0, 'zero'),
])
def test_salary_bracket(weight, expected):
    assert salary_bracket(weight) == expected


@pytest.mark.parametrize("tier,weight,expected", [
    (SalaryTier.HIGH, 90, 50),
    (SalaryTier.LOW, 90, -90),
    (SalaryTier.LOW, -75, 50),
    (SalaryTier.MEDIUM, -75, -40),
    (SalaryTier.HIGH, 50, 35),
    (SalaryTier.MEDIUM, 50, 0),
    (SalaryTier.LOW, 10, 15),
    (SalaryTier.MEDIUM, 0, 50),
    (None, 90, 0),
])
def test_salary_adjustment(tier, weight, expected):
    assert salary_adjustment(tier, weight) == expected


def test_zero_weights_score_zero(zero_weights):
    values = CategoryValues(security=100, shops=100)
    extras = LifestyleExtras(green_zones=10, noise=10, salary_tier=SalaryTier.HIGH)

    assert score_neighborhood(values, extras, zero_weights) == 0.0


def test_score_is_normalized_by_total_weight(zero_weights):
    weights = dict(zero_weights)
    weights[Category.SECURITY] = 50
    weights[Category.GREEN_ZONES] = 45
    weights[Category.NOISE] = 45

    score = score_neighborhood(CategoryValues(security=80), LifestyleExtras(), weights)

    assert score == pytest.approx(40 / 140 * 100)


def test_breakdown_covers_every_category():
    breakdown = score_breakdown(CategoryValues(), LifestyleExtras(), derive_weights(UserProfile()))

    assert set(breakdown) == set(Category)


def test_linear_terms(zero_weights):
    weights = dict(zero_weights)
    weights[Category.CONNECTIVITY] = 40
    weights[Category.SHOPS] = -20

    breakdown = score_breakdown(
        CategoryValues(shops=50),
        LifestyleExtras(connectivity=75),
        weights,
    )

    assert breakdown[Category.CONNECTIVITY] == pytest.approx(30.0)
    assert breakdown[Category.SHOPS] == pytest.approx(-10.0)


def test_nature_lover_prefers_green_neighborhood():
    weights = derive_weights(UserProfile(environment="naturaleza", priorities=["verde"]))
    # A is modestly better on every linear category it has, but barely green
    values_a = CategoryValues(security=75, shops=75, walkability=65)
    values_b = CategoryValues(security=60, shops=60, walkability=50)
    extras_a = LifestyleExtras(green_zones=20)
    extras_b = LifestyleExtras(green_zones=85)

    breakdown_a = score_breakdown(values_a, extras_a, weights)
    breakdown_b = score_breakdown(values_b, extras_b, weights)

    assert breakdown_a[Category.GREEN_ZONES] == pytest.approx(20 - 60)
    assert breakdown_b[Category.GREEN_ZONES] == pytest.approx(85 + 25)
    assert breakdown_a[Category.SECURITY] > breakdown_b[Category.SECURITY]
    assert breakdown_a[Category.SHOPS] > breakdown_b[Category.SHOPS]
    assert score_neighborhood(values_b, extras_b, weights) > score_neighborhood(values_a, extras_a, weights)


def test_high_budget_rewards_high_salary_tier():
    weights = derive_weights(UserProfile(budget="alto"))
    values = CategoryValues(security=60, shops=60)

    high = score_breakdown(values, LifestyleExtras(salary_tier=SalaryTier.HIGH), weights)
    low = score_breakdown(values, LifestyleExtras(salary_tier=SalaryTier.LOW), weights)

    assert high[Category.SALARY] == 50
    assert low[Category.SALARY] == -90
    assert sum(high.values()) - sum(low.values()) == pytest.approx(140)
