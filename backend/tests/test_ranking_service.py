import pytest

from hoodscout.models.enums import SalaryTier
from hoodscout.services.ranking_service import (
    allowed_salary_tiers,
    filter_by_budget,
    new_run_seed,
    sort_by_final_score,
    tie_break_noise,
)


def test_tie_break_noise_known_values():
    # ord('A') + ord('B') + ord('C') = 198
    assert tie_break_noise("ABC", 0) == pytest.approx(0.96)
    assert tie_break_noise("ABC", 2) == pytest.approx(-1.0)
    assert tie_break_noise("", 50) == pytest.approx(0.0)


def test_tie_break_noise_is_deterministic():
    assert tie_break_noise("Echo Park", 1234) == tie_break_noise("Echo Park", 1234)


def test_tie_break_noise_range():
    names = ["Venice", "Silver Lake", "Koreatown", "Westwood", "Boyle Heights", "Ñuñoa"]
    for name in names:
        for seed in range(0, 250, 7):
            assert -1.0 <= tie_break_noise(name, seed) <= 0.98


def test_new_run_seed_is_wall_clock_millis():
    seed = new_run_seed()

    assert isinstance(seed, int)
    assert seed > 1_600_000_000_000


@pytest.mark.parametrize("budget,expected", [
    ("bajo", {SalaryTier.LOW}),
    ("medio-bajo", {SalaryTier.LOW, SalaryTier.MEDIUM}),
    (" Medio-Bajo ", {SalaryTier.LOW, SalaryTier.MEDIUM}),
    ("baja", None),
    ("medio", {SalaryTier.LOW, SalaryTier.MEDIUM}),
    ("medio-alto", None),
    ("alto", None),
    (None, None),
])
def test_allowed_salary_tiers(budget, expected):
    assert allowed_salary_tiers(budget) == expected


def test_low_budget_keeps_only_low_tier(make_scored):
    scored = [
        make_scored("A", salary_tier=SalaryTier.LOW),
        make_scored("B", salary_tier=SalaryTier.MEDIUM),
        make_scored("C", salary_tier=SalaryTier.HIGH),
        make_scored("D"),
    ]

    kept = filter_by_budget(scored, "bajo")

    assert [n.name for n in kept] == ["A"]


def test_medium_budget_drops_high_and_unknown_tiers(make_scored):
    scored = [
        make_scored("A", salary_tier=SalaryTier.HIGH),
        make_scored("B", salary_tier=SalaryTier.MEDIUM),
        make_scored("C", salary_tier=SalaryTier.LOW),
        make_scored("D"),
    ]

    kept = filter_by_budget(scored, "medio")

    assert [n.name for n in kept] == ["B", "C"]


def test_unfiltered_budgets_keep_everything(make_scored):
    scored = [make_scored("A", salary_tier=SalaryTier.HIGH), make_scored("B")]

    assert filter_by_budget(scored, "alto") == scored
    assert filter_by_budget(scored, None) == scored


def test_sort_by_final_score(make_scored):
    scored = [
        make_scored("Mid", 50.0),
        make_scored("Top", 80.5),
        make_scored("Low", -3.0),
        make_scored("Also Mid", 50.0),
    ]

    ranked = sort_by_final_score(scored)

    assert [n.name for n in ranked] == ["Top", "Also Mid", "Mid", "Low"]
