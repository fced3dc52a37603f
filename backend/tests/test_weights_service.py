import pytest

from hoodscout.models.enums import Category
from hoodscout.models.schemas import UserProfile
from hoodscout.services.weights_service import (
    BASELINE_WEIGHTS,
    WEIGHT_RULES,
    derive_weights,
    field_contributions,
    rule_contributions,
    weights_to_dict,
)


def test_empty_profile_returns_baseline():
    weights = derive_weights(UserProfile())

    assert weights == BASELINE_WEIGHTS
    assert set(weights) == set(Category)
    # The baseline itself is never mutated
    assert weights is not BASELINE_WEIGHTS


def test_every_rule_block_has_a_profile_field():
    for field in WEIGHT_RULES:
        assert field in UserProfile.model_fields


def test_profile_accepts_questionnaire_keys():
    profile = UserProfile.model_validate({"presupuesto": "alto", "estiloVida": "nocturna", "unknownKey": 1})

    assert profile.budget == "alto"
    assert profile.lifestyle == ["nocturna"]


def test_high_budget_raises_salary_and_parking():
    weights = derive_weights(UserProfile(budget="alto"))

    assert weights[Category.SALARY] == 90
    assert weights[Category.PARKING] == 40


def test_low_budget_lowers_salary():
    weights = derive_weights(UserProfile(budget="bajo"))

    assert weights[Category.SALARY] == -75
    assert weights[Category.PUBLIC_TRANSPORT] == 50


def test_medium_budget_zeroes_salary():
    assert derive_weights(UserProfile(budget="medio"))[Category.SALARY] == 0


def test_rules_accumulate_before_clamping():
    profile = UserProfile(environment="naturaleza", priorities=["verde"])

    weights = derive_weights(profile)

    # 30 + 45 + 35 = 110
    assert weights[Category.GREEN_ZONES] == 100
    assert weights[Category.AIR_QUALITY] == 65


def test_weights_are_clamped_below():
    weights = derive_weights(UserProfile(budget="bajo", housing_type="economica"))

    # 10 - 85 - 30 = -105
    assert weights[Category.SALARY] == -100


def test_all_weights_stay_in_range():
    profile = UserProfile(
        age_bracket="51+",
        family_situation="hijos-pequenos",
        lifestyle=["tranquila", "deportiva", "profesional"],
        priorities=["seguridad", "verde", "servicios", "movilidad"],
        environment="naturaleza",
        air_quality="muy-importante",
        security_level="muy-alta",
        budget="alto",
        housing_type="lujo",
        physical_activity="alta",
        trail_need="alta",
    )

    weights = derive_weights(profile)

    assert all(-100 <= w <= 100 for w in weights.values())
    assert weights[Category.SECURITY] == 100


def test_multi_select_lifestyle_sums_every_tag():
    weights = derive_weights(UserProfile(lifestyle=["nocturna", "tranquila"]))

    assert weights[Category.NIGHT_LEISURE] == 45
    assert weights[Category.NOISE] == 40
    assert weights[Category.SECURITY] == 90


def test_duplicate_tags_apply_once():
    once = derive_weights(UserProfile(priorities=["empleo"]))
    twice = derive_weights(UserProfile(priorities=["empleo", "Empleo", "empleo"]))

    assert once == twice
    assert twice[Category.OCCUPABILITY] == 55


def test_derivation_is_idempotent():
    profile = UserProfile(age_bracket="18-25", lifestyle=["estudiante"], public_transport="diario")

    assert derive_weights(profile) == derive_weights(profile)


def test_unrecognized_answers_are_ignored():
    profile = UserProfile(budget="millonario", lifestyle=["astronauta"], environment="")

    assert derive_weights(profile) == BASELINE_WEIGHTS
    assert rule_contributions(profile) == []


@pytest.mark.parametrize("raw", ["hijos-pequeños", "Hijos-Pequeños", "  HIJOS-PEQUENOS "])
def test_answers_are_normalized(raw):
    weights = derive_weights(UserProfile(family_situation=raw))

    assert weights[Category.SCHOOLS] == 90


@pytest.mark.parametrize("field,raw", [
    ("budget", "baja"),
    ("budget", "Medio-Alta"),
    ("age_bracket", "65+"),
    ("work_modality", "teletrabajo"),
    ("family_situation", "hijos pequenos"),
    ("air_quality", "nada-importante"),
])
def test_unlisted_variants_contribute_nothing(field, raw):
    profile = UserProfile(**{field: raw})

    assert derive_weights(profile) == BASELINE_WEIGHTS
    assert rule_contributions(profile) == []


def test_security_level_uses_feminine_ladder():
    weights = derive_weights(UserProfile(security_level="alta"))

    assert weights[Category.SECURITY] == 70
    assert weights[Category.POLICE_STATIONS] == 60


def test_day_and_night_leisure_ladders_are_asymmetric():
    day = derive_weights(UserProfile(day_leisure="poco-importante"))
    night = derive_weights(UserProfile(night_leisure="poco-importante"))

    assert day[Category.DAY_LEISURE] == 25
    assert night[Category.NIGHT_LEISURE] == 20


def test_field_contributions_report_matched_answer():
    contributions = field_contributions(UserProfile(budget="alto"), "budget")

    assert [(c.value, c.category, c.delta) for c in contributions] == [
        ("alto", Category.SALARY, 80),
        ("alto", Category.PARKING, 10),
    ]


def test_weights_to_dict_uses_category_names():
    serialized = weights_to_dict(derive_weights(UserProfile()))

    assert serialized["GreenZones"] == 30
    assert serialized["Salary"] == 10
    assert len(serialized) == 21
