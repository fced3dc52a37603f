"""
Weight derivation service
Turns a user profile into a per-category weight vector through an additive rule table.
"""

import logging
from typing import Dict, List, NamedTuple

from ..models.enums import Category
from ..models.schemas import UserProfile
from ..utils.answer_mapping import normalize_answer, normalize_answers

logger = logging.getLogger(__name__)

C = Category

WEIGHT_MIN = -100
WEIGHT_MAX = 100

# Typical importance of every category before any answer is applied
BASELINE_WEIGHTS: Dict[Category, int] = {
    C.SECURITY: 50,
    C.SHOPS: 50,
    C.SCHOOLS: 10,
    C.HOSPITALS: 40,
    C.FIRE_STATIONS: 40,
    C.POLICE_STATIONS: 50,
    C.NIGHT_LEISURE: 20,
    C.DAY_LEISURE: 30,
    C.UNIVERSITIES: 10,
    C.PUBLIC_TRANSPORT: 40,
    C.TAXIS: 10,
    C.BIKE_LANES: 15,
    C.WALKABILITY: 30,
    C.PARKING: 30,
    C.CONNECTIVITY: 40,
    C.GREEN_ZONES: 30,
    C.NOISE: 30,
    C.AIR_QUALITY: 30,
    C.OCCUPABILITY: 20,
    C.ACCESSIBILITY: 20,
    C.SALARY: 10,
}

_COUPLE_OR_SINGLE = {C.NIGHT_LEISURE: 15, C.SHOPS: 15, C.DAY_LEISURE: 10}

# profile field -> answer -> {category: delta}
WEIGHT_RULES: Dict[str, Dict[str, Dict[Category, int]]] = {
    'age_bracket': {
        '18-25': {C.NIGHT_LEISURE: 30, C.DAY_LEISURE: 20, C.UNIVERSITIES: 40, C.SECURITY: -10},
        '26-35': {C.NIGHT_LEISURE: 20, C.DAY_LEISURE: 25, C.SHOPS: 20},
        '36-50': {C.HOSPITALS: 15, C.SHOPS: 15, C.SECURITY: 10},
        '51+': {C.HOSPITALS: 30, C.SECURITY: 20, C.NIGHT_LEISURE: -15, C.FIRE_STATIONS: 15,
                C.ACCESSIBILITY: 15},
    },
    'family_situation': {
        'hijos-pequenos': {C.SCHOOLS: 80, C.SECURITY: 30, C.HOSPITALS: 20, C.FIRE_STATIONS: 20,
                           C.DAY_LEISURE: 20, C.NIGHT_LEISURE: -20, C.GREEN_ZONES: 15,
                           C.AIR_QUALITY: 15},
        'hijos-adolescentes': {C.SCHOOLS: 60, C.SECURITY: 25, C.DAY_LEISURE: 15, C.UNIVERSITIES: 20},
        'multigeneracional': {C.HOSPITALS: 25, C.SECURITY: 20, C.FIRE_STATIONS: 20, C.SHOPS: 15,
                              C.ACCESSIBILITY: 25},
        'solo': _COUPLE_OR_SINGLE,
        'pareja': _COUPLE_OR_SINGLE,
    },
    'lifestyle': {
        'nocturna': {C.NIGHT_LEISURE: 40, C.SECURITY: 10, C.POLICE_STATIONS: 10, C.NOISE: -20},
        'diurna': {C.DAY_LEISURE: 30, C.SHOPS: 20},
        'tranquila': {C.SECURITY: 30, C.HOSPITALS: 15, C.NIGHT_LEISURE: -15, C.FIRE_STATIONS: 10,
                      C.NOISE: 30},
        'estudiante': {C.UNIVERSITIES: 80, C.NIGHT_LEISURE: 25, C.DAY_LEISURE: 20, C.SHOPS: 15,
                       C.PUBLIC_TRANSPORT: 15},
        'profesional': {C.SHOPS: 20, C.DAY_LEISURE: 15, C.HOSPITALS: 10, C.CONNECTIVITY: 20,
                        C.OCCUPABILITY: 20},
        'deportiva': {C.WALKABILITY: 25, C.BIKE_LANES: 20, C.GREEN_ZONES: 15},
    },
    'priorities': {
        'seguridad': {C.SECURITY: 30, C.POLICE_STATIONS: 20, C.FIRE_STATIONS: 15},
        'servicios': {C.SHOPS: 25, C.HOSPITALS: 25, C.FIRE_STATIONS: 15, C.POLICE_STATIONS: 15},
        'social': {C.NIGHT_LEISURE: 25, C.DAY_LEISURE: 25, C.SHOPS: 15},
        'educacion': {C.SCHOOLS: 40, C.UNIVERSITIES: 40},
        'verde': {C.DAY_LEISURE: 25, C.SECURITY: 10, C.GREEN_ZONES: 35, C.AIR_QUALITY: 15},
        'movilidad': {C.PUBLIC_TRANSPORT: 30, C.BIKE_LANES: 15, C.WALKABILITY: 15},
        'empleo': {C.OCCUPABILITY: 35, C.CONNECTIVITY: 10},
    },
    'environment': {
        'naturaleza': {C.GREEN_ZONES: 45, C.AIR_QUALITY: 20, C.NOISE: 20, C.NIGHT_LEISURE: -10},
        'urbano': {C.SHOPS: 15, C.NIGHT_LEISURE: 15, C.PUBLIC_TRANSPORT: 15, C.WALKABILITY: 10,
                   C.GREEN_ZONES: -10},
        'tranquilo': {C.NOISE: 35, C.SECURITY: 10},
        'mixto': {},
    },
    'air_quality': {
        'muy-importante': {C.AIR_QUALITY: 50, C.GREEN_ZONES: 10},
        'importante': {C.AIR_QUALITY: 25},
        'poco-importante': {C.AIR_QUALITY: -10},
    },
    'work_modality': {
        'remoto': {C.CONNECTIVITY: 50, C.NOISE: 15, C.PUBLIC_TRANSPORT: -10},
        'hibrido': {C.CONNECTIVITY: 25, C.PUBLIC_TRANSPORT: 10},
        'presencial': {C.PUBLIC_TRANSPORT: 20, C.OCCUPABILITY: 15, C.PARKING: 10},
    },
    'housing_type': {
        'lujo': {C.SALARY: 30, C.SECURITY: 15},
        'estandar': {},
        'economica': {C.SALARY: -30},
        'compartida': {C.UNIVERSITIES: 15, C.PUBLIC_TRANSPORT: 15, C.SALARY: -15},
    },
    'budget': {
        'bajo': {C.SALARY: -85, C.PUBLIC_TRANSPORT: 10},
        'medio-bajo': {C.SALARY: -45},
        'medio': {C.SALARY: -10},
        'medio-alto': {C.SALARY: 40},
        'alto': {C.SALARY: 80, C.PARKING: 10},
    },
    'security_level': {
        'muy-alta': {C.SECURITY: 40, C.POLICE_STATIONS: 20},
        'alta': {C.SECURITY: 20, C.POLICE_STATIONS: 10},
        'media': {},
        'baja': {C.SECURITY: -10},
    },
    'commute_distance': {
        'muy-cerca': {C.WALKABILITY: 25, C.OCCUPABILITY: 20},
        'cerca': {C.PUBLIC_TRANSPORT: 15, C.BIKE_LANES: 10},
        'lejos': {C.PARKING: 20, C.PUBLIC_TRANSPORT: 20},
        'indiferente': {},
    },
    'nightlife': {
        'muy-importante': {C.NIGHT_LEISURE: 40},
        'importante': {C.NIGHT_LEISURE: 20},
        'poco-importante': {},
        'evitar': {C.NIGHT_LEISURE: -30, C.NOISE: 20},
    },
    'hospital_access': {
        'muy-importante': {C.HOSPITALS: 35},
        'importante': {C.HOSPITALS: 15},
        'poco-importante': {},
    },
    'school_quality': {
        'muy-importante': {C.SCHOOLS: 40},
        'importante': {C.SCHOOLS: 20},
        'no-aplica': {C.SCHOOLS: -10},
    },
    'shop_access': {
        'muy-importante': {C.SHOPS: 30},
        'importante': {C.SHOPS: 15},
        'poco-importante': {C.SHOPS: -10},
    },
    'public_transport': {
        'diario': {C.PUBLIC_TRANSPORT: 45},
        'frecuente': {C.PUBLIC_TRANSPORT: 25},
        'ocasional': {C.PUBLIC_TRANSPORT: 5},
        'nunca': {C.PUBLIC_TRANSPORT: -20},
    },
    'taxi_use': {
        'frecuente': {C.TAXIS: 40},
        'ocasional': {C.TAXIS: 15},
        'nunca': {},
    },
    'bike_use': {
        'diario': {C.BIKE_LANES: 45},
        'frecuente': {C.BIKE_LANES: 25},
        'ocasional': {C.BIKE_LANES: 10},
        'nunca': {},
    },
    'parking_need': {
        'imprescindible': {C.PARKING: 50},
        'importante': {C.PARKING: 25},
        'no-necesito': {C.PARKING: -20},
    },
    'physical_activity': {
        'alta': {C.WALKABILITY: 30, C.GREEN_ZONES: 15},
        'media': {C.WALKABILITY: 15},
        'baja': {},
    },
    'trail_need': {
        'alta': {C.GREEN_ZONES: 25, C.WALKABILITY: 15},
        'media': {C.GREEN_ZONES: 10},
        'baja': {},
    },
    'university_proximity': {
        'muy-importante': {C.UNIVERSITIES: 50},
        'importante': {C.UNIVERSITIES: 25},
        'no-importante': {},
    },
    # Day leisure deducts on "poco-importante" while night leisure does not
    'day_leisure': {
        'muy-importante': {C.DAY_LEISURE: 35},
        'importante': {C.DAY_LEISURE: 20},
        'poco-importante': {C.DAY_LEISURE: -5},
    },
    'night_leisure': {
        'muy-importante': {C.NIGHT_LEISURE: 35, C.NOISE: -15},
        'importante': {C.NIGHT_LEISURE: 15},
        'poco-importante': {},
    },
}

MULTI_SELECT_FIELDS = {'lifestyle', 'priorities'}


class RuleContribution(NamedTuple):
    """One (category, delta) pair produced by a matched answer."""
    field: str
    value: str
    category: Category
    delta: int


def clamp_weight(weight: int) -> int:
    return max(WEIGHT_MIN, min(WEIGHT_MAX, weight))


def _answers_for(profile: UserProfile, field: str) -> List[str]:
    raw = getattr(profile, field, None)
    if field in MULTI_SELECT_FIELDS:
        return normalize_answers(raw)
    answer = normalize_answer(raw)
    return [answer] if answer else []


def field_contributions(profile: UserProfile, field: str) -> List[RuleContribution]:
    """
    Evaluate a single rule block.

    Args:
        profile: User profile
        field: Profile field name (a key of WEIGHT_RULES)

    Returns:
        Contributions of the matched answers for that field; empty when the field
        is unset or its answer is not part of the rule table
    """
    rules = WEIGHT_RULES[field]
    contributions = []
    for answer in _answers_for(profile, field):
        deltas = rules.get(answer)
        if deltas is None:
            logger.debug(f"Ignoring unrecognized answer {answer!r} for {field}")
            continue
        for category, delta in deltas.items():
            contributions.append(RuleContribution(field, answer, category, delta))
    return contributions


def rule_contributions(profile: UserProfile) -> List[RuleContribution]:
    """Collect the contributions of every rule block for a profile."""
    contributions = []
    for field in WEIGHT_RULES:
        contributions.extend(field_contributions(profile, field))
    return contributions


def derive_weights(profile: UserProfile) -> Dict[Category, int]:
    """
    Derive the per-category weight vector for a user profile.

    The baseline is copied, every matched rule delta is summed on top of it and
    each category is clamped to [-100, 100] once, after all rules are applied.

    Args:
        profile: User profile

    Returns:
        Fresh weight vector covering every Category
    """
    weights = dict(BASELINE_WEIGHTS)
    for contribution in rule_contributions(profile):
        weights[contribution.category] += contribution.delta

    return {category: clamp_weight(weight) for category, weight in weights.items()}


def weights_to_dict(weights: Dict[Category, int]) -> Dict[str, int]:
    """Serialize a weight vector with category names as keys."""
    return {category.value: weight for category, weight in weights.items()}
