"""
Normalization of questionnaire answers before they are matched against the weight rules
"""
import unicodedata
from typing import Iterable, List, Optional


def fold_accents(text: str) -> str:
    """Strip diacritics so 'pequeños' and 'pequenos' compare equal."""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_answer(value: Optional[str]) -> Optional[str]:
    """
    Normalize a single questionnaire answer.

    Only trims, lower-cases and folds accents: the result must still equal one
    of the listed answers exactly to match a rule.

    Args:
        value: Raw answer as sent by the frontend

    Returns:
        Lower-case answer, or None when the answer is empty
    """
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)

    cleaned = fold_accents(value.strip().lower())
    return cleaned or None


def normalize_answers(values: Optional[Iterable[str]]) -> List[str]:
    """Normalize a multi-select answer, dropping empties and duplicates while keeping order."""
    if not values:
        return []

    seen = set()
    normalized = []
    for value in values:
        answer = normalize_answer(value)
        if answer and answer not in seen:
            seen.add(answer)
            normalized.append(answer)
    return normalized
