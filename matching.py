import re
from typing import Iterable, List, Sequence

from rapidfuzz.distance import Levenshtein

from constants import FUZZY_MATCH_THRESHOLD, MIN_WINDOW_TERM_LENGTH
from recipe_models import StructuredRecipe


def normalize_ingredient(term: str) -> str:
    return re.sub(r"\s+", " ", term or "").strip().lower()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance: single-character insertions, deletions and substitutions."""
    return Levenshtein.distance(a, b)


def _word_windows(ingredient: str, term: str) -> List[str]:
    # "chicken breast" for "chiken" -> ["chicken breast", "chicken", "breast"]
    windows = [ingredient]
    if len(term) < MIN_WINDOW_TERM_LENGTH:
        return windows
    words = ingredient.split(" ")
    width = len(term.split(" "))
    if width < len(words):
        windows.extend(" ".join(words[k:k + width]) for k in range(len(words) - width + 1))
    return windows


def ingredient_matches(
    recipe_ingredients: Iterable[str],
    query_term: str,
    threshold: int = FUZZY_MATCH_THRESHOLD,
) -> bool:
    """True when any recipe ingredient contains, is contained in, or nearly spells the term.

    Near spelling is checked against the whole ingredient name and, for terms
    of at least MIN_WINDOW_TERM_LENGTH characters, against each run of words
    as long as the term, so "chiken" finds "chicken breast".
    """
    term = normalize_ingredient(query_term)
    for raw in recipe_ingredients:
        ingredient = normalize_ingredient(raw)
        if not ingredient:
            continue
        if term in ingredient or ingredient in term:
            return True
        if any(edit_distance(window, term) <= threshold for window in _word_windows(ingredient, term)):
            return True
    return False


def has_all_ingredients(
    recipe: StructuredRecipe,
    query_terms: Sequence[str],
    threshold: int = FUZZY_MATCH_THRESHOLD,
) -> bool:
    """Every term must match at least one of the recipe's ingredients."""
    names = recipe.ingredient_names
    return all(ingredient_matches(names, term, threshold) for term in query_terms)
