from typing import Iterable, List, Optional

from constants import DIETARY_EXCLUSIONS, MEAL_TYPE_KEYWORDS
from difficulty import TimeBucket
from recipe_models import PreferenceFilter, StructuredRecipe


def _lower(value: Optional[str]) -> str:
    return (value or "").lower()


def _wanted(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def passes_diet(recipe: StructuredRecipe, diet: str) -> bool:
    rule = DIETARY_EXCLUSIONS.get(_wanted(diet))
    if rule is None:
        return True
    fields, keywords = rule
    texts = [_lower(getattr(recipe, name)) for name in fields]
    return not any(word in text for word in keywords for text in texts)


def passes_meal_type(recipe: StructuredRecipe, meal_type: str) -> bool:
    wanted = _wanted(meal_type)
    if wanted in _lower(recipe.category):
        return True
    title = _lower(recipe.title)
    tags = _lower(recipe.tags)
    return any(word in title or word in tags for word in MEAL_TYPE_KEYWORDS.get(wanted, ()))


def passes_cuisine(recipe: StructuredRecipe, cuisine: str) -> bool:
    wanted = _wanted(cuisine)
    return _lower(recipe.area) == wanted or wanted in _lower(recipe.tags)


def passes_cooking_time(recipe: StructuredRecipe, cooking_time: str) -> bool:
    wanted = TimeBucket.from_label(cooking_time)
    estimated = recipe.estimated_time
    if wanted is None:
        # Unrecognised label: fall back to comparing the text.
        return _wanted(cooking_time) in estimated.value.lower()
    return estimated is wanted


def passes_skill_level(recipe: StructuredRecipe, skill_level: str) -> bool:
    return recipe.difficulty.value.lower() == _wanted(skill_level)


def matches_preferences(recipe: StructuredRecipe, prefs: PreferenceFilter) -> bool:
    if _wanted(prefs.dietary_preference) and not passes_diet(recipe, prefs.dietary_preference):
        return False
    if _wanted(prefs.meal_type) and not passes_meal_type(recipe, prefs.meal_type):
        return False
    if _wanted(prefs.cuisine) and not passes_cuisine(recipe, prefs.cuisine):
        return False
    if _wanted(prefs.cooking_time) and not passes_cooking_time(recipe, prefs.cooking_time):
        return False
    if _wanted(prefs.skill_level) and not passes_skill_level(recipe, prefs.skill_level):
        return False
    return True


def apply_filters(recipes: Iterable[StructuredRecipe], prefs: Optional[PreferenceFilter]) -> List[StructuredRecipe]:
    """Keep the recipes that satisfy every configured preference, in their original order."""
    if prefs is None:
        return list(recipes or [])
    return [r for r in recipes or [] if matches_preferences(r, prefs)]
