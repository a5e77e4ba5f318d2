import logging
from typing import Any, Dict, List, Optional

import requests

from constants import MAX_INGREDIENT_SLOTS
from errors import RemoteUnavailableError
from recipe_models import Ingredient, StructuredRecipe

logger = logging.getLogger(__name__)

MEALDB_API_BASE = "https://www.themealdb.com/api/json/v1/1"


def _check_slot(index: int) -> None:
    if not 1 <= index <= MAX_INGREDIENT_SLOTS:
        raise IndexError(f"ingredient slot {index} outside 1..{MAX_INGREDIENT_SLOTS}")


def ingredient_slot(meal: Dict[str, Any], index: int) -> Optional[Ingredient]:
    """Ingredient stored in numbered slot ``index`` (1-based), or None when blank."""
    _check_slot(index)
    name = (meal.get(f"strIngredient{index}") or "").strip()
    if not name:
        return None
    measure = (meal.get(f"strMeasure{index}") or "").strip()
    return Ingredient(name=name, measure=measure)


def meal_to_recipe(meal: Dict[str, Any]) -> Optional[StructuredRecipe]:
    """Convert a TheMealDB meal (full record or filter stub) into a StructuredRecipe."""
    meal_id = meal.get("idMeal")
    title = (meal.get("strMeal") or "").strip()
    if not meal_id or not title:
        logger.warning("Ignoring meal payload without id or name: %r", meal_id)
        return None
    ingredients = []
    for index in range(1, MAX_INGREDIENT_SLOTS + 1):
        ingredient = ingredient_slot(meal, index)
        if ingredient:
            ingredients.append(ingredient)
    return StructuredRecipe(
        id=str(meal_id),
        title=title,
        instructions=meal.get("strInstructions") or "",
        ingredients=tuple(ingredients),
        category=meal.get("strCategory") or None,
        area=meal.get("strArea") or None,
        tags=meal.get("strTags") or None,
        thumbnail_url=meal.get("strMealThumb") or None,
    )


def recipe_to_meal(recipe: StructuredRecipe) -> Dict[str, Any]:
    """Serialize back to TheMealDB's fixed-slot layout."""
    meal: Dict[str, Any] = {
        "idMeal": recipe.id,
        "strMeal": recipe.title,
        "strInstructions": recipe.instructions,
        "strCategory": recipe.category,
        "strArea": recipe.area,
        "strTags": recipe.tags,
        "strMealThumb": recipe.thumbnail_url,
    }
    for index in range(1, MAX_INGREDIENT_SLOTS + 1):
        if index <= len(recipe.ingredients):
            ingredient = recipe.ingredients[index - 1]
            meal[f"strIngredient{index}"] = ingredient.name
            meal[f"strMeasure{index}"] = ingredient.measure
        else:
            meal[f"strIngredient{index}"] = ""
            meal[f"strMeasure{index}"] = ""
    return meal


class MealDBClient:
    """Thin client for TheMealDB's public JSON API.

    Every method raises ``RemoteUnavailableError`` on transport errors, HTTP
    errors or undecodable bodies; callers decide how to degrade.
    """

    def __init__(self, base_url: str = MEALDB_API_BASE, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, endpoint: str, params: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteUnavailableError("TheMealDB", str(exc)) from exc
        if not resp.ok:
            raise RemoteUnavailableError("TheMealDB", f"{endpoint} returned {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteUnavailableError("TheMealDB", f"{endpoint} returned invalid JSON") from exc
        return data if isinstance(data, dict) else {}

    def _meals(self, endpoint: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        # TheMealDB answers {"meals": null} when nothing matches.
        return self._get(endpoint, params).get("meals") or []

    def search_by_name(self, name: str) -> List[Dict[str, Any]]:
        return self._meals("search.php", {"s": name})

    def search_by_ingredient(self, term: str) -> List[Dict[str, Any]]:
        return self._meals("filter.php", {"i": term})

    def get_by_id(self, meal_id: str) -> Optional[Dict[str, Any]]:
        meals = self._meals("lookup.php", {"i": meal_id})
        return meals[0] if meals else None

    def list_ingredients(self) -> List[Dict[str, Any]]:
        return self._meals("list.php", {"i": "list"})
