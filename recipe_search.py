import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import requests

from constants import FUZZY_MATCH_THRESHOLD
from errors import RemoteUnavailableError
from matching import has_all_ingredients, normalize_ingredient
from mealdb_client import meal_to_recipe
from recipe_models import StructuredRecipe

logger = logging.getLogger(__name__)

# Failures an injected corpus client may raise for an unreachable service.
REMOTE_FAULTS = (RemoteUnavailableError, requests.RequestException, OSError)


def _to_recipes(meals: Iterable[Dict[str, Any]]) -> List[StructuredRecipe]:
    recipes = []
    for meal in meals:
        recipe = meal_to_recipe(meal)
        if recipe is not None:
            recipes.append(recipe)
    return recipes


def dedupe_by_id(recipes: Iterable[StructuredRecipe]) -> List[StructuredRecipe]:
    """Drop repeated ids, keeping the last payload seen at the first position."""
    by_id: Dict[str, StructuredRecipe] = {}
    for recipe in recipes:
        by_id[recipe.id] = recipe
    return list(by_id.values())


class CorpusSearchStrategy:
    """Runs the remote lookups behind ingredient and name searches.

    ``client`` is anything with ``search_by_name``, ``search_by_ingredient``
    and ``get_by_id`` returning TheMealDB-shaped dicts. Remote failures are
    logged and treated as empty results; nothing is retried here.
    """

    def __init__(self, client, threshold: int = FUZZY_MATCH_THRESHOLD):
        self.client = client
        self.threshold = threshold

    def _prefilter(self, term: str) -> List[Dict[str, Any]]:
        try:
            return self.client.search_by_ingredient(term)
        except REMOTE_FAULTS as exc:
            logger.warning("Ingredient search for %r failed: %s", term, exc)
            return []

    def _details(self, meal_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.client.get_by_id(meal_id)
        except REMOTE_FAULTS as exc:
            logger.warning("Detail lookup for meal %s failed: %s", meal_id, exc)
            return None

    def hydrate(self, stubs: Iterable[Dict[str, Any]]) -> List[StructuredRecipe]:
        """Fetch full records for stubs one by one; stubs without details are dropped."""
        recipes = []
        for stub in stubs:
            meal_id = stub.get("idMeal")
            if not meal_id:
                continue
            details = self._details(meal_id)
            if not details:
                logger.debug("No details for meal %s, skipping", meal_id)
                continue
            recipe = meal_to_recipe(details)
            if recipe is not None:
                recipes.append(recipe)
        return recipes

    def search_by_ingredients(self, terms: Sequence[str]) -> List[StructuredRecipe]:
        """Recipes containing every term, using the first term as the corpus prefilter."""
        terms = [t for t in (normalize_ingredient(t) for t in terms or []) if t]
        if not terms:
            return []

        stubs = self._prefilter(terms[0])
        if not stubs:
            logger.info("No corpus recipes contain %r", terms[0])
            return []
        if len(terms) == 1:
            return _to_recipes(stubs)

        candidates = self.hydrate(stubs)
        matches = [r for r in candidates if has_all_ingredients(r, terms[1:], self.threshold)]
        for recipe in matches:
            classification = recipe.classification
            logger.debug("%s: %s, %s", recipe.title,
                         classification.difficulty.value, classification.estimated_time.value)
        logger.info("%d of %d candidates for %r contain all of %r",
                    len(matches), len(candidates), terms[0], terms[1:])
        return matches

    def intersect_by_ingredients(self, terms: Sequence[str], limit: int = 5) -> List[StructuredRecipe]:
        """Recipes the corpus lists under every term, hydrated up to ``limit``.

        Each further term narrows the id set of the previous ones; the search
        stops as soon as the intersection is empty.
        """
        terms = [t for t in (normalize_ingredient(t) for t in terms or []) if t]
        if not terms:
            return []
        stubs = self._prefilter(terms[0])
        for term in terms[1:]:
            if not stubs:
                break
            next_ids = {meal.get("idMeal") for meal in self._prefilter(term)}
            stubs = [meal for meal in stubs if meal.get("idMeal") in next_ids]
        if not stubs:
            return []
        return self.hydrate(stubs[:limit])

    def search_by_name(self, name: str) -> List[StructuredRecipe]:
        try:
            meals = self.client.search_by_name(name)
        except REMOTE_FAULTS as exc:
            logger.warning("Name search for %r failed: %s", name, exc)
            return []
        return _to_recipes(meals)

    def search_by_names(self, names: Iterable[str]) -> List[StructuredRecipe]:
        recipes: List[StructuredRecipe] = []
        for name in names:
            recipes.extend(self.search_by_name(name))
        return dedupe_by_id(recipes)
