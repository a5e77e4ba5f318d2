import pytest

from errors import RemoteUnavailableError


def make_meal(meal_id, name, ingredients, **extra):
    meal = {
        "idMeal": meal_id,
        "strMeal": name,
        "strInstructions": extra.pop("instructions", "Cook everything together."),
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
    }
    for index, ingredient in enumerate(ingredients, 1):
        meal[f"strIngredient{index}"] = ingredient
        meal[f"strMeasure{index}"] = "1 cup"
    meal.update(extra)
    return meal


def stub(meal):
    return {"idMeal": meal["idMeal"], "strMeal": meal["strMeal"], "strMealThumb": meal["strMealThumb"]}


class FakeCorpus:
    """In-memory stand-in for MealDBClient that records every call."""

    def __init__(self, meals=(), by_ingredient=None, by_name=None, failing_ids=(), down=False):
        self.meals = {m["idMeal"]: m for m in meals}
        self.by_ingredient = by_ingredient or {}
        self.by_name = by_name or {}
        self.failing_ids = set(failing_ids)
        self.down = down
        self.calls = []

    def _check(self):
        if self.down:
            raise RemoteUnavailableError("TheMealDB", "connection refused")

    def search_by_ingredient(self, term):
        self.calls.append(("ingredient", term))
        self._check()
        return [stub(self.meals[i]) for i in self.by_ingredient.get(term, [])]

    def search_by_name(self, name):
        self.calls.append(("name", name))
        self._check()
        return [self.meals[i] for i in self.by_name.get(name.lower(), [])]

    def get_by_id(self, meal_id):
        self.calls.append(("lookup", meal_id))
        self._check()
        if meal_id in self.failing_ids:
            raise RemoteUnavailableError("TheMealDB", "timeout")
        return self.meals.get(meal_id)


CURRY = make_meal("1", "Chicken Curry", ["Chicken", "Onion", "Garlic", "Tomato"],
                  strCategory="Chicken", strArea="Indian", strTags="Curry")
SALAD = make_meal("2", "Chicken Salad", ["Chicken", "Lettuce", "Tomatoes", "Olive Oil"],
                  strCategory="Chicken", strArea="American", strTags="Salad")
SOUP = make_meal("3", "Chicken Soup", ["Chicken", "Carrot", "Celery"],
                 strCategory="Chicken", strArea="British", strTags="Soup")
RISOTTO = make_meal("4", "Mushroom Risotto", ["Rice", "Mushroom", "Parmesan"],
                    strCategory="Vegetarian", strArea="Italian", strTags="Rice",
                    instructions="Stir the rice slowly.")


@pytest.fixture
def corpus():
    return FakeCorpus(
        meals=[CURRY, SALAD, SOUP, RISOTTO],
        by_ingredient={
            "chicken": ["1", "2", "3"],
            "tomato": ["1", "2"],
            "rice": ["4"],
        },
        by_name={"italian": ["4"], "chicken": ["1", "2", "3"], "curry": ["1"]},
    )
