from recipe_filters import apply_filters, passes_cooking_time
from recipe_models import Ingredient, PreferenceFilter, StructuredRecipe


def _recipe(recipe_id, title, category, area, tags, ingredient_count, instructions):
    return StructuredRecipe(
        id=recipe_id,
        title=title,
        category=category,
        area=area,
        tags=tags,
        instructions=instructions,
        ingredients=tuple(Ingredient(f"ingredient {i}") for i in range(ingredient_count)),
    )


# Intermediate / 30-60 minutes
BUTTER_CHICKEN = _recipe("1", "Butter Chicken", "Chicken", "Indian", "Curry,Spicy", 7, "Simmer the sauce.")
# Beginner / 15-30 minutes
PRIMAVERA = _recipe("2", "Pasta Primavera", "Vegetarian", "Italian", "Pasta", 4, "Boil pasta. Toss.")
# Intermediate / 30-60 minutes
SPONGE = _recipe("3", "Victoria Sponge", "Dessert", "British", "Cake,Sweet", 8, "Bake for 25 minutes.")

ALL = [BUTTER_CHICKEN, PRIMAVERA, SPONGE]


def _ids(recipes):
    return [r.id for r in recipes]


def test_no_preferences_keeps_everything_in_order():
    assert _ids(apply_filters(ALL, PreferenceFilter())) == ["1", "2", "3"]
    assert _ids(apply_filters(ALL, PreferenceFilter(cuisine="", skill_level=""))) == ["1", "2", "3"]
    assert apply_filters([], PreferenceFilter(cuisine="Italian")) == []


def test_dietary_preferences_use_keyword_tables():
    assert _ids(apply_filters(ALL, PreferenceFilter(dietary_preference="Vegetarian"))) == ["2", "3"]
    assert _ids(apply_filters(ALL, PreferenceFilter(dietary_preference="vegan"))) == ["2", "3"]
    # gluten-free looks at the instructions instead of the tags
    assert _ids(apply_filters(ALL, PreferenceFilter(dietary_preference="gluten-free"))) == ["1", "3"]
    assert _ids(apply_filters(ALL, PreferenceFilter(dietary_preference="keto"))) == ["1", "2", "3"]


def test_meal_type_matches_category_or_keywords():
    assert _ids(apply_filters(ALL, PreferenceFilter(meal_type="Dessert"))) == ["3"]
    assert _ids(apply_filters(ALL, PreferenceFilter(meal_type="chicken"))) == ["1"]

    sandwich = _recipe("4", "Club Sandwich", "Miscellaneous", "American", None, 5, "Stack it.")
    assert _ids(apply_filters([sandwich], PreferenceFilter(meal_type="lunch"))) == ["4"]


def test_cuisine_matches_area_or_tags():
    assert _ids(apply_filters(ALL, PreferenceFilter(cuisine="italian"))) == ["2"]
    assert _ids(apply_filters(ALL, PreferenceFilter(cuisine="Curry"))) == ["1"]


def test_cooking_time_compares_buckets():
    assert _ids(apply_filters(ALL, PreferenceFilter(cooking_time="15-30 minutes"))) == ["2"]
    assert _ids(apply_filters(ALL, PreferenceFilter(cooking_time="30-60 min"))) == ["1", "3"]
    assert not passes_cooking_time(PRIMAVERA, "60+ minutes")


def test_skill_level_filter_is_idempotent():
    prefs = PreferenceFilter(skill_level="Beginner")
    once = apply_filters(ALL, prefs)

    assert _ids(once) == ["2"]
    assert apply_filters(once, prefs) == once


def test_axes_combine_with_and():
    prefs = PreferenceFilter(dietary_preference="vegetarian", skill_level="intermediate")
    assert _ids(apply_filters(ALL, prefs)) == ["3"]
