from typing import Iterable

from recipe_models import PreferenceFilter

CHEF_SYSTEM_PROMPT = (
    "You are a helpful AI chef assistant. When asked for recipes, always return a list of 3 creative "
    "recipes in the strict format described by the user prompt."
)

RECIPE_FORMAT = (
    "Title: <Recipe Title>\n"
    "Description: <Brief appetizing description>\n"
    "Ingredients:\n"
    "- <ingredient 1>\n"
    "- <ingredient 2>\n"
    "...\n"
    "Instructions:\n"
    "1. <step 1>\n"
    "2. <step 2>\n"
    "...\n"
    "Separate each recipe with \n---\n."
)


def preferences_prompt(prefs: PreferenceFilter) -> str:
    return (
        "Generate 3 creative recipes based on these preferences: "
        f"Dietary: {prefs.dietary_preference or ''}, "
        f"Meal: {prefs.meal_type or ''}, "
        f"Cuisine: {prefs.cuisine or ''}, "
        f"Cooking Time: {prefs.cooking_time or ''}, "
        f"Skill: {prefs.skill_level or ''}, "
        f"Additional: {prefs.additional_info or ''}.\n\n"
        "Please format your response strictly as follows for each recipe:\n"
        + RECIPE_FORMAT
    )


def ingredients_prompt(ingredients: Iterable[str]) -> str:
    return (
        f"List 3 creative recipes using the following ingredients: {', '.join(ingredients)}. "
        "For each recipe, use this format:\n"
        + RECIPE_FORMAT
    )


def food_photo_prompt(subject: str) -> str:
    return (
        f"Professional food photography of {subject}. The dish is beautifully plated on an elegant "
        "ceramic plate or rustic wooden board, captured from a 45-degree angle or overhead perspective. "
        "The lighting is soft and natural, highlighting the textures and colors of the food. "
        "The background is blurred with warm, inviting tones. Garnishes and ingredients are artfully "
        "arranged. The image style is clean, modern, and appetizing."
    )
