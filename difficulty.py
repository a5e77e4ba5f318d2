"""Heuristic difficulty and cooking time classification.

Both values are derived from the ingredient list and the instruction text
only, so they can be recomputed at any time for corpus and generated
recipes alike.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from constants import (
    ADVANCED_LIMITS,
    INTERMEDIATE_LIMITS,
    LONG_TIME_KEYWORDS,
    MEDIUM_TIME_KEYWORDS,
    MEDIUM_TIME_MIN_INGREDIENTS,
    QUICK_TIME_KEYWORDS,
    QUICK_TIME_MAX_INGREDIENTS,
    STEP_MARKER_RE,
    TIME_BUCKET_ALIASES,
)


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class TimeBucket(str, Enum):
    """Estimated cooking time buckets, shortest first."""

    QUICK = "15-30 minutes"
    MODERATE = "30-45 minutes"
    LONG = "30-60 minutes"
    EXTENDED = "60+ minutes"

    @classmethod
    def from_label(cls, label: str) -> Optional["TimeBucket"]:
        """Resolve a loosely written label ("30-60 min", "Over 60 minutes") to a bucket."""
        if not label:
            return None
        text = label.lower().replace("–", "-").replace("—", "-")
        text = re.sub(r"\s*-\s*", "-", text)
        text = re.sub(r"\s+", " ", text).strip()
        text = re.sub(r"\s*(?:minutes?|mins?)$", "", text).strip()
        canonical = TIME_BUCKET_ALIASES.get(text)
        if canonical is None:
            return None
        return cls(canonical)


# Fallthrough bucket when no keyword or ingredient-count rule applies.
DEFAULT_TIME_BUCKET = TimeBucket.MODERATE


@dataclass(frozen=True)
class RecipeClassification:
    difficulty: Difficulty
    estimated_time: TimeBucket


def count_ingredients(ingredients: Any) -> int:
    count = 0
    for ingredient in ingredients or ():
        name = getattr(ingredient, "name", ingredient)
        if name and str(name).strip():
            count += 1
    return count


def count_steps(instructions: str) -> int:
    # Splitting text without markers yields one segment, including the empty string.
    return len(STEP_MARKER_RE.split(instructions or ""))


def calculate_difficulty(ingredient_count: int, step_count: int) -> Difficulty:
    if ingredient_count > ADVANCED_LIMITS[0] or step_count > ADVANCED_LIMITS[1]:
        return Difficulty.ADVANCED
    if ingredient_count > INTERMEDIATE_LIMITS[0] or step_count > INTERMEDIATE_LIMITS[1]:
        return Difficulty.INTERMEDIATE
    return Difficulty.BEGINNER


def estimate_cooking_time(instructions: str, ingredient_count: int) -> TimeBucket:
    text = (instructions or "").lower()
    if any(word in text for word in LONG_TIME_KEYWORDS):
        return TimeBucket.EXTENDED
    if any(word in text for word in MEDIUM_TIME_KEYWORDS) or ingredient_count > MEDIUM_TIME_MIN_INGREDIENTS:
        return TimeBucket.LONG
    if any(word in text for word in QUICK_TIME_KEYWORDS) or ingredient_count <= QUICK_TIME_MAX_INGREDIENTS:
        return TimeBucket.QUICK
    return DEFAULT_TIME_BUCKET


def classify(recipe: Any) -> RecipeClassification:
    """Classify anything exposing ``ingredients`` and ``instructions``."""
    ingredient_count = count_ingredients(recipe.ingredients)
    instructions = recipe.instructions or ""
    return RecipeClassification(
        difficulty=calculate_difficulty(ingredient_count, count_steps(instructions)),
        estimated_time=estimate_cooking_time(instructions, ingredient_count),
    )
