from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from constants import MAX_INGREDIENT_SLOTS
from difficulty import Difficulty, RecipeClassification, TimeBucket, classify


@dataclass(frozen=True)
class Ingredient:
    name: str
    measure: str = ""


@dataclass(frozen=True)
class StructuredRecipe:
    """Recipe shape shared by corpus results and generated recipes."""

    id: str
    title: str
    instructions: str = ""
    ingredients: Tuple[Ingredient, ...] = ()
    category: Optional[str] = None
    area: Optional[str] = None
    tags: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("recipe title must not be empty")
        ingredients = tuple(self.ingredients)
        if len(ingredients) > MAX_INGREDIENT_SLOTS:
            raise ValueError(
                f"recipe {self.id!r} has {len(ingredients)} ingredients, at most {MAX_INGREDIENT_SLOTS} allowed"
            )
        for ingredient in ingredients:
            if not ingredient.name.strip():
                raise ValueError(f"recipe {self.id!r} has a blank ingredient name")
        object.__setattr__(self, "ingredients", ingredients)
        object.__setattr__(self, "instructions", self.instructions or "")

    @property
    def ingredient_names(self) -> List[str]:
        return [ingredient.name for ingredient in self.ingredients]

    @property
    def classification(self) -> RecipeClassification:
        return classify(self)

    @property
    def difficulty(self) -> Difficulty:
        return self.classification.difficulty

    @property
    def estimated_time(self) -> TimeBucket:
        return self.classification.estimated_time

    def to_dict(self) -> Dict[str, Any]:
        classification = self.classification
        return {
            "id": self.id,
            "title": self.title,
            "instructions": self.instructions,
            "ingredients": [{"name": i.name, "measure": i.measure} for i in self.ingredients],
            "category": self.category,
            "area": self.area,
            "tags": self.tags,
            "thumbnail_url": self.thumbnail_url,
            "difficulty": classification.difficulty.value,
            "estimated_time": classification.estimated_time.value,
        }


@dataclass(frozen=True)
class ParsedRecipeText:
    """Best-effort extraction from one block of generated text."""

    title: str
    ingredients: List[str] = field(default_factory=list)
    instructions: str = ""


@dataclass
class PreferenceFilter:
    """User preferences; an empty or missing value puts no constraint on that axis."""

    dietary_preference: Optional[str] = None
    meal_type: Optional[str] = None
    cuisine: Optional[str] = None
    cooking_time: Optional[str] = None
    skill_level: Optional[str] = None
    additional_info: Optional[str] = None

    def search_queries(self) -> List[str]:
        """Preference values worth running as corpus name searches, in priority order."""
        values = [self.cuisine, self.meal_type, self.dietary_preference, self.additional_info]
        return [v.strip() for v in values if v and v.strip()]

    def is_empty(self) -> bool:
        return not any([
            self.dietary_preference,
            self.meal_type,
            self.cuisine,
            self.cooking_time,
            self.skill_level,
            self.additional_info,
        ])


@dataclass
class SuggestionResult:
    """Outcome of a preference search; ``source`` is "corpus", "ai" or "none"."""

    recipes: List[StructuredRecipe] = field(default_factory=list)
    source: str = "none"
    message: str = ""


@dataclass
class ChatReply:
    """Everything produced by one assistant chat turn."""

    ingredients: List[str] = field(default_factory=list)
    corpus_recipes: List[StructuredRecipe] = field(default_factory=list)
    corpus_message: Optional[str] = None
    ai_recipes: List[StructuredRecipe] = field(default_factory=list)
    text: str = ""
