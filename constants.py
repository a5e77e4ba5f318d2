import re
from typing import Dict, FrozenSet, Pattern, Tuple

# Maximum edit distance at which two normalized ingredient names still match.
FUZZY_MATCH_THRESHOLD = 2

# Shorter terms are only compared against whole ingredient names, so "rice"
# does not fuzzily match the "ice" in "ice cream".
MIN_WINDOW_TERM_LENGTH = 5

# TheMealDB stores ingredients in numbered slots strIngredient1..strIngredient20.
MAX_INGREDIENT_SLOTS = 20

STEP_MARKER_RE: Pattern[str] = re.compile(r"\d+\.")

# Difficulty thresholds: (max ingredients, max step segments) before moving up a level.
INTERMEDIATE_LIMITS = (6, 5)
ADVANCED_LIMITS = (10, 8)

LONG_TIME_KEYWORDS = ("overnight", "hours")
MEDIUM_TIME_KEYWORDS = ("simmer", "bake")
QUICK_TIME_KEYWORDS = ("quick",)
MEDIUM_TIME_MIN_INGREDIENTS = 8
QUICK_TIME_MAX_INGREDIENTS = 5

# Loose spellings of the time bucket labels, keyed by the numeric part.
TIME_BUCKET_ALIASES: Dict[str, str] = {
    "15-30": "15-30 minutes",
    "30-45": "30-45 minutes",
    "30-60": "30-60 minutes",
    "60+": "60+ minutes",
    "over 60": "60+ minutes",
}

# diet -> (recipe fields to scan, disqualifying keywords)
DIETARY_EXCLUSIONS: Dict[str, Tuple[Tuple[str, ...], FrozenSet[str]]] = {
    "vegetarian": (
        ("category", "tags"),
        frozenset({"beef", "chicken", "pork", "lamb", "seafood", "fish"}),
    ),
    "vegan": (
        ("category", "tags"),
        frozenset({"meat", "chicken", "beef", "pork", "fish", "egg", "milk", "cheese", "dairy"}),
    ),
    "gluten-free": (
        ("instructions",),
        frozenset({"wheat", "flour", "pasta", "bread"}),
    ),
}

MEAL_TYPE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "breakfast": ("breakfast", "morning", "brunch"),
    "lunch": ("lunch", "sandwich", "salad"),
    "dinner": ("dinner", "supper", "main course"),
    "snack": ("snack", "appetizer", "side"),
    "dessert": ("dessert", "sweet", "cake", "pie"),
}

# Words recognised as ingredients in a free-text chat message.
KNOWN_INGREDIENT_WORDS: Tuple[str, ...] = (
    "eggs", "egg", "chicken", "beef", "fish", "rice", "potato", "onion", "tomato", "cheese",
    "milk", "bread", "pasta", "carrot", "spinach", "pepper", "mushroom", "garlic", "beans",
    "lentil", "tofu", "paneer", "shrimp", "lamb", "broccoli", "cauliflower", "corn", "peas",
    "avocado", "bacon", "sausage", "turkey", "duck", "salmon", "tuna", "apple", "banana",
    "orange", "lemon", "lime", "strawberry", "blueberry", "yogurt", "cream", "butter", "flour",
    "sugar", "honey", "oats", "coconut", "almond", "walnut", "cashew", "pistachio", "lettuce",
    "cabbage", "zucchini", "eggplant", "pumpkin", "sweet potato", "chickpea", "quinoa",
    "barley", "basil", "cilantro", "parsley", "mint", "rosemary", "thyme", "sage", "dill",
    "coriander", "mustard", "kale", "arugula", "rocket", "radish", "turnip", "celery", "leek",
    "scallion", "green onion", "chive", "artichoke", "asparagus", "beet", "brussels sprout",
    "cucumber", "date", "fig", "grape", "kiwi", "mango", "melon", "papaya", "peach", "pear",
    "pineapple", "plum", "pomegranate", "raspberry", "watermelon",
)

# Generated text grammar. Headers may carry markdown decoration ("**Ingredients:**").
HEADER_PREFIX = r"^[ \t#*]*"
INGREDIENTS_SECTION_RE: Pattern[str] = re.compile(
    HEADER_PREFIX
    + r"ingredients?\b[ \t*]*[:\-]?[ \t*]*\n*"
    + r"(.*?)"
    + r"(?=" + HEADER_PREFIX + r"(?:instructions?|steps)\b[ \t*]*(?:[:\-]|$)|\n[ \t]*\n|\Z)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
INSTRUCTIONS_SECTION_RE: Pattern[str] = re.compile(
    HEADER_PREFIX + r"(?:instructions?|steps)\b[ \t*]*(?:[:\-]|$)[ \t*]*(.*)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
TITLE_LINE_RE: Pattern[str] = re.compile(r"^[ \t#*]*title[ \t*]*:[ \t*]*(.+)$", re.IGNORECASE | re.MULTILINE)
RECIPE_SEPARATOR_RE: Pattern[str] = re.compile(r"^[ \t]*-{3,}[ \t]*$", re.MULTILINE)
LIST_PREFIX_RE: Pattern[str] = re.compile(r"^[-*•\d.\s]+")
INSTRUCTIONS_WORD_RE: Pattern[str] = re.compile(r"^instructions?", re.IGNORECASE)

# Acceptance policy for a parsed generated recipe.
MIN_ACCEPTED_INGREDIENTS = 2
MIN_ACCEPTED_INSTRUCTIONS_CHARS = 11

DEFAULT_AI_TITLE = "AI Recipe"
PLACEHOLDER_THUMBNAIL = "https://placehold.co/600x400?text={text}"
