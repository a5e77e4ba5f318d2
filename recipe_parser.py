import logging
import re
import uuid
from typing import List, Optional

from constants import (
    DEFAULT_AI_TITLE,
    INGREDIENTS_SECTION_RE,
    INSTRUCTIONS_SECTION_RE,
    INSTRUCTIONS_WORD_RE,
    LIST_PREFIX_RE,
    MAX_INGREDIENT_SLOTS,
    MIN_ACCEPTED_INGREDIENTS,
    MIN_ACCEPTED_INSTRUCTIONS_CHARS,
    RECIPE_SEPARATOR_RE,
    TITLE_LINE_RE,
)
from recipe_models import Ingredient, ParsedRecipeText, StructuredRecipe

logger = logging.getLogger(__name__)


def split_recipe_blocks(text: str) -> List[str]:
    """Split model output on "---" separator lines, dropping empty segments."""
    blocks = RECIPE_SEPARATOR_RE.split((text or "").replace("\r\n", "\n"))
    return [b.strip() for b in blocks if b.strip()]


def normalize_title(raw_title: str) -> str:
    t = re.sub(r"\s+", " ", raw_title or "")
    # markdown emphasis and heading marks around the title
    return t.strip(" *#_")


def _extract_title(block: str) -> str:
    m = TITLE_LINE_RE.search(block)
    if m:
        title = normalize_title(m.group(1))
        if title:
            return title
    for line in block.splitlines():
        title = normalize_title(line)
        if title:
            return title
    return DEFAULT_AI_TITLE


def _extract_ingredients(block: str) -> List[str]:
    m = INGREDIENTS_SECTION_RE.search(block)
    if not m:
        return []
    ingredients = []
    for line in re.split(r"[\n\r]", m.group(1)):
        item = LIST_PREFIX_RE.sub("", line).strip()
        if len(item) > 1 and not INSTRUCTIONS_WORD_RE.match(item):
            ingredients.append(item)
    return ingredients


def _extract_instructions(block: str) -> str:
    m = INSTRUCTIONS_SECTION_RE.search(block)
    if m:
        return m.group(1).strip()
    # No explicit header: whatever follows the ingredients section.
    ingredients = INGREDIENTS_SECTION_RE.search(block)
    if not ingredients:
        return ""
    return block[ingredients.end():].strip()


def parse_ai_recipe(block: str) -> ParsedRecipeText:
    """Pull title, ingredients and instructions out of one generated recipe.

    Never rejects anything: missing sections come back empty and the caller
    decides with ``is_acceptable`` whether the result is usable.
    """
    block = (block or "").replace("\r\n", "\n").strip()
    return ParsedRecipeText(
        title=_extract_title(block),
        ingredients=_extract_ingredients(block),
        instructions=_extract_instructions(block),
    )


def is_acceptable(parsed: ParsedRecipeText) -> bool:
    return (
        bool(parsed.title)
        and len(parsed.ingredients) >= MIN_ACCEPTED_INGREDIENTS
        and len(parsed.instructions) >= MIN_ACCEPTED_INSTRUCTIONS_CHARS
    )


def is_recipe_text(text: str) -> bool:
    """True when text has both an ingredients header and an instructions/steps header."""
    text = text or ""
    return bool(INGREDIENTS_SECTION_RE.search(text) and INSTRUCTIONS_SECTION_RE.search(text))


def new_recipe_id(source_tag: str) -> str:
    return f"{source_tag}-{uuid.uuid4().hex}"


def build_ai_recipe(
    parsed: ParsedRecipeText,
    source_tag: str = "ai",
    category: Optional[str] = None,
    area: Optional[str] = None,
    tags: Optional[str] = None,
    thumbnail_url: Optional[str] = None,
) -> StructuredRecipe:
    if len(parsed.ingredients) > MAX_INGREDIENT_SLOTS:
        logger.debug("Dropping %d ingredients beyond slot limit for %r",
                     len(parsed.ingredients) - MAX_INGREDIENT_SLOTS, parsed.title)
    return StructuredRecipe(
        id=new_recipe_id(source_tag),
        title=parsed.title,
        instructions=parsed.instructions,
        ingredients=tuple(Ingredient(name=name) for name in parsed.ingredients[:MAX_INGREDIENT_SLOTS]),
        category=category,
        area=area,
        tags=tags,
        thumbnail_url=thumbnail_url,
    )


def parse_generated_block(text: str, source_tag: str = "ai", **fields) -> Optional[StructuredRecipe]:
    """Structured recipe for an acceptable block, or None when the parse is too thin."""
    parsed = parse_ai_recipe(text)
    if not is_acceptable(parsed):
        logger.info("Rejected generated recipe %r (%d ingredients, %d instruction chars)",
                    parsed.title, len(parsed.ingredients), len(parsed.instructions))
        return None
    return build_ai_recipe(parsed, source_tag=source_tag, **fields)


def parse_accepted_blocks(text: str) -> List[ParsedRecipeText]:
    """Parse every block of a multi-recipe answer, keeping only acceptable ones."""
    accepted = []
    for block in split_recipe_blocks(text):
        parsed = parse_ai_recipe(block)
        if is_acceptable(parsed):
            accepted.append(parsed)
        else:
            logger.info("Skipping unparseable recipe block starting %r", block[:40])
    return accepted
