from typing import Optional
from urllib.parse import quote_plus

from constants import PLACEHOLDER_THUMBNAIL
from recipe_models import StructuredRecipe


def thumbnail_for(recipe: StructuredRecipe) -> str:
    """Recipe image, or a placeholder that depends only on the title."""
    if recipe.thumbnail_url:
        return recipe.thumbnail_url
    return PLACEHOLDER_THUMBNAIL.format(text=quote_plus(recipe.title))


def summary_line(recipe: StructuredRecipe) -> str:
    classification = recipe.classification
    parts = [recipe.title, classification.difficulty.value, classification.estimated_time.value]
    if recipe.area:
        parts.append(recipe.area)
    return " · ".join(parts)


def render_markdown(recipe: StructuredRecipe, source_url: Optional[str] = None) -> str:
    classification = recipe.classification
    md = [f"# {recipe.title}", ""]
    md.append(f"![{recipe.title}]({thumbnail_for(recipe)})")
    md.append("")
    md.append(f"_Difficulty: {classification.difficulty.value} · Time: {classification.estimated_time.value}_")
    md.append("")
    if source_url:
        md.append(f"_Source: {source_url}_")
        md.append("")
    if recipe.ingredients:
        md.append("## Ingredients")
        for ing in recipe.ingredients:
            md.append(f"- {ing.measure} {ing.name}" if ing.measure else f"- {ing.name}")
        md.append("")
    if recipe.instructions:
        md.append("## Instructions")
        md.append(recipe.instructions.strip())
        md.append("")
    return "\n".join(md).strip() + "\n"
