import argparse
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

from config import Settings
from mealdb_client import MealDBClient
from recipe_assistant import RecipeAssistant, recipe_from_text
from recipe_display import render_markdown, summary_line
from recipe_filters import apply_filters
from recipe_models import PreferenceFilter, StructuredRecipe
from recipe_parser import is_recipe_text, parse_accepted_blocks, build_ai_recipe
from recipe_search import CorpusSearchStrategy
from xai_client import XAIClient

logger = logging.getLogger(__name__)


def build_assistant(settings: Settings) -> RecipeAssistant:
    search = CorpusSearchStrategy(MealDBClient(settings.mealdb_base_url, timeout=settings.http_timeout))
    text_client = None
    if settings.ai_enabled:
        text_client = XAIClient(
            settings.xai_api_key,
            base_url=settings.xai_base_url,
            chat_model=settings.xai_chat_model,
            image_model=settings.xai_image_model,
            timeout=max(settings.http_timeout, 60),
        )
    else:
        logger.info("XAI_API_KEY not set, AI-generated recipes disabled")
    return RecipeAssistant(search, text_client=text_client, image_client=text_client)


def _preferences(args: argparse.Namespace) -> PreferenceFilter:
    return PreferenceFilter(
        dietary_preference=args.diet,
        meal_type=args.meal_type,
        cuisine=args.cuisine,
        cooking_time=args.time,
        skill_level=args.skill,
        additional_info=getattr(args, "info", None),
    )


def _safe_filename(title: str) -> str:
    return re.sub(r"[^\w\- ]+", "-", title).strip()[:80] or "recipe"


def _unused_path(out_dir: Path, stem: str) -> Path:
    md_path = out_dir / f"{stem}.md"
    counter = 2
    while md_path.exists():
        md_path = out_dir / f"{stem} ({counter}).md"
        counter += 1
    return md_path


def write_recipes(recipes: Iterable[StructuredRecipe], out_dir: Optional[Path]) -> List[Path]:
    """Write one Markdown file per recipe; never overwrites an existing file."""
    if out_dir is None:
        return []
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for recipe in recipes:
        md_path = _unused_path(out_dir, _safe_filename(recipe.title))
        with open(md_path, "w", encoding="utf-8") as f:
            f.write(render_markdown(recipe))
        paths.append(md_path)
    return paths


def print_recipes(recipes: List[StructuredRecipe], full: bool) -> None:
    for recipe in recipes:
        print(render_markdown(recipe) if full else f"- {summary_line(recipe)}")


def _add_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--diet", help="Dietary preference, e.g. vegetarian, vegan, gluten-free")
    parser.add_argument("--meal-type", help="breakfast, lunch, dinner, snack or dessert")
    parser.add_argument("--cuisine", help="Cuisine / area, e.g. Italian")
    parser.add_argument("--time", help="Cooking time bucket, e.g. '15-30 minutes'")
    parser.add_argument("--skill", help="Beginner, Intermediate or Advanced")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Find recipes from your pantry in TheMealDB, with AI-generated fallbacks.")
    ap.add_argument("--out-dir", help="Write each recipe as a Markdown file into this directory")
    output = ap.add_mutually_exclusive_group()
    output.add_argument("--full", action="store_true", help="Print full recipes instead of one line each")
    output.add_argument("--json", action="store_true", help="Print all recipes as one JSON array")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log search progress")
    sub = ap.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Recipes containing all of the given ingredients")
    search.add_argument("ingredients", nargs="+", help="Ingredient names; the first one drives the search")
    _add_filter_args(search)

    suggest = sub.add_parser("suggest", help="Recipes matching preferences, generated by AI if none exist")
    _add_filter_args(suggest)
    suggest.add_argument("--info", help="Additional free-text wishes")

    chat = sub.add_parser("chat", help="Ask the recipe assistant a question")
    chat.add_argument("message", help="What you have or what you want to cook")

    parse = sub.add_parser("parse", help="Parse a file of AI-generated recipes")
    parse.add_argument("path", type=Path, help="Text file with recipes separated by '---' lines")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    settings = Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    out_dir = Path(args.out_dir) if args.out_dir else None

    def say(message: str) -> None:
        # JSON output stays machine readable
        if not args.json:
            print(message)

    if args.command == "suggest":
        prefs = _preferences(args)
        if prefs.is_empty():
            ap.error("suggest needs at least one of --diet, --meal-type, --cuisine, --time, --skill or --info")

    assistant = build_assistant(settings)

    if args.command == "search":
        recipes = assistant.search.search_by_ingredients(args.ingredients)
        recipes = apply_filters(recipes, _preferences(args))
        if not recipes:
            say("No recipes found.")
    elif args.command == "suggest":
        result = assistant.suggest(prefs)
        say(result.message)
        recipes = result.recipes
    elif args.command == "chat":
        reply = assistant.chat(args.message)
        if reply.corpus_message:
            say(reply.corpus_message)
            if not args.json:
                print_recipes(reply.corpus_recipes, args.full)
        say(reply.text)
        recipes = reply.corpus_recipes + reply.ai_recipes
        if not reply.ai_recipes and is_recipe_text(reply.text):
            recipes.append(recipe_from_text(reply.text))
        if not args.json:
            print_recipes(reply.ai_recipes, args.full)
    else:
        text = args.path.read_text(encoding="utf-8")
        recipes = [build_ai_recipe(parsed) for parsed in parse_accepted_blocks(text)]
        if not recipes:
            say("No valid recipes could be parsed.")

    if args.json:
        print(json.dumps([recipe.to_dict() for recipe in recipes], indent=2, ensure_ascii=False))
    elif args.command in ("search", "suggest", "parse"):
        print_recipes(recipes, args.full)
    for path in write_recipes(recipes, out_dir):
        say(f"Markdown: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
