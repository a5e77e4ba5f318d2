import logging
from typing import List, Optional

from constants import KNOWN_INGREDIENT_WORDS
from errors import RemoteUnavailableError
from prompts import CHEF_SYSTEM_PROMPT, ingredients_prompt, preferences_prompt
from recipe_filters import apply_filters
from recipe_models import ChatReply, ParsedRecipeText, PreferenceFilter, StructuredRecipe, SuggestionResult
from recipe_parser import build_ai_recipe, parse_accepted_blocks, parse_ai_recipe
from recipe_search import CorpusSearchStrategy

logger = logging.getLogger(__name__)

MAX_RESULTS = 5


def extract_ingredient_words(message: str) -> List[str]:
    """Known ingredient words in a chat message, longest first, skipping overlaps."""
    text = (message or "").lower()
    found: List[str] = []
    for word in sorted(KNOWN_INGREDIENT_WORDS, key=len, reverse=True):
        if word in text and not any(word in f or f in word for f in found):
            found.append(word)
    return found


def recipe_from_text(text: str) -> StructuredRecipe:
    """Turn a single free-form chat answer into a recipe, whatever its quality."""
    parsed = parse_ai_recipe(text)
    return build_ai_recipe(parsed, source_tag="ai-chat", category="AI Chat", area="AI Generated", tags="AI,Chat")


class RecipeAssistant:
    """Combines corpus search and generated recipes for preferences and chat.

    ``text_client`` needs ``complete(system, user)``; ``image_client`` needs
    ``generate(prompt)``. Either may be None, which disables that feature.
    """

    def __init__(self, search: CorpusSearchStrategy, text_client=None, image_client=None):
        self.search = search
        self.text_client = text_client
        self.image_client = image_client

    def _complete(self, prompt: str) -> Optional[str]:
        if self.text_client is None:
            logger.info("No language model configured, skipping generation")
            return None
        try:
            return self.text_client.complete(CHEF_SYSTEM_PROMPT, prompt)
        except RemoteUnavailableError as exc:
            logger.warning("Recipe generation failed: %s", exc)
            return None

    def _image_for(self, subject: str) -> Optional[str]:
        if self.image_client is None:
            return None
        return self.image_client.generate(subject)

    def _build(self, parsed: List[ParsedRecipeText], source_tag: str, image_hint: str = "", **fields) -> List[StructuredRecipe]:
        recipes = []
        for item in parsed:
            subject = f"{item.title}, {image_hint} cuisine" if image_hint else item.title
            recipes.append(build_ai_recipe(
                item,
                source_tag=source_tag,
                thumbnail_url=self._image_for(subject),
                **fields,
            ))
        return recipes

    def suggest(self, prefs: PreferenceFilter) -> SuggestionResult:
        """Corpus recipes matching the preferences, or generated ones when none match."""
        found = apply_filters(self.search.search_by_names(prefs.search_queries()), prefs)
        if found:
            return SuggestionResult(
                recipes=found[:MAX_RESULTS],
                source="corpus",
                message="Found some recipes matching your preferences!",
            )

        text = self._complete(preferences_prompt(prefs))
        if text is None:
            return SuggestionResult(message="Recipe generation is unavailable right now.")

        recipes = self._build(
            parse_accepted_blocks(text),
            source_tag="ai",
            image_hint=prefs.cuisine or "",
            category=prefs.meal_type or "AI",
            area=prefs.cuisine or "AI Generated",
            tags=prefs.dietary_preference or None,
        )
        if not recipes:
            return SuggestionResult(message="Sorry, I couldn't generate any valid recipes. Please try again.")
        return SuggestionResult(recipes=recipes, source="ai", message="Here are some AI-generated recipes for you!")

    def chat(self, message: str) -> ChatReply:
        """One chat turn: corpus lookup for mentioned ingredients plus a model answer."""
        if not message or not message.strip():
            raise ValueError("chat message must not be empty")

        reply = ChatReply(ingredients=extract_ingredient_words(message))
        if reply.ingredients:
            joined = ", ".join(reply.ingredients)
            reply.corpus_recipes = self.search.intersect_by_ingredients(reply.ingredients, limit=MAX_RESULTS)
            if reply.corpus_recipes:
                reply.corpus_message = f'Found {len(reply.corpus_recipes)} recipes in TheMealDB for "{joined}"'
            else:
                reply.corpus_message = f'No recipes found in TheMealDB for "{joined}"'

        prompt = ingredients_prompt(reply.ingredients) if reply.ingredients else message
        text = self._complete(prompt)
        if text is None:
            reply.text = "Sorry, there was an error contacting the AI."
            return reply

        if reply.ingredients:
            reply.ai_recipes = self._build(
                parse_accepted_blocks(text),
                source_tag="ai-chat",
                category="AI Chat",
                area="AI Generated",
                tags="AI,Chat",
            )
        if reply.ai_recipes:
            reply.text = f'Here are some creative AI recipes for "{", ".join(reply.ingredients)}"'
        elif text.strip():
            reply.text = text
        else:
            reply.text = "Sorry, I couldn't find an answer."
        return reply
