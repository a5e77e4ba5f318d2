import pytest

from errors import RemoteUnavailableError
from recipe_assistant import RecipeAssistant, extract_ingredient_words, recipe_from_text
from recipe_models import PreferenceFilter
from recipe_search import CorpusSearchStrategy


GENERATED = (
    "Title: Lemon Pasta\n"
    "Description: Bright and fresh.\n"
    "Ingredients:\n"
    "- pasta\n"
    "- lemon\n"
    "- olive oil\n"
    "Instructions:\n"
    "1. Boil pasta.\n"
    "2. Toss with lemon and oil.\n"
    "---\n"
    "Title: Half a recipe\n"
    "Ingredients:\n"
    "- salt\n"
    "---\n"
    "Title: Tomato Rice\n"
    "Ingredients:\n"
    "- rice\n"
    "- tomato\n"
    "Instructions:\n"
    "1. Cook the rice with chopped tomato.\n"
)


class FakeTextClient:
    def __init__(self, answer=GENERATED, error=False):
        self.answer = answer
        self.error = error
        self.prompts = []

    def complete(self, system_prompt, user_prompt):
        self.prompts.append(user_prompt)
        if self.error:
            raise RemoteUnavailableError("xAI", "503")
        return self.answer


class FakeImageClient:
    def __init__(self):
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return f"https://img.example/{len(self.prompts)}.png"


def test_extract_ingredient_words_prefers_longest_without_overlap():
    words = extract_ingredient_words("I have eggs, chicken and Sweet Potato")

    assert words == ["sweet potato", "chicken", "eggs"]
    assert extract_ingredient_words("What should I cook tonight?") == []


def test_suggest_returns_filtered_corpus_recipes_first(corpus):
    text_client = FakeTextClient()
    assistant = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=text_client)

    result = assistant.suggest(PreferenceFilter(cuisine="Italian"))

    assert result.source == "corpus"
    assert [r.title for r in result.recipes] == ["Mushroom Risotto"]
    assert text_client.prompts == []


def test_suggest_falls_back_to_generated_recipes(corpus):
    text_client = FakeTextClient()
    images = FakeImageClient()
    assistant = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=text_client, image_client=images)

    result = assistant.suggest(PreferenceFilter(cuisine="Thai", meal_type="Dinner", dietary_preference="vegetarian"))

    assert result.source == "ai"
    assert [r.title for r in result.recipes] == ["Lemon Pasta", "Tomato Rice"]
    lemon = result.recipes[0]
    assert lemon.category == "Dinner"
    assert lemon.area == "Thai"
    assert lemon.tags == "vegetarian"
    assert lemon.thumbnail_url == "https://img.example/1.png"
    assert lemon.id.startswith("ai-")
    assert images.prompts[0] == "Lemon Pasta, Thai cuisine"
    assert "Cuisine: Thai" in text_client.prompts[0]


def test_suggest_reports_when_nothing_valid_was_generated(corpus):
    assistant = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=FakeTextClient("I'm not sure."))

    result = assistant.suggest(PreferenceFilter(cuisine="Thai"))

    assert result.recipes == []
    assert result.source == "none"
    assert "couldn't generate" in result.message


def test_suggest_without_language_model(corpus):
    result = RecipeAssistant(CorpusSearchStrategy(corpus)).suggest(PreferenceFilter(cuisine="Thai"))

    assert result.recipes == []
    assert "unavailable" in result.message


def test_chat_combines_corpus_and_generated_recipes(corpus):
    text_client = FakeTextClient()
    assistant = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=text_client)

    reply = assistant.chat("I have chicken and a tomato")

    assert reply.ingredients == ["chicken", "tomato"]
    assert [r.title for r in reply.corpus_recipes] == ["Chicken Curry", "Chicken Salad"]
    assert reply.corpus_message == 'Found 2 recipes in TheMealDB for "chicken, tomato"'
    assert [r.title for r in reply.ai_recipes] == ["Lemon Pasta", "Tomato Rice"]
    assert reply.ai_recipes[0].category == "AI Chat"
    assert reply.ai_recipes[0].thumbnail_url is None
    assert "chicken, tomato" in text_client.prompts[0]


def test_chat_without_ingredients_returns_plain_answer(corpus):
    text_client = FakeTextClient(answer="Blanching means briefly boiling vegetables.")
    reply = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=text_client).chat("What is blanching?")

    assert reply.ingredients == []
    assert reply.corpus_message is None
    assert reply.ai_recipes == []
    assert reply.text == "Blanching means briefly boiling vegetables."
    assert text_client.prompts == ["What is blanching?"]
    assert corpus.calls == []


def test_chat_reports_missing_corpus_matches_and_ai_errors(corpus):
    assistant = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=FakeTextClient(error=True))

    reply = assistant.chat("Anything with kiwi?")

    assert reply.corpus_message == 'No recipes found in TheMealDB for "kiwi"'
    assert reply.text == "Sorry, there was an error contacting the AI."


def test_chat_with_empty_answer_says_it_found_nothing(corpus):
    assistant = RecipeAssistant(CorpusSearchStrategy(corpus), text_client=FakeTextClient(answer="  \n"))

    reply = assistant.chat("What is blanching?")

    assert reply.text == "Sorry, I couldn't find an answer."
    assert reply.ai_recipes == []


def test_chat_rejects_empty_message(corpus):
    with pytest.raises(ValueError):
        RecipeAssistant(CorpusSearchStrategy(corpus)).chat("   ")


def test_recipe_from_text_builds_chat_recipe():
    recipe = recipe_from_text(GENERATED.split("---")[0])

    assert recipe.title == "Lemon Pasta"
    assert recipe.tags == "AI,Chat"
    assert recipe.id.startswith("ai-chat-")
