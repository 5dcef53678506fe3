"""Tests for tiered recipe generation."""

import asyncio
from dataclasses import dataclass

import pytest
from conftest import FakeMealDbClient, FakeTextClient

from mealvista.domain.errors import GenerationUnusableError
from mealvista.domain.profiles import DEFAULT_PROFILE, HealthGoal, UserHealthProfile
from mealvista.domain.recipes import Difficulty
from mealvista.services.calories import calorie_target
from mealvista.services.constraints import contains_any
from mealvista.services.generation import (
    RecipeGenerator,
    RecipeTextClient,
    build_prompt,
    parse_model_text,
    personalize_name,
)
from mealvista.services.nutrition import NutritionAggregator

MODEL_TEXT = """Recipe: Lemon Garlic Salmon

Ingredients:
- 200g salmon fillet
- 1 tbsp olive oil
- 2 cloves garlic

Instructions:
1. Heat the olive oil in a pan over medium heat.
2. Sear the salmon for four minutes per side.
3. Add garlic and cook one more minute.

Nutrition: about 400 kcal per serving
"""


@dataclass
class SlowTextClient(RecipeTextClient):
    async def complete(self, prompt: str) -> str:
        await asyncio.sleep(1)
        return MODEL_TEXT


def _generator(
    aggregator: NutritionAggregator,
    text_client: RecipeTextClient | None = None,
    image_client: FakeMealDbClient | None = None,
) -> RecipeGenerator:
    return RecipeGenerator(
        aggregator=aggregator,
        text_client=text_client,
        image_client=image_client,
        model_timeout_seconds=0.05,
    )


def test_model_text_is_used_when_usable(aggregator: NutritionAggregator) -> None:
    generator = _generator(aggregator, FakeTextClient(text=MODEL_TEXT))

    recipe = asyncio.run(generator.generate(DEFAULT_PROFILE, "salmon"))

    assert recipe.name == "Lemon Garlic Salmon"
    assert recipe.ingredients == [
        "200g salmon fillet",
        "1 tbsp olive oil",
        "2 cloves garlic",
    ]
    assert [step.id for step in recipe.instructions] == [1, 2, 3]
    assert recipe.is_ai_generated
    assert recipe.id.startswith("ai-")
    assert recipe.allergens == ["fish"]
    assert recipe.nutrition.calories == 349
    assert recipe.servings == 1


def test_failing_model_falls_back_to_knowledge_base(
    aggregator: NutritionAggregator, text_client: FakeTextClient
) -> None:
    generator = _generator(aggregator, text_client)

    recipe = asyncio.run(generator.generate(DEFAULT_PROFILE, "Fluffy egg breakfast"))

    assert recipe.name == "Perfect Scrambled Eggs"
    assert len(recipe.instructions) == 8
    assert recipe.difficulty == Difficulty.MEDIUM
    assert (recipe.prep_time_min, recipe.cook_time_min) == (16, 24)
    assert text_client.prompts


def test_slow_model_times_out(aggregator: NutritionAggregator) -> None:
    generator = _generator(aggregator, SlowTextClient())

    recipe = asyncio.run(generator.generate(DEFAULT_PROFILE, "chicken"))

    assert recipe.name == "Herb-Roasted Chicken"


def test_unknown_query_uses_minimal_template(aggregator: NutritionAggregator) -> None:
    profile = UserHealthProfile(dietary_preferences=["keto"])
    generator = _generator(aggregator, FakeTextClient(text="too short"))

    recipe = asyncio.run(generator.generate(profile, "quinoa"))

    assert recipe.name == "Keto Quinoa Delight"
    assert "500g quinoa" in recipe.ingredients
    assert "2 tbsp butter" in recipe.ingredients
    assert len(recipe.instructions) == 7
    assert recipe.difficulty == Difficulty.MEDIUM


def test_fully_filtered_template_falls_through(
    aggregator: NutritionAggregator,
) -> None:
    profile = UserHealthProfile(allergens=["egg", "butter", "milk", "salt", "chive"])
    generator = _generator(aggregator)

    recipe = asyncio.run(generator.generate(profile, "egg"))

    assert recipe.name == "Egg Delight"
    assert recipe.ingredients
    assert not any(contains_any(line, profile.allergens) for line in recipe.ingredients)


def test_minimal_template_falls_back_to_staples(
    aggregator: NutritionAggregator,
) -> None:
    profile = UserHealthProfile(
        allergens=["olive", "onion", "garlic", "salt", "pepper"]
    )
    generator = _generator(aggregator)

    recipe = asyncio.run(generator.generate(profile, "olive"))

    assert recipe.ingredients == ["200g mixed vegetables"]
    assert recipe.servings >= 1


def test_allergens_covering_every_staple_leave_no_ingredients(
    aggregator: NutritionAggregator,
) -> None:
    profile = UserHealthProfile(allergens=["a", "e", "i", "o", "u"])
    generator = _generator(aggregator, FakeTextClient(error=RuntimeError("down")))

    recipe = asyncio.run(generator.generate(profile, "tofu"))

    assert recipe.name == "Tofu Delight"
    assert recipe.ingredients == []
    assert recipe.instructions
    assert recipe.servings == 1


@pytest.mark.parametrize("query", ["egg", "pasta", "tofu", "x", "  rice bowl "])
def test_generation_is_total(aggregator: NutritionAggregator, query: str) -> None:
    profile = UserHealthProfile(
        dietary_preferences=["vegan", "high-protein"],
        allergens=["soy", "nut"],
        health_goal=HealthGoal.WEIGHT_GAIN,
    )
    generator = _generator(aggregator, FakeTextClient(error=RuntimeError("boom")))

    recipe = asyncio.run(generator.generate(profile, query))

    assert recipe.name
    assert recipe.instructions
    assert recipe.personalized_for is not None
    assert recipe.personalized_for.health_goal == "Weight Gain"
    assert not any(contains_any(line, ["soy", "nut"]) for line in recipe.ingredients)


def test_image_from_mealdb_or_unsplash(aggregator: NutritionAggregator) -> None:
    images = FakeMealDbClient(
        searches={"pasta": [{"strMealThumb": "https://img.example/pasta.jpg"}]}
    )
    generator = _generator(aggregator, image_client=images)

    found = asyncio.run(generator.generate(DEFAULT_PROFILE, "pasta"))
    fallback = asyncio.run(generator.generate(DEFAULT_PROFILE, "sweet potato"))

    assert found.image == "https://img.example/pasta.jpg"
    assert fallback.image == "https://source.unsplash.com/400x300/?sweet%20potato,food"


def test_prompt_carries_profile_constraints() -> None:
    profile = UserHealthProfile(
        dietary_preferences=["vegetarian", "low-carb"],
        allergens=["peanut", "shrimp"],
        bmi_category="Overweight",
        health_goal=HealthGoal.WEIGHT_LOSS,
    )

    prompt = build_prompt(profile, "tofu", calorie_target(profile))

    assert "200-450" in prompt
    assert "Weight Loss" in prompt
    assert "Overweight" in prompt
    assert "vegetarian, low-carb" in prompt
    assert "allergen-free: no peanut, shrimp" in prompt


def test_parse_model_text_requires_both_sections() -> None:
    with pytest.raises(GenerationUnusableError):
        parse_model_text("short", "rice")
    with pytest.raises(GenerationUnusableError):
        parse_model_text("Ingredients:\n- 1 cup rice\n- 2 cups water\n" * 3, "rice")


def test_parse_model_text_handles_markdown_headers() -> None:
    text = (
        "**Title:** Spiced Lentil Soup\n"
        "## Ingredients (serves 2):\n"
        "* 1 cup red lentils\n"
        "* a\n"
        "## Method:\n"
        "Step 1: Rinse the lentils under cold water.\n"
        "Step 2: Stir.\n"
        "Step 3: Simmer with spices for twenty minutes.\n"
    )

    draft = parse_model_text(text, "lentils")

    assert draft.name == "Spiced Lentil Soup"
    assert draft.ingredients == ["1 cup red lentils"]
    assert draft.instructions == [
        "Rinse the lentils under cold water.",
        "Simmer with spices for twenty minutes.",
    ]


def test_parse_model_text_caps_sections() -> None:
    ingredients = "\n".join(f"- {n} cups ingredient {n}" for n in range(20))
    steps = "\n".join(f"{n}. Do the important thing number {n}." for n in range(20))
    text = f"Name: Big Batch\nIngredients:\n{ingredients}\nInstructions:\n{steps}"

    draft = parse_model_text(text, "batch")

    assert len(draft.ingredients) == 15
    assert len(draft.instructions) == 15


def test_personalize_name_prefixes() -> None:
    profile = UserHealthProfile(
        dietary_preferences=["keto", "high-protein"],
        health_goal=HealthGoal.WEIGHT_LOSS,
    )

    assert personalize_name("Omelette", profile) == "Keto Light Omelette"
    assert personalize_name("Omelette", DEFAULT_PROFILE) == "Omelette"
