"""Spoonacular recipe provider."""

import asyncio
import logging
import re
from dataclasses import dataclass

from mealvista.adapters.spoonacular_client import SpoonacularClient
from mealvista.domain.errors import ProviderUnavailableError
from mealvista.domain.nutrition import NutritionProfile
from mealvista.domain.recipes import RawRecipe, RecipeStep
from mealvista.services.classification import (
    detect_allergens,
    difficulty_for_minutes,
    split_ready_time,
)
from mealvista.services.providers import RecipeProvider

_logger = logging.getLogger(__name__)

_NUTRIENT_NAMES = {
    "calories": "Calories",
    "protein": "Protein",
    "carbs": "Carbohydrates",
    "fat": "Fat",
    "fiber": "Fiber",
    "calcium": "Calcium",
    "iron": "Iron",
    "vitamin_a": "Vitamin A",
    "vitamin_c": "Vitamin C",
}

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class SpoonacularProvider(RecipeProvider):
    """Normalizes Spoonacular complex search results."""

    client: SpoonacularClient
    target_count: int = 8
    name: str = "spoonacular"

    async def fetch_by_category(self, cuisine: str) -> list[RawRecipe]:
        """Return up to ``target_count`` recipes for a cuisine."""
        try:
            payload = await self.client.complex_search(
                cuisine, number=self.target_count
            )
        except Exception as exc:
            raise ProviderUnavailableError(self.name, str(exc)) from exc
        results = payload.get("results") or []
        if not results:
            raise ProviderUnavailableError(self.name, f"no recipes for {cuisine}")
        _logger.info("Spoonacular returned %s %s recipes", len(results), cuisine)

        outcomes = await asyncio.gather(
            *(self._to_recipe(item) for item in results), return_exceptions=True
        )
        recipes: list[RawRecipe] = []
        for item, outcome in zip(results, outcomes, strict=True):
            if isinstance(outcome, Exception):
                _logger.warning(
                    "Skipping Spoonacular recipe %s: %s", item.get("id"), outcome
                )
                continue
            recipes.append(outcome)
        if not recipes:
            raise ProviderUnavailableError(
                self.name, f"no usable recipes for {cuisine}"
            )
        return recipes

    async def _to_recipe(self, item: dict[str, object]) -> RawRecipe:
        steps = _steps(item.get("analyzedInstructions"))
        if not steps:
            steps = await self._detail_steps(item["id"])

        total_minutes = int(item.get("readyInMinutes") or 30)
        prep, cook = split_ready_time(total_minutes)
        ingredient_items = item.get("extendedIngredients") or []
        score = item.get("spoonacularScore")
        return RawRecipe(
            id=f"recipe-{item['id']}",
            name=str(item.get("title") or ""),
            image=item.get("image"),
            servings=int(item.get("servings") or 2),
            prep_time_min=prep,
            cook_time_min=cook,
            difficulty=difficulty_for_minutes(total_minutes),
            rating=min(5.0, round(float(score) / 20, 1)) if score else 4.5,
            nutrition=_nutrition(item.get("nutrition")),
            ingredients=[_ingredient_line(entry) for entry in ingredient_items],
            instructions=steps,
            allergens=detect_allergens(
                [str(entry.get("name") or "") for entry in ingredient_items]
            ),
            diet_types=_diet_types(item),
        )

    async def _detail_steps(self, recipe_id: object) -> list[RecipeStep]:
        try:
            detail = await self.client.get_information(int(recipe_id))
        except Exception as exc:
            _logger.warning(
                "No detailed instructions available for recipe %s: %s", recipe_id, exc
            )
            return []
        return _steps(detail.get("analyzedInstructions"))


def _ingredient_line(entry: dict[str, object]) -> str:
    metric = (entry.get("measures") or {}).get("metric") or {}
    amount = metric.get("amount") or entry.get("amount") or 1
    unit = metric.get("unitShort") or entry.get("unitShort") or ""
    name = entry.get("name") or entry.get("originalName") or ""
    line = f"{_format_amount(amount)} {unit} {name}"
    return _WHITESPACE_RE.sub(" ", line).strip()


def _format_amount(amount: object) -> str:
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _steps(analyzed: object) -> list[RecipeStep]:
    if not isinstance(analyzed, list) or not analyzed:
        return []
    steps: list[RecipeStep] = []
    for index, step in enumerate(analyzed[0].get("steps") or [], start=1):
        text = str(step.get("step") or "").strip()
        if not text:
            continue
        length = step.get("length") or {}
        time = (
            f"{length['number']} {length.get('unit', '')}".strip()
            if length.get("number")
            else None
        )
        steps.append(RecipeStep(id=index, text=text, time=time))
    return steps


def _nutrition(raw: object) -> NutritionProfile:
    if not isinstance(raw, dict):
        return NutritionProfile()
    nutrients = raw.get("nutrients") or []
    amounts: dict[str, int] = {}
    for field_name, label in _NUTRIENT_NAMES.items():
        match = next((n for n in nutrients if n.get("name") == label), None)
        if match is not None:
            amounts[field_name] = max(0, round(float(match.get("amount") or 0)))
    return NutritionProfile(**amounts)


def _diet_types(item: dict[str, object]) -> list[str]:
    if item.get("vegan"):
        return ["vegan", "vegetarian"]
    if item.get("vegetarian"):
        return ["vegetarian"]
    return ["omnivore"]
