"""TheMealDB recipe provider."""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mealvista.adapters.mealdb_client import MealDbClient
from mealvista.domain.cuisines import CUISINES, CuisineMapping
from mealvista.domain.errors import ProviderUnavailableError
from mealvista.domain.recipes import RawRecipe, RecipeStep
from mealvista.services.classification import (
    detect_allergens,
    determine_diet_types,
    meal_difficulty,
    meal_times,
)
from mealvista.services.providers import RecipeProvider

_logger = logging.getLogger(__name__)

_MAX_INGREDIENT_SLOTS = 20
_MIN_STEP_LENGTH = 10
# Step numbering only counts after a sentence end, so "180." stays intact.
_STEP_SPLIT_RE = re.compile(r"\r\n|\n|\.(?=\s+[A-Z])|(?<=[.!?])\s*(?=\d+\.\s)")
_STEP_NUMBER_RE = re.compile(r"^\d+\.\s*")


@dataclass
class MealDbProvider(RecipeProvider):
    """Collects meals for a cuisine through several TheMealDB lookups.

    Sub-strategies run in order (area, category, search terms) until
    ``target_count`` distinct meals are known. Each sub-strategy and each
    detail lookup may fail on its own without failing the whole call.
    """

    client: MealDbClient
    target_count: int = 8
    area_limit: int = 15
    category_limit: int = 10
    search_term_limit: int = 6
    collect_limit: int = 12
    detail_concurrency: int = 4
    name: str = "themealdb"

    async def fetch_by_category(self, cuisine: str) -> list[RawRecipe]:
        """Return detailed recipes for a cuisine."""
        mapping = CUISINES.get(cuisine)
        if mapping is None:
            raise ProviderUnavailableError(self.name, f"no mapping for {cuisine}")

        meal_ids = await self._collect_meal_ids(mapping)
        if not meal_ids:
            raise ProviderUnavailableError(self.name, f"no meals found for {cuisine}")

        semaphore = asyncio.Semaphore(self.detail_concurrency)
        detailed = await asyncio.gather(
            *(self._detail(meal_id, semaphore) for meal_id in meal_ids)
        )
        recipes = [recipe for recipe in detailed if recipe is not None]
        if not recipes:
            raise ProviderUnavailableError(
                self.name, f"no detailed meals could be fetched for {cuisine}"
            )
        _logger.info("TheMealDB produced %s %s recipes", len(recipes), cuisine)
        return recipes

    async def _collect_meal_ids(self, mapping: CuisineMapping) -> list[str]:
        seen: list[str] = []

        def absorb(meals: list[dict[str, object]], cap: int | None = None) -> None:
            for meal in meals:
                if cap is not None and len(seen) >= cap:
                    return
                meal_id = str(meal.get("idMeal") or "")
                if meal_id and meal_id not in seen:
                    seen.append(meal_id)

        if mapping.area:
            meals = await self._attempt(
                f"area {mapping.area}",
                lambda: self.client.filter_by_area(mapping.area),
            )
            absorb(meals[: self.area_limit])

        if mapping.category and len(seen) < self.target_count:
            meals = await self._attempt(
                f"category {mapping.category}",
                lambda: self.client.filter_by_category(mapping.category),
            )
            absorb(meals[: self.category_limit])

        for term in mapping.search_terms[: self.search_term_limit]:
            if len(seen) >= self.target_count:
                break
            meals = await self._attempt(
                f"search {term!r}", lambda term=term: self.client.search(term)
            )
            absorb(meals, cap=self.collect_limit)

        return seen[: self.target_count]

    async def _attempt(
        self,
        label: str,
        call: Callable[[], Awaitable[list[dict[str, object]]]],
    ) -> list[dict[str, object]]:
        try:
            return await call()
        except Exception as exc:
            _logger.warning("TheMealDB %s failed: %s", label, exc)
            return []

    async def _detail(
        self, meal_id: str, semaphore: asyncio.Semaphore
    ) -> RawRecipe | None:
        async with semaphore:
            try:
                meal = await self.client.lookup(meal_id)
            except Exception as exc:
                _logger.warning("Failed to get details for meal %s: %s", meal_id, exc)
                return None
        if meal is None:
            return None
        try:
            return transform_meal(meal)
        except Exception as exc:
            _logger.warning("Failed to normalize meal %s: %s", meal_id, exc)
            return None


def transform_meal(meal: dict[str, object]) -> RawRecipe:
    """Normalize a full TheMealDB meal into a RawRecipe without nutrition."""
    ingredients = meal_ingredients(meal)
    instructions = split_instructions(str(meal.get("strInstructions") or ""))
    prep, cook = meal_times(len(instructions))
    return RawRecipe(
        id=f"recipe-{meal['idMeal']}",
        name=str(meal.get("strMeal") or ""),
        image=meal.get("strMealThumb"),
        servings=2,
        prep_time_min=prep,
        cook_time_min=cook,
        difficulty=meal_difficulty(len(instructions)),
        rating=4.5,
        ingredients=ingredients,
        instructions=instructions,
        allergens=detect_allergens(ingredients),
        diet_types=determine_diet_types(ingredients),
    )


def meal_ingredients(meal: dict[str, object]) -> list[str]:
    """Return ``"<measure> <ingredient>"`` lines from the numbered slots."""
    lines: list[str] = []
    for slot in range(1, _MAX_INGREDIENT_SLOTS + 1):
        ingredient = str(meal.get(f"strIngredient{slot}") or "").strip()
        if not ingredient:
            continue
        measure = str(meal.get(f"strMeasure{slot}") or "").strip()
        lines.append(f"{measure} {ingredient}".strip())
    return lines


def split_instructions(text: str) -> list[RecipeStep]:
    """Split free-text instructions into numbered steps."""
    fragments = (part.strip() for part in _STEP_SPLIT_RE.split(text) if part)
    steps = [
        _STEP_NUMBER_RE.sub("", fragment)
        for fragment in fragments
        if len(fragment) > _MIN_STEP_LENGTH
    ]
    return [RecipeStep(id=index, text=step) for index, step in enumerate(steps, 1)]
