"""Category recipe retrieval with provider fallback and caching."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from mealvista.domain.cuisines import available_cuisines, normalize_cuisine
from mealvista.domain.errors import AllProvidersFailedError, UnknownCuisineError
from mealvista.domain.recipes import RawRecipe, RecipeBatch
from mealvista.services.cache import RecipeCache
from mealvista.services.nutrition import NutritionAggregator
from mealvista.services.providers import RecipeProvider

_logger = logging.getLogger(__name__)

CACHE_SOURCE = "cache"


@dataclass
class RecipeOrchestrator:
    """Serves category recipes from the cache or the first working provider.

    The provider order is fixed at construction. The cache belongs to this
    orchestrator alone.
    """

    providers: Sequence[RecipeProvider]
    cache: RecipeCache
    aggregator: NutritionAggregator
    provider_timeout_seconds: float = 30.0

    def categories(self) -> list[str]:
        """Return the supported cuisines."""
        return available_cuisines()

    async def get_recipes(self, cuisine: str) -> RecipeBatch:
        """Return recipes for a cuisine.

        Raises UnknownCuisineError for unsupported cuisines and
        AllProvidersFailedError when no provider produced recipes.
        """
        key = normalize_cuisine(cuisine)
        if key not in self.categories():
            raise UnknownCuisineError(key, self.categories())

        async with self.cache.lock(key):
            entry = self.cache.get(key)
            if entry is not None:
                _logger.info("Serving %s from cache", key)
                return RecipeBatch(recipes=entry.data, source=CACHE_SOURCE)

            failures: dict[str, str] = {}
            for provider in self.providers:
                recipes = await self._try_provider(provider, key, failures)
                if recipes is None:
                    continue
                enriched = await asyncio.gather(
                    *(self.aggregator.ensure_nutrition(recipe) for recipe in recipes)
                )
                stored = self.cache.set(key, list(enriched))
                return RecipeBatch(recipes=stored.data, source=provider.name)

        raise AllProvidersFailedError(key, failures)

    def find_recipe(self, recipe_id: str) -> tuple[str, RawRecipe] | None:
        """Return ``(cuisine, recipe)`` for a recipe held in a fresh entry."""
        for entry in self.cache.fresh_entries():
            for recipe in entry.data:
                if recipe.id == recipe_id:
                    return entry.key, recipe
        return None

    async def _try_provider(
        self, provider: RecipeProvider, cuisine: str, failures: dict[str, str]
    ) -> list[RawRecipe] | None:
        try:
            recipes = await asyncio.wait_for(
                provider.fetch_by_category(cuisine),
                timeout=self.provider_timeout_seconds,
            )
        except TimeoutError:
            failures[provider.name] = "timed out"
            _logger.warning("Provider %s timed out for %s", provider.name, cuisine)
            return None
        except Exception as exc:
            failures[provider.name] = str(exc)
            _logger.warning(
                "Provider %s failed for %s: %s", provider.name, cuisine, exc
            )
            return None
        if not recipes:
            failures[provider.name] = "no recipes"
            _logger.warning(
                "Provider %s returned no recipes for %s", provider.name, cuisine
            )
            return None
        _logger.info(
            "Provider %s served %s recipes for %s",
            provider.name,
            len(recipes),
            cuisine,
        )
        return recipes
