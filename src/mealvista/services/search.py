"""Free-text recipe search backed by the recipe generator."""

import asyncio
import logging
from dataclasses import dataclass

from mealvista.domain.profiles import DEFAULT_PROFILE, UserHealthProfile
from mealvista.domain.recipes import RawRecipe
from mealvista.services.generation import RecipeGenerator

_logger = logging.getLogger(__name__)

SEARCH_SOURCE = "ai-generated"


@dataclass
class RecipeSearchService:
    """Generates several personalized recipes for a query."""

    generator: RecipeGenerator
    count: int = 5

    async def search(
        self, query: str, profile: UserHealthProfile | None = None
    ) -> list[RawRecipe]:
        """Return distinct generated recipes, at least one."""
        effective = profile or DEFAULT_PROFILE
        generated = await asyncio.gather(
            *(
                self.generator.generate(effective, query)
                for _ in range(max(1, self.count))
            )
        )
        recipes: list[RawRecipe] = []
        seen: set[str] = set()
        for recipe in generated:
            key = recipe.name.lower()
            if key in seen:
                continue
            seen.add(key)
            recipes.append(recipe)
        _logger.info(
            "Search for %r produced %s distinct recipes", query, len(recipes)
        )
        return recipes
