"""Recipe provider interface."""

from typing import Protocol

from mealvista.domain.recipes import RawRecipe


class RecipeProvider(Protocol):
    """A source of canonical recipes for a cuisine."""

    name: str

    async def fetch_by_category(self, cuisine: str) -> list[RawRecipe]:
        """Return normalized recipes or raise ProviderUnavailableError."""
