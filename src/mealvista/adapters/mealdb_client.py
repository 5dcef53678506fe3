"""TheMealDB API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MealDbClient(Protocol):
    """Interface for TheMealDB lookups."""

    async def filter_by_area(self, area: str) -> list[dict[str, object]]:
        """Return meal stubs for an area such as ``Italian``."""

    async def filter_by_category(self, category: str) -> list[dict[str, object]]:
        """Return meal stubs for a category such as ``Pasta``."""

    async def search(self, term: str) -> list[dict[str, object]]:
        """Return full meals whose name matches the term."""

    async def lookup(self, meal_id: str) -> dict[str, object] | None:
        """Return the full meal for an id, if present."""


@dataclass
class HttpxMealDbClient(MealDbClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 8.0

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 8.0
    ) -> "HttpxMealDbClient":
        """Create a TheMealDB client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def filter_by_area(self, area: str) -> list[dict[str, object]]:
        """Filter meals by area."""
        return await self._meals("filter.php", {"a": area})

    async def filter_by_category(self, category: str) -> list[dict[str, object]]:
        """Filter meals by category."""
        return await self._meals("filter.php", {"c": category})

    async def search(self, term: str) -> list[dict[str, object]]:
        """Search meals by name."""
        return await self._meals("search.php", {"s": term})

    async def lookup(self, meal_id: str) -> dict[str, object] | None:
        """Look up a meal by id."""
        meals = await self._meals("lookup.php", {"i": meal_id})
        return meals[0] if meals else None

    async def _meals(
        self, endpoint: str, params: dict[str, str]
    ) -> list[dict[str, object]]:
        response = await self.http_client.get(
            f"{self.base_url}/{endpoint}",
            params=params,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        # TheMealDB answers {"meals": null} when nothing matches.
        return response.json().get("meals") or []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
