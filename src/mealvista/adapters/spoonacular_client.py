"""Spoonacular recipe API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class SpoonacularClient(Protocol):
    """Interface for Spoonacular recipe lookups."""

    async def complex_search(self, cuisine: str, number: int = 8) -> dict[str, object]:
        """Search recipes for a cuisine and return raw API data."""

    async def get_information(self, recipe_id: int) -> dict[str, object]:
        """Fetch detailed information for a recipe."""


@dataclass
class HttpxSpoonacularClient(SpoonacularClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    search_timeout_seconds: float = 10.0
    detail_timeout_seconds: float = 5.0

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def complex_search(self, cuisine: str, number: int = 8) -> dict[str, object]:
        """Search recipes with ingredients, instructions and nutrition."""
        response = await self.http_client.get(
            f"{self.base_url}/complexSearch",
            params={
                "cuisine": cuisine,
                "number": number,
                "addRecipeInformation": "true",
                "addRecipeNutrition": "true",
                "fillIngredients": "true",
                "apiKey": self.api_key,
            },
            timeout=self.search_timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def get_information(self, recipe_id: int) -> dict[str, object]:
        """Fetch recipe information including nutrition."""
        response = await self.http_client.get(
            f"{self.base_url}/{recipe_id}/information",
            params={"includeNutrition": "true", "apiKey": self.api_key},
            timeout=self.detail_timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
