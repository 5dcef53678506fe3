"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_PROVIDER_ORDER = ("spoonacular", "themealdb")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-4o-mini"
    spoonacular_api_key: str
    spoonacular_base_url: str = "https://api.spoonacular.com/recipes"
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    fdc_api_key: str = "DEMO_KEY"
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    recipe_provider_order: str | None = None
    provider_timeout_seconds: float = 30.0
    nutrition_timeout_seconds: float = 3.0
    generation_timeout_seconds: float = 20.0
    image_lookup_timeout_seconds: float = 3.0
    recipe_cache_ttl_seconds: int = 3600
    nutrition_concurrency: int = 4
    search_recipe_count: int = 5
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_provider_order(raw: str | None) -> list[str]:
    """Parse the comma-separated recipe provider order from env."""
    if raw is None:
        return list(DEFAULT_PROVIDER_ORDER)
    names: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if not value or value in names:
            continue
        names.append(value)
    return names or list(DEFAULT_PROVIDER_ORDER)
