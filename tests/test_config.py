"""Tests for configuration parsing."""

from mealvista.config import DEFAULT_PROVIDER_ORDER, Settings, parse_provider_order


def test_parse_provider_order() -> None:
    assert parse_provider_order(None) == list(DEFAULT_PROVIDER_ORDER)
    assert parse_provider_order("TheMealDB, spoonacular,themealdb") == [
        "themealdb",
        "spoonacular",
    ]
    assert parse_provider_order(" , ") == list(DEFAULT_PROVIDER_ORDER)


def test_settings_defaults(settings: Settings) -> None:
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.provider_timeout_seconds == 30.0
    assert settings.nutrition_timeout_seconds == 3.0
    assert settings.recipe_cache_ttl_seconds == 3600
    assert settings.search_recipe_count == 5
