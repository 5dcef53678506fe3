"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from mealvista.adapters.fdc_client import HttpxFdcClient
from mealvista.adapters.mealdb_client import HttpxMealDbClient
from mealvista.adapters.openai_text_client import OpenAIRecipeTextClient
from mealvista.adapters.spoonacular_client import HttpxSpoonacularClient
from mealvista.adapters.supabase_profile_repository import SupabaseProfileRepository
from mealvista.config import Settings, parse_provider_order
from mealvista.services.cache import InMemoryRecipeCache
from mealvista.services.generation import RecipeGenerator
from mealvista.services.mealdb import MealDbProvider
from mealvista.services.nutrition import NutritionAggregator, NutritionEstimator
from mealvista.services.orchestrator import RecipeOrchestrator
from mealvista.services.profiles import ProfileService
from mealvista.services.providers import RecipeProvider
from mealvista.services.search import RecipeSearchService
from mealvista.services.spoonacular import SpoonacularProvider


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    orchestrator: RecipeOrchestrator
    search_service: RecipeSearchService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))

    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.nutrition_timeout_seconds,
    )
    mealdb_client = HttpxMealDbClient.create(resolved_settings.mealdb_base_url)
    spoonacular_client = HttpxSpoonacularClient.create(
        api_key=resolved_settings.spoonacular_api_key,
        base_url=resolved_settings.spoonacular_base_url,
    )
    text_client = OpenAIRecipeTextClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
    )

    aggregator = NutritionAggregator(
        estimator=NutritionEstimator(
            fdc_client=fdc_client,
            timeout_seconds=resolved_settings.nutrition_timeout_seconds,
        ),
        concurrency=resolved_settings.nutrition_concurrency,
    )
    available: dict[str, RecipeProvider] = {
        "spoonacular": SpoonacularProvider(spoonacular_client),
        "themealdb": MealDbProvider(mealdb_client),
    }
    providers = [
        available[name]
        for name in parse_provider_order(resolved_settings.recipe_provider_order)
        if name in available
    ]
    cache = InMemoryRecipeCache(
        ttl_seconds=resolved_settings.recipe_cache_ttl_seconds
    )
    orchestrator = RecipeOrchestrator(
        providers=providers,
        cache=cache,
        aggregator=aggregator,
        provider_timeout_seconds=resolved_settings.provider_timeout_seconds,
    )
    generator = RecipeGenerator(
        aggregator=aggregator,
        text_client=text_client,
        image_client=mealdb_client,
        model_timeout_seconds=resolved_settings.generation_timeout_seconds,
        image_timeout_seconds=resolved_settings.image_lookup_timeout_seconds,
    )
    search_service = RecipeSearchService(
        generator=generator, count=resolved_settings.search_recipe_count
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await mealdb_client.close()
        await spoonacular_client.close()
        await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        orchestrator=orchestrator,
        search_service=search_service,
        profile_service=profile_service,
        close_resources=close_resources,
    )
