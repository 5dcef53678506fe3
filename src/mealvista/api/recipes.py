"""Recipe API endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from mealvista.domain.errors import AllProvidersFailedError, UnknownCuisineError
from mealvista.services.search import SEARCH_SOURCE

if TYPE_CHECKING:
    from mealvista.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])

_logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


@router.get("/categories")
async def list_categories(request: Request) -> dict[str, object]:
    """Return the supported cuisines."""
    container: AppContainer = request.app.state.container
    categories = container.orchestrator.categories()
    return {"success": True, "categories": categories, "count": len(categories)}


@router.get("/category/{cuisine}", response_model=None)
async def recipes_by_category(
    cuisine: str, request: Request
) -> dict[str, object] | JSONResponse:
    """Return recipes for a cuisine from the cache or a provider."""
    container: AppContainer = request.app.state.container
    try:
        batch = await container.orchestrator.get_recipes(cuisine)
    except UnknownCuisineError as exc:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "success": False,
                "message": f"Category '{exc.cuisine}' not found",
                "availableCategories": exc.available,
            },
        )
    except AllProvidersFailedError as exc:
        _logger.error("Failed to fetch %s recipes: %s", exc.cuisine, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Failed to fetch recipes",
                "error": str(exc),
            },
        )
    return {
        "success": True,
        "category": cuisine.strip().lower(),
        "recipes": [recipe.to_payload() for recipe in batch.recipes],
        "count": len(batch.recipes),
        "source": batch.source,
    }


@router.get("/search/{query}", response_model=None)
async def search_recipes(
    query: str,
    request: Request,
    authorization: str | None = Header(default=None),
) -> dict[str, object] | JSONResponse:
    """Return personalized generated recipes for a free-text query."""
    container: AppContainer = request.app.state.container
    cleaned = query.strip()
    if len(cleaned) < MIN_QUERY_LENGTH:
        return _failure(
            status.HTTP_400_BAD_REQUEST, "Search query must be at least 2 characters"
        )
    profile = container.profile_service.resolve(authorization)
    recipes = await container.search_service.search(cleaned, profile)
    return {
        "success": True,
        "query": cleaned,
        "recipes": [recipe.to_payload() for recipe in recipes],
        "count": len(recipes),
        "source": SEARCH_SOURCE,
        "personalized": profile is not None,
        "userProfile": (
            profile.model_dump(mode="json", by_alias=True)
            if profile is not None
            else None
        ),
    }


@router.get("/{recipe_id}", response_model=None)
async def recipe_detail(
    recipe_id: str, request: Request
) -> dict[str, object] | JSONResponse:
    """Return a recipe held in the category cache."""
    container: AppContainer = request.app.state.container
    found = container.orchestrator.find_recipe(recipe_id)
    if found is None:
        return _failure(status.HTTP_404_NOT_FOUND, "Recipe not found")
    category, recipe = found
    return {"success": True, "recipe": recipe.to_payload(), "category": category}


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "message": message}
    )
