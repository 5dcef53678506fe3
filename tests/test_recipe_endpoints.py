"""Tests for the recipe HTTP endpoints."""

from conftest import FakeMealDbClient
from fastapi.testclient import TestClient

from mealvista.api.app import create_app


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_categories(container) -> None:
    client = TestClient(create_app(container))

    data = client.get("/recipes/categories").json()

    assert data["success"] is True
    assert "pakistani" in data["categories"]
    assert data["count"] == len(data["categories"])


def test_category_recipes_then_cache(container) -> None:
    client = TestClient(create_app(container))

    first = client.get("/recipes/category/Italian")
    second = client.get("/recipes/category/italian")

    assert first.status_code == 200
    data = first.json()
    assert data["success"] is True
    assert data["category"] == "italian"
    assert data["source"] == "themealdb"
    assert data["count"] == 2
    recipe = data["recipes"][0]
    assert recipe["id"] == "recipe-100"
    assert recipe["prepTimeMin"] == 6
    assert recipe["isAIGenerated"] is False
    assert recipe["nutrition"]["calories"] > 0
    assert "vitaminC" in recipe["nutrition"]

    assert second.json()["source"] == "cache"
    assert second.json()["recipes"] == data["recipes"]


def test_unknown_category_is_404(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/recipes/category/atlantean")

    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert "italian" in data["availableCategories"]


def test_all_providers_failed_is_500(
    container, mealdb_client: FakeMealDbClient
) -> None:
    mealdb_client.error = RuntimeError("maintenance")
    client = TestClient(create_app(container))

    response = client.get("/recipes/category/thai")

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Failed to fetch recipes"
    assert "themealdb" in data["error"]


def test_anonymous_search(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/recipes/search/egg")

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "ai-generated"
    assert data["personalized"] is False
    assert data["userProfile"] is None
    assert data["count"] == 1
    assert data["recipes"][0]["name"] == "Perfect Scrambled Eggs"
    assert data["recipes"][0]["isAIGenerated"] is True


def test_personalized_search(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/recipes/search/egg", headers={"Authorization": "Bearer good-token"}
    )

    data = response.json()
    assert data["personalized"] is True
    assert data["userProfile"]["bmiCategory"] == "Overweight"
    assert data["userProfile"]["healthGoal"] == "weight_loss"
    recipe = data["recipes"][0]
    assert recipe["name"] == "Light Perfect Scrambled Eggs"
    assert recipe["personalizedFor"]["healthGoal"] == "Weight Loss"


def test_short_query_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/recipes/search/a")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Search query must be at least 2 characters",
    }


def test_recipe_detail_from_cache(container) -> None:
    client = TestClient(create_app(container))
    client.get("/recipes/category/italian")

    found = client.get("/recipes/recipe-101")
    missing = client.get("/recipes/recipe-404")

    assert found.status_code == 200
    assert found.json()["category"] == "italian"
    assert found.json()["recipe"]["name"] == "Pasta Rossa"
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Recipe not found"}
