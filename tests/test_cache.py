"""Tests for the in-memory recipe cache."""

from conftest import FakeClock

from mealvista.domain.recipes import Difficulty, RawRecipe
from mealvista.services.cache import InMemoryRecipeCache


def _recipe(recipe_id: str) -> RawRecipe:
    return RawRecipe(
        id=recipe_id,
        name=recipe_id,
        prep_time_min=5,
        cook_time_min=10,
        difficulty=Difficulty.EASY,
    )


def test_get_returns_fresh_entry() -> None:
    clock = FakeClock()
    cache = InMemoryRecipeCache(ttl_seconds=60, clock=clock)
    cache.set("italian", [_recipe("a")])

    clock.advance(59)
    entry = cache.get("italian")

    assert entry is not None
    assert [recipe.id for recipe in entry.data] == ["a"]


def test_stale_entry_is_ignored_until_replaced() -> None:
    clock = FakeClock()
    cache = InMemoryRecipeCache(ttl_seconds=60, clock=clock)
    cache.set("italian", [_recipe("a")])

    clock.advance(60)
    assert cache.get("italian") is None
    assert cache.fresh_entries() == []

    cache.set("italian", [_recipe("b")])
    entry = cache.get("italian")
    assert entry is not None
    assert entry.data[0].id == "b"


def test_lock_is_shared_per_key() -> None:
    cache = InMemoryRecipeCache()

    assert cache.lock("thai") is cache.lock("thai")
    assert cache.lock("thai") is not cache.lock("indian")
