"""Heuristic tagging shared by provider adapters and the generator."""

import math

from mealvista.domain.recipes import Difficulty

# First matching tag wins per ingredient line.
_ALLERGEN_TAGS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("peanuts", ("peanut",)),
    ("nuts", ("almond", "cashew", "walnut", "pistachio", "hazelnut", "pecan")),
    ("dairy", ("dairy", "cheese", "milk", "butter", "cream", "yogurt")),
    ("eggs", ("egg",)),
    ("gluten", ("gluten", "wheat", "flour")),
    ("soy", ("soy", "tofu")),
    ("fish", ("fish", "shrimp", "prawn", "salmon", "tuna")),
)

_MEAT_WORDS = ("chicken", "beef", "pork", "lamb", "fish", "meat", "bacon", "mutton")
_DAIRY_WORDS = ("milk", "cheese", "butter", "cream", "yogurt")
_PLANT_BASED = (
    "almond milk",
    "vegan",
    "coconut cream",
    "coconut milk",
    "peanut butter",
)


def detect_allergens(ingredients: list[str]) -> list[str]:
    """Return allergen tags present in the ingredient lines."""
    found: list[str] = []
    for line in ingredients:
        lowered = line.lower()
        for tag, keywords in _ALLERGEN_TAGS:
            if tag == "dairy" and any(marker in lowered for marker in _PLANT_BASED):
                continue
            if any(keyword in lowered for keyword in keywords):
                if tag not in found:
                    found.append(tag)
                break
    return found


def determine_diet_types(
    ingredients: list[str], preferences: list[str] | None = None
) -> list[str]:
    """Classify ingredient lines as vegan, vegetarian or omnivore."""
    lines = [line.lower() for line in ingredients]
    has_meat = any(word in line for line in lines for word in _MEAT_WORDS)
    has_animal_product = any(
        (any(word in line for word in _DAIRY_WORDS) or "egg" in line)
        and not any(marker in line for marker in _PLANT_BASED)
        for line in lines
    )
    if has_meat:
        types = ["omnivore"]
    elif has_animal_product:
        types = ["vegetarian"]
    else:
        types = ["vegan"]
    for preference in preferences or []:
        if preference not in types:
            types.append(preference)
    return types


def difficulty_for_steps(step_count: int) -> Difficulty:
    """Difficulty for generated recipes by instruction count."""
    if step_count < 5:
        return Difficulty.EASY
    if step_count < 10:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def generated_times(step_count: int) -> tuple[int, int]:
    """Return (prep, cook) minutes for generated recipes."""
    return max(10, step_count * 2), max(15, step_count * 3)


def meal_times(step_count: int) -> tuple[int, int]:
    """Return (prep, cook) minutes estimated from a provider's step count."""
    prep = max(5, min(30, step_count * 2))
    cook = max(15, min(90, step_count * 5))
    return prep, cook


def meal_difficulty(step_count: int) -> Difficulty:
    """Difficulty for provider recipes that only expose instructions."""
    if step_count > 8:
        return Difficulty.HARD
    if step_count > 5:
        return Difficulty.MEDIUM
    return Difficulty.EASY


def split_ready_time(total_minutes: int) -> tuple[int, int]:
    """Split a total ready time into 30% prep and the rest cooking."""
    prep = max(5, math.floor(total_minutes * 0.3))
    return prep, max(0, total_minutes - prep)


def difficulty_for_minutes(total_minutes: int) -> Difficulty:
    """Difficulty for provider recipes that expose a total ready time."""
    if total_minutes > 60:
        return Difficulty.HARD
    if total_minutes > 30:
        return Difficulty.MEDIUM
    return Difficulty.EASY
