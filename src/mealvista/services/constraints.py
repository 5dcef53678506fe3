"""Allergen and diet-type filtering of ingredient lists.

This is the single place that decides which ingredient lines may appear in a
recipe for a given profile. Matching is case-insensitive substring matching
and is a heuristic, not a guarantee of allergen detection.
"""

import re

from mealvista.domain.profiles import UserHealthProfile

MEAT_KEYWORDS = ("chicken", "beef", "pork", "lamb", "fish", "meat", "bacon")

VEGAN_SUBSTITUTES: dict[str, str] = {
    "buttermilk": "almond milk",
    "cream cheese": "vegan cream cheese",
    "milk": "almond milk",
    "cheese": "vegan cheese",
    "butter": "vegan butter",
    "cream": "coconut cream",
}

# Longest keywords first so compounds win over their parts.
_DAIRY_PATTERN = "|".join(
    re.escape(keyword) for keyword in sorted(VEGAN_SUBSTITUTES, key=len, reverse=True)
)
_DAIRY_RE = re.compile(rf"\b({_DAIRY_PATTERN})\b", re.IGNORECASE)

_PLANT_BASED_MARKERS = ("almond milk", "vegan ", "coconut cream", "coconut milk")


def contains_any(text: str, keywords: tuple[str, ...] | list[str]) -> bool:
    """Return True when any keyword occurs in the text, ignoring case."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords if keyword)


def filter_ingredients(
    ingredients: list[str], profile: UserHealthProfile
) -> list[str]:
    """Drop or substitute ingredient lines that the profile does not allow.

    Substitutions keep the line at its original position.
    """
    allergens = [allergen.strip() for allergen in profile.allergens if allergen.strip()]
    plant_based = profile.prefers("vegetarian") or profile.prefers("vegan")
    vegan = profile.prefers("vegan")

    allowed: list[str] = []
    for ingredient in ingredients:
        if contains_any(ingredient, allergens):
            continue
        if plant_based and contains_any(ingredient, MEAT_KEYWORDS):
            continue
        line = _veganize(ingredient) if vegan else ingredient
        if contains_any(line, allergens):
            continue
        allowed.append(line)
    return allowed


def _veganize(ingredient: str) -> str:
    lowered = ingredient.lower()
    if any(marker in lowered for marker in _PLANT_BASED_MARKERS):
        return ingredient
    return _DAIRY_RE.sub(
        lambda match: VEGAN_SUBSTITUTES[match.group(1).lower()], ingredient
    )
