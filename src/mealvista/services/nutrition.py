"""Ingredient nutrition estimation and recipe-level aggregation."""

import asyncio
import logging
import math
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from mealvista.adapters.fdc_client import FdcClient
from mealvista.domain.errors import NutritionLookupTimeoutError
from mealvista.domain.heuristics import estimate_grams, heuristic_per_100g
from mealvista.domain.ingredients import parse_ingredient
from mealvista.domain.nutrition import (
    NUTRIENT_FIELDS,
    NutrientValues,
    NutritionProfile,
)
from mealvista.domain.recipes import RawRecipe

_logger = logging.getLogger(__name__)


@dataclass
class NutritionEstimator:
    """Per-100g nutrition from USDA FDC with a keyword heuristic fallback."""

    fdc_client: FdcClient
    timeout_seconds: float = 3.0

    async def estimate(self, name: str) -> NutrientValues:
        """Return per-100g nutrition for an ingredient name.

        Never raises: lookup failures and empty results fall back to the
        food-group heuristic.
        """
        try:
            values = await self._lookup(name)
        except NutritionLookupTimeoutError:
            _logger.warning("Nutrition lookup timed out for %s, using estimate", name)
            return heuristic_per_100g(name)
        except Exception as exc:
            _logger.warning(
                "Nutrition lookup failed for %s (status=%s), using estimate",
                name,
                _status_code_from_exception(exc),
            )
            return heuristic_per_100g(name)
        if values is None:
            _logger.info("No FDC match for %s, using estimate", name)
            return heuristic_per_100g(name)
        return values

    async def _lookup(self, name: str) -> NutrientValues | None:
        try:
            payload = await asyncio.wait_for(
                self.fdc_client.search_foods(name, page_size=1),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise NutritionLookupTimeoutError(name) from exc
        foods = payload.get("foods") or []
        if not foods:
            return None
        return _extract_nutrients(foods[0].get("foodNutrients") or [])


@dataclass
class NutritionAggregator:
    """Sums ingredient contributions into a recipe NutritionProfile."""

    estimator: NutritionEstimator
    concurrency: int = 4

    async def aggregate(self, lines: Sequence[str]) -> NutritionProfile:
        """Compute total nutrition for raw ingredient lines.

        Contributions are summed with ``math.fsum`` so the result does not
        depend on ingredient order or on lookup completion order. Values from
        the live FDC lookup may vary between calls.
        """
        semaphore = asyncio.Semaphore(max(1, self.concurrency))
        contributions = await asyncio.gather(
            *(self._contribution(line, semaphore) for line in lines)
        )
        present = [item for item in contributions if item is not None]
        totals = {
            name: _bounded_sum(getattr(item, name) for item in present)
            for name in NUTRIENT_FIELDS
        }
        return NutritionProfile(
            **{name: max(0, round(value)) for name, value in totals.items()}
        )

    async def ensure_nutrition(self, recipe: RawRecipe) -> RawRecipe:
        """Return the recipe with nutrition filled in when it has none."""
        if not recipe.nutrition.is_empty():
            return recipe
        nutrition = await self.aggregate(recipe.ingredients)
        return recipe.model_copy(update={"nutrition": nutrition})

    async def _contribution(
        self, line: str, semaphore: asyncio.Semaphore
    ) -> NutrientValues | None:
        if not line or not line.strip():
            return None
        parsed = parse_ingredient(line)
        if not parsed.name:
            return None
        grams = estimate_grams(parsed.quantity, parsed.unit, parsed.name)
        if not math.isfinite(grams):
            _logger.warning("Skipping %s, quantity is out of range", parsed.name)
            return None
        async with semaphore:
            per_100g = await self.estimator.estimate(parsed.name)
        contribution = per_100g.scaled(grams / 100)
        if not all(
            math.isfinite(getattr(contribution, name)) for name in NUTRIENT_FIELDS
        ):
            _logger.warning("Skipping %s, nutrition is out of range", parsed.name)
            return None
        return contribution


def _bounded_sum(values: Iterable[float]) -> float:
    # fsum raises instead of returning inf when finite inputs overflow.
    try:
        return math.fsum(values)
    except OverflowError:
        return sys.float_info.max


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _extract_nutrients(food_nutrients: list[dict[str, object]]) -> NutrientValues:
    """Map FDC nutrient names onto canonical fields, first match wins."""
    values: dict[str, float] = {}
    for nutrient in food_nutrients:
        label = " ".join(
            str(nutrient.get(key) or "") for key in ("nutrientName", "unitName")
        ).lower()
        target = _nutrient_field(label)
        amount = nutrient.get("value")
        if target is None or target in values or amount is None:
            continue
        values[target] = max(0.0, float(amount))
    return NutrientValues(**values)


def _nutrient_field(label: str) -> str | None:  # noqa: PLR0911
    if "energy" in label and "kcal" in label:
        return "calories"
    if "protein" in label:
        return "protein"
    if "carbohydrate" in label:
        return "carbs"
    if "total lipid" in label or "fat," in label:
        return "fat"
    if "fiber" in label:
        return "fiber"
    if "calcium" in label:
        return "calcium"
    if "iron" in label:
        return "iron"
    if "vitamin a" in label:
        return "vitamin_a"
    if "vitamin c" in label:
        return "vitamin_c"
    return None
