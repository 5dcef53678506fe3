"""Default conversion tables and nutrition heuristics.

These numbers are hand-picked approximations, not reference data. They are
kept in one place so deployments can replace them without touching the
aggregation code.
"""

from dataclasses import dataclass, field

from mealvista.domain.ingredients import Unit
from mealvista.domain.nutrition import NutrientValues

UNIT_GRAMS: dict[Unit, float] = {
    Unit.CUP: 240.0,
    Unit.TBSP: 15.0,
    Unit.TSP: 5.0,
    Unit.OZ: 28.35,
    Unit.LB: 453.59,
    Unit.KG: 1000.0,
    Unit.G: 1.0,
    Unit.ML: 1.0,
    Unit.L: 1000.0,
    Unit.PINCH: 0.5,
    Unit.DASH: 0.5,
    Unit.SLICE: 30.0,
    Unit.CLOVE: 3.0,
}

# Per-item weights for unitless counts such as "2 onions", first match wins.
ITEM_WEIGHTS: tuple[tuple[str, float], ...] = (
    ("egg", 50.0),
    ("onion", 150.0),
    ("tomato", 150.0),
    ("potato", 200.0),
    ("clove", 3.0),
    ("garlic", 3.0),
)
DEFAULT_ITEM_WEIGHT = 100.0


@dataclass(frozen=True)
class FoodGroup:
    """A keyword set mapped to representative per-100g nutrition."""

    name: str
    keywords: tuple[str, ...]
    per_100g: NutrientValues = field(default_factory=NutrientValues)

    def matches(self, ingredient_name: str) -> bool:
        """Return True when any keyword occurs in the ingredient name."""
        lowered = ingredient_name.lower()
        return any(keyword in lowered for keyword in self.keywords)


FOOD_GROUPS: tuple[FoodGroup, ...] = (
    FoodGroup(
        name="protein",
        keywords=(
            "chicken",
            "meat",
            "beef",
            "fish",
            "pork",
            "lamb",
            "turkey",
            "mutton",
            "shrimp",
            "prawn",
            "salmon",
            "tuna",
            "egg",
        ),
        per_100g=NutrientValues(
            calories=165, protein=26, fat=7, calcium=11, iron=1, vitamin_a=6
        ),
    ),
    FoodGroup(
        name="vegetables",
        keywords=(
            "tomato",
            "onion",
            "garlic",
            "pepper",
            "carrot",
            "spinach",
            "cabbage",
            "broccoli",
            "ginger",
            "chilli",
            "chili",
            "greens",
            "vegetable",
        ),
        per_100g=NutrientValues(
            calories=18,
            protein=1,
            carbs=4,
            fiber=1,
            calcium=10,
            vitamin_a=42,
            vitamin_c=13,
        ),
    ),
    FoodGroup(
        name="grains",
        keywords=("rice", "wheat", "flour", "bread", "pasta", "noodle", "oat", "naan"),
        per_100g=NutrientValues(calories=130, protein=3, carbs=28, calcium=10),
    ),
    FoodGroup(
        name="fats",
        keywords=("oil", "butter", "ghee", "lard"),
        per_100g=NutrientValues(calories=120, fat=14),
    ),
    FoodGroup(
        name="dairy",
        keywords=("milk", "cheese", "cream", "yogurt", "yoghurt", "paneer"),
        per_100g=NutrientValues(
            calories=61, protein=3, carbs=5, fat=3, calcium=113, vitamin_a=28
        ),
    ),
    FoodGroup(
        name="seasonings",
        keywords=("spice", "salt", "cumin", "turmeric", "masala", "herb", "powder"),
        per_100g=NutrientValues(calories=3, carbs=1, calcium=3),
    ),
)

DEFAULT_PER_100G = NutrientValues(
    calories=25,
    protein=1,
    carbs=5,
    fiber=1,
    calcium=25,
    vitamin_a=50,
    vitamin_c=10,
)


def heuristic_per_100g(ingredient_name: str) -> NutrientValues:
    """Classify an ingredient by food group and return its nutrition."""
    for group in FOOD_GROUPS:
        if group.matches(ingredient_name):
            return group.per_100g
    return DEFAULT_PER_100G


def item_weight(ingredient_name: str) -> float:
    """Return the estimated weight in grams of one counted item."""
    lowered = ingredient_name.lower()
    for keyword, grams in ITEM_WEIGHTS:
        if keyword in lowered:
            return grams
    return DEFAULT_ITEM_WEIGHT


def estimate_grams(quantity: float, unit: Unit | None, ingredient_name: str) -> float:
    """Convert a parsed quantity and unit into an estimated gram weight."""
    if unit is None or unit is Unit.PIECE:
        return quantity * item_weight(ingredient_name)
    return quantity * UNIT_GRAMS[unit]
