"""Supported cuisines and their provider lookup hints."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CuisineMapping:
    """How a cuisine is looked up in TheMealDB."""

    search_terms: tuple[str, ...]
    area: str | None = None
    category: str | None = None


CUISINES: dict[str, CuisineMapping] = {
    "italian": CuisineMapping(
        search_terms=(
            "pasta",
            "pizza",
            "risotto",
            "lasagne",
            "carbonara",
            "tiramisu",
            "spaghetti",
        ),
        area="Italian",
        category="Pasta",
    ),
    "pakistani": CuisineMapping(
        search_terms=(
            "biryani",
            "kebab",
            "curry",
            "naan",
            "pakora",
            "samosa",
            "halwa",
            "korma",
            "tandoori",
        ),
    ),
    "indian": CuisineMapping(
        search_terms=(
            "curry",
            "biryani",
            "tikka",
            "masala",
            "dal",
            "samosa",
            "naan",
            "butter chicken",
        ),
        area="Indian",
    ),
    "chinese": CuisineMapping(
        search_terms=(
            "chow",
            "fried rice",
            "dumpling",
            "sweet and sour",
            "kung pao",
            "lo mein",
            "chow mein",
        ),
        area="Chinese",
    ),
    "mexican": CuisineMapping(
        search_terms=(
            "taco",
            "burrito",
            "enchilada",
            "quesadilla",
            "guacamole",
            "salsa",
            "fajita",
        ),
        area="Mexican",
    ),
    "thai": CuisineMapping(
        search_terms=(
            "pad thai",
            "curry",
            "tom yum",
            "satay",
            "green curry",
            "mango sticky rice",
            "thai",
        ),
        area="Thai",
    ),
    "mediterranean": CuisineMapping(
        search_terms=(
            "hummus",
            "falafel",
            "shakshuka",
            "tzatziki",
            "moussaka",
            "baklava",
            "greek",
        ),
        area="Greek",
    ),
}


def normalize_cuisine(cuisine: str) -> str:
    """Return the lookup key for a cuisine name."""
    return cuisine.strip().lower()


def available_cuisines() -> list[str]:
    """Return the supported cuisine keys."""
    return list(CUISINES)
