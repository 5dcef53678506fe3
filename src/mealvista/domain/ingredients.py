"""Ingredient line parsing into quantity, unit and name."""

import math
import re
from dataclasses import dataclass
from enum import Enum


class Unit(str, Enum):
    """Canonical measurement units recognised in ingredient lines."""

    CUP = "cup"
    TBSP = "tbsp"
    TSP = "tsp"
    G = "g"
    KG = "kg"
    OZ = "oz"
    ML = "ml"
    L = "l"
    PINCH = "pinch"
    DASH = "dash"
    SLICE = "slice"
    CLOVE = "clove"
    PIECE = "piece"
    LB = "lb"


_UNIT_ALIASES: dict[str, Unit] = {
    "cup": Unit.CUP,
    "cups": Unit.CUP,
    "tbsp": Unit.TBSP,
    "tsp": Unit.TSP,
    "g": Unit.G,
    "kg": Unit.KG,
    "oz": Unit.OZ,
    "ml": Unit.ML,
    "l": Unit.L,
    "pinch": Unit.PINCH,
    "pinches": Unit.PINCH,
    "dash": Unit.DASH,
    "dashes": Unit.DASH,
    "slice": Unit.SLICE,
    "slices": Unit.SLICE,
    "clove": Unit.CLOVE,
    "cloves": Unit.CLOVE,
    "piece": Unit.PIECE,
    "pieces": Unit.PIECE,
    "lb": Unit.LB,
    "lbs": Unit.LB,
    "pound": Unit.LB,
    "pounds": Unit.LB,
}

_UNIT_PATTERN = "|".join(sorted(_UNIT_ALIASES, key=len, reverse=True))

_LINE_RE = re.compile(
    r"^\s*"
    r"(?:(?P<whole>\d+)\s+(?P<mixed>\d+/\d+)|(?P<number>\d+(?:\.\d+)?(?:/\d+)?|\.\d+))"
    rf"\s*(?:(?P<unit>{_UNIT_PATTERN})\b\.?)?"
    r"\s*(?P<name>.*)$",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured view of a raw ingredient line."""

    quantity: float
    unit: Unit | None
    name: str


def parse_ingredient(line: str) -> ParsedIngredient:
    """Parse a raw ingredient line such as ``"2 cups rice"``.

    Lines without a leading number (or with an unusable one, such as a zero
    denominator or a number too large for a float) parse to a single unitless
    item named after the whole line.
    """
    match = _LINE_RE.match(line)
    if match is None:
        return _unparsed(line)

    if match.group("whole") is not None:
        fraction = _to_number(match.group("mixed"))
        quantity = None if fraction is None else float(match.group("whole")) + fraction
    else:
        quantity = _to_number(match.group("number"))
    if quantity is None or not math.isfinite(quantity):
        return _unparsed(line)

    raw_unit = match.group("unit")
    unit = _UNIT_ALIASES[raw_unit.lower()] if raw_unit else None
    return ParsedIngredient(
        quantity=quantity,
        unit=unit,
        name=match.group("name").strip().lower(),
    )


def _to_number(token: str) -> float | None:
    if "/" in token:
        numerator, denominator = token.split("/", 1)
        if float(denominator) == 0:
            return None
        return float(numerator) / float(denominator)
    return float(token)


def _unparsed(line: str) -> ParsedIngredient:
    return ParsedIngredient(quantity=1.0, unit=None, name=line.strip().lower())
