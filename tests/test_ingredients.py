"""Tests for ingredient line parsing."""

import pytest

from mealvista.domain.ingredients import ParsedIngredient, Unit, parse_ingredient


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("2 cups rice", ParsedIngredient(2.0, Unit.CUP, "rice")),
        ("500g chicken breast", ParsedIngredient(500.0, Unit.G, "chicken breast")),
        ("500 g chicken breast", ParsedIngredient(500.0, Unit.G, "chicken breast")),
        ("1/2 tsp salt", ParsedIngredient(0.5, Unit.TSP, "salt")),
        ("1 1/2 cups flour", ParsedIngredient(1.5, Unit.CUP, "flour")),
        ("0.25 kg Lamb", ParsedIngredient(0.25, Unit.KG, "lamb")),
        (".5 l milk", ParsedIngredient(0.5, Unit.L, "milk")),
        ("2 Tbsp. olive oil", ParsedIngredient(2.0, Unit.TBSP, "olive oil")),
        ("3 eggs", ParsedIngredient(3.0, None, "eggs")),
        ("2 lbs beef", ParsedIngredient(2.0, Unit.LB, "beef")),
        (
            "4 cloves garlic, minced",
            ParsedIngredient(4.0, Unit.CLOVE, "garlic, minced"),
        ),
    ],
)
def test_parse_quantified_lines(line: str, expected: ParsedIngredient) -> None:
    assert parse_ingredient(line) == expected


def test_unit_requires_word_boundary() -> None:
    parsed = parse_ingredient("2 garlic cloves")
    assert parsed == ParsedIngredient(2.0, None, "garlic cloves")

    parsed = parse_ingredient("1 large egg")
    assert parsed.unit is None
    assert parsed.name == "large egg"


def test_lines_without_number_are_single_items() -> None:
    assert parse_ingredient("Salt to taste") == ParsedIngredient(
        1.0, None, "salt to taste"
    )


def test_zero_denominator_is_unparsed() -> None:
    assert parse_ingredient("1/0 cup sugar") == ParsedIngredient(
        1.0, None, "1/0 cup sugar"
    )


@pytest.mark.parametrize(
    "line",
    ["", "   ", "cup", "/", "2", "½ cup milk", "💥", "1" * 5000 + " 1/2 cup rice"],
)
def test_parse_is_total(line: str) -> None:
    parsed = parse_ingredient(line)
    assert parsed.quantity >= 0
    assert parsed.name == parsed.name.strip().lower()


@pytest.mark.parametrize(
    "line",
    [
        "1" * 5000 + " 1/2 cup rice",
        "1" + "0" * 400 + " g salt",
        "1" + "0" * 400 + "/" + "1" + "0" * 400 + " cup milk",
    ],
)
def test_oversized_numbers_parse_as_single_items(line: str) -> None:
    parsed = parse_ingredient(line)

    assert parsed.quantity == 1.0
    assert parsed.unit is None
    assert parsed.name == line.lower()
