"""Nutrition domain models."""

from dataclasses import dataclass, fields

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NUTRIENT_FIELDS = (
    "calories",
    "protein",
    "carbs",
    "fat",
    "fiber",
    "calcium",
    "iron",
    "vitamin_a",
    "vitamin_c",
)


@dataclass(frozen=True)
class NutrientValues:
    """Nutrient amounts for a fixed quantity of food, usually 100 g."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    vitamin_a: float = 0.0
    vitamin_c: float = 0.0

    def scaled(self, factor: float) -> "NutrientValues":
        """Return the values multiplied by ``factor``."""
        return NutrientValues(
            **{item.name: getattr(self, item.name) * factor for item in fields(self)}
        )


class NutritionProfile(BaseModel):
    """Recipe-level nutrition, per serving as produced."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    calories: int = Field(default=0, ge=0)
    protein: int = Field(default=0, ge=0)
    carbs: int = Field(default=0, ge=0)
    fat: int = Field(default=0, ge=0)
    fiber: int = Field(default=0, ge=0)
    calcium: int = Field(default=0, ge=0)
    iron: int = Field(default=0, ge=0)
    vitamin_a: int = Field(default=0, ge=0)
    vitamin_c: int = Field(default=0, ge=0)

    def is_empty(self) -> bool:
        """Return True when no nutrient carries a value."""
        return all(getattr(self, name) == 0 for name in NUTRIENT_FIELDS)
