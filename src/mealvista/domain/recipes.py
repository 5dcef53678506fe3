"""Canonical recipe models shared by every pipeline path."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mealvista.domain.nutrition import NutritionProfile


class Difficulty(str, Enum):
    """Recipe difficulty levels."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class _RecipeModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class RecipeStep(_RecipeModel):
    """Single instruction step."""

    id: int
    text: str
    time: str | None = None
    note: str | None = None


class PersonalizedFor(_RecipeModel):
    """Profile summary attached to generated recipes."""

    health_goal: str
    bmi_category: str | None = None
    dietary_preferences: list[str] = Field(default_factory=list)


class RawRecipe(_RecipeModel):
    """Canonical recipe shape returned by providers and the generator."""

    id: str
    name: str
    image: str | None = None
    servings: int = Field(default=2, ge=1)
    prep_time_min: int = Field(ge=0)
    cook_time_min: int = Field(ge=0)
    difficulty: Difficulty
    rating: float = Field(default=4.5, ge=0.0, le=5.0)
    nutrition: NutritionProfile = Field(default_factory=NutritionProfile)
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[RecipeStep] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    diet_types: list[str] = Field(default_factory=list)
    is_ai_generated: bool = Field(default=False, alias="isAIGenerated")
    personalized_for: PersonalizedFor | None = None

    def to_payload(self) -> dict[str, object]:
        """Serialize with the public camelCase field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class RecipeBatch:
    """Recipes for a category together with their provenance."""

    recipes: list[RawRecipe]
    source: str
