"""User health profile models consumed by personalization."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HealthGoal(str, Enum):
    """Supported health goals."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MAINTENANCE = "maintenance"


HEALTH_GOAL_LABELS = {
    HealthGoal.WEIGHT_LOSS: "Weight Loss",
    HealthGoal.WEIGHT_GAIN: "Weight Gain",
    HealthGoal.MAINTENANCE: "Weight Maintenance",
}


class UserHealthProfile(BaseModel):
    """Read-only dietary and health profile of a user."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    dietary_preferences: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    bmi: float | None = None
    bmi_category: str | None = None
    health_goal: HealthGoal | None = None

    def prefers(self, preference: str) -> bool:
        """Return True when the dietary preference is set."""
        wanted = preference.lower()
        return any(item.lower() == wanted for item in self.dietary_preferences)


DEFAULT_PROFILE = UserHealthProfile(
    bmi=22.0,
    bmi_category="Normal",
    health_goal=HealthGoal.MAINTENANCE,
)


def format_health_goal(goal: HealthGoal | None) -> str:
    """Return a display label for a health goal."""
    if goal is None:
        return HEALTH_GOAL_LABELS[HealthGoal.MAINTENANCE]
    return HEALTH_GOAL_LABELS[goal]


@dataclass(frozen=True)
class CalorieTarget:
    """Per-serving calorie window."""

    min: int
    max: int

    @property
    def midpoint(self) -> float:
        """Return the centre of the window."""
        return (self.min + self.max) / 2
