"""Per-meal calorie targets derived from a health profile."""

from mealvista.domain.profiles import CalorieTarget, HealthGoal, UserHealthProfile

_BMI_CATEGORY_CALORIES = {
    "underweight": 600,
    "normal": 500,
    "overweight": 400,
    "obese": 350,
}
_DEFAULT_BASE_CALORIES = 500

_GOAL_SHIFT = {
    HealthGoal.WEIGHT_LOSS: -100,
    HealthGoal.WEIGHT_GAIN: 150,
    HealthGoal.MAINTENANCE: 0,
}

_FLOOR = 200
_CEILING = 800


def bmi_category_for(bmi: float) -> str:
    """Return the WHO adult category for a BMI value."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def calorie_target(profile: UserHealthProfile) -> CalorieTarget:
    """Return the per-serving calorie window for a profile."""
    category = (profile.bmi_category or "").strip().lower()
    if category not in _BMI_CATEGORY_CALORIES and profile.bmi is not None:
        category = bmi_category_for(profile.bmi).lower()
    base = _BMI_CATEGORY_CALORIES.get(category, _DEFAULT_BASE_CALORIES)
    if profile.health_goal is not None:
        base += _GOAL_SHIFT[profile.health_goal]
    return CalorieTarget(min=max(_FLOOR, base - 100), max=min(_CEILING, base + 150))
