"""Personalized recipe generation with tiered fallbacks."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote
from uuid import uuid4

from mealvista.adapters.mealdb_client import MealDbClient
from mealvista.domain.errors import GenerationUnusableError
from mealvista.domain.profiles import (
    CalorieTarget,
    HealthGoal,
    UserHealthProfile,
    format_health_goal,
)
from mealvista.domain.recipes import PersonalizedFor, RawRecipe, RecipeStep
from mealvista.services import knowledge_base
from mealvista.services.calories import calorie_target
from mealvista.services.classification import (
    detect_allergens,
    determine_diet_types,
    difficulty_for_steps,
    generated_times,
)
from mealvista.services.constraints import filter_ingredients
from mealvista.services.nutrition import NutritionAggregator

_logger = logging.getLogger(__name__)

MIN_MODEL_TEXT_LENGTH = 50
MAX_SECTION_ITEMS = 15
_MIN_INGREDIENT_LENGTH = 3
_MIN_INSTRUCTION_LENGTH = 10

_SECTION_KINDS = {
    "ingredient": "ingredients",
    "ingredients": "ingredients",
    "instruction": "instructions",
    "instructions": "instructions",
    "method": "instructions",
    "step": "instructions",
    "steps": "instructions",
    "directions": "instructions",
}
_HEADER_RE = re.compile(
    r"^[\s*#>_-]*(?:\d+[.)]\s*)?[*_]*\s*"
    r"(?P<label>ingredients?|instructions?|method|steps?|directions"
    r"|nutrition(?:al information)?|prep(?:aration)? time|cook(?:ing)? time"
    r"|servings|difficulty|notes?|tips?)"
    r"\b[^:\n]{0,40}:[*_\s]*(?P<rest>.*)$",
    re.IGNORECASE,
)
_NAME_RE = re.compile(
    r"^[\s*#>_-]*(?:\d+[.)]\s*)?[*_]*\s*(?:recipe(?: name)?|name|title)[*_]*\s*:"
    r"[*_\s]*(?P<name>[^\n]+?)[*_\s]*$",
    re.IGNORECASE | re.MULTILINE,
)
_BULLET_RE = re.compile(
    r"^\s*(?:[-•*]+|\d+[.)](?!\d)|step\s+\d+[.:)]?)\s*", re.IGNORECASE
)

UNSPLASH_FALLBACK = "https://source.unsplash.com/400x300/?{query},food"


class RecipeTextClient(Protocol):
    """Interface for a free-text generation model."""

    async def complete(self, prompt: str) -> str:
        """Return the model's text for a prompt."""


@dataclass(frozen=True)
class RecipeDraft:
    """Name, ingredient lines and steps before enrichment."""

    name: str
    ingredients: list[str]
    instructions: list[str]
    tier: str


@dataclass
class RecipeGenerator:
    """Produces one recipe for a query, falling back through fixed tiers.

    The model tier is tried first, then the keyword knowledge base, then a
    generic template. The last tier always yields a recipe, so ``generate``
    never raises.
    """

    aggregator: NutritionAggregator
    text_client: RecipeTextClient | None = None
    image_client: MealDbClient | None = None
    model_timeout_seconds: float = 20.0
    image_timeout_seconds: float = 3.0

    async def generate(self, profile: UserHealthProfile, query: str) -> RawRecipe:
        """Return a personalized recipe for the query."""
        target = calorie_target(profile)
        draft = await self._draft(profile, query, target)
        _logger.info("Generated %r via %s for %r", draft.name, draft.tier, query)

        nutrition = await self.aggregator.aggregate(draft.ingredients)
        steps = [
            RecipeStep(id=index, text=text)
            for index, text in enumerate(draft.instructions, 1)
        ]
        prep, cook = generated_times(len(steps))
        return RawRecipe(
            id=f"ai-{uuid4().hex[:12]}",
            name=personalize_name(draft.name, profile),
            image=await self._image_for(query),
            servings=max(1, round(nutrition.calories / target.midpoint)),
            prep_time_min=prep,
            cook_time_min=cook,
            difficulty=difficulty_for_steps(len(steps)),
            rating=4.5,
            nutrition=nutrition,
            ingredients=draft.ingredients,
            instructions=steps,
            allergens=detect_allergens(draft.ingredients),
            diet_types=determine_diet_types(
                draft.ingredients, profile.dietary_preferences
            ),
            is_ai_generated=True,
            personalized_for=PersonalizedFor(
                health_goal=format_health_goal(profile.health_goal),
                bmi_category=profile.bmi_category,
                dietary_preferences=list(profile.dietary_preferences),
            ),
        )

    async def _draft(
        self, profile: UserHealthProfile, query: str, target: CalorieTarget
    ) -> RecipeDraft:
        try:
            return await self._from_model(profile, query, target)
        except GenerationUnusableError as exc:
            _logger.info("Model tier unusable for %r: %s", query, exc)
        try:
            return self._from_knowledge_base(profile, query)
        except GenerationUnusableError as exc:
            _logger.info("Knowledge base tier unusable for %r: %s", query, exc)
        return self._from_minimal_template(profile, query)

    async def _from_model(
        self, profile: UserHealthProfile, query: str, target: CalorieTarget
    ) -> RecipeDraft:
        if self.text_client is None:
            raise GenerationUnusableError("no text model configured")
        prompt = build_prompt(profile, query, target)
        try:
            text = await asyncio.wait_for(
                self.text_client.complete(prompt), timeout=self.model_timeout_seconds
            )
        except TimeoutError as exc:
            raise GenerationUnusableError("text model timed out") from exc
        except Exception as exc:
            _logger.warning("Text model call failed: %s", exc)
            raise GenerationUnusableError(f"text model failed: {exc}") from exc

        parsed = parse_model_text(text, query)
        return _constrained(parsed, profile)

    def _from_knowledge_base(
        self, profile: UserHealthProfile, query: str
    ) -> RecipeDraft:
        template = knowledge_base.match_template(query)
        if template is None:
            raise GenerationUnusableError(f"no template matches {query!r}")
        draft = RecipeDraft(
            name=template.name,
            ingredients=list(template.ingredients),
            instructions=list(template.instructions),
            tier="knowledge base",
        )
        return _constrained(draft, profile)

    def _from_minimal_template(
        self, profile: UserHealthProfile, query: str
    ) -> RecipeDraft:
        ingredients = filter_ingredients(
            knowledge_base.minimal_ingredients(query, profile), profile
        )
        if not ingredients:
            ingredients = _first_allowed_staple(profile)
        return RecipeDraft(
            name=knowledge_base.minimal_name(query),
            ingredients=ingredients,
            instructions=knowledge_base.minimal_instructions(query),
            tier="minimal template",
        )

    async def _image_for(self, query: str) -> str:
        fallback = UNSPLASH_FALLBACK.format(query=quote(query.strip()))
        if self.image_client is None:
            return fallback
        try:
            meals = await asyncio.wait_for(
                self.image_client.search(query), timeout=self.image_timeout_seconds
            )
        except Exception as exc:
            _logger.info("Image lookup for %r failed: %s", query, exc)
            return fallback
        for meal in meals:
            thumb = meal.get("strMealThumb")
            if thumb:
                return str(thumb)
        return fallback


def build_prompt(
    profile: UserHealthProfile, query: str, target: CalorieTarget
) -> str:
    """Return the text prompt for a personalized recipe."""
    constraints: list[str] = []
    for preference in ("vegetarian", "vegan", "keto", "low-carb", "high-protein"):
        if profile.prefers(preference):
            constraints.append(preference)
    if profile.allergens:
        constraints.append(f"allergen-free: no {', '.join(profile.allergens)}")

    lines = [
        f"Create a healthy recipe using {query}.",
        "",
        "User profile:",
        f"- Target calories per serving: {target.min}-{target.max}",
        f"- BMI category: {profile.bmi_category or 'Normal'}",
        f"- Health goal: {format_health_goal(profile.health_goal)}",
    ]
    if constraints:
        lines.append(f"- Dietary requirements: {', '.join(constraints)}")
    lines += [
        "",
        "Respond in this format:",
        "Recipe: <name>",
        "Ingredients:",
        "- <quantity> <unit> <ingredient>",
        "Instructions:",
        "1. <step>",
    ]
    return "\n".join(lines)


def parse_model_text(text: str, query: str) -> RecipeDraft:
    """Extract a recipe draft from free model text.

    Raises GenerationUnusableError when the text is too short or either
    section is missing.
    """
    if len(text.strip()) < MIN_MODEL_TEXT_LENGTH:
        raise GenerationUnusableError("model text too short")

    sections: dict[str, list[str]] = {"ingredients": [], "instructions": []}
    current: str | None = None
    for raw_line in text.splitlines():
        header = _HEADER_RE.match(raw_line)
        if header is not None:
            current = _SECTION_KINDS.get(header.group("label").lower())
            raw_line = header.group("rest")
        if current is None:
            continue
        item = _clean_item(raw_line)
        if item:
            sections[current].append(item)

    ingredients = [
        item for item in sections["ingredients"] if len(item) >= _MIN_INGREDIENT_LENGTH
    ][:MAX_SECTION_ITEMS]
    instructions = [
        item
        for item in sections["instructions"]
        if len(item) > _MIN_INSTRUCTION_LENGTH
    ][:MAX_SECTION_ITEMS]
    if not ingredients:
        raise GenerationUnusableError("model text has no ingredients")
    if not instructions:
        raise GenerationUnusableError("model text has no instructions")

    match = _NAME_RE.search(text)
    name = match.group("name").strip() if match else ""
    return RecipeDraft(
        name=name or f"Healthy {query.strip().title()}",
        ingredients=ingredients,
        instructions=instructions,
        tier="model",
    )


def personalize_name(name: str, profile: UserHealthProfile) -> str:
    """Prefix a recipe name with goal and diet qualifiers."""
    if profile.health_goal == HealthGoal.WEIGHT_LOSS:
        name = f"Light {name}"
    elif profile.health_goal == HealthGoal.WEIGHT_GAIN:
        name = f"Nutritious {name}"
    if profile.prefers("keto"):
        name = f"Keto {name}"
    elif profile.prefers("high-protein"):
        name = f"High-Protein {name}"
    return name


def _clean_item(line: str) -> str:
    return _BULLET_RE.sub("", line.replace("**", "")).strip()


def _constrained(draft: RecipeDraft, profile: UserHealthProfile) -> RecipeDraft:
    ingredients = filter_ingredients(draft.ingredients, profile)
    if not ingredients:
        raise GenerationUnusableError(
            f"{draft.tier} ingredients removed by dietary constraints"
        )
    return RecipeDraft(
        name=draft.name,
        ingredients=ingredients,
        instructions=draft.instructions,
        tier=draft.tier,
    )


def _first_allowed_staple(profile: UserHealthProfile) -> list[str]:
    """Return the first staple the profile allows, or an empty list.

    Allergen matching is by substring, so a profile whose allergens cover every
    staple (single letters, for instance) leaves nothing to offer. Allergen
    safety wins there and the recipe is returned without ingredients.
    """
    for staple in knowledge_base.STAPLE_INGREDIENTS:
        allowed = filter_ingredients([staple], profile)
        if allowed:
            return allowed
    _logger.warning("Every staple conflicts with the allergens %s", profile.allergens)
    return []
