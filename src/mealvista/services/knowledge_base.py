"""Fixed recipe templates used when the text model is unavailable."""

from dataclasses import dataclass

from mealvista.domain.profiles import UserHealthProfile


@dataclass(frozen=True)
class RecipeTemplate:
    """A complete recipe keyed by a query keyword."""

    keyword: str
    name: str
    ingredients: tuple[str, ...]
    instructions: tuple[str, ...]


KNOWLEDGE_BASE: tuple[RecipeTemplate, ...] = (
    RecipeTemplate(
        keyword="egg",
        name="Perfect Scrambled Eggs",
        ingredients=(
            "4 large eggs",
            "2 tbsp butter",
            "2 tbsp milk",
            "Salt and pepper to taste",
            "Fresh chives, chopped (optional)",
        ),
        instructions=(
            "Crack eggs into a bowl and whisk until yolks and whites are combined",
            "Add milk, salt, and pepper, and whisk again",
            "Heat butter in a non-stick pan over medium-low heat",
            "Pour in the egg mixture and let it sit for 30 seconds",
            "Gently push the eggs from the edges toward the center with a spatula",
            "Keep cooking, stirring occasionally, until creamy and just set",
            "Remove from heat while still slightly runny",
            "Garnish with chives and serve immediately",
        ),
    ),
    RecipeTemplate(
        keyword="chicken",
        name="Herb-Roasted Chicken",
        ingredients=(
            "1.5 kg whole chicken",
            "2 tbsp olive oil",
            "1 lemon, halved",
            "4 cloves garlic, minced",
            "1 tsp dried rosemary",
            "1 tsp dried thyme",
            "Salt and pepper to taste",
            "1 onion, quartered",
        ),
        instructions=(
            "Preheat oven to 200°C (400°F)",
            "Pat chicken dry and place in a roasting pan",
            "Mix olive oil, garlic, rosemary, thyme, salt, and pepper",
            "Rub the mixture all over the chicken, including under the skin",
            "Place lemon halves and onion quarters inside the chicken cavity",
            "Roast for 60-75 minutes until the thickest part reaches 75°C (165°F)",
            "Let rest for 10 minutes before carving",
            "Serve with roasted vegetables",
        ),
    ),
    RecipeTemplate(
        keyword="pasta",
        name="Creamy Pasta",
        ingredients=(
            "300g pasta",
            "200ml heavy cream",
            "100g parmesan cheese, grated",
            "2 cloves garlic, minced",
            "2 tbsp butter",
            "Salt and pepper to taste",
            "Fresh basil leaves",
        ),
        instructions=(
            "Cook pasta according to package directions until al dente",
            "Meanwhile, heat butter in a large pan over medium heat",
            "Add garlic and cook for 1 minute until fragrant",
            "Pour in cream and bring to a gentle simmer",
            "Add grated parmesan and stir until melted and smooth",
            "Drain pasta, reserving 1/2 cup of pasta water",
            "Add pasta to the sauce and toss to combine",
            "Add pasta water if needed to thin the sauce",
            "Season with salt and pepper, garnish with basil, and serve",
        ),
    ),
    RecipeTemplate(
        keyword="rice",
        name="Vegetable Fried Rice",
        ingredients=(
            "3 cups cooked rice",
            "2 tbsp vegetable oil",
            "1 onion, diced",
            "2 cloves garlic, minced",
            "1 cup mixed vegetables",
            "2 tbsp soy sauce",
            "2 spring onions, sliced",
        ),
        instructions=(
            "Heat oil in a wok or large pan over high heat",
            "Add onion and garlic and stir-fry for 2 minutes",
            "Add mixed vegetables and cook until just tender",
            "Add the cooked rice and break up any clumps",
            "Stir in soy sauce and toss until evenly coloured",
            "Scatter spring onions over the top and serve hot",
        ),
    ),
)

STAPLE_INGREDIENTS = ("200g mixed vegetables", "1 cup steamed rice", "250ml water")


def match_template(query: str) -> RecipeTemplate | None:
    """Return the first template whose keyword occurs in the query."""
    lowered = query.lower()
    for template in KNOWLEDGE_BASE:
        if template.keyword in lowered:
            return template
    return None


def minimal_name(query: str) -> str:
    """Return the generic recipe name for a query."""
    cleaned = query.strip()
    return f"{cleaned[:1].upper()}{cleaned[1:]} Delight"


def minimal_ingredients(query: str, profile: UserHealthProfile) -> list[str]:
    """Return aromatics plus the queried main ingredient."""
    main = query.strip().lower()
    ingredients = [
        "2 tbsp olive oil",
        "1 onion, diced",
        "2 cloves garlic, minced",
        "Salt and pepper to taste",
        f"500g {main}",
    ]
    if profile.prefers("high-protein"):
        ingredients.append("200g tofu or tempeh")
    if profile.prefers("keto"):
        ingredients.extend(["2 tbsp butter", "100g leafy greens"])
    if profile.prefers("low-carb"):
        ingredients.append("200g vegetables")
    return ingredients


def minimal_instructions(query: str) -> list[str]:
    """Return a generic seven step cooking procedure."""
    main = query.strip().lower()
    return [
        f"Prepare the {main} by cleaning and cutting as needed",
        "Heat oil in a pan over medium heat",
        "Add onions and garlic, sauté until fragrant",
        f"Add the {main} and cook until tender",
        "Season with salt, pepper, and herbs",
        "Cook for 10-15 minutes until done",
        "Serve hot and enjoy!",
    ]
