"""Recipe suggestions with retry and a local fallback.

The generator is asked up to ``max_attempts`` times while it reports being
overloaded, waiting ``base_delay * (attempt + 1)`` after each failed attempt.
Anything else, or running out of attempts, yields a canned recipe so the
shopper always gets an answer.
"""

import time
from dataclasses import dataclass

import structlog

from bakery.errors import InvalidInput
from bakery.recipes.generator.port import GenerationError, RecipeGenerator

logger = structlog.get_logger(__name__)

FALLBACK_MESSAGE = "Our recipe assistant is busy right now, so here is a basic recipe to get you started."


@dataclass(frozen=True)
class RecipeSuggestion:
    recipe: str
    fallback: bool = False
    message: str | None = None


def build_prompt(dish_name: str, ingredients: list[str] | None = None) -> str:
    prompt = (
        f'Create a detailed recipe for "{dish_name}".\n'
        "Respond in plain text without markdown formatting, using this layout:\n"
        "the recipe title on the first line, then a section starting with 'Ingredients:' "
        "listing each ingredient with its quantity, then a section starting with "
        "'Instructions:' giving numbered steps, then a section starting with 'Notes:' "
        "with serving suggestions or tips."
    )
    if ingredients:
        prompt += f"\nUse these ingredients where possible: {', '.join(ingredients)}."
    return prompt


def fallback_recipe(dish_name: str, ingredients: list[str] | None = None) -> str:
    title = dish_name.strip().title()
    if ingredients:
        ingredient_lines = "\n".join(f"- {item}" for item in ingredients)
    else:
        ingredient_lines = "\n".join(
            f"- {item}"
            for item in (
                "2 cups all-purpose flour",
                "1 cup sugar",
                "1/2 cup butter",
                "2 eggs",
                "1 tsp baking powder",
            )
        )

    return (
        f"{title}\n\n"
        f"Ingredients:\n{ingredient_lines}\n\n"
        "Instructions:\n"
        "1. Preheat the oven and prepare your baking tin.\n"
        "2. Mix the dry ingredients in a large bowl.\n"
        "3. Combine the wet ingredients and fold them into the dry mix.\n"
        "4. Pour into the tin and bake until golden.\n"
        "5. Let it cool before serving.\n\n"
        "Notes:\n"
        f"This is a basic outline for {title}. Adjust quantities and baking time to taste."
    )


def _clean_ingredients(ingredients) -> list[str]:
    if not ingredients:
        return []
    return [str(item).strip() for item in ingredients if str(item).strip()]


def suggest_recipe(
    generator: RecipeGenerator,
    dish_name: str | None,
    ingredients: list[str] | None = None,
    max_attempts: int = 3,
    base_delay: float = 2.0,
    sleep=time.sleep,
) -> RecipeSuggestion:
    if not dish_name or not dish_name.strip():
        raise InvalidInput("Dish name is required")

    dish_name = dish_name.strip()
    ingredients = _clean_ingredients(ingredients)
    prompt = build_prompt(dish_name, ingredients)

    attempt = 1
    while True:
        try:
            return RecipeSuggestion(recipe=generator.generate(prompt))
        except GenerationError as exc:
            if not exc.retriable or attempt >= max_attempts:
                logger.warning(
                    "Recipe generation failed, serving fallback",
                    dish=dish_name,
                    attempts=attempt,
                    status=exc.status,
                    error=exc.message,
                )
                return RecipeSuggestion(
                    recipe=fallback_recipe(dish_name, ingredients),
                    fallback=True,
                    message=FALLBACK_MESSAGE,
                )

            delay = base_delay * (attempt + 1)
            logger.info("Recipe service overloaded, retrying", dish=dish_name, attempt=attempt, delay=delay)
            sleep(delay)
            attempt += 1
