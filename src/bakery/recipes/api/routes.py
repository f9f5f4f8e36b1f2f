"""FastAPI endpoint for AI recipe suggestions."""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from bakery.errors import InvalidInput
from bakery.identity.tokens import Principal
from bakery.recipes.api.schemas import GenerateRecipeRequest, RecipeResponse
from bakery.recipes.suggestion import suggest_recipe
from bakery.shared.dependencies import get_principal, get_services

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/generate", response_model=RecipeResponse, response_model_exclude_none=True)
async def generate_recipe(
    body: GenerateRecipeRequest,
    services=Depends(get_services),
    principal: Principal = Depends(get_principal),
) -> RecipeResponse:
    if not body.dish_name or not body.dish_name.strip():
        raise InvalidInput("Dish name is required")

    settings = services.settings
    suggestion = await run_in_threadpool(
        suggest_recipe,
        services.recipes,
        body.dish_name,
        body.ingredients,
        max_attempts=settings.recipe_max_attempts,
        base_delay=settings.recipe_retry_base_delay,
        sleep=services.sleep,
    )
    return RecipeResponse(
        recipe=suggestion.recipe,
        fallback=True if suggestion.fallback else None,
        message=suggestion.message,
    )
