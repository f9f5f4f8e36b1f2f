"""Pydantic request/response schemas for the recipe API."""

from bakery.shared.schemas import CamelModel


class GenerateRecipeRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"dishName": "banana bread", "ingredients": ["bananas"]}]}}

    dish_name: str | None = None
    ingredients: list[str] | None = None


class RecipeResponse(CamelModel):
    success: bool = True
    recipe: str
    fallback: bool | None = None
    message: str | None = None
