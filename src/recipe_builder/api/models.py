"""Pydantic models for nutrition API payloads."""

from pydantic import BaseModel, Field

from recipe_builder.domain.nutrition import RecipeIngredientInput


class IngredientPayload(BaseModel):
    """Ingredient line in a nutrition request."""

    name: str = Field(min_length=1)
    amount: str = Field(min_length=1)


class NutritionRequest(BaseModel):
    """Body of a nutrition calculation request."""

    ingredients: list[IngredientPayload] = Field(min_length=1)
    servings: int = Field(ge=1, le=100)

    def ingredient_inputs(self) -> list[RecipeIngredientInput]:
        """Return the ingredients as pipeline input."""
        return [
            RecipeIngredientInput(name=item.name, amount=item.amount)
            for item in self.ingredients
        ]
