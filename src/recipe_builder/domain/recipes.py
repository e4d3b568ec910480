"""Models for AI-generated recipe ideas and full recipes."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DietaryPreferences(_CamelModel):
    """Dietary constraints to pass along to recipe generation."""

    is_vegetarian: bool = Field(default=False, alias="isVegetarian")
    is_vegan: bool = Field(default=False, alias="isVegan")
    is_pescatarian: bool = Field(default=False, alias="isPescatarian")
    allergies: list[str] = Field(default_factory=list)
    custom_instructions: str | None = Field(default=None, alias="customInstructions")

    def restrictions(self) -> list[str]:
        """Return restriction phrases in prompt order."""
        phrases: list[str] = []
        if self.is_vegetarian:
            phrases.append("vegetarian")
        if self.is_vegan:
            phrases.append("vegan")
        if self.is_pescatarian:
            phrases.append("pescatarian")
        if self.allergies:
            phrases.append(f"no {', '.join(self.allergies)}")
        if self.custom_instructions:
            phrases.append(self.custom_instructions)
        return phrases


class RecipeIdeasRequest(_CamelModel):
    """Parameters for generating recipe ideas."""

    ingredients: list[str] = Field(min_length=1)
    cuisine: str = Field(min_length=1)
    meal_type: str = Field(min_length=1, alias="mealType")
    style: str | None = None
    servings: int = Field(default=4, ge=1, le=100)
    dietary_preferences: DietaryPreferences | None = Field(
        default=None, alias="dietaryPreferences"
    )


class FullRecipeRequest(RecipeIdeasRequest):
    """Parameters for expanding one idea into a full recipe."""

    recipe_name: str = Field(min_length=1, alias="recipeName")
    estimated_time: str = Field(default="30 minutes", alias="estimatedTime")
    difficulty: str = "Medium"
    include_nutrition: bool = Field(default=True, alias="includeNutrition")


class RecipeIdea(_CamelModel):
    """Short recipe suggestion."""

    name: str
    description: str
    estimated_time: str = Field(alias="estimatedTime")
    difficulty: str


class GeneratedIngredient(_CamelModel):
    """Ingredient line as produced by the text generator."""

    name: str = Field(min_length=1)
    amount: str
    unit: str = ""

    @field_validator("amount", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, int | float):
            return f"{value:g}"
        return value

    @property
    def amount_text(self) -> str:
        """Amount and unit joined as free text, e.g. "1/2 cup"."""
        return f"{self.amount} {self.unit}".strip()


class FullRecipe(_CamelModel):
    """Complete generated recipe."""

    name: str
    description: str
    ingredients: list[GeneratedIngredient]
    instructions: list[str]
    cook_time: str = Field(alias="cookTime")
    difficulty: str
    servings: int = Field(ge=1, le=100)
    cuisine_type: str = Field(default="", alias="cuisineType")
    recipe_style: str = Field(default="", alias="recipeStyle")
