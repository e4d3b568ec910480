"""Nutrition domain models."""

from dataclasses import dataclass
from typing import Literal

NutritionSource = Literal["mapping", "usda", "default", "failed"]


@dataclass(frozen=True)
class RecipeIngredientInput:
    """Raw ingredient line supplied by a caller."""

    name: str
    amount: str


@dataclass(frozen=True)
class ParsedAmount:
    """Numeric quantity and unit token decoded from free text.

    A quantity of 0 means nothing numeric could be decoded.
    """

    quantity: float
    unit: str


@dataclass(frozen=True)
class NutritionPer100g:
    """Macronutrient profile normalized to 100 grams."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class NutritionInfo:
    """Absolute macronutrient amounts for an ingredient, recipe or serving."""

    calories: int
    protein: int
    carbs: int
    fat: int

    def as_dict(self) -> dict[str, int]:
        """Return the values keyed by field name."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


ZERO_NUTRITION = NutritionInfo(calories=0, protein=0, carbs=0, fat=0)


@dataclass(frozen=True)
class IngredientNutritionDetail:
    """Per-ingredient result with provenance."""

    ingredient: str
    amount: str
    grams: float | None
    nutrition: NutritionInfo | None
    source: NutritionSource


@dataclass(frozen=True)
class NutritionResult:
    """Recipe totals, per-serving values, warnings and details."""

    nutrition_total: NutritionInfo
    nutrition_per_serving: NutritionInfo
    warnings: list[str]
    details: list[IngredientNutritionDetail]
