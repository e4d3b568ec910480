"""Recipe nutrition calculation."""

import asyncio
import logging
import math
from dataclasses import dataclass

from recipe_builder.domain.nutrition import (
    ZERO_NUTRITION,
    IngredientNutritionDetail,
    NutritionInfo,
    NutritionPer100g,
    NutritionResult,
    RecipeIngredientInput,
)
from recipe_builder.services.cache import LookupCache
from recipe_builder.services.resolver import NutritionResolver
from recipe_builder.services.units import UnitConverter

_logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a calculation is requested with unusable arguments."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives."""
    return math.floor(value + 0.5)


def scale_nutrition(per_100g: NutritionPer100g, grams: float) -> NutritionInfo:
    """Scale a per-100g profile to a gram weight, rounding each field."""
    factor = grams / 100
    return NutritionInfo(
        calories=round_half_up(per_100g.calories * factor),
        protein=round_half_up(per_100g.protein * factor),
        carbs=round_half_up(per_100g.carbs * factor),
        fat=round_half_up(per_100g.fat * factor),
    )


@dataclass
class IngredientNutritionCalculator:
    """Computes attributed nutrition for a single ingredient line."""

    converter: UnitConverter
    resolver: NutritionResolver

    async def calculate(
        self, ingredient: RecipeIngredientInput, cache: LookupCache
    ) -> IngredientNutritionDetail:
        """Convert, resolve and scale one ingredient.

        Ingredients whose amount cannot be converted are returned with
        source "failed" and never reach the resolver.
        """
        grams = self.converter.convert_to_grams(ingredient.amount, ingredient.name)
        if not grams:
            return IngredientNutritionDetail(
                ingredient=ingredient.name,
                amount=ingredient.amount,
                grams=None,
                nutrition=None,
                source="failed",
            )
        resolved = await self.resolver.resolve(ingredient.name, cache)
        return IngredientNutritionDetail(
            ingredient=ingredient.name,
            amount=ingredient.amount,
            grams=grams,
            nutrition=scale_nutrition(resolved.per_100g, grams),
            source=resolved.source,
        )


@dataclass
class RecipeNutritionService:
    """Aggregates ingredient nutrition into recipe totals and per-serving values."""

    calculator: IngredientNutritionCalculator

    async def calculate_recipe_nutrition(
        self, ingredients: list[RecipeIngredientInput], servings: int
    ) -> NutritionResult:
        """Calculate totals, per-serving values and warnings for a recipe.

        Ingredient-level problems are reported as warnings; the call itself
        only fails for a servings count below 1.
        """
        if servings < 1:
            raise InvalidInputError(f"Servings must be at least 1, got {servings}")

        cache = LookupCache()
        details = list(
            await asyncio.gather(
                *(
                    self.calculator.calculate(ingredient, cache)
                    for ingredient in ingredients
                )
            )
        )
        warnings = [
            warning for detail in details if (warning := _warning_for(detail))
        ]
        total = _sum_nutrition(details)
        per_serving = NutritionInfo(
            calories=round_half_up(total.calories / servings),
            protein=round_half_up(total.protein / servings),
            carbs=round_half_up(total.carbs / servings),
            fat=round_half_up(total.fat / servings),
        )
        _logger.info(
            "Calculated nutrition for %s ingredients (%s warnings, %s lookups)",
            len(details),
            len(warnings),
            len(cache),
        )
        return NutritionResult(
            nutrition_total=total,
            nutrition_per_serving=per_serving,
            warnings=warnings,
            details=details,
        )


def _warning_for(detail: IngredientNutritionDetail) -> str | None:
    if detail.source == "failed":
        return f"Could not calculate nutrition for: {detail.ingredient} ({detail.amount})"
    if detail.source == "default":
        return f"Using estimated nutrition for: {detail.ingredient}"
    return None


def _sum_nutrition(details: list[IngredientNutritionDetail]) -> NutritionInfo:
    total = ZERO_NUTRITION
    for detail in details:
        if detail.nutrition is None:
            continue
        total = NutritionInfo(
            calories=total.calories + detail.nutrition.calories,
            protein=total.protein + detail.nutrition.protein,
            carbs=total.carbs + detail.nutrition.carbs,
            fat=total.fat + detail.nutrition.fat,
        )
    return total


def result_to_dict(result: NutritionResult) -> dict[str, object]:
    """Serialize a nutrition result to the public JSON shape."""
    return {
        "nutritionTotal": result.nutrition_total.as_dict(),
        "nutritionPerServing": result.nutrition_per_serving.as_dict(),
        "warnings": list(result.warnings),
        "details": [
            {
                "ingredient": detail.ingredient,
                "amount": detail.amount,
                "grams": detail.grams,
                "nutrition": detail.nutrition.as_dict() if detail.nutrition else None,
                "source": detail.source,
            }
            for detail in result.details
        ],
    }
