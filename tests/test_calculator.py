"""Tests for ingredient and recipe nutrition calculation."""

import asyncio

import pytest

from recipe_builder.domain.nutrition import (
    NutritionInfo,
    NutritionPer100g,
    RecipeIngredientInput,
)
from recipe_builder.services.cache import LookupCache
from recipe_builder.services.calculator import (
    IngredientNutritionCalculator,
    InvalidInputError,
    RecipeNutritionService,
    result_to_dict,
    round_half_up,
    scale_nutrition,
)
from recipe_builder.services.nutrition import UsdaNutritionSource
from recipe_builder.services.resolver import NutritionResolver
from recipe_builder.services.units import UnitConverter
from tests.conftest import FakeFdcClient

_RECIPE = [
    RecipeIngredientInput(name="chicken breast", amount="1 lb"),
    RecipeIngredientInput(name="olive oil", amount="2 tablespoons"),
    RecipeIngredientInput(name="rice", amount="1 cup"),
]


def _service(client: FakeFdcClient | None = None) -> RecipeNutritionService:
    resolver = NutritionResolver(
        remote=UsdaNutritionSource(fdc_client=client, retry_delay_seconds=0)
    )
    return RecipeNutritionService(
        calculator=IngredientNutritionCalculator(
            converter=UnitConverter(), resolver=resolver
        )
    )


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_scale_nutrition_rounds_each_field() -> None:
    per_100g = NutritionPer100g(calories=165, protein=31, carbs=0, fat=3.6)

    assert scale_nutrition(per_100g, 453.592) == NutritionInfo(
        calories=748, protein=141, carbs=0, fat=16
    )


def test_recipe_totals_and_per_serving() -> None:
    result = asyncio.run(_service().calculate_recipe_nutrition(_RECIPE, servings=2))

    assert all(detail.grams is not None for detail in result.details)
    assert [detail.source for detail in result.details] == ["mapping"] * 3
    assert result.warnings == []
    assert result.nutrition_total.calories == sum(
        detail.nutrition.calories for detail in result.details if detail.nutrition
    )
    assert result.nutrition_total == NutritionInfo(
        calories=1662, protein=154, carbs=148, fat=44
    )
    assert result.nutrition_per_serving == NutritionInfo(
        calories=831, protein=77, carbs=74, fat=22
    )
    assert result.nutrition_per_serving.calories == round_half_up(
        result.nutrition_total.calories / 2
    )


def test_single_serving_matches_total() -> None:
    result = asyncio.run(_service().calculate_recipe_nutrition(_RECIPE, servings=1))

    assert result.nutrition_per_serving == result.nutrition_total


def test_failed_and_estimated_ingredients_produce_warnings_in_order() -> None:
    ingredients = [
        RecipeIngredientInput(name="saffron", amount="a pinch"),
        RecipeIngredientInput(name="garlic", amount="2 cloves"),
        RecipeIngredientInput(name="mystery spice blend", amount="1 tsp"),
        RecipeIngredientInput(name="chicken", amount="3 xyz"),
    ]

    result = asyncio.run(_service().calculate_recipe_nutrition(ingredients, 4))

    assert [detail.source for detail in result.details] == [
        "failed",
        "mapping",
        "default",
        "failed",
    ]
    assert result.warnings == [
        "Could not calculate nutrition for: saffron (a pinch)",
        "Using estimated nutrition for: mystery spice blend",
        "Could not calculate nutrition for: chicken (3 xyz)",
    ]
    failed = result.details[0]
    assert failed.grams is None
    assert failed.nutrition is None


def test_failed_ingredient_never_reaches_resolver() -> None:
    client = FakeFdcClient()
    calculator = IngredientNutritionCalculator(
        converter=UnitConverter(),
        resolver=NutritionResolver(remote=UsdaNutritionSource(fdc_client=client)),
    )

    detail = asyncio.run(
        calculator.calculate(
            RecipeIngredientInput(name="jackfruit", amount="some"), LookupCache()
        )
    )

    assert detail.source == "failed"
    assert client.search_calls == []


def test_remote_result_is_labelled_usda() -> None:
    client = FakeFdcClient()

    result = asyncio.run(
        _service(client).calculate_recipe_nutrition(
            [RecipeIngredientInput(name="jackfruit", amount="200 g")], servings=1
        )
    )

    detail = result.details[0]
    assert detail.source == "usda"
    assert detail.nutrition == NutritionInfo(calories=190, protein=3, carbs=46, fat=1)
    assert result.warnings == []


def test_every_ingredient_failing_still_returns_zero_totals() -> None:
    ingredients = [
        RecipeIngredientInput(name="salt", amount="to taste"),
        RecipeIngredientInput(name="pepper", amount="a dash"),
    ]

    result = asyncio.run(_service().calculate_recipe_nutrition(ingredients, 2))

    assert result.nutrition_total == NutritionInfo(0, 0, 0, 0)
    assert result.nutrition_per_serving == NutritionInfo(0, 0, 0, 0)
    assert len(result.warnings) == 2


def test_repeated_calculation_is_deterministic() -> None:
    service = _service(FakeFdcClient())
    ingredients = [*_RECIPE, RecipeIngredientInput(name="jackfruit", amount="1 cup")]

    first = asyncio.run(service.calculate_recipe_nutrition(ingredients, 3))
    second = asyncio.run(service.calculate_recipe_nutrition(ingredients, 3))

    assert first.nutrition_total == second.nutrition_total
    assert first.nutrition_per_serving == second.nutrition_per_serving


def test_each_calculation_uses_a_fresh_cache() -> None:
    client = FakeFdcClient()
    service = _service(client)
    ingredients = [
        RecipeIngredientInput(name="jackfruit", amount="100 g"),
        RecipeIngredientInput(name="Jackfruit", amount="50 g"),
    ]

    asyncio.run(service.calculate_recipe_nutrition(ingredients, 1))
    asyncio.run(service.calculate_recipe_nutrition(ingredients, 1))

    assert len(client.search_calls) == 2


@pytest.mark.parametrize("servings", [0, -1])
def test_servings_below_one_are_rejected(servings: int) -> None:
    with pytest.raises(InvalidInputError):
        asyncio.run(_service().calculate_recipe_nutrition(_RECIPE, servings))


def test_result_to_dict_uses_public_field_names() -> None:
    result = asyncio.run(
        _service().calculate_recipe_nutrition(
            [
                RecipeIngredientInput(name="garlic", amount="2 cloves"),
                RecipeIngredientInput(name="saffron", amount="a pinch"),
            ],
            servings=1,
        )
    )

    payload = result_to_dict(result)

    assert payload["nutritionTotal"] == {"calories": 9, "protein": 0, "carbs": 2, "fat": 0}
    assert payload["nutritionPerServing"] == payload["nutritionTotal"]
    assert payload["details"][0] == {
        "ingredient": "garlic",
        "amount": "2 cloves",
        "grams": 6,
        "nutrition": {"calories": 9, "protein": 0, "carbs": 2, "fat": 0},
        "source": "mapping",
    }
    assert payload["details"][1]["grams"] is None
    assert payload["details"][1]["source"] == "failed"
    assert payload["warnings"] == ["Could not calculate nutrition for: saffron (a pinch)"]
