"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from recipe_builder.adapters.fdc_client import HttpxFdcClient
from recipe_builder.adapters.openai_text_client import OpenAITextClient
from recipe_builder.config import Settings
from recipe_builder.services.calculator import (
    IngredientNutritionCalculator,
    RecipeNutritionService,
)
from recipe_builder.services.nutrition import UsdaNutritionSource
from recipe_builder.services.recipes import RecipeGenerationService
from recipe_builder.services.resolver import NutritionResolver
from recipe_builder.services.units import UnitConverter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    unit_converter: UnitConverter
    recipe_nutrition_service: RecipeNutritionService
    recipe_generation_service: RecipeGenerationService | None
    close_resources: Callable[[], Awaitable[None]]


def build_nutrition_service(
    converter: UnitConverter, usda_source: UsdaNutritionSource
) -> RecipeNutritionService:
    """Assemble the nutrition pipeline around a USDA source."""
    calculator = IngredientNutritionCalculator(
        converter=converter,
        resolver=NutritionResolver(remote=usda_source),
    )
    return RecipeNutritionService(calculator=calculator)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Missing API keys leave the matching integration disabled: USDA lookups
    report no data and recipe generation is unavailable.
    """
    resolved_settings = settings or Settings()
    fdc_client = (
        HttpxFdcClient.create(
            api_key=resolved_settings.usda_api_key,
            base_url=resolved_settings.usda_base_url,
            timeout_seconds=resolved_settings.usda_timeout_seconds,
        )
        if resolved_settings.usda_api_key
        else None
    )
    text_client = (
        OpenAITextClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
        )
        if resolved_settings.openai_api_key
        else None
    )
    converter = UnitConverter()
    nutrition_service = build_nutrition_service(
        converter,
        UsdaNutritionSource(
            fdc_client=fdc_client,
            retry_attempts=resolved_settings.usda_retry_attempts,
        ),
    )
    generation_service = (
        RecipeGenerationService(client=text_client) if text_client else None
    )

    async def close_resources() -> None:
        if fdc_client is not None:
            await fdc_client.close()
        if text_client is not None:
            await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        unit_converter=converter,
        recipe_nutrition_service=nutrition_service,
        recipe_generation_service=generation_service,
        close_resources=close_resources,
    )
