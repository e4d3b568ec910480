"""Remote nutrition lookups against USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_builder.adapters.fdc_client import FdcClient
from recipe_builder.domain.nutrition import NutritionPer100g
from recipe_builder.services.cache import LookupCache

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class UsdaNutritionSource:
    """Looks up per-100g macros by ingredient name.

    Every failure (no API key, HTTP error, timeout, unexpected payload) is
    logged and reported as None so callers can fall back to estimates.
    """

    fdc_client: FdcClient | None
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def per_100g(
        self, ingredient_name: str, cache: LookupCache
    ) -> NutritionPer100g | None:
        """Return cached or freshly fetched macros for an ingredient."""
        return await cache.get_or_fetch(
            ingredient_name.lower().strip(), lambda: self._fetch(ingredient_name)
        )

    async def _fetch(self, ingredient_name: str) -> NutritionPer100g | None:
        client = self.fdc_client
        if client is None:
            _logger.warning("USDA API key is not configured")
            return None
        try:
            payload = await self._call_with_retry(
                lambda: client.search_foods(ingredient_name, page_size=1),
                action=f"search:{ingredient_name}",
            )
            food = _first_food(payload)
            if food is None:
                return None
            return _extract_macros(food.get("foodNutrients") or [])
        except Exception as exc:
            _logger.warning(
                "USDA lookup failed for %s (status=%s): %s",
                ingredient_name,
                _status_code_from_exception(exc),
                exc,
            )
            return None

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.info(
                    "USDA %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _first_food(payload: dict[str, object]) -> dict[str, object] | None:
    foods = payload.get("foods")
    if isinstance(foods, list) and foods and isinstance(foods[0], dict):
        return foods[0]
    return None


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _extract_macros(food_nutrients: list[dict[str, object]]) -> NutritionPer100g:
    """Extract calories, protein, carbs and fat from FDC nutrients.

    Search results carry ``nutrientId``/``value``; food details carry
    ``nutrient.id``/``amount``. Missing nutrients count as 0.
    """
    values: dict[str, float] = {
        "calories": 0.0,
        "protein": 0.0,
        "fat": 0.0,
        "carbs": 0.0,
    }
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("value", nutrient.get("amount"))
        if amount is None:
            continue
        for field_name, field_id in _NUTRIENT_IDS.items():
            if nutrient_id == field_id:
                values[field_name] = float(amount)

    return NutritionPer100g(
        calories=values["calories"],
        protein=values["protein"],
        carbs=values["carbs"],
        fat=values["fat"],
    )
