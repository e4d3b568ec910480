"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from recipe_builder.adapters.fdc_client import FdcClient
from recipe_builder.config import Settings
from recipe_builder.containers import AppContainer, build_nutrition_service
from recipe_builder.services.nutrition import UsdaNutritionSource
from recipe_builder.services.recipes import RecipeGenerationService, TextGenerationClient
from recipe_builder.services.units import UnitConverter


def fdc_food(
    fdc_id: int,
    description: str,
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
) -> dict[str, object]:
    """Build a search-result food record with the four macro nutrients."""
    return {
        "fdcId": fdc_id,
        "description": description,
        "dataType": "Foundation",
        "foodNutrients": [
            {"nutrientId": 1008, "nutrientName": "Energy", "value": calories, "unitName": "KCAL"},
            {"nutrientId": 1003, "nutrientName": "Protein", "value": protein, "unitName": "G"},
            {"nutrientId": 1005, "nutrientName": "Carbohydrate, by difference", "value": carbs, "unitName": "G"},
            {"nutrientId": 1004, "nutrientName": "Total lipid (fat)", "value": fat, "unitName": "G"},
        ],
    }  # fmt: skip


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses keyed by lowercase query."""

    foods: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "jackfruit": fdc_food(2001, "Jackfruit, raw", 95, 1.7, 23, 0.6),
        }
    )
    fail_queries: set[str] = field(default_factory=set)
    search_calls: list[str] = field(default_factory=list)

    async def search_foods(self, query: str, page_size: int = 1) -> dict[str, object]:
        self.search_calls.append(query)
        if query.lower() in self.fail_queries:
            raise RuntimeError(f"lookup failed for {query}")
        food = self.foods.get(query.lower())
        return {"foods": [food] if food else [], "totalHits": 1 if food else 0}


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text generator returning queued responses."""

    responses: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.responses.pop(0)


IDEAS_RESPONSE = json.dumps(
    [
        {
            "name": "Garlic Chicken Rice Bowl",
            "description": "Seared chicken over garlicky rice.",
            "estimatedTime": "30 minutes",
            "difficulty": "Easy",
        },
        {
            "name": "Chicken Fried Rice",
            "description": "Wok-tossed rice with chicken and egg.",
            "estimatedTime": "25 minutes",
            "difficulty": "Easy",
        },
        {
            "name": "Chicken and Rice Soup",
            "description": "A comforting brothy soup.",
            "estimatedTime": "45 minutes",
            "difficulty": "Medium",
        },
    ]
)

FULL_RECIPE_RESPONSE = (
    "Here is your recipe:\n```json\n"
    + json.dumps(
        {
            "name": "Garlic Chicken Rice Bowl",
            "description": "Seared chicken over garlicky rice.",
            "ingredients": [
                {"name": "chicken breast", "amount": "1", "unit": "lb"},
                {"name": "olive oil", "amount": "2", "unit": "tablespoons"},
                {"name": "rice", "amount": 1, "unit": "cup"},
                {"name": "garlic", "amount": "2", "unit": "cloves"},
            ],
            "instructions": ["Cook the rice.", "Sear the chicken.", "Serve."],
            "cookTime": "30 minutes",
            "difficulty": "Easy",
            "servings": 2,
            "cuisineType": "Asian",
            "recipeStyle": "healthy",
        }
    )
    + "\n```"
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        usda_api_key="usda-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def container(
    settings: Settings, fdc_client: FakeFdcClient, text_client: FakeTextClient
) -> AppContainer:
    converter = UnitConverter()
    nutrition_service = build_nutrition_service(
        converter,
        UsdaNutritionSource(fdc_client=fdc_client, retry_delay_seconds=0),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        unit_converter=converter,
        recipe_nutrition_service=nutrition_service,
        recipe_generation_service=RecipeGenerationService(client=text_client),
        close_resources=close_resources,
    )
