"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recipe_builder.api.models import NutritionRequest
from recipe_builder.app_logging import configure_logging
from recipe_builder.containers import AppContainer
from recipe_builder.domain.recipes import FullRecipeRequest, RecipeIdeasRequest
from recipe_builder.services.calculator import result_to_dict
from recipe_builder.services.recipes import (
    RecipeGenerationError,
    RecipeGenerationService,
    ingredient_display_lines,
    nutrition_inputs,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/nutrition/calculate", response_model=None)
    async def calculate_nutrition(
        body: NutritionRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Estimate total and per-serving nutrition for a recipe."""
        state_container: AppContainer = request.app.state.container
        nutrition_service = state_container.recipe_nutrition_service
        try:
            result = await nutrition_service.calculate_recipe_nutrition(
                body.ingredient_inputs(), body.servings
            )
        except Exception:
            logger.exception("Error calculating nutrition")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to calculate nutrition"
            )
        return result_to_dict(result)

    @app.post("/api/recipes/generate-ideas", response_model=None)
    async def generate_ideas(
        body: RecipeIdeasRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Generate three recipe ideas from selected ingredients."""
        service = _generation_service(request)
        if service is None:
            return _generation_unavailable()
        try:
            ideas = await service.generate_ideas(body)
        except RecipeGenerationError as exc:
            return _error(status.HTTP_502_BAD_GATEWAY, str(exc))
        except Exception:
            logger.exception("Error generating recipe ideas")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to generate recipe ideas",
            )
        return {"ideas": [idea.model_dump(by_alias=True) for idea in ideas]}

    @app.post("/api/recipes/generate-full", response_model=None)
    async def generate_full_recipe(
        body: FullRecipeRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Generate a full recipe and, optionally, its nutrition estimate."""
        state_container: AppContainer = request.app.state.container
        service = _generation_service(request)
        if service is None:
            return _generation_unavailable()
        try:
            recipe = await service.generate_full_recipe(body)
            nutrition = None
            if body.include_nutrition:
                nutrition_service = state_container.recipe_nutrition_service
                result = await nutrition_service.calculate_recipe_nutrition(
                    nutrition_inputs(recipe), recipe.servings
                )
                nutrition = result_to_dict(result)
        except RecipeGenerationError as exc:
            return _error(status.HTTP_502_BAD_GATEWAY, str(exc))
        except Exception:
            logger.exception("Error generating full recipe")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to generate full recipe",
            )
        return {
            "recipe": recipe.model_dump(by_alias=True),
            "displayIngredients": ingredient_display_lines(
                recipe, state_container.unit_converter
            ),
            "nutrition": nutrition,
        }

    return app


def _generation_service(request: Request) -> RecipeGenerationService | None:
    container: AppContainer = request.app.state.container
    return container.recipe_generation_service


def _generation_unavailable() -> JSONResponse:
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE, "Recipe generation is not configured"
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first validation problem as a short message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
