"""Recipe idea and full recipe generation via a text-generation model."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from recipe_builder.domain.nutrition import RecipeIngredientInput
from recipe_builder.domain.recipes import (
    FullRecipe,
    FullRecipeRequest,
    RecipeIdea,
    RecipeIdeasRequest,
)
from recipe_builder.services.display import format_ingredient_display
from recipe_builder.services.units import UnitConverter

IDEA_COUNT = 3

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_IDEAS_ADAPTER = TypeAdapter(list[RecipeIdea])

_logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Interface for a prompt-in, text-out language model."""

    async def generate(self, prompt: str) -> str:
        """Return the raw model output for a prompt."""


class RecipeGenerationError(RuntimeError):
    """Raised when generated text cannot be turned into a recipe."""


@dataclass
class RecipeGenerationService:
    """Builds prompts and coerces model output into recipe models."""

    client: TextGenerationClient

    async def generate_ideas(self, request: RecipeIdeasRequest) -> list[RecipeIdea]:
        """Return exactly three recipe ideas for the selected ingredients."""
        text = await self.client.generate(build_ideas_prompt(request))
        try:
            ideas = _IDEAS_ADAPTER.validate_python(_extract_json(text, _JSON_ARRAY_RE))
        except (ValueError, ValidationError) as exc:
            _logger.warning("Unparseable recipe ideas response: %s", text)
            raise RecipeGenerationError(
                "Failed to parse recipe ideas from AI response"
            ) from exc
        if len(ideas) != IDEA_COUNT:
            raise RecipeGenerationError(
                f"Expected {IDEA_COUNT} recipe ideas, got {len(ideas)}"
            )
        return ideas

    async def generate_full_recipe(self, request: FullRecipeRequest) -> FullRecipe:
        """Expand a recipe idea into a complete recipe."""
        text = await self.client.generate(build_full_recipe_prompt(request))
        try:
            return FullRecipe.model_validate(_extract_json(text, _JSON_OBJECT_RE))
        except (ValueError, ValidationError) as exc:
            _logger.warning("Unparseable full recipe response: %s", text)
            raise RecipeGenerationError(
                "Failed to parse full recipe from AI response"
            ) from exc


def nutrition_inputs(recipe: FullRecipe) -> list[RecipeIngredientInput]:
    """Turn generated ingredients into nutrition calculation input."""
    return [
        RecipeIngredientInput(name=ingredient.name, amount=ingredient.amount_text)
        for ingredient in recipe.ingredients
    ]


def ingredient_display_lines(recipe: FullRecipe, converter: UnitConverter) -> list[str]:
    """Render each generated ingredient with its gram weight where known."""
    return [
        format_ingredient_display(
            ingredient.name,
            ingredient.amount,
            ingredient.unit,
            converter.convert_to_grams(ingredient.amount_text, ingredient.name),
        )
        for ingredient in recipe.ingredients
    ]


def build_ideas_prompt(request: RecipeIdeasRequest) -> str:
    """Build the prompt asking for three recipe ideas."""
    lines = [
        "You are a professional chef and recipe creator. "
        f"Generate exactly {IDEA_COUNT} unique and creative {request.cuisine} "
        f"{request.meal_type.lower()} recipe ideas using the following "
        f"ingredients: {', '.join(request.ingredients)}.",
    ]
    if request.style:
        lines.append(f"Recipe style: {request.style}")
    lines.append(f"Servings: {request.servings}")
    lines.extend(_dietary_lines(request))
    lines.append(
        "\nFor each recipe idea, provide a creative name, a brief 2-3 sentence "
        "description, an estimated cooking time (e.g. \"30 minutes\") and a "
        "difficulty level (Easy, Medium, or Hard).\n\n"
        f"Format your response as a JSON array with exactly {IDEA_COUNT} "
        "objects with the fields name, description, estimatedTime and "
        "difficulty (all strings).\n\n"
        "IMPORTANT: Return ONLY the JSON array, no other text or explanation."
    )
    return "\n".join(lines)


def build_full_recipe_prompt(request: FullRecipeRequest) -> str:
    """Build the prompt asking for a complete recipe as JSON."""
    lines = [
        "You are a professional chef. Create a complete, detailed recipe for "
        f'"{request.recipe_name}".',
        "",
        "Recipe requirements:",
        f"- Cuisine: {request.cuisine}",
    ]
    if request.style:
        lines.append(f"- Style: {request.style}")
    lines.extend(
        [
            f"- Meal type: {request.meal_type}",
            f"- Servings: {request.servings}",
            f"- Estimated time: {request.estimated_time}",
            f"- Difficulty: {request.difficulty}",
            f"- Must use these ingredients: {', '.join(request.ingredients)}",
        ]
    )
    lines.extend(_dietary_lines(request))
    lines.append(
        "\nProvide a compelling 2-3 sentence description, a complete "
        "ingredients list with specific amounts and units, and detailed "
        "step-by-step instructions.\n\n"
        "Format your response as JSON with these fields:\n"
        "{\n"
        '  "name": string,\n'
        '  "description": string,\n'
        '  "ingredients": array of { "name": string, "amount": string, '
        '"unit": string },\n'
        '  "instructions": array of strings,\n'
        '  "cookTime": string,\n'
        '  "difficulty": string,\n'
        '  "servings": number,\n'
        '  "cuisineType": string,\n'
        '  "recipeStyle": string\n'
        "}\n\n"
        "IMPORTANT:\n"
        '- Be precise with ingredient amounts (e.g. "2", "1/2", "1.5")\n'
        "- Use standard units (cup, tablespoon, teaspoon, ounce, pound, gram, "
        "whole, clove, etc.)\n"
        "- Return ONLY the JSON object, no other text or explanation."
    )
    return "\n".join(lines)


def _dietary_lines(request: RecipeIdeasRequest) -> list[str]:
    preferences = request.dietary_preferences
    if preferences is None:
        return []
    restrictions = preferences.restrictions()
    if not restrictions:
        return []
    return [f"Dietary restrictions: {', '.join(restrictions)}"]


def _extract_json(text: str, pattern: re.Pattern[str]) -> object:
    """Return the first JSON value matching pattern, ignoring markdown fences."""
    match = pattern.search(text)
    if not match:
        raise ValueError("No JSON found in response")
    return json.loads(match.group())
