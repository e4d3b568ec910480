"""Nutrition source resolution: curated mapping, USDA, category default."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from recipe_builder.domain.nutrition import NutritionPer100g
from recipe_builder.services.cache import LookupCache
from recipe_builder.services.nutrition import UsdaNutritionSource
from recipe_builder.services.reference_data import (
    CATEGORY_DEFAULTS,
    CATEGORY_KEYWORDS,
    INGREDIENT_NUTRITION,
    Category,
    CategoryRules,
    NutritionMapping,
)

ResolvedSource = Literal["mapping", "usda", "default"]


@dataclass(frozen=True)
class ResolvedNutrition:
    """Per-100g profile and the step that produced it."""

    per_100g: NutritionPer100g
    source: ResolvedSource


@dataclass
class NutritionResolver:
    """Resolves per-100g nutrition, always ending in a category default."""

    remote: UsdaNutritionSource
    mapping: NutritionMapping = INGREDIENT_NUTRITION
    category_rules: CategoryRules = CATEGORY_KEYWORDS
    category_defaults: Mapping[Category, NutritionPer100g] = field(
        default_factory=lambda: CATEGORY_DEFAULTS
    )
    _patterns: tuple[tuple[Category, re.Pattern[str]], ...] = field(
        init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._patterns = tuple(
            (category, re.compile("|".join(keywords)))
            for category, keywords in self.category_rules
        )

    async def resolve(
        self, ingredient_name: str, cache: LookupCache
    ) -> ResolvedNutrition:
        """Return nutrition from the first source that has data."""
        mapped = self.lookup_mapping(ingredient_name)
        if mapped is not None:
            return ResolvedNutrition(per_100g=mapped, source="mapping")
        remote = await self.remote.per_100g(ingredient_name, cache)
        if remote is not None:
            return ResolvedNutrition(per_100g=remote, source="usda")
        return ResolvedNutrition(
            per_100g=self.default_for(ingredient_name), source="default"
        )

    def lookup_mapping(self, ingredient_name: str) -> NutritionPer100g | None:
        """Exact key lookup, then the first key contained in either direction."""
        name = ingredient_name.lower().strip()
        if not name:
            return None
        for key, per_100g in self.mapping:
            if key == name:
                return per_100g
        for key, per_100g in self.mapping:
            if key in name or name in key:
                return per_100g
        return None

    def categorize(self, ingredient_name: str) -> Category:
        """Classify an ingredient by keyword, in category priority order."""
        name = ingredient_name.lower()
        for category, pattern in self._patterns:
            if pattern.search(name):
                return category
        return "generic"

    def default_for(self, ingredient_name: str) -> NutritionPer100g:
        """Return the fixed estimate for the ingredient's category."""
        return self.category_defaults[self.categorize(ingredient_name)]
