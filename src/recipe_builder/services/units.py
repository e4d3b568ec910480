"""Conversion of ingredient amounts to grams."""

import logging
from dataclasses import dataclass, field

from recipe_builder.services.amounts import parse_amount
from recipe_builder.services.reference_data import (
    GRAMS_PER_UNIT,
    INGREDIENT_UNIT_OVERRIDES,
    IngredientOverrides,
    UnitTable,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitConverter:
    """Converts free-text amounts to grams using ordered conversion tables."""

    grams_per_unit: UnitTable = field(default_factory=lambda: GRAMS_PER_UNIT)
    overrides: IngredientOverrides = INGREDIENT_UNIT_OVERRIDES

    def convert_to_grams(self, amount: str, ingredient_name: str = "") -> float | None:
        """Return the weight in grams, or None when it cannot be determined.

        Amounts without a unit are returned as-is (already grams or a count).
        Ingredient-specific factors take precedence over the generic table;
        the first override key contained in the name (or containing it) that
        defines the unit is used.
        """
        parsed = parse_amount(amount)
        if parsed.quantity == 0:
            return None
        if not parsed.unit:
            return parsed.quantity

        factor = self._override_factor(ingredient_name, parsed.unit)
        if factor is None:
            factor = self.grams_per_unit.get(parsed.unit)
        if factor is None:
            _logger.warning(
                "Unknown unit: %s for ingredient: %s", parsed.unit, ingredient_name
            )
            return None
        return parsed.quantity * factor

    def conversion_info(self, amount: str, ingredient_name: str = "") -> str:
        """Describe the conversion applied to an amount."""
        grams = self.convert_to_grams(amount, ingredient_name)
        if grams is None:
            return f'Could not convert "{amount}"'
        return f"{amount} ≈ {grams:.1f}g"

    def _override_factor(self, ingredient_name: str, unit: str) -> float | None:
        name = ingredient_name.lower().strip()
        if not name:
            return None
        for key, units in self.overrides:
            if (key in name or name in key) and unit in units:
                return units[unit]
        return None


_DEFAULT_CONVERTER = UnitConverter()


def convert_to_grams(amount: str, ingredient_name: str = "") -> float | None:
    """Convert an amount with the default conversion tables."""
    return _DEFAULT_CONVERTER.convert_to_grams(amount, ingredient_name)
