"""Ingredient display strings with gram annotations."""

from recipe_builder.services.calculator import round_half_up

_COUNTABLE_UNITS = frozenset(
    {
        "clove",
        "cloves",
        "whole",
        "medium",
        "large",
        "small",
        "sprig",
        "sprigs",
        "bunch",
        "bunches",
    }
)
_OIL_KEYWORDS = ("oil", "butter", "ghee", "margarine", "lard", "shortening")
_GRAIN_KEYWORDS = (
    "rice",
    "pasta",
    "quinoa",
    "oats",
    "couscous",
    "barley",
    "bulgur",
    "farro",
    "noodle",
    "spaghetti",
    "macaroni",
    "penne",
)
_PROTEIN_KEYWORDS = (
    "chicken",
    "beef",
    "pork",
    "fish",
    "salmon",
    "tuna",
    "turkey",
    "lamb",
    "duck",
    "tofu",
    "tempeh",
    "seitan",
    "steak",
    "thigh",
    "breast",
    "ground meat",
)


def format_ingredient_display(
    name: str, amount: str, unit: str, grams: float | None
) -> str:
    """Format an ingredient line, showing grams where they help.

    - countable units, oils and grains measured in cups:
      "2 cloves garlic (6g)"
    - proteins: "454g chicken breast"
    - everything else: "2 cups broccoli (473g)"

    Without a gram value the line falls back to "amount unit name".
    """
    simple = format_ingredient_simple(name, amount, unit)
    if not grams:
        return simple
    annotated = f"{simple} ({round_half_up(grams)}g)"
    unit_key = unit.lower()
    if unit_key in _COUNTABLE_UNITS or _matches(name, _OIL_KEYWORDS):
        return annotated
    if _matches(name, _GRAIN_KEYWORDS) and unit_key in {"cup", "cups"}:
        return annotated
    if _matches(name, _PROTEIN_KEYWORDS):
        return f"{round_half_up(grams)}g {name}"
    return annotated


def format_ingredient_simple(name: str, amount: str, unit: str) -> str:
    """Format an ingredient line without grams."""
    return f"{amount} {unit} {name}"


def _matches(name: str, keywords: tuple[str, ...]) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in keywords)
