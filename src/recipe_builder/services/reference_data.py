"""Static reference tables for unit conversion and nutrition estimates.

Every table that is scanned for a first match is an ordered tuple of
``(key, value)`` pairs; the order of entries decides which key wins.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from recipe_builder.domain.nutrition import NutritionPer100g

Category = Literal["protein", "vegetable", "carb", "fat", "spice", "sauce", "generic"]

UnitTable = Mapping[str, float]
IngredientOverrides = tuple[tuple[str, UnitTable], ...]
NutritionMapping = tuple[tuple[str, NutritionPer100g], ...]
CategoryRules = tuple[tuple[Category, tuple[str, ...]], ...]

_UNIT_SPELLINGS: dict[str, tuple[str, ...]] = {
    "cup": ("cup", "cups"),
    "tablespoon": ("tablespoon", "tablespoons", "tbsp", "tbs"),
    "teaspoon": ("teaspoon", "teaspoons", "tsp"),
    "stick": ("stick", "sticks"),
}


def _per_unit(**grams: float) -> UnitTable:
    expanded: dict[str, float] = {}
    for unit, value in grams.items():
        for spelling in _UNIT_SPELLINGS[unit]:
            expanded[spelling] = value
    return MappingProxyType(expanded)


GRAMS_PER_UNIT: UnitTable = MappingProxyType(
    {
        # weight
        "g": 1,
        "gram": 1,
        "grams": 1,
        "kg": 1000,
        "kilogram": 1000,
        "kilograms": 1000,
        "oz": 28.35,
        "ounce": 28.35,
        "ounces": 28.35,
        "lb": 453.592,
        "lbs": 453.592,
        "pound": 453.592,
        "pounds": 453.592,
        # counts, rough averages
        "clove": 3,
        "cloves": 3,
        "piece": 50,
        "pieces": 50,
        "slice": 25,
        "slices": 25,
        "whole": 100,
        "medium": 150,
        "large": 200,
        "small": 75,
        # volume at water density, 1 ml = 1 g
        "ml": 1,
        "milliliter": 1,
        "milliliters": 1,
        "l": 1000,
        "liter": 1000,
        "liters": 1000,
        "cup": 236.588,
        "cups": 236.588,
        "tablespoon": 14.787,
        "tablespoons": 14.787,
        "tbsp": 14.787,
        "teaspoon": 4.929,
        "teaspoons": 4.929,
        "tsp": 4.929,
        "pint": 473.176,
        "pints": 473.176,
        "quart": 946.353,
        "quarts": 946.353,
        "gallon": 3785.41,
        "gallons": 3785.41,
        "fluid ounce": 29.574,
        "fluid ounces": 29.574,
        "fl oz": 29.574,
    }
)

# First key matching the name wins, so specific keys precede the keys they contain.
INGREDIENT_UNIT_OVERRIDES: IngredientOverrides = (
    ("flour", _per_unit(cup=120, tablespoon=8, teaspoon=2.5)),
    ("brown sugar", _per_unit(cup=220, tablespoon=14, teaspoon=4.5)),
    ("sugar", _per_unit(cup=200, tablespoon=12.5, teaspoon=4)),
    ("butter", _per_unit(cup=227, tablespoon=14, stick=113)),
    ("olive oil", _per_unit(cup=216, tablespoon=13.5, teaspoon=4.5)),
    ("oil", _per_unit(cup=218, tablespoon=13.6, teaspoon=4.5)),
    ("honey", _per_unit(cup=340, tablespoon=21, teaspoon=7)),
    ("milk", _per_unit(cup=244, tablespoon=15, teaspoon=5)),
    ("water", _per_unit(cup=236.588, tablespoon=14.787, teaspoon=4.929)),
    ("rice", _per_unit(cup=185, tablespoon=12)),
    ("pasta", _per_unit(cup=105)),
    ("oats", _per_unit(cup=80)),
)

# Raw or as-purchased values, per 100 g.
INGREDIENT_NUTRITION: NutritionMapping = (
    ("chicken breast", NutritionPer100g(calories=165, protein=31, carbs=0, fat=3.6)),
    ("chicken thigh", NutritionPer100g(calories=209, protein=26, carbs=0, fat=10.9)),
    ("chicken", NutritionPer100g(calories=239, protein=27, carbs=0, fat=14)),
    ("ground beef", NutritionPer100g(calories=254, protein=17.2, carbs=0, fat=20)),
    ("beef", NutritionPer100g(calories=250, protein=26, carbs=0, fat=15)),
    ("pork", NutritionPer100g(calories=242, protein=27, carbs=0, fat=14)),
    ("salmon", NutritionPer100g(calories=208, protein=20, carbs=0, fat=13)),
    ("tuna", NutritionPer100g(calories=132, protein=28, carbs=0, fat=1)),
    ("shrimp", NutritionPer100g(calories=99, protein=24, carbs=0.2, fat=0.3)),
    ("turkey", NutritionPer100g(calories=189, protein=29, carbs=0, fat=7)),
    ("tofu", NutritionPer100g(calories=76, protein=8, carbs=1.9, fat=4.8)),
    ("eggplant", NutritionPer100g(calories=25, protein=1, carbs=5.9, fat=0.2)),
    ("egg", NutritionPer100g(calories=143, protein=12.6, carbs=0.7, fat=9.5)),
    ("olive oil", NutritionPer100g(calories=884, protein=0, carbs=0, fat=100)),
    ("vegetable oil", NutritionPer100g(calories=884, protein=0, carbs=0, fat=100)),
    ("butter", NutritionPer100g(calories=717, protein=0.9, carbs=0.1, fat=81)),
    ("brown rice", NutritionPer100g(calories=370, protein=7.9, carbs=77, fat=2.9)),
    ("rice", NutritionPer100g(calories=365, protein=7.1, carbs=80, fat=0.7)),
    ("pasta", NutritionPer100g(calories=371, protein=13, carbs=75, fat=1.5)),
    ("quinoa", NutritionPer100g(calories=368, protein=14, carbs=64, fat=6)),
    ("oats", NutritionPer100g(calories=389, protein=16.9, carbs=66, fat=6.9)),
    ("bread", NutritionPer100g(calories=265, protein=9, carbs=49, fat=3.2)),
    ("sweet potato", NutritionPer100g(calories=86, protein=1.6, carbs=20, fat=0.1)),
    ("potato", NutritionPer100g(calories=77, protein=2, carbs=17, fat=0.1)),
    ("flour", NutritionPer100g(calories=364, protein=10, carbs=76, fat=1)),
    ("brown sugar", NutritionPer100g(calories=380, protein=0.1, carbs=98, fat=0)),
    ("sugar", NutritionPer100g(calories=387, protein=0, carbs=100, fat=0)),
    ("honey", NutritionPer100g(calories=304, protein=0.3, carbs=82, fat=0)),
    ("milk", NutritionPer100g(calories=61, protein=3.2, carbs=4.8, fat=3.3)),
    ("cheddar", NutritionPer100g(calories=403, protein=25, carbs=1.3, fat=33)),
    ("parmesan", NutritionPer100g(calories=431, protein=38, carbs=4.1, fat=29)),
    ("broccoli", NutritionPer100g(calories=34, protein=2.8, carbs=7, fat=0.4)),
    ("spinach", NutritionPer100g(calories=23, protein=2.9, carbs=3.6, fat=0.4)),
    ("carrot", NutritionPer100g(calories=41, protein=0.9, carbs=10, fat=0.2)),
    ("onion", NutritionPer100g(calories=40, protein=1.1, carbs=9.3, fat=0.1)),
    ("garlic", NutritionPer100g(calories=149, protein=6.4, carbs=33, fat=0.5)),
    ("tomato", NutritionPer100g(calories=18, protein=0.9, carbs=3.9, fat=0.2)),
    ("bell pepper", NutritionPer100g(calories=31, protein=1, carbs=6, fat=0.3)),
    ("mushroom", NutritionPer100g(calories=22, protein=3.1, carbs=3.3, fat=0.3)),
    ("zucchini", NutritionPer100g(calories=17, protein=1.2, carbs=3.1, fat=0.3)),
    ("avocado", NutritionPer100g(calories=160, protein=2, carbs=8.5, fat=14.7)),
    ("soy sauce", NutritionPer100g(calories=53, protein=8.1, carbs=4.9, fat=0.6)),
)

# Keyword patterns are regex fragments tried as unanchored searches.
CATEGORY_KEYWORDS: CategoryRules = (
    (
        "protein",
        (
            "chicken", "beef", "pork", "fish", "salmon", "tuna", "turkey",
            "lamb", "tofu", "tempeh", "seitan", "egg",
        ),
    ),
    (
        "vegetable",
        (
            "broccoli", "carrot", "spinach", "kale", "lettuce", "tomato",
            "pepper", "onion", "garlic", "mushroom", "zucchini", "cucumber",
            "celery", "cauliflower", "cabbage", "asparagus", "eggplant",
        ),
    ),
    (
        "carb",
        (
            "rice", "pasta", "bread", "potato", "quinoa", "oats", "noodle",
            "tortilla", "pita", "bagel", "cereal",
        ),
    ),
    (
        "fat",
        ("oil", "butter", "margarine", "lard", "shortening", r"cream(?!.*cheese)"),
    ),
    (
        "spice",
        (
            "pepper", "salt", "cumin", "paprika", "oregano", "basil", "thyme",
            "rosemary", "cinnamon", "ginger", "turmeric", "cayenne",
            "chili powder",
        ),
    ),
    (
        "sauce",
        (
            "sauce", "dressing", "marinade", "salsa", "pesto", "mayo",
            "mustard", "ketchup", "gravy",
        ),
    ),
)  # fmt: skip

CATEGORY_DEFAULTS: Mapping[Category, NutritionPer100g] = MappingProxyType(
    {
        "protein": NutritionPer100g(calories=150, protein=25, carbs=0, fat=5),
        "vegetable": NutritionPer100g(calories=25, protein=1.5, carbs=5, fat=0.2),
        "carb": NutritionPer100g(calories=120, protein=3, carbs=25, fat=0.5),
        "fat": NutritionPer100g(calories=800, protein=0, carbs=0, fat=90),
        "spice": NutritionPer100g(calories=200, protein=8, carbs=40, fat=5),
        "sauce": NutritionPer100g(calories=100, protein=2, carbs=10, fat=5),
        "generic": NutritionPer100g(calories=50, protein=2, carbs=10, fat=1),
    }
)
