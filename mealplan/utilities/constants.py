from typing import Final, Tuple

DATE_FORMAT: Final[str] = "%Y-%m-%d"

UNITS: Final[Tuple[str, ...]] = (
    "cup",
    "tablespoon",
    "teaspoon",
    "gram",
    "kilogram",
    "milliliter",
    "liter",
    "piece",
    "whole",
    "clove",
    "slice",
    "bunch",
    "pinch",
    "dash",
    "can",
    "package",
)

INGREDIENT_CATEGORIES: Final[Tuple[str, ...]] = (
    "Vegetables",
    "Fruits",
    "Meat",
    "Poultry",
    "Seafood",
    "Dairy",
    "Grains",
    "Legumes",
    "Nuts & Seeds",
    "Herbs & Spices",
    "Oils & Fats",
    "Condiments",
    "Baking",
    "Other",
)

MEAL_TYPES: Final[Tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")

RECIPE_MEAL_PLAN: Final[str] = "recipe"
CUSTOM_MEAL_PLAN_TYPES: Final[Tuple[str, ...]] = (
    "dining-out",
    "takeout",
    "leftovers",
    "skipping",
    "other",
)

# Smaller unit -> (larger unit, factor)
CONSOLIDATION_RULES: Final[dict[str, Tuple[str, int]]] = {
    "gram": ("kilogram", 1000),
    "milliliter": ("liter", 1000),
}

UNKNOWN_INGREDIENT_NAME: Final[str] = "Unknown ingredient ({id})"
