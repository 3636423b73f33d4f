from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%d-%m-%Y"

DEFAULT_RECIPE_SERVINGS: Final[int] = 4

UNITS: Final[tuple[str, ...]] = (
    "piece", "gram", "kilogram", "milliliter", "liter", "cup",
    "tablespoon", "teaspoon", "ounce", "pound", "pinch", "to_taste",
)

CATEGORIES: Final[tuple[str, ...]] = (
    "produce", "dairy", "meat", "seafood", "grains", "canned", "spices",
    "oils", "baking", "beverages", "frozen", "condiments", "other",
)
DEFAULT_CATEGORY: Final[str] = "other"

MEAL_TYPES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

WEEK_DAYS: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

# Short labels used on shopping lists and PDF exports
UNIT_LABELS: Final[dict[str, str]] = {
    "piece": "pcs",
    "gram": "g",
    "kilogram": "kg",
    "milliliter": "ml",
    "liter": "l",
    "cup": "cup",
    "tablespoon": "tbsp",
    "teaspoon": "tsp",
    "ounce": "oz",
    "pound": "lb",
    "pinch": "pinch",
    "to_taste": "to taste",
}
