import logging
from typing import Iterable, List, Optional

from cookwise.domain.errors import InputViolation, NotFound
from cookwise.domain.Recipe import Recipe, RecipeIngredient
from cookwise.domain.units import validate_unit
from cookwise.infra.Ingredient_Repository import get_or_create_ingredient, ingredient_index
from cookwise.infra.store import JsonStore
from cookwise.utilities.constants import DEFAULT_CATEGORY, DEFAULT_RECIPE_SERVINGS

logger = logging.getLogger(__name__)


def recipe_index(data: dict):
    """Recipe objects keyed by id with ingredients resolved."""
    ingredients = ingredient_index(data)
    return {row["id"]: Recipe.from_dict(row, ingredients) for row in data["recipes"]}


def visible_to(owner: Optional[str], household_id: Optional[str]) -> bool:
    """Shared recipes (no owner) are visible to every household; None as household means unscoped."""
    return household_id is None or owner in (None, household_id)


class RecipeRepository:
    def __init__(self, store: JsonStore):
        self.store = store

    def create(self, title: str, ingredients: Iterable[dict], servings: Optional[int] = DEFAULT_RECIPE_SERVINGS,
               steps: Optional[List[str]] = None, description: str = "", prep_time: Optional[int] = None,
               cook_time: Optional[int] = None, household_id: Optional[str] = None) -> Recipe:
        """Store a recipe; unknown ingredient names are created in the same transaction.

        Each ingredient dict carries name, quantity, unit and optionally category,
        original_text and note.
        """
        if servings is not None and servings < 0:
            raise InputViolation(f"Servings cannot be negative: {servings}")
        with self.store.transaction() as data:
            lines = []
            for entry in ingredients:
                quantity = entry.get("quantity", 0)
                if quantity is None or quantity < 0:
                    raise InputViolation(f"Quantity cannot be negative for {entry.get('name')}: {quantity}")
                ingredient = get_or_create_ingredient(data, entry["name"], entry.get("category") or DEFAULT_CATEGORY)
                lines.append(RecipeIngredient(
                    ingredient=ingredient,
                    quantity=quantity,
                    unit=validate_unit(entry.get("unit", "piece")),
                    original_text=entry.get("original_text") or "",
                    note=entry.get("note"),
                ))
            recipe = Recipe(
                title=title.strip(),
                servings=servings or DEFAULT_RECIPE_SERVINGS,
                ingredients=lines,
                steps=steps,
                description=description,
                prep_time=prep_time,
                cook_time=cook_time,
                household_id=household_id,
            )
            data["recipes"].append(recipe.to_dict())
        logger.info("Created recipe %s (%s) with %d ingredients", recipe.title, recipe.id, len(lines))
        return recipe

    def get(self, recipe_id: str, household_id: Optional[str] = None) -> Recipe:
        """Recipe by id; another household's recipe is reported as not found."""
        recipe = recipe_index(self.store.read()).get(recipe_id)
        if recipe is None or not visible_to(recipe.household_id, household_id):
            raise NotFound(f"Recipe '{recipe_id}' not found.")
        return recipe

    def list(self, household_id: Optional[str] = None) -> List[Recipe]:
        recipes = list(recipe_index(self.store.read()).values())
        return [r for r in recipes if visible_to(r.household_id, household_id)]

    def delete(self, recipe_id: str, household_id: Optional[str] = None) -> None:
        """Delete a recipe with its ingredient lines and the meal plans that use it."""
        with self.store.transaction() as data:
            row = next((r for r in data["recipes"] if r["id"] == recipe_id), None)
            if row is None or not visible_to(row.get("household_id"), household_id):
                raise NotFound(f"Recipe '{recipe_id}' not found.")
            data["recipes"].remove(row)
            plans_before = len(data["meal_plans"])
            data["meal_plans"] = [p for p in data["meal_plans"] if p["recipe_id"] != recipe_id]
        logger.info("Deleted recipe %s and %d meal plans", recipe_id, plans_before - len(data["meal_plans"]))
