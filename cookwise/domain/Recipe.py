"""Recipe domain entity: title, default servings, ingredient lines, steps."""
from typing import List, Optional
from uuid import uuid4

from cookwise.domain.Ingredient import Ingredient
from cookwise.utilities.constants import DEFAULT_RECIPE_SERVINGS


class RecipeIngredient:
    """Association between a Recipe and an Ingredient with quantity and unit."""

    def __init__(self, ingredient: Ingredient, quantity: float = 0, unit: str = "piece",
                 original_text: str = "", note: Optional[str] = None):
        self.ingredient = ingredient
        self.quantity = quantity
        self.unit = (unit or "piece").lower()
        self.original_text = original_text or ""
        self.note = note

    @property
    def ingredient_id(self) -> str:
        return self.ingredient.id

    def __str__(self) -> str:
        return f"{self.quantity} {self.unit} {self.ingredient.name}"

    __repr__ = __str__

    def to_dict(self):
        '''Stored form references the ingredient by id only.'''
        return {
            "ingredient_id": self.ingredient.id,
            "quantity": self.quantity,
            "unit": self.unit,
            "original_text": self.original_text,
            "note": self.note,
        }

    @staticmethod
    def from_dict(data, ingredient: Ingredient):
        return RecipeIngredient(
            ingredient=ingredient,
            quantity=data.get("quantity", 0),
            unit=data.get("unit", "piece"),
            original_text=data.get("original_text", ""),
            note=data.get("note"),
        )


class Recipe:
    def __init__(self, title: str = "", servings: Optional[int] = DEFAULT_RECIPE_SERVINGS,
                 ingredients: Optional[List[RecipeIngredient]] = None, steps: Optional[List[str]] = None,
                 description: str = "", prep_time: Optional[int] = None, cook_time: Optional[int] = None,
                 household_id: Optional[str] = None, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.title = title
        self.servings = servings
        self.ingredients = ingredients[:] if ingredients else []
        self.steps = steps[:] if steps else []
        self.description = description or ""
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.household_id = household_id

    @property
    def effective_servings(self) -> int:
        '''Servings the ingredient quantities are defined against; unset or zero falls back to the default.'''
        return self.servings or DEFAULT_RECIPE_SERVINGS

    def ingredient_ids(self) -> List[str]:
        '''Distinct ingredient ids in first-appearance order.'''
        seen = []
        for line in self.ingredients:
            if line.ingredient_id not in seen:
                seen.append(line.ingredient_id)
        return seen

    def __str__(self) -> str:
        return f"{self.title} - {self.servings} servings - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "servings": self.servings,
            "description": self.description,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "household_id": self.household_id,
            "steps": self.steps,
            "ingredients": [line.to_dict() for line in self.ingredients],
        }

    @staticmethod
    def from_dict(data, ingredients_by_id):
        '''Builds a Recipe from its stored dict, resolving ingredient ids through ``ingredients_by_id``.'''
        d = dict(data)
        lines = []
        for entry in d.get("ingredients", []):
            ingredient = ingredients_by_id.get(entry.get("ingredient_id"))
            if ingredient is None:
                continue  # ingredient row vanished; nothing to resolve against
            lines.append(RecipeIngredient.from_dict(entry, ingredient))
        return Recipe(
            title=d.get("title", ""),
            servings=d.get("servings", DEFAULT_RECIPE_SERVINGS),
            ingredients=lines,
            steps=d.get("steps", []),
            description=d.get("description", ""),
            prep_time=d.get("prep_time"),
            cook_time=d.get("cook_time"),
            household_id=d.get("household_id"),
            id=d.get("id"),
        )

    def api_dict(self):
        '''Resolved form for API responses (ingredient names instead of ids).'''
        data = self.to_dict()
        data["ingredients"] = [
            {**line.to_dict(), "name": line.ingredient.name, "category": line.ingredient.category}
            for line in self.ingredients
        ]
        return data
