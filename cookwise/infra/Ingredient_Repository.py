"""Ingredient repository helpers (global ingredient catalogue)."""
import logging
from typing import Dict, List

from cookwise.domain.errors import NotFound
from cookwise.domain.Ingredient import Ingredient, normalize_name
from cookwise.infra.store import JsonStore
from cookwise.utilities.constants import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)


def ingredient_index(data: dict) -> Dict[str, Ingredient]:
    """Ingredient objects keyed by id, built from the raw collections."""
    return {row["id"]: Ingredient.from_dict(row) for row in data["ingredients"]}


def get_or_create_ingredient(data: dict, name: str, category: str = DEFAULT_CATEGORY) -> Ingredient:
    """Return the ingredient with this name (case-insensitive), creating it on first reference.

    An existing ingredient keeps its original category.
    """
    key = normalize_name(name)
    for row in data["ingredients"]:
        if normalize_name(row.get("name", "")) == key:
            return Ingredient.from_dict(row)
    ingredient = Ingredient(name=" ".join(name.split()), category=category)
    data["ingredients"].append(ingredient.to_dict())
    logger.info("Created ingredient %s (%s)", ingredient.name, ingredient.category)
    return ingredient


class IngredientRepository:
    def __init__(self, store: JsonStore):
        self.store = store

    def list(self) -> List[Ingredient]:
        items = list(ingredient_index(self.store.read()).values())
        items.sort(key=lambda i: i.key)
        return items

    def get(self, ingredient_id: str) -> Ingredient:
        ingredient = ingredient_index(self.store.read()).get(ingredient_id)
        if ingredient is None:
            raise NotFound(f"Ingredient '{ingredient_id}' not found.")
        return ingredient

    def get_or_create(self, name: str, category: str = DEFAULT_CATEGORY) -> Ingredient:
        with self.store.transaction() as data:
            return get_or_create_ingredient(data, name, category)
