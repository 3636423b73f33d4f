"""Pantry repository helpers (per-household stock rows)."""
import logging
from typing import Iterable, List, Optional

from cookwise.domain.Pantry import Pantry
from cookwise.domain.PantryItem import PantryItem
from cookwise.domain.units import validate_unit
from cookwise.infra.Ingredient_Repository import get_or_create_ingredient, ingredient_index
from cookwise.infra.store import JsonStore
from cookwise.utilities.constants import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)


def _load_pantry(data: dict, household_id: str) -> Pantry:
    ingredients = ingredient_index(data)
    items = []
    for row in data["pantry_items"]:
        if row.get("household_id") != household_id:
            continue
        ingredient = ingredients.get(row["ingredient_id"])
        if ingredient is None:
            continue
        items.append(PantryItem.from_dict(row, ingredient))
    return Pantry(household_id=household_id, items=items)


def _store_pantry(data: dict, pantry: Pantry):
    others = [row for row in data["pantry_items"] if row.get("household_id") != pantry.household_id]
    data["pantry_items"] = others + [item.to_dict() for item in pantry.get_items()]


class PantryRepository:
    def __init__(self, store: JsonStore):
        self.store = store

    def get_pantry(self, household_id: str) -> Pantry:
        return _load_pantry(self.store.read(), household_id)

    def list_items(self, household_id: str, ingredient_ids: Optional[Iterable[str]] = None) -> List[PantryItem]:
        items = self.get_pantry(household_id).get_items()
        if ingredient_ids is not None:
            wanted = set(ingredient_ids)
            items = [item for item in items if item.ingredient_id in wanted]
        items.sort(key=lambda i: i.ingredient.key)
        return items

    def add(self, household_id: str, name: str, quantity: float, unit: str,
            category: str = DEFAULT_CATEGORY, **fields) -> PantryItem:
        """Add stock; a second entry for the same ingredient increments the existing row."""
        unit = validate_unit(unit)
        with self.store.transaction() as data:
            ingredient = get_or_create_ingredient(data, name, category)
            pantry = _load_pantry(data, household_id)
            item = pantry.add_item(PantryItem(ingredient=ingredient, quantity=quantity, unit=unit,
                                              household_id=household_id, **fields))
            _store_pantry(data, pantry)
        logger.info("Pantry household=%s: %s now %s %s", household_id, ingredient.name, item.quantity, item.unit)
        return item

    def update(self, household_id: str, item_id: str, **fields) -> PantryItem:
        if fields.get("unit") is not None:
            fields["unit"] = validate_unit(fields["unit"])
        with self.store.transaction() as data:
            pantry = _load_pantry(data, household_id)
            item = pantry.update_item(item_id, **fields)
            _store_pantry(data, pantry)
        return item

    def delete(self, household_id: str, item_id: str) -> None:
        with self.store.transaction() as data:
            pantry = _load_pantry(data, household_id)
            pantry.remove_item(item_id)
            _store_pantry(data, pantry)
