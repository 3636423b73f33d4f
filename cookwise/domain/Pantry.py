"""Pantry aggregate: one household's PantryItem rows, at most one per ingredient."""
import logging
from datetime import date
from typing import List, Optional

from cookwise.domain.errors import InputViolation, NotFound
from cookwise.domain.PantryItem import PantryItem
from cookwise.domain.units import convert_quantity
from cookwise.events.Event_Bus import GLOBAL_EVENT_BUS
from cookwise.events.event_helpers import publish_low_stock, publish_near_expiry
from cookwise.utilities.config import DAYS_BEFORE_EXPIRY

logger = logging.getLogger(__name__)

# Optional fields an incoming duplicate overrides when it sets them
MERGED_FIELDS = ("location", "expiry_date", "min_quantity", "notes")


class Pantry:
    def __init__(self, household_id: Optional[str] = None, items: Optional[List[PantryItem]] = None):
        self.household_id = household_id
        self.items: List[PantryItem] = list(items or [])
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _notify_low_stock(self, item: PantryItem):
        publish_low_stock(item, item.quantity, item.min_quantity, bus=self._event_bus)

    def _notify_near_expiry(self, item: PantryItem, days_left: int):
        publish_near_expiry(item, days_left, DAYS_BEFORE_EXPIRY, bus=self._event_bus)

    # --- Lookup ------------------------------------------------------------
    def find(self, ingredient_id: str) -> Optional[PantryItem]:
        for item in self.items:
            if item.ingredient_id == ingredient_id:
                return item
        return None

    def get(self, item_id: str) -> PantryItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFound(f"Pantry item '{item_id}' not found.")

    def ingredient_ids(self) -> set:
        return {item.ingredient_id for item in self.items}

    # --- Mutations ---------------------------------------------------------
    def add_item(self, item: PantryItem) -> PantryItem:
        '''
        Adds an item to the pantry. A second row for the same ingredient is merged
        into the existing one: its quantity is converted to the stored unit and added,
        and any MERGED_FIELDS it sets replace the stored values.
        Raises UnitMismatch when the units cannot be converted.
        '''
        if item.quantity < 0:
            raise InputViolation(f"Quantity cannot be negative: {item.quantity}")
        existing = self.find(item.ingredient_id)
        if existing is None:
            item.household_id = self.household_id
            self.items.append(item)
            self._evaluate_item(item)
            return item

        delta = convert_quantity(item.quantity, item.unit, existing.unit, ingredient=item.ingredient.name)
        existing.set_quantity(delta)
        for name in MERGED_FIELDS:
            incoming = getattr(item, name)
            if incoming:
                setattr(existing, name, incoming)
        logger.debug("Merged %s %s of %s into pantry item %s",
                     item.quantity, item.unit, item.ingredient.name, existing.id)
        self._evaluate_item(existing)
        return existing

    def remove_item(self, item_id: str) -> PantryItem:
        item = self.get(item_id)
        self.items.remove(item)
        return item

    def update_item(self, item_id: str, quantity: Optional[float] = None, unit: Optional[str] = None,
                    **fields) -> PantryItem:
        '''Sets absolute values on an existing item (quantity overwrites, it is not a delta).'''
        item = self.get(item_id)
        if quantity is not None:
            if quantity < 0:
                raise InputViolation(f"Quantity cannot be negative: {quantity}")
            item.quantity = quantity
        if unit is not None:
            item.unit = unit
        for name in ("expiry_date", "location", "min_quantity", "notes"):
            if name in fields:
                setattr(item, name, fields[name])
        self._evaluate_item(item)
        return item

    # --- Evaluation logic --------------------------------------------------
    def _evaluate_item(self, item: PantryItem):
        if item.min_quantity > 0 and item.quantity <= item.min_quantity:
            self._notify_low_stock(item)
        days_left = item.days_left(date.today())
        if days_left is not None and days_left <= DAYS_BEFORE_EXPIRY:
            self._notify_near_expiry(item, days_left)

    def get_items(self):
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()
