"""ShoppingList aggregate: a dated snapshot of items to purchase for one household week."""
from datetime import date
from typing import List, Optional
from uuid import uuid4

from cookwise.domain.errors import InputViolation, NotFound
from cookwise.domain.Plan import parse_date
from cookwise.utilities.constants import CATEGORIES, DEFAULT_CATEGORY, DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT


class ShoppingListItem:
    def __init__(self, name: str, quantity: float = 0, unit: str = "piece",
                 category: str = DEFAULT_CATEGORY, ingredient_id: Optional[str] = None,
                 checked: bool = False, issue: Optional[dict] = None, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.ingredient_id = ingredient_id
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.category = category
        self.checked = checked
        self.issue = issue

    @property
    def is_manual(self) -> bool:
        return self.ingredient_id is None

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "ingredient_id": self.ingredient_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "checked": self.checked,
            "issue": self.issue,
        }

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return ShoppingListItem(
            name=d.get("name", ""),
            quantity=d.get("quantity", 0),
            unit=d.get("unit", "piece"),
            category=d.get("category", DEFAULT_CATEGORY),
            ingredient_id=d.get("ingredient_id"),
            checked=bool(d.get("checked", False)),
            issue=d.get("issue"),
            id=d.get("id"),
        )


class ShoppingList:
    def __init__(self, household_id: str, week_of: date, name: str = "",
                 items: Optional[List[ShoppingListItem]] = None, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.household_id = household_id
        self.week_of = parse_date(week_of)
        self.name = name or f"Shopping List ({self.week_of.strftime(DISPLAY_DATE_FORMAT)})"
        self.items: List[ShoppingListItem] = list(items or [])

    @property
    def key(self):
        return (self.household_id, self.week_of)

    def find_line(self, ingredient_id: str, unit: str) -> Optional[ShoppingListItem]:
        for item in self.items:
            if item.ingredient_id == ingredient_id and item.unit == unit:
                return item
        return None

    def get_item(self, item_id: str) -> ShoppingListItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFound(f"Shopping list item '{item_id}' not found.")

    def upsert_item(self, ingredient_id: str, name: str, quantity: float, unit: str,
                    category: str, issue: Optional[dict] = None) -> str:
        '''
        Writes one generated line. An existing line for the same ingredient and unit
        gets its quantity overwritten; otherwise a new line is appended.
        Returns "updated" or "added".
        '''
        line = self.find_line(ingredient_id, unit)
        if line is not None:
            line.quantity = quantity
            line.issue = issue
            return "updated"
        self.items.append(ShoppingListItem(
            name=name, quantity=quantity, unit=unit, category=category,
            ingredient_id=ingredient_id, issue=issue,
        ))
        return "added"

    def add_manual_item(self, name: str, quantity: float, unit: str,
                        category: str = DEFAULT_CATEGORY) -> ShoppingListItem:
        if quantity < 0:
            raise InputViolation(f"Quantity cannot be negative: {quantity}")
        if category not in CATEGORIES:
            raise InputViolation(f"Unknown ingredient category: {category}")
        item = ShoppingListItem(name=name, quantity=quantity, unit=unit, category=category)
        self.items.append(item)
        return item

    def toggle_item(self, item_id: str, checked: bool) -> ShoppingListItem:
        item = self.get_item(item_id)
        item.checked = checked
        return item

    def remove_item(self, item_id: str) -> ShoppingListItem:
        item = self.get_item(item_id)
        self.items.remove(item)
        return item

    def get_items(self):
        '''Items grouped by category, then by name.'''
        return sorted(self.items, key=lambda i: (CATEGORIES.index(i.category) if i.category in CATEGORIES
                                                 else len(CATEGORIES), i.name.lower()))

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.get_items())
        return f"{self.name}:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return {
            "id": self.id,
            "household_id": self.household_id,
            "week_of": self.week_of.strftime(ISO_DATE_FORMAT),
            "name": self.name,
            "items": [item.to_dict() for item in self.items],
        }

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return ShoppingList(
            household_id=d.get("household_id"),
            week_of=d["week_of"],
            name=d.get("name", ""),
            items=[ShoppingListItem.from_dict(i) for i in d.get("items", [])],
            id=d.get("id"),
        )
