"""PantryItem domain entity: household stock of one ingredient with optional expiry/location."""
from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from cookwise.domain.Ingredient import Ingredient
from cookwise.utilities.constants import ISO_DATE_FORMAT


class PantryItem:
    def __init__(self, ingredient: Ingredient, quantity: float = 0, unit: str = "piece",
                 household_id: Optional[str] = None, expiry_date: Optional[date] = None,
                 location: Optional[str] = None, min_quantity: float = 0, notes: Optional[str] = None,
                 id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.ingredient = ingredient
        self.quantity = quantity
        self.unit = (unit or "piece").lower()
        self.household_id = household_id
        self.expiry_date = expiry_date
        self.location = location
        self.min_quantity = min_quantity or 0
        self.notes = notes

    @property
    def ingredient_id(self) -> str:
        return self.ingredient.id

    @property
    def name(self) -> str:
        return self.ingredient.name

    def set_quantity(self, delta: float):
        '''Adjusts the quantity by the specified delta (can be negative).'''
        self.quantity += delta

    def days_left(self, today: Optional[date] = None) -> Optional[int]:
        if not self.expiry_date:
            return None
        return (self.expiry_date - (today or date.today())).days

    def __str__(self) -> str:
        parts = [f"{self.ingredient.name} - {self.quantity} {self.unit}"]
        if self.expiry_date:
            parts.append(f"Exp: {self.expiry_date.strftime(ISO_DATE_FORMAT)}")
        if self.location:
            parts.append(f"In: {self.location}")
        return " - ".join(parts)

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "household_id": self.household_id,
            "ingredient_id": self.ingredient.id,
            "quantity": self.quantity,
            "unit": self.unit,
            "expiry_date": self.expiry_date.strftime(ISO_DATE_FORMAT) if self.expiry_date else None,
            "location": self.location,
            "min_quantity": self.min_quantity,
            "notes": self.notes,
        }

    def api_dict(self):
        data = self.to_dict()
        data["name"] = self.ingredient.name
        data["category"] = self.ingredient.category
        return data

    @staticmethod
    def from_dict(data, ingredient: Ingredient):
        d = dict(data)
        exp = d.get("expiry_date")
        if exp and not isinstance(exp, date):
            try:
                exp = datetime.strptime(exp, ISO_DATE_FORMAT).date()
            except ValueError:
                exp = None
        return PantryItem(
            ingredient=ingredient,
            quantity=d.get("quantity", 0),
            unit=d.get("unit", "piece"),
            household_id=d.get("household_id"),
            expiry_date=exp or None,
            location=d.get("location"),
            min_quantity=d.get("min_quantity", 0),
            notes=d.get("notes"),
            id=d.get("id"),
        )
