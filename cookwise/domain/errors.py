"""Error taxonomy shared by the domain, logic and infra layers."""
from typing import Optional


class KitchenError(Exception):
    """Base class for all CookWise errors."""


class InputViolation(KitchenError, ValueError):
    """Rejected input: non-positive servings, negative quantity, unknown enum value."""


class UnitMismatch(KitchenError):
    """Two quantities of the same ingredient carry units that cannot be converted."""

    def __init__(self, from_unit: str, to_unit: str, ingredient: Optional[str] = None):
        self.from_unit = from_unit
        self.to_unit = to_unit
        self.ingredient = ingredient
        subject = f" for '{ingredient}'" if ingredient else ""
        super().__init__(f"Cannot convert {from_unit} to {to_unit}{subject}")

    def to_dict(self):
        return {
            "type": "unit_mismatch",
            "ingredient": self.ingredient,
            "from_unit": self.from_unit,
            "to_unit": self.to_unit,
            "message": str(self),
        }


class NotFound(KitchenError, LookupError):
    """A referenced record does not exist."""


class StoreError(KitchenError):
    """The data file could not be read or written."""
