"""
Unit Constants and Conversion Tables

Mass and volume units convert through a base unit (gram / milliliter).
Count-like units (piece, pinch, to_taste) only convert to themselves.
"""
from cookwise.domain.errors import InputViolation, UnitMismatch
from cookwise.utilities.constants import UNITS

# unit -> (base_unit, factor)
UNIT_CONVERSIONS = {
    # Weight: base = gram
    'gram': ('gram', 1),
    'kilogram': ('gram', 1000),
    'ounce': ('gram', 28.3495),
    'pound': ('gram', 453.592),
    # Volume: base = milliliter
    'milliliter': ('milliliter', 1),
    'liter': ('milliliter', 1000),
    'cup': ('milliliter', 236.588),
    'tablespoon': ('milliliter', 14.787),
    'teaspoon': ('milliliter', 4.929),
}


def validate_unit(unit: str) -> str:
    u = (unit or '').strip().lower()
    if u not in UNITS:
        raise InputViolation(f"Unknown unit: {unit}")
    return u


def are_compatible(from_unit: str, to_unit: str) -> bool:
    if from_unit == to_unit:
        return True
    if from_unit not in UNIT_CONVERSIONS or to_unit not in UNIT_CONVERSIONS:
        return False
    return UNIT_CONVERSIONS[from_unit][0] == UNIT_CONVERSIONS[to_unit][0]


def convert_quantity(quantity: float, from_unit: str, to_unit: str, ingredient: str = None) -> float:
    """Convert ``quantity`` between two units of the same dimension.

    Raises UnitMismatch for incompatible pairs (mass vs volume, anything vs
    piece/pinch/to_taste). No rounding is applied.
    """
    if from_unit == to_unit:
        return quantity
    if not are_compatible(from_unit, to_unit):
        raise UnitMismatch(from_unit, to_unit, ingredient=ingredient)
    _, from_factor = UNIT_CONVERSIONS[from_unit]
    _, to_factor = UNIT_CONVERSIONS[to_unit]
    return quantity * from_factor / to_factor
