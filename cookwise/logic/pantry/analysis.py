"""Pantry analysis helpers."""
from __future__ import annotations
from datetime import date as _date
from typing import List, Dict, Any, Iterable, Optional

from cookwise.domain.PantryItem import PantryItem
from cookwise.utilities.config import DAYS_BEFORE_EXPIRY
from cookwise.utilities.constants import ISO_DATE_FORMAT

__all__ = ["compute_expiring_soon", "compute_low_stock", "compute_pantry_snapshots"]


def compute_expiring_soon(items: Iterable[PantryItem], *, window: int | None = None,
                          today: Optional[_date] = None) -> List[Dict[str, Any]]:
    """Return items expiring in <= window days (including already expired)."""
    expiring_window = window if window is not None else DAYS_BEFORE_EXPIRY
    today = today or _date.today()
    result: List[Dict[str, Any]] = []
    for item in items:
        days_left = item.days_left(today)
        if days_left is None or days_left > expiring_window:
            continue
        result.append({
            'id': item.id,
            'name': item.name,
            'quantity': item.quantity,
            'unit': item.unit,
            'exp': item.expiry_date.strftime(ISO_DATE_FORMAT),
            'days_left': days_left,
            'location': item.location,
        })
    result.sort(key=lambda x: (x['days_left'], x['name']))
    return result


def compute_low_stock(items: Iterable[PantryItem]) -> List[Dict[str, Any]]:
    """Return items at or below their own min_quantity (items without one are never low)."""
    low: List[Dict[str, Any]] = []
    for item in items:
        if item.min_quantity > 0 and item.quantity <= item.min_quantity:
            low.append({
                'id': item.id,
                'name': item.name,
                'quantity': item.quantity,
                'unit': item.unit,
                'threshold': item.min_quantity,
            })
    low.sort(key=lambda x: (x['quantity'], x['name']))
    return low


def compute_pantry_snapshots(items: Iterable[PantryItem], *, window: int | None = None,
                             today: Optional[_date] = None):
    items = list(items)
    exp = compute_expiring_soon(items, window=window, today=today)
    low = compute_low_stock(items)
    return exp, low
