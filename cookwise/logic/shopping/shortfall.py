"""Pantry delta (shortfall) calculation.

Provides compute_shortfall(requirements, pantry_items): how much of each
required ingredient line still has to be bought after on-hand pantry stock
is applied.
"""
import logging
from typing import Dict, Iterable, List, Optional

from cookwise.domain.errors import InputViolation, UnitMismatch
from cookwise.domain.PantryItem import PantryItem
from cookwise.domain.units import convert_quantity
from cookwise.utilities.constants import CATEGORIES

logger = logging.getLogger(__name__)


def _index_pantry(pantry_items: Iterable[PantryItem]) -> Dict[str, PantryItem]:
    index: Dict[str, PantryItem] = {}
    for item in pantry_items:
        if item.quantity is None or item.quantity < 0:
            raise InputViolation(f"Pantry quantity for {item.ingredient.name} cannot be negative: {item.quantity}")
        if item.ingredient_id in index:
            raise InputViolation(f"More than one pantry row for {item.ingredient.name}")
        index[item.ingredient_id] = item
    return index


def _sort_key(entry: dict):
    category = entry['category']
    rank = CATEGORIES.index(category) if category in CATEGORIES else len(CATEGORIES)
    return (rank, entry['name'].lower(), entry['unit'])


def compute_shortfall(requirements: Dict, pantry_items: Iterable[PantryItem]) -> List[dict]:
    """Subtract pantry stock from aggregated requirements.

    Args:
        requirements: output of aggregate_requirements, keyed by (ingredient_id, unit).
        pantry_items: the household's PantryItem rows (at most one per ingredient).

    Returns:
        List of dicts { ingredient_id, name, buy_quantity, unit, category, needed,
        on_hand, issue } with buy_quantity > 0 only, sorted by category then name.

    Stock of one ingredient is applied once across its lines: first to the line
    in the pantry's own unit, then to lines in a convertible unit. When units
    cannot be converted the full need is bought and a unit_mismatch issue is
    attached to that line; the other lines are unaffected.
    Only buy_quantity is rounded (2 decimals).
    """
    pantry = _index_pantry(pantry_items)
    remaining = {ingredient_id: item.quantity for ingredient_id, item in pantry.items()}

    entries = [dict(entry) for entry in requirements.values()]
    applied: List[Optional[float]] = [None] * len(entries)
    issues: List[Optional[dict]] = [None] * len(entries)

    # Pass 1: lines in the pantry's own unit
    for i, entry in enumerate(entries):
        item = pantry.get(entry['ingredient_id'])
        if item is None or item.unit != entry['unit']:
            continue
        used = min(entry['quantity'], remaining[item.ingredient_id])
        remaining[item.ingredient_id] -= used
        applied[i] = used

    # Pass 2: lines in any other unit
    for i, entry in enumerate(entries):
        item = pantry.get(entry['ingredient_id'])
        if item is None or applied[i] is not None:
            continue
        try:
            available = convert_quantity(remaining[item.ingredient_id], item.unit, entry['unit'],
                                         ingredient=entry['name'])
        except UnitMismatch as exc:
            logger.warning("Shortfall for %s: %s; buying the full %s %s",
                           entry['name'], exc, entry['quantity'], entry['unit'])
            issues[i] = exc.to_dict()
            applied[i] = 0
            continue
        used = min(entry['quantity'], max(0, available))
        remaining[item.ingredient_id] -= convert_quantity(used, entry['unit'], item.unit)
        applied[i] = used

    shortfall: List[dict] = []
    for i, entry in enumerate(entries):
        on_hand = applied[i] or 0
        buy_quantity = round(max(0, entry['quantity'] - on_hand), 2)
        if buy_quantity <= 0:
            continue
        shortfall.append({
            'ingredient_id': entry['ingredient_id'],
            'name': entry['name'],
            'buy_quantity': buy_quantity,
            'unit': entry['unit'],
            'category': entry['category'],
            'needed': entry['quantity'],
            'on_hand': on_hand,
            'issue': issues[i],
        })

    shortfall.sort(key=_sort_key)
    return shortfall


__all__ = ['compute_shortfall']
