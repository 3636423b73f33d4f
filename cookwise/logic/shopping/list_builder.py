"""Shopping list builder.

Chains aggregate_requirements -> compute_shortfall and reconciles the result
into a persisted ShoppingList.
"""
import logging
from typing import Any, Dict, Iterable, List

from cookwise.domain.PantryItem import PantryItem
from cookwise.domain.Plan import MealPlan
from cookwise.domain.ShoppingList import ShoppingList
from cookwise.logic.shopping.requirements import aggregate_requirements
from cookwise.logic.shopping.shortfall import compute_shortfall

logger = logging.getLogger(__name__)

NOTHING_TO_GENERATE = "No meals planned for this week."


def build_shopping_list(meal_plans: Iterable[MealPlan], pantry_items: Iterable[PantryItem]) -> List[dict]:
    """Compute the items to buy for a set of planned meals.

    Returns the compute_shortfall entries (buy_quantity > 0 only).
    """
    requirements = aggregate_requirements(meal_plans)
    if not requirements:
        return []
    wanted = {ingredient_id for ingredient_id, _ in requirements}
    relevant = [item for item in pantry_items if item.ingredient_id in wanted]
    return compute_shortfall(requirements, relevant)


def apply_shortfall(shopping_list: ShoppingList, shortfall: Iterable[dict]) -> Dict[str, int]:
    """Upsert shortfall entries into ``shopping_list``.

    Existing lines for the same (ingredient, unit) are overwritten with the fresh
    quantity, new ones are appended. Lines that are no longer required, manual
    lines and checked flags are left untouched: there is no removal pass.
    """
    counts = {'added': 0, 'updated': 0}
    for entry in shortfall:
        outcome = shopping_list.upsert_item(
            ingredient_id=entry['ingredient_id'],
            name=entry['name'],
            quantity=entry['buy_quantity'],
            unit=entry['unit'],
            category=entry['category'],
            issue=entry.get('issue'),
        )
        counts[outcome] += 1
    return counts


def generate_shopping_list(shopping_list: ShoppingList, meal_plans: Iterable[MealPlan],
                           pantry_items: Iterable[PantryItem]) -> Dict[str, Any]:
    """Regenerate ``shopping_list`` from meal plans and pantry stock.

    Returns:
        { generated, message, count, added, updated, issues }. An empty plan set
        is not a failure: generated is False and the list is left unchanged.
    """
    plans = list(meal_plans)
    if not plans:
        logger.info("Nothing to generate for household=%s week_of=%s",
                    shopping_list.household_id, shopping_list.week_of)
        return {'generated': False, 'message': NOTHING_TO_GENERATE, 'count': 0,
                'added': 0, 'updated': 0, 'issues': []}

    shortfall = build_shopping_list(plans, pantry_items)
    counts = apply_shortfall(shopping_list, shortfall)
    issues = [entry['issue'] for entry in shortfall if entry.get('issue')]
    logger.info("Generated shopping list %s: %d lines (%d added, %d updated, %d unit issues)",
                shopping_list.id, len(shortfall), counts['added'], counts['updated'], len(issues))
    return {
        'generated': True,
        'message': f"{len(shortfall)} items to buy.",
        'count': len(shortfall),
        'added': counts['added'],
        'updated': counts['updated'],
        'issues': issues,
    }


__all__ = ['build_shopping_list', 'apply_shortfall', 'generate_shopping_list', 'NOTHING_TO_GENERATE']
