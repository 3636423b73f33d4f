"""Event helper utilities.

Quick import:
    from cookwise.events.event_helpers import (
        publish_low_stock, publish_near_expiry, publish_list_generated,
    )

The pantry helpers take an optional ``bus``; without one they publish on the
global bus.
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, create_event,
    PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY, SHOPPING_LIST_GENERATED,
)

__all__ = [
    'publish_low_stock', 'publish_near_expiry', 'publish_list_generated',
    'PANTRY_LOW_STOCK', 'PANTRY_NEAR_EXPIRY', 'SHOPPING_LIST_GENERATED',
]


def publish_low_stock(item: Any, remaining: float, threshold: float, bus: Optional[EventBus] = None):
    """Publish a pantry.low_stock event."""
    (bus or GLOBAL_EVENT_BUS).publish(PANTRY_LOW_STOCK, {
        'item': item,
        'remaining': remaining,
        'threshold': threshold
    })


def publish_near_expiry(item: Any, days_left: int, threshold: int, bus: Optional[EventBus] = None):
    """Publish a pantry.near_expiry event."""
    (bus or GLOBAL_EVENT_BUS).publish(PANTRY_NEAR_EXPIRY, {
        'item': item,
        'days_left': days_left,
        'threshold': threshold
    })


def publish_list_generated(shopping_list: Any, count: int, issues: int):
    """Publish a shopping.generated event once a list has been reconciled."""
    create_event(SHOPPING_LIST_GENERATED, {
        'household_id': shopping_list.household_id,
        'week_of': shopping_list.week_of.isoformat(),
        'list_id': shopping_list.id,
        'count': count,
        'issues': issues,
    })
