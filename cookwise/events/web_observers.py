"""Web-facing observers for kitchen events.

Subscribes to the GLOBAL_EVENT_BUS for:
  - pantry.low_stock
  - pantry.near_expiry
  - shopping.generated

and keeps an in-memory ring buffer of recent events that the API serves at
/api/pantry/alerts. Each event gets an auto-increment id (cursor) so clients
can poll with since=<last_id_seen>. The buffer is per process and capped at
MAX_EVENTS.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY, SHOPPING_LIST_GENERATED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None and hasattr(item, 'ingredient'):
                evt['name'] = item.ingredient.name
                evt['unit'] = item.unit
                evt['quantity'] = item.quantity
                evt['household_id'] = item.household_id
            for k in ('remaining', 'threshold', 'days_left', 'household_id', 'week_of',
                      'list_id', 'count', 'issues'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(PANTRY_LOW_STOCK, _record)
    GLOBAL_EVENT_BUS.subscribe(PANTRY_NEAR_EXPIRY, _record)
    GLOBAL_EVENT_BUS.subscribe(SHOPPING_LIST_GENERATED, _record)
    _started = True
    logger.info("Web observers subscribed to kitchen events")


def get_events(since: Optional[int] = None, household_id: Optional[str] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one household.

    Response includes next_cursor (largest id) so the client can poll with since=next_cursor.
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if household_id is not None:
        data = [e for e in data if e.get('household_id') in (None, household_id)]
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    """Drop buffered events (used by tests)."""
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear']
