from typing import Optional

from fastapi import APIRouter, Depends, Query

from cookwise.api.deps import get_household, get_store
from cookwise.events.web_observers import get_events
from cookwise.infra.Pantry_Repository import PantryRepository
from cookwise.infra.store import JsonStore
from cookwise.logic.pantry.analysis import compute_pantry_snapshots
from cookwise.utilities.validators import PantryItemInput, PantryUpdateInput

router = APIRouter(prefix="/api/pantry", tags=["pantry"])


@router.get("")
def list_pantry(household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    items = PantryRepository(store).list_items(household_id)
    return {"count": len(items), "items": [item.api_dict() for item in items]}


@router.post("", status_code=201)
def add_pantry_item(payload: PantryItemInput, household_id: str = Depends(get_household),
                    store: JsonStore = Depends(get_store)):
    item = PantryRepository(store).add(household_id, **payload.model_dump())
    return item.api_dict()


@router.put("/{item_id}")
def update_pantry_item(item_id: str, payload: PantryUpdateInput, household_id: str = Depends(get_household),
                       store: JsonStore = Depends(get_store)):
    item = PantryRepository(store).update(household_id, item_id, **payload.model_dump(exclude_unset=True))
    return item.api_dict()


@router.delete("/{item_id}", status_code=204)
def delete_pantry_item(item_id: str, household_id: str = Depends(get_household),
                       store: JsonStore = Depends(get_store)):
    PantryRepository(store).delete(household_id, item_id)


@router.get("/alerts")
def pantry_alerts(since: Optional[int] = Query(default=None), window: Optional[int] = Query(default=None),
                  household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    """Buffered pantry/shopping events plus current expiring-soon and low-stock snapshots."""
    items = PantryRepository(store).list_items(household_id)
    expiring_soon, low_stock = compute_pantry_snapshots(items, window=window)
    events = get_events(since, household_id=household_id)
    return {**events, "expiring_soon": expiring_soon, "low_stock": low_stock}
