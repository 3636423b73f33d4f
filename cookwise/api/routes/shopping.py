import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from cookwise.api.deps import get_household, get_store
from cookwise.domain.Plan import week_bounds
from cookwise.events.event_helpers import publish_list_generated
from cookwise.infra.pdf_utils import generate_pdf_for_shopping_list
from cookwise.infra.Pantry_Repository import PantryRepository
from cookwise.infra.Plan_Repository import PlanRepository
from cookwise.infra.ShoppingList_Repository import ShoppingListRepository
from cookwise.infra.store import JsonStore
from cookwise.logic.shopping.list_builder import generate_shopping_list
from cookwise.utilities.validators import GenerateShoppingListInput, ShoppingListItemInput, ToggleItemInput

logger = logging.getLogger("cookwise_app")

router = APIRouter(prefix="/api/shopping-list", tags=["shopping"])


@router.post("/generate")
def generate(payload: Optional[GenerateShoppingListInput] = None,
             household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    """Regenerate the household's list for the week containing ``day`` (default: today).

    Plans, pantry and list are read and the list written back in one store
    transaction, so concurrent item toggles or manual additions are not lost.

    Response JSON structure:
        { generated, message, count, added, updated, issues, week_of, list }
    ``list`` is null when nothing was planned and no list exists for that week.
    """
    monday, sunday = week_bounds((payload.day if payload else None) or date.today())
    logger.info("ShoppingList GENERATE household=%s week_of=%s", household_id, monday)

    def reconcile(shopping_list):
        plans = PlanRepository(store).list_range(household_id, monday, sunday)
        wanted = {line.ingredient_id for plan in plans for line in plan.recipe.ingredients}
        pantry_items = PantryRepository(store).list_items(household_id, wanted) if wanted else []
        return generate_shopping_list(shopping_list, plans, pantry_items)

    shopping_list, result = ShoppingListRepository(store).regenerate(household_id, monday, reconcile)
    if result["generated"]:
        publish_list_generated(shopping_list, result["count"], len(result["issues"]))
    return {
        **result,
        "week_of": monday.isoformat(),
        "list": _list_payload(shopping_list) if shopping_list is not None else None,
    }


def _list_payload(shopping_list):
    data = shopping_list.to_dict()
    data["items"] = [item.to_dict() for item in shopping_list.get_items()]
    data["count"] = len(data["items"])
    return data


@router.get("")
def get_week_list(day: Optional[date] = Query(default=None), household_id: str = Depends(get_household),
                  store: JsonStore = Depends(get_store)):
    shopping_list = ShoppingListRepository(store).find(household_id, day or date.today())
    if shopping_list is None:
        raise HTTPException(status_code=404, detail="No shopping list for this week")
    return _list_payload(shopping_list)


@router.get("/all")
def list_all(household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    lists = ShoppingListRepository(store).list(household_id)
    return {
        "count": len(lists),
        "lists": [{"id": s.id, "name": s.name, "week_of": s.week_of.isoformat(), "items": len(s.items)}
                  for s in lists],
    }


@router.get("/{list_id}")
def get_list(list_id: str, household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    return _list_payload(ShoppingListRepository(store).get(household_id, list_id))


@router.post("/{list_id}/items", status_code=201)
def add_item(list_id: str, payload: ShoppingListItemInput, household_id: str = Depends(get_household),
             store: JsonStore = Depends(get_store)):
    item = ShoppingListRepository(store).add_manual_item(
        household_id, list_id, payload.name, payload.quantity, payload.unit, payload.category
    )
    return item.to_dict()


@router.patch("/{list_id}/items/{item_id}")
def toggle_item(list_id: str, item_id: str, payload: ToggleItemInput,
                household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    item = ShoppingListRepository(store).toggle_item(household_id, list_id, item_id, payload.checked)
    return item.to_dict()


@router.delete("/{list_id}/items/{item_id}", status_code=204)
def delete_item(list_id: str, item_id: str, household_id: str = Depends(get_household),
                store: JsonStore = Depends(get_store)):
    ShoppingListRepository(store).delete_item(household_id, list_id, item_id)


@router.get("/{list_id}/pdf")
def export_pdf(list_id: str, household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    shopping_list = ShoppingListRepository(store).get(household_id, list_id)
    return Response(
        content=generate_pdf_for_shopping_list(shopping_list),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="shopping_list_{shopping_list.week_of}.pdf"'},
    )
