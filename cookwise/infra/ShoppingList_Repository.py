import logging
from typing import List, Optional, Tuple

from cookwise.domain.errors import InputViolation, NotFound
from cookwise.domain.Plan import parse_date, week_bounds
from cookwise.domain.ShoppingList import ShoppingList, ShoppingListItem
from cookwise.infra.store import JsonStore
from cookwise.utilities.constants import ISO_DATE_FORMAT

logger = logging.getLogger(__name__)


class ShoppingListRepository:
    """Shopping lists addressed by (household, week_of Monday)."""

    def __init__(self, store: JsonStore):
        self.store = store

    def find(self, household_id: str, day) -> Optional[ShoppingList]:
        week_of = week_bounds(parse_date(day))[0].strftime(ISO_DATE_FORMAT)
        for row in self.store.read()["shopping_lists"]:
            if row.get("household_id") == household_id and row["week_of"] == week_of:
                return ShoppingList.from_dict(row)
        return None

    def get(self, household_id: str, list_id: str) -> ShoppingList:
        for row in self.store.read()["shopping_lists"]:
            if row["id"] == list_id and row.get("household_id") == household_id:
                return ShoppingList.from_dict(row)
        raise NotFound(f"Shopping list '{list_id}' not found.")

    def list(self, household_id: str) -> List[ShoppingList]:
        rows = [row for row in self.store.read()["shopping_lists"] if row.get("household_id") == household_id]
        return sorted((ShoppingList.from_dict(r) for r in rows), key=lambda s: s.week_of, reverse=True)

    def save(self, shopping_list: ShoppingList) -> ShoppingList:
        """Insert or replace by id; a second list for the same household week is rejected."""
        row = shopping_list.to_dict()
        with self.store.transaction() as data:
            lists = data["shopping_lists"]
            for existing in lists:
                if existing["id"] != row["id"] and (existing.get("household_id"), existing["week_of"]) == \
                        (row["household_id"], row["week_of"]):
                    raise InputViolation(
                        f"Household {row['household_id']} already has a list for week of {row['week_of']}"
                    )
            data["shopping_lists"] = [r for r in lists if r["id"] != row["id"]] + [row]
        return shopping_list

    def regenerate(self, household_id: str, day, reconcile) -> Tuple[Optional[ShoppingList], dict]:
        """Load, reconcile and write back the list for the week containing ``day`` in one transaction.

        ``reconcile(shopping_list)`` returns the generate_shopping_list result; the
        list is only written when result["generated"] is true. Returns the list
        (None if the week has no list) and the result.
        """
        week_of = week_bounds(parse_date(day))[0]
        key = (household_id, week_of.strftime(ISO_DATE_FORMAT))
        with self.store.transaction() as data:
            lists = data["shopping_lists"]
            index = next((i for i, row in enumerate(lists)
                          if (row.get("household_id"), row["week_of"]) == key), None)
            if index is None:
                shopping_list = ShoppingList(household_id=household_id, week_of=week_of)
            else:
                shopping_list = ShoppingList.from_dict(lists[index])
            result = reconcile(shopping_list)
            if result["generated"]:
                if index is None:
                    lists.append(shopping_list.to_dict())
                else:
                    lists[index] = shopping_list.to_dict()
        if index is None and not result["generated"]:
            return None, result
        return shopping_list, result

    def _modify(self, household_id: str, list_id: str, change):
        with self.store.transaction() as data:
            for idx, row in enumerate(data["shopping_lists"]):
                if row["id"] == list_id and row.get("household_id") == household_id:
                    shopping_list = ShoppingList.from_dict(row)
                    result = change(shopping_list)
                    data["shopping_lists"][idx] = shopping_list.to_dict()
                    return result
            raise NotFound(f"Shopping list '{list_id}' not found.")

    def toggle_item(self, household_id: str, list_id: str, item_id: str, checked: bool) -> ShoppingListItem:
        return self._modify(household_id, list_id, lambda sl: sl.toggle_item(item_id, checked))

    def add_manual_item(self, household_id: str, list_id: str, name: str, quantity: float,
                        unit: str, category: str) -> ShoppingListItem:
        return self._modify(household_id, list_id,
                            lambda sl: sl.add_manual_item(name, quantity, unit, category))

    def delete_item(self, household_id: str, list_id: str, item_id: str) -> ShoppingListItem:
        return self._modify(household_id, list_id, lambda sl: sl.remove_item(item_id))
