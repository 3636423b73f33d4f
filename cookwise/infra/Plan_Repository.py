import logging
from datetime import date
from typing import List, Optional

from cookwise.domain.errors import InputViolation, NotFound
from cookwise.domain.Plan import MealPlan, WeekPlan, parse_date, week_bounds
from cookwise.infra.Recipe_Repository import recipe_index, visible_to
from cookwise.infra.store import JsonStore
from cookwise.utilities.constants import ISO_DATE_FORMAT, MEAL_TYPES

logger = logging.getLogger(__name__)


def _resolve(rows, recipes) -> List[MealPlan]:
    plans = []
    for row in rows:
        recipe = recipes.get(row["recipe_id"])
        if recipe is None:
            logger.warning("Meal plan %s references missing recipe %s", row["id"], row["recipe_id"])
            continue
        plans.append(MealPlan(
            date=row["date"],
            meal_type=row["meal_type"],
            recipe=recipe,
            servings=row.get("servings", 4),
            household_id=row.get("household_id"),
            id=row["id"],
        ))
    plans.sort(key=lambda p: (p.date, MEAL_TYPES.index(p.meal_type)))
    return plans


class PlanRepository:
    def __init__(self, store: JsonStore):
        self.store = store

    def assign_slot(self, household_id: str, day, meal_type: str, recipe_id: str, servings: int = 4) -> MealPlan:
        """Put ``recipe_id`` in the (household, day, meal_type) slot.

        Any current occupant is removed and the new entry inserted in one
        transaction: either both happen or neither does.
        """
        day = parse_date(day)
        if meal_type not in MEAL_TYPES:
            raise InputViolation(f"Invalid meal type: {meal_type}")
        if servings is None or servings <= 0:
            raise InputViolation(f"Servings must be positive: {servings}")
        day_str = day.strftime(ISO_DATE_FORMAT)
        with self.store.transaction() as data:
            recipe = recipe_index(data).get(recipe_id)
            if recipe is None or not visible_to(recipe.household_id, household_id):
                raise NotFound(f"Recipe '{recipe_id}' not found.")
            kept = []
            replaced = 0
            for row in data["meal_plans"]:
                if (row.get("household_id"), row["date"], row["meal_type"]) == (household_id, day_str, meal_type):
                    replaced += 1
                else:
                    kept.append(row)
            plan = MealPlan(date=day, meal_type=meal_type, recipe=recipe, servings=servings,
                            household_id=household_id)
            kept.append(plan.to_dict())
            data["meal_plans"] = kept
        logger.info("Slot %s %s for household=%s -> %s (replaced %d)",
                    day_str, meal_type, household_id, recipe.title, replaced)
        return plan

    def remove(self, household_id: str, plan_id: str) -> None:
        with self.store.transaction() as data:
            before = len(data["meal_plans"])
            data["meal_plans"] = [p for p in data["meal_plans"]
                                  if not (p["id"] == plan_id and p.get("household_id") == household_id)]
            if len(data["meal_plans"]) == before:
                raise NotFound(f"Meal plan '{plan_id}' not found.")

    def list_range(self, household_id: str, start, end) -> List[MealPlan]:
        """Meal plans with start <= date <= end, recipes and ingredients resolved."""
        start, end = parse_date(start), parse_date(end)
        data = self.store.read()
        rows = [row for row in data["meal_plans"]
                if row.get("household_id") == household_id and start <= parse_date(row["date"]) <= end]
        return _resolve(rows, recipe_index(data))

    def get_week(self, household_id: str, day: Optional[date] = None) -> WeekPlan:
        monday, sunday = week_bounds(parse_date(day or date.today()))
        return WeekPlan(monday, self.list_range(household_id, monday, sunday), household_id=household_id)
