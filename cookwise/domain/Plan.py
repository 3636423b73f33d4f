"""Plan domain entities: a single meal slot assignment and the weekly view over them."""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional
from uuid import uuid4

from cookwise.domain.Recipe import Recipe
from cookwise.utilities.constants import ISO_DATE_FORMAT, MEAL_TYPES, WEEK_DAYS


def parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def week_bounds(day: date):
    '''Monday and Sunday of the week containing ``day``.'''
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


class MealPlan:
    def __init__(self, date, meal_type: str, recipe: Recipe, servings: int = 4,
                 household_id: Optional[str] = None, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.date = parse_date(date)
        self.meal_type = meal_type
        self.recipe = recipe
        self.servings = servings
        self.household_id = household_id

    def __str__(self) -> str:
        return f"{self.date.strftime(ISO_DATE_FORMAT)} {self.meal_type}: {self.recipe.title} x{self.servings}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "household_id": self.household_id,
            "date": self.date.strftime(ISO_DATE_FORMAT),
            "meal_type": self.meal_type,
            "recipe_id": self.recipe.id,
            "servings": self.servings,
        }

    def api_dict(self):
        data = self.to_dict()
        data["recipe_title"] = self.recipe.title
        return data


class WeekPlan:
    """Monday-to-Sunday view over MealPlan entries of one household."""

    def __init__(self, week_of: date, entries: Optional[List[MealPlan]] = None,
                 household_id: Optional[str] = None):
        self.week_of, self.week_end = week_bounds(parse_date(week_of))
        self.entries = sorted(entries or [], key=lambda e: (e.date, MEAL_TYPES.index(e.meal_type)))
        self.household_id = household_id
        iso = self.week_of.isocalendar()
        self.week = iso[1]
        self.year = iso[0]

    @property
    def meals(self) -> Dict[str, Dict[str, Optional[MealPlan]]]:
        '''Grid keyed by day name then meal type; empty slots are None.'''
        grid: Dict[str, Dict[str, Optional[MealPlan]]] = {}
        for offset, day_name in enumerate(WEEK_DAYS):
            day = self.week_of + timedelta(days=offset)
            grid[day_name] = {"date": day}
            for meal_type in MEAL_TYPES:
                grid[day_name][meal_type] = None
        for entry in self.entries:
            grid[WEEK_DAYS[entry.date.weekday()]][entry.meal_type] = entry
        return grid

    def to_dict(self):
        return {
            "household_id": self.household_id,
            "week_of": self.week_of.strftime(ISO_DATE_FORMAT),
            "week": self.week,
            "year": self.year,
            "entries": [e.api_dict() for e in self.entries],
        }
