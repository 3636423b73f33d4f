from datetime import date, timedelta
import unittest

from cookwise.domain.errors import InputViolation, NotFound, UnitMismatch
from cookwise.domain.Ingredient import Ingredient
from cookwise.domain.Pantry import Pantry
from cookwise.domain.PantryItem import PantryItem
from cookwise.events.Event_Bus import EventBus, PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY


class TestPantry(unittest.TestCase):

    def setUp(self):
        self.events = []
        bus = EventBus()
        bus.subscribe(PANTRY_LOW_STOCK, lambda name, payload: self.events.append((name, payload)))
        bus.subscribe(PANTRY_NEAR_EXPIRY, lambda name, payload: self.events.append((name, payload)))
        self.pantry = Pantry(household_id="h1").set_event_bus(bus)
        self.flour = Ingredient("Flour", "baking")
        self.milk = Ingredient("Milk", "dairy")

    def test_add_item(self):
        item = self.pantry.add_item(PantryItem(self.flour, 500, "gram"))
        self.assertIn(item, self.pantry.get_items())
        self.assertEqual(item.household_id, "h1")
        self.assertIs(self.pantry.find(self.flour.id), item)

    def test_duplicate_merges_into_existing_unit(self):
        first = self.pantry.add_item(PantryItem(self.flour, 500, "gram"))
        merged = self.pantry.add_item(PantryItem(self.flour, 1, "kilogram"))
        self.assertIs(merged, first)
        self.assertEqual(len(self.pantry), 1)
        self.assertEqual(merged.quantity, 1500)
        self.assertEqual(merged.unit, "gram")

    def test_duplicate_overrides_optional_fields_it_sets(self):
        expiry = date.today() + timedelta(days=30)
        first = self.pantry.add_item(PantryItem(self.milk, 1, "liter", location="fridge", notes="whole"))
        self.pantry.add_item(PantryItem(self.milk, 1, "liter", expiry_date=expiry, min_quantity=0.5,
                                        notes="semi-skimmed"))
        self.assertEqual(first.quantity, 2)
        self.assertEqual(first.location, "fridge")
        self.assertEqual(first.expiry_date, expiry)
        self.assertEqual(first.min_quantity, 0.5)
        self.assertEqual(first.notes, "semi-skimmed")

    def test_duplicate_with_incompatible_unit_raises(self):
        self.pantry.add_item(PantryItem(self.flour, 500, "gram"))
        with self.assertRaises(UnitMismatch):
            self.pantry.add_item(PantryItem(self.flour, 2, "cup"))
        self.assertEqual(self.pantry.find(self.flour.id).quantity, 500)

    def test_negative_quantity_rejected(self):
        with self.assertRaises(InputViolation):
            self.pantry.add_item(PantryItem(self.flour, -1, "gram"))
        item = self.pantry.add_item(PantryItem(self.flour, 5, "gram"))
        with self.assertRaises(InputViolation):
            self.pantry.update_item(item.id, quantity=-2)

    def test_update_sets_absolute_values(self):
        item = self.pantry.add_item(PantryItem(self.milk, 1, "liter"))
        self.pantry.update_item(item.id, quantity=2, location="fridge")
        self.assertEqual(item.quantity, 2)
        self.assertEqual(item.location, "fridge")

    def test_remove_item(self):
        item = self.pantry.add_item(PantryItem(self.flour, 5, "gram"))
        self.pantry.remove_item(item.id)
        self.assertNotIn(item, self.pantry.get_items())
        with self.assertRaises(NotFound):
            self.pantry.remove_item(item.id)

    def test_low_stock_event(self):
        self.pantry.add_item(PantryItem(self.milk, 0.5, "liter", min_quantity=1))
        names = [name for name, _ in self.events]
        self.assertEqual(names, [PANTRY_LOW_STOCK])
        self.assertEqual(self.events[0][1]["threshold"], 1)

    def test_no_low_stock_without_threshold(self):
        self.pantry.add_item(PantryItem(self.milk, 0, "liter"))
        self.assertEqual(self.events, [])

    def test_near_expiry_event(self):
        self.pantry.add_item(PantryItem(self.milk, 1, "liter", expiry_date=date.today() + timedelta(days=1)))
        self.assertEqual([name for name, _ in self.events], [PANTRY_NEAR_EXPIRY])
        self.assertEqual(self.events[0][1]["days_left"], 1)

    def test_ingredient_ids(self):
        self.pantry.add_item(PantryItem(self.flour, 5, "gram"))
        self.pantry.add_item(PantryItem(self.milk, 1, "liter"))
        self.assertEqual(self.pantry.ingredient_ids(), {self.flour.id, self.milk.id})
