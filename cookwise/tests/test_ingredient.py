import unittest

from cookwise.domain.errors import InputViolation, UnitMismatch
from cookwise.domain.Ingredient import Ingredient, normalize_name
from cookwise.domain.units import are_compatible, convert_quantity, validate_unit


class TestIngredient(unittest.TestCase):

    def test_category_is_normalized(self):
        ingredient = Ingredient("  Red Onion ", "PRODUCE")
        self.assertEqual(ingredient.name, "Red Onion")
        self.assertEqual(ingredient.category, "produce")
        self.assertEqual(ingredient.key, "red onion")

    def test_unknown_category_rejected(self):
        with self.assertRaises(InputViolation):
            Ingredient("Onion", "vegetables")

    def test_round_trip_dict(self):
        ingredient = Ingredient("Flour", "baking")
        restored = Ingredient.from_dict(ingredient.to_dict())
        self.assertEqual(restored, ingredient)
        self.assertEqual(restored.category, "baking")

    def test_normalize_name(self):
        self.assertEqual(normalize_name("  Olive   Oil "), "olive oil")
        self.assertEqual(normalize_name(None), "")


class TestUnits(unittest.TestCase):

    def test_validate_unit(self):
        self.assertEqual(validate_unit(" Gram "), "gram")
        with self.assertRaises(InputViolation):
            validate_unit("bushel")

    def test_compatibility(self):
        self.assertTrue(are_compatible("kilogram", "gram"))
        self.assertTrue(are_compatible("cup", "milliliter"))
        self.assertTrue(are_compatible("piece", "piece"))
        self.assertFalse(are_compatible("gram", "milliliter"))
        self.assertFalse(are_compatible("piece", "gram"))

    def test_convert_quantity(self):
        self.assertEqual(convert_quantity(2, "kilogram", "gram"), 2000)
        self.assertEqual(convert_quantity(500, "milliliter", "liter"), 0.5)
        self.assertEqual(convert_quantity(3, "piece", "piece"), 3)

    def test_convert_incompatible_raises(self):
        with self.assertRaises(UnitMismatch) as ctx:
            convert_quantity(1, "cup", "gram", ingredient="Flour")
        issue = ctx.exception.to_dict()
        self.assertEqual(issue["type"], "unit_mismatch")
        self.assertEqual(issue["ingredient"], "Flour")
        self.assertEqual((issue["from_unit"], issue["to_unit"]), ("cup", "gram"))
