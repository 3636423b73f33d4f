from datetime import date
import unittest

from cookwise.domain.Ingredient import Ingredient
from cookwise.domain.Plan import MealPlan, WeekPlan
from cookwise.domain.Recipe import Recipe, RecipeIngredient
from cookwise.domain.ShoppingList import ShoppingList
from cookwise.infra.pdf_utils import generate_pdf_for_shopping_list, generate_pdf_for_week


class TestPdfUtils(unittest.TestCase):

    def test_week_pdf(self):
        recipe = Recipe(title="Omelette", ingredients=[RecipeIngredient(Ingredient("Egg", "dairy"), 3, "piece")])
        week = WeekPlan(date(2025, 3, 5), [MealPlan("2025-03-04", "breakfast", recipe, servings=2)])
        self.assertEqual(week.week_of, date(2025, 3, 3))
        self.assertTrue(generate_pdf_for_week(week).startswith(b"%PDF"))

    def test_empty_week_pdf(self):
        self.assertTrue(generate_pdf_for_week(WeekPlan(date(2025, 3, 3))).startswith(b"%PDF"))

    def test_shopping_list_pdf_with_issue(self):
        shopping_list = ShoppingList("h1", date(2025, 3, 3))
        shopping_list.upsert_item("flour", "Flour", 2, "cup", "baking",
                                  issue={"type": "unit_mismatch", "message": "Cannot convert gram to cup"})
        shopping_list.add_manual_item("Soap", 1, "piece")
        self.assertTrue(generate_pdf_for_shopping_list(shopping_list).startswith(b"%PDF"))
