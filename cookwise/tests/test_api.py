import tempfile
import unittest

from fastapi.testclient import TestClient

from cookwise.api.api_run import create_app
from cookwise.events import web_observers

HEADERS = {"X-Household-Id": "h1"}
WEEK_DAY = "2025-03-05"


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.client = TestClient(create_app(self._tmp.name))
        web_observers.clear()

    def tearDown(self):
        self._tmp.cleanup()

    def create_recipe(self, title, ingredients, servings=4):
        resp = self.client.post("/api/recipes", headers=HEADERS, json={
            "title": title, "servings": servings, "ingredients": ingredients,
        })
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def add_pantry(self, name, quantity, unit, **extra):
        return self.client.post("/api/pantry", headers=HEADERS,
                                json={"name": name, "quantity": quantity, "unit": unit, **extra})


class TestRecipesApi(ApiTestCase):

    def test_create_get_delete(self):
        recipe = self.create_recipe("Onion Soup", [{"name": "Onion", "quantity": 300, "unit": "Gram",
                                                    "category": "produce"}])
        self.assertEqual(recipe["ingredients"][0]["unit"], "gram")
        self.assertEqual(recipe["household_id"], "h1")

        resp = self.client.get(f"/api/recipes/{recipe['id']}", headers=HEADERS)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["ingredients"][0]["name"], "Onion")

        listed = self.client.get("/api/recipes", headers=HEADERS).json()
        self.assertEqual(listed["count"], 1)
        other = self.client.get("/api/recipes", headers={"X-Household-Id": "h2"}).json()
        self.assertEqual(other["count"], 0)

        self.assertEqual(self.client.delete(f"/api/recipes/{recipe['id']}", headers=HEADERS).status_code, 204)
        self.assertEqual(self.client.get(f"/api/recipes/{recipe['id']}", headers=HEADERS).status_code, 404)

    def test_other_household_cannot_read_or_delete(self):
        recipe = self.create_recipe("Onion Soup", [{"name": "Onion", "quantity": 300, "unit": "gram"}])
        self.client.post("/api/plan/slot", headers=HEADERS, json={
            "day": WEEK_DAY, "meal_type": "dinner", "recipe_id": recipe["id"],
        })
        intruder = {"X-Household-Id": "h2"}

        self.assertEqual(self.client.get(f"/api/recipes/{recipe['id']}", headers=intruder).status_code, 404)
        self.assertEqual(self.client.delete(f"/api/recipes/{recipe['id']}", headers=intruder).status_code, 404)
        resp = self.client.post("/api/plan/slot", headers=intruder, json={
            "day": WEEK_DAY, "meal_type": "dinner", "recipe_id": recipe["id"],
        })
        self.assertEqual(resp.status_code, 404)

        week = self.client.get("/api/plan/week", headers=HEADERS, params={"day": WEEK_DAY}).json()
        self.assertEqual(len(week["entries"]), 1)
        self.assertEqual(self.client.get(f"/api/recipes/{recipe['id']}", headers=HEADERS).status_code, 200)

    def test_invalid_payload_rejected(self):
        resp = self.client.post("/api/recipes", headers=HEADERS, json={
            "title": "Soup", "ingredients": [{"name": "Salt", "quantity": 1, "unit": "handful"}],
        })
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post("/api/recipes", headers=HEADERS, json={
            "title": "Soup", "ingredients": [{"name": "Salt", "quantity": -1, "unit": "gram"}],
        })
        self.assertEqual(resp.status_code, 422)

    def test_matches(self):
        self.create_recipe("Recipe B", [{"name": "Flour", "quantity": 1, "unit": "cup"},
                                        {"name": "Sugar", "quantity": 1, "unit": "cup"},
                                        {"name": "Salt", "quantity": 1, "unit": "pinch"}])
        self.create_recipe("Recipe A", [{"name": "Flour", "quantity": 1, "unit": "cup"},
                                        {"name": "Salt", "quantity": 1, "unit": "pinch"}])
        self.add_pantry("Flour", 500, "gram")
        self.add_pantry("Salt", 100, "gram")

        data = self.client.get("/api/recipes/matches", headers=HEADERS).json()
        self.assertEqual([m["recipe"]["title"] for m in data["matches"]], ["Recipe A", "Recipe B"])
        self.assertEqual([m["match_percentage"] for m in data["matches"]], [100, 67])
        self.assertEqual(data["matches"][1]["missing_ingredients"], ["Sugar"])


class TestPantryApi(ApiTestCase):

    def test_add_merge_and_mismatch(self):
        self.assertEqual(self.add_pantry("Flour", 500, "gram").status_code, 201)
        merged = self.add_pantry("flour", 1, "kilogram").json()
        self.assertEqual(merged["quantity"], 1500)

        resp = self.add_pantry("Flour", 2, "cup")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["error"]["type"], "unit_mismatch")

        data = self.client.get("/api/pantry", headers=HEADERS).json()
        self.assertEqual(data["count"], 1)

    def test_update_and_delete(self):
        item = self.add_pantry("Milk", 1, "liter", category="dairy").json()
        resp = self.client.put(f"/api/pantry/{item['id']}", headers=HEADERS, json={"quantity": 3})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["quantity"], 3)
        self.assertEqual(self.client.put(f"/api/pantry/{item['id']}", headers=HEADERS,
                                         json={"quantity": -1}).status_code, 422)
        self.assertEqual(self.client.delete(f"/api/pantry/{item['id']}", headers=HEADERS).status_code, 204)
        self.assertEqual(self.client.delete(f"/api/pantry/{item['id']}", headers=HEADERS).status_code, 404)

    def test_alerts(self):
        self.add_pantry("Milk", 0.5, "liter", category="dairy", min_quantity=1)
        self.add_pantry("Rice", 2, "kilogram", category="grains")
        data = self.client.get("/api/pantry/alerts", headers=HEADERS).json()
        self.assertEqual([i["name"] for i in data["low_stock"]], ["Milk"])
        self.assertEqual([e["type"] for e in data["events"]], ["pantry.low_stock"])
        self.assertEqual(data["next_cursor"], data["events"][-1]["id"])

        other = self.client.get("/api/pantry/alerts", headers={"X-Household-Id": "h2"}).json()
        self.assertEqual(other["events"], [])


class TestPlannerApi(ApiTestCase):

    def test_slot_week_and_pdf(self):
        recipe = self.create_recipe("Onion Soup", [{"name": "Onion", "quantity": 300, "unit": "gram"}])
        resp = self.client.post("/api/plan/slot", headers=HEADERS, json={
            "day": WEEK_DAY, "meal_type": "Dinner", "recipe_id": recipe["id"], "servings": 2,
        })
        self.assertEqual(resp.status_code, 201, resp.text)

        week = self.client.get("/api/plan/week", headers=HEADERS, params={"day": WEEK_DAY}).json()
        self.assertEqual(week["week_of"], "2025-03-03")
        self.assertEqual(len(week["entries"]), 1)
        self.assertEqual(week["entries"][0]["recipe_title"], "Onion Soup")

        pdf = self.client.get("/api/plan/week/pdf", headers=HEADERS, params={"day": WEEK_DAY})
        self.assertEqual(pdf.status_code, 200)
        self.assertTrue(pdf.content.startswith(b"%PDF"))

    def test_unknown_recipe(self):
        resp = self.client.post("/api/plan/slot", headers=HEADERS, json={
            "day": WEEK_DAY, "meal_type": "dinner", "recipe_id": "missing",
        })
        self.assertEqual(resp.status_code, 404)


class TestShoppingListApi(ApiTestCase):

    def plan_week(self):
        recipe = self.create_recipe("Creamy Soup", [
            {"name": "Onion", "quantity": 300, "unit": "gram", "category": "produce"},
            {"name": "Cream", "quantity": 1, "unit": "cup", "category": "dairy"},
        ])
        self.client.post("/api/plan/slot", headers=HEADERS, json={
            "day": WEEK_DAY, "meal_type": "dinner", "recipe_id": recipe["id"], "servings": 4,
        })
        self.add_pantry("Onion", 100, "gram")
        self.add_pantry("Cream", 200, "gram")

    def generate(self):
        resp = self.client.post("/api/shopping-list/generate", headers=HEADERS, json={"day": WEEK_DAY})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_empty_week(self):
        data = self.generate()
        self.assertFalse(data["generated"])
        self.assertEqual(data["message"], "No meals planned for this week.")
        self.assertIsNone(data["list"])
        resp = self.client.get("/api/shopping-list", headers=HEADERS, params={"day": WEEK_DAY})
        self.assertEqual(resp.status_code, 404)

    def test_generate_and_regenerate(self):
        self.plan_week()
        data = self.generate()
        self.assertTrue(data["generated"])
        self.assertEqual(data["week_of"], "2025-03-03")
        self.assertEqual(data["count"], 2)
        items = {i["name"]: i for i in data["list"]["items"]}
        self.assertEqual(items["Onion"]["quantity"], 200)
        self.assertEqual(items["Cream"]["issue"]["type"], "unit_mismatch")
        self.assertEqual(len(data["issues"]), 1)

        again = self.generate()
        self.assertEqual(again["list"]["id"], data["list"]["id"])
        self.assertEqual(again["added"], 0)
        self.assertEqual(again["updated"], 2)
        self.assertEqual(
            [(i["name"], i["quantity"]) for i in again["list"]["items"]],
            [(i["name"], i["quantity"]) for i in data["list"]["items"]],
        )

    def test_item_changes_survive_regeneration(self):
        self.plan_week()
        data = self.generate()
        list_id = data["list"]["id"]
        onion = next(i for i in data["list"]["items"] if i["name"] == "Onion")

        resp = self.client.patch(f"/api/shopping-list/{list_id}/items/{onion['id']}", headers=HEADERS,
                                 json={"checked": True})
        self.assertEqual(resp.status_code, 200)
        resp = self.client.post(f"/api/shopping-list/{list_id}/items", headers=HEADERS,
                                json={"name": "Bread", "category": "grains"})
        self.assertEqual(resp.status_code, 201)

        data = self.generate()
        items = {i["name"]: i for i in data["list"]["items"]}
        self.assertTrue(items["Onion"]["checked"])
        self.assertIn("Bread", items)

        resp = self.client.delete(f"/api/shopping-list/{list_id}/items/{items['Bread']['id']}", headers=HEADERS)
        self.assertEqual(resp.status_code, 204)
        current = self.client.get(f"/api/shopping-list/{list_id}", headers=HEADERS).json()
        self.assertNotIn("Bread", [i["name"] for i in current["items"]])

    def test_lists_are_household_scoped(self):
        self.plan_week()
        list_id = self.generate()["list"]["id"]
        resp = self.client.get(f"/api/shopping-list/{list_id}", headers={"X-Household-Id": "h2"})
        self.assertEqual(resp.status_code, 404)
        overview = self.client.get("/api/shopping-list/all", headers=HEADERS).json()
        self.assertEqual(overview["count"], 1)

    def test_generated_event_and_pdf(self):
        self.plan_week()
        list_id = self.generate()["list"]["id"]
        events = self.client.get("/api/pantry/alerts", headers=HEADERS).json()["events"]
        generated = [e for e in events if e["type"] == "shopping.generated"]
        self.assertEqual(generated[0]["list_id"], list_id)
        self.assertEqual(generated[0]["issues"], 1)

        pdf = self.client.get(f"/api/shopping-list/{list_id}/pdf", headers=HEADERS)
        self.assertEqual(pdf.status_code, 200)
        self.assertEqual(pdf.headers["content-type"], "application/pdf")
        self.assertTrue(pdf.content.startswith(b"%PDF"))
