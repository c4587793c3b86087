import json
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient
from mealplan.api.api_run import create_app
from mealplan.domain.Ingredient import Ingredient
from mealplan.domain.MealPlan import CustomMealPlan, RecipeMealPlan
from mealplan.domain.Recipe import Recipe, RecipeIngredient, SubRecipe


class TestGroceryListAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        app = create_app(Path(self._tmp.name))
        self.service = app.state.grocery_service
        self.client = TestClient(app)

        self.service.ingredients.add_many([
            Ingredient(id="flour", name="Flour", category="Baking"),
            Ingredient(id="butter", name="Butter", category="Dairy"),
            Ingredient(id="milk", name="Milk", category="Dairy"),
        ])
        self.service.recipes.add(Recipe(id="roux", name="Roux", servings=1, ingredients=[
            RecipeIngredient("flour", 50, "gram"),
            RecipeIngredient("butter", 50, "gram"),
        ]))
        self.service.recipes.add(Recipe(id="bechamel", name="Bechamel", servings=2,
                                        ingredients=[RecipeIngredient("milk", 500, "milliliter")],
                                        sub_recipes=[SubRecipe("roux", 1)]))
        self.service.meal_plans.add(RecipeMealPlan(id="mp1", date="2026-01-02", recipe_id="bechamel", servings=4))
        self.service.meal_plans.add(CustomMealPlan(id="mp2", date="2026-01-03", kind="dining-out"))

    def tearDown(self):
        self.client.close()
        self._tmp.cleanup()

    def _generate(self, **extra):
        body = {"start": "2026-01-01", "end": "2026-01-07"}
        body.update(extra)
        return self.client.post('/api/grocery-lists/', json=body)

    def test_preview(self):
        resp = self.client.post('/api/grocery-lists/preview', json={"start": "2026-01-01", "end": "2026-01-07"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        items = {i['name']: i for i in data['items']}
        self.assertEqual(items['Milk']['quantity'], 1)
        self.assertEqual(items['Milk']['unit'], 'liter')
        self.assertEqual(items['Flour']['quantity'], 100)
        self.assertEqual(items['Flour']['display'], '100 gram')
        self.assertEqual(data['count'], 3)
        self.assertEqual(data['unresolved'], [])
        self.assertEqual(data['recipeMeals'], 1)
        self.assertEqual(self.client.get('/api/grocery-lists/').json()['count'], 0)

    def test_invalid_range(self):
        resp = self.client.post('/api/grocery-lists/preview', json={"start": "2026-01-07", "end": "2026-01-01"})
        self.assertEqual(resp.status_code, 422)

    def test_generate_fetch_and_delete(self):
        resp = self._generate(name="Sauce week")
        self.assertEqual(resp.status_code, 201)
        list_id = resp.json()['list']['id']

        self.assertEqual(self.client.get('/api/grocery-lists/latest').json()['id'], list_id)
        listing = self.client.get('/api/grocery-lists/').json()
        self.assertEqual([gl['id'] for gl in listing['lists']], [list_id])

        detail = self.client.get(f'/api/grocery-lists/{list_id}').json()
        self.assertEqual(detail['list']['name'], "Sauce week")
        self.assertEqual([c['category'] for c in detail['categories']], ['Baking', 'Dairy'])
        self.assertEqual(detail['count'], 3)

        resp = self.client.delete(f'/api/grocery-lists/{list_id}')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(f'/api/grocery-lists/{list_id}').status_code, 404)
        self.assertEqual(self.client.delete(f'/api/grocery-lists/{list_id}').status_code, 404)

    def test_check_off_and_manual_items(self):
        list_id = self._generate().json()['list']['id']
        detail = self.client.get(f'/api/grocery-lists/{list_id}').json()
        flour = detail['categories'][0]['items'][0]

        resp = self.client.patch(f'/api/grocery-lists/{list_id}/items/{flour["id"]}', json={"checked": True})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()['checked'])
        detail = self.client.get(f'/api/grocery-lists/{list_id}').json()
        self.assertEqual([i['id'] for i in detail['checked']], [flour['id']])

        resp = self.client.post(f'/api/grocery-lists/{list_id}/items',
                                json={"name": "Nutmeg", "quantity": 1, "unit": "pinch", "category": "Herbs & Spices"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(self.client.get(f'/api/grocery-lists/{list_id}').json()['count'], 4)

        self.assertEqual(self.client.patch(f'/api/grocery-lists/{list_id}/items/nope',
                                           json={"checked": True}).status_code, 404)
        self.assertEqual(self.client.patch(f'/api/grocery-lists/{list_id}/items/{flour["id"]}',
                                           json={}).status_code, 400)

    def test_quick_range_and_no_latest(self):
        week = self.client.get('/api/grocery-lists/quick-range').json()
        self.assertLessEqual(week['start'], week['end'])
        day = self.client.get('/api/grocery-lists/quick-range', params={'days': 1}).json()
        self.assertEqual(day['start'], day['end'])
        self.assertEqual(self.client.get('/api/grocery-lists/latest').status_code, 404)

    def test_pdf(self):
        list_id = self._generate().json()['list']['id']
        resp = self.client.get(f'/api/grocery-lists/{list_id}/pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers['content-type'], 'application/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))

    def test_cyclic_recipes_are_a_conflict(self):
        roux = self.service.recipes.get("roux")
        roux.sub_recipes.append(SubRecipe("bechamel", 1))
        self.service.recipes.update(roux)
        resp = self._generate()
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()['path'], ["bechamel", "roux", "bechamel"])

    def test_sub_recipe_endpoints(self):
        self.service.recipes.add(Recipe(id="lasagna", name="Lasagna", servings=6))

        excluded = self.client.get('/api/recipes/roux/excluded-sub-recipes').json()
        self.assertEqual(excluded['excluded'], ['bechamel', 'roux'])

        depth = self.client.get('/api/recipes/bechamel/depth').json()
        self.assertEqual(depth['depth'], 2)
        self.assertTrue(depth['atLimit'])

        resp = self.client.post('/api/recipes/lasagna/sub-recipes', json={"recipeId": "bechamel", "servings": 2})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['recipe']['subRecipes'][0]['recipeId'], 'bechamel')
        resp = self.client.post('/api/recipes/lasagna/sub-recipes', json={"recipeId": "bechamel", "servings": 2})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(len(self.service.recipes.get("lasagna").sub_recipes), 1)

        resp = self.client.post('/api/recipes/roux/sub-recipes', json={"recipeId": "lasagna", "servings": 1})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()['subRecipeId'], 'lasagna')

        resp = self.client.post('/api/recipes/ghost/sub-recipes', json={"recipeId": "roux", "servings": 1})
        self.assertEqual(resp.status_code, 404)

    def test_import_endpoint(self):
        payload = {"name": "Crepes", "servings": 4, "ingredients": [
            {"name": "flour", "quantity": 250, "unit": "gram"},
            {"name": "Eggs", "quantity": 3, "unit": "piece", "category": "Dairy"},
        ]}
        resp = self.client.post('/api/recipes/import', json={"json": json.dumps(payload), "persist": True})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data['isValid'])
        self.assertEqual(data['recipe']['ingredients'][0]['ingredientId'], 'flour')
        self.assertEqual(len(data['newIngredients']), 1)
        self.assertEqual(self.client.get('/api/recipes/').json()['count'], 3)

        resp = self.client.post('/api/recipes/import', json={"json": "{oops"})
        self.assertFalse(resp.json()['isValid'])


if __name__ == "__main__":
    unittest.main()
