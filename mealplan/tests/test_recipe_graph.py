import unittest
from mealplan.domain.Recipe import Recipe, RecipeIngredient, SubRecipe
from mealplan.logic.recipes.graph import (
    build_sub_recipe_index, find_cycles, get_excluded_recipe_ids, get_recipe_depth, would_create_circular
)


def _recipe(recipe_id, *sub_ids):
    return Recipe(
        id=recipe_id,
        name=f"Recipe {recipe_id}",
        servings=1,
        ingredients=[RecipeIngredient("salt", 1, "pinch")],
        sub_recipes=[SubRecipe(s, 1) for s in sub_ids],
    )


class TestRecipeGraph(unittest.TestCase):

    def setUp(self):
        # A -> B -> C, D unrelated
        self.recipes = [_recipe("A", "B"), _recipe("B", "C"), _recipe("C"), _recipe("D")]

    def test_index(self):
        index = build_sub_recipe_index(self.recipes)
        self.assertEqual(index["A"], ["B"])
        self.assertEqual(index["C"], [])

    def test_closing_edge_is_circular(self):
        self.assertTrue(would_create_circular("C", "A", self.recipes))
        self.assertTrue(would_create_circular("B", "A", self.recipes))

    def test_unrelated_edge_is_not_circular(self):
        self.assertFalse(would_create_circular("A", "D", self.recipes))
        self.assertFalse(would_create_circular("A", "C", self.recipes))

    def test_self_reference_is_circular(self):
        self.assertTrue(would_create_circular("A", "A", self.recipes))

    def test_terminates_on_already_cyclic_data(self):
        cyclic = [_recipe("X", "Y"), _recipe("Y", "X"), _recipe("Z")]
        self.assertFalse(would_create_circular("Z", "X", cyclic))
        self.assertTrue(would_create_circular("X", "Y", cyclic))

    def test_excluded_ids(self):
        self.assertEqual(get_excluded_recipe_ids("C", self.recipes), {"A", "B", "C"})
        self.assertEqual(get_excluded_recipe_ids("D", self.recipes), {"D"})
        self.assertEqual(get_excluded_recipe_ids("A", self.recipes), {"A"})

    def test_depth_without_sub_recipes(self):
        self.assertEqual(get_recipe_depth("D", self.recipes), 1)

    def test_depth_is_capped(self):
        chain = [_recipe("A", "B"), _recipe("B", "C"), _recipe("C", "D"), _recipe("D")]
        self.assertEqual(get_recipe_depth("A", chain, max_depth=2), 2)
        self.assertEqual(get_recipe_depth("A", chain, max_depth=10), 4)
        self.assertEqual(get_recipe_depth("C", chain, max_depth=10), 2)

    def test_depth_takes_deepest_branch(self):
        recipes = [_recipe("A", "B", "C"), _recipe("B"), _recipe("C", "E"), _recipe("E")]
        self.assertEqual(get_recipe_depth("A", recipes, max_depth=10), 3)

    def test_depth_terminates_on_cycle(self):
        cyclic = [_recipe("X", "Y"), _recipe("Y", "X")]
        self.assertEqual(get_recipe_depth("X", cyclic, max_depth=10), 2)

    def test_find_cycles(self):
        self.assertEqual(find_cycles(self.recipes), [])
        cyclic = [_recipe("X", "Y"), _recipe("Y", "Z"), _recipe("Z", "X"), _recipe("W", "W")]
        cycles = find_cycles(cyclic)
        self.assertEqual(len(cycles), 2)
        self.assertIn(["X", "Y", "Z", "X"], cycles)
        self.assertIn(["W", "W"], cycles)


if __name__ == "__main__":
    unittest.main()
