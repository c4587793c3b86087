import unittest
from mealplan.domain.Recipe import Recipe, RecipeIngredient, SubRecipe
from mealplan.logic.recipes.resolver import (
    INVALID_SERVINGS, MISSING_RECIPE, resolve_recipe_ingredients
)
from mealplan.utilities.errors import RecipeCycleError


class TestIngredientResolver(unittest.TestCase):

    def setUp(self):
        self.sauce = Recipe(
            id="sauce", name="Tomato Sauce", servings=4,
            ingredients=[RecipeIngredient("tomato", 400, "gram"), RecipeIngredient("garlic", 2, "clove")],
        )
        self.pasta = Recipe(
            id="pasta", name="Pasta", servings=2,
            ingredients=[RecipeIngredient("spaghetti", 200, "gram")],
            sub_recipes=[SubRecipe("sauce", 2)],
        )
        self.recipes = [self.sauce, self.pasta]

    def _by_ingredient(self, resolution):
        return {line.ingredient_id: line for line in resolution.lines}

    def test_scales_direct_ingredients(self):
        resolution = resolve_recipe_ingredients("sauce", 8, self.recipes)
        lines = self._by_ingredient(resolution)
        self.assertEqual(lines["tomato"].quantity, 800)
        self.assertEqual(lines["garlic"].quantity, 4)
        self.assertEqual(lines["tomato"].recipe_id, "sauce")
        self.assertEqual(resolution.unresolved, [])

    def test_scales_through_sub_recipes(self):
        # pasta x4 -> ratio 2 -> sauce at 4 servings -> ratio 1
        lines = self._by_ingredient(resolve_recipe_ingredients("pasta", 4, self.recipes))
        self.assertEqual(lines["spaghetti"].quantity, 400)
        self.assertEqual(lines["tomato"].quantity, 400)
        self.assertEqual(lines["garlic"].quantity, 2)

    def test_nested_servings_multiply(self):
        inner = Recipe(id="inner", servings=1, ingredients=[RecipeIngredient("flour", 100, "gram")])
        middle = Recipe(id="middle", servings=1, sub_recipes=[SubRecipe("inner", 2)])
        outer = Recipe(id="outer", servings=1, sub_recipes=[SubRecipe("middle", 1)])
        resolution = resolve_recipe_ingredients("outer", 1, [inner, middle, outer])
        self.assertEqual(len(resolution.lines), 1)
        self.assertEqual(resolution.lines[0].quantity, 200)
        self.assertEqual(resolution.lines[0].unit, "gram")

    def test_lines_are_not_merged(self):
        shared = Recipe(id="shared", servings=1, ingredients=[RecipeIngredient("salt", 1, "pinch")],
                        sub_recipes=[SubRecipe("leaf", 1)])
        leaf = Recipe(id="leaf", servings=1, ingredients=[RecipeIngredient("salt", 2, "pinch")])
        resolution = resolve_recipe_ingredients("shared", 1, [shared, leaf])
        self.assertEqual([l.quantity for l in resolution.lines], [1, 2])

    def test_missing_recipe_is_reported(self):
        resolution = resolve_recipe_ingredients("nope", 2, self.recipes)
        self.assertEqual(resolution.lines, [])
        self.assertEqual(len(resolution.unresolved), 1)
        self.assertEqual(resolution.unresolved[0].recipe_id, "nope")
        self.assertEqual(resolution.unresolved[0].reason, MISSING_RECIPE)
        self.assertIsNone(resolution.unresolved[0].parent_recipe_id)

    def test_missing_sub_recipe_keeps_the_rest(self):
        broken = Recipe(id="broken", servings=1, ingredients=[RecipeIngredient("rice", 1, "cup")],
                        sub_recipes=[SubRecipe("gone", 1)])
        resolution = resolve_recipe_ingredients("broken", 1, [broken])
        self.assertEqual([l.ingredient_id for l in resolution.lines], ["rice"])
        self.assertEqual(resolution.unresolved[0].parent_recipe_id, "broken")

    def test_invalid_base_servings_is_reported(self):
        bad = Recipe(id="bad", servings=0, ingredients=[RecipeIngredient("rice", 1, "cup")])
        resolution = resolve_recipe_ingredients("bad", 1, [bad])
        self.assertEqual(resolution.lines, [])
        self.assertEqual(resolution.unresolved[0].reason, INVALID_SERVINGS)

    def test_non_numeric_base_servings_is_reported(self):
        odd = Recipe(id="odd", servings=2, ingredients=[RecipeIngredient("rice", 1, "cup")])
        odd.servings = "two"
        resolution = resolve_recipe_ingredients("odd", 1, [odd])
        self.assertEqual(resolution.lines, [])
        self.assertEqual(resolution.unresolved[0].reason, INVALID_SERVINGS)

    def test_requested_servings_must_be_positive(self):
        with self.assertRaises(ValueError):
            resolve_recipe_ingredients("sauce", 0, self.recipes)

    def test_cycle_raises(self):
        a = Recipe(id="a", servings=1, sub_recipes=[SubRecipe("b", 1)])
        b = Recipe(id="b", servings=1, sub_recipes=[SubRecipe("a", 1)])
        with self.assertRaises(RecipeCycleError) as ctx:
            resolve_recipe_ingredients("a", 1, [a, b])
        self.assertEqual(ctx.exception.path, ["a", "b", "a"])
        self.assertEqual(ctx.exception.reason, "cycle")

    def test_max_depth_raises(self):
        chain = [Recipe(id=f"r{i}", servings=1, sub_recipes=[SubRecipe(f"r{i + 1}", 1)]) for i in range(5)]
        chain.append(Recipe(id="r5", servings=1, ingredients=[RecipeIngredient("salt", 1, "pinch")]))
        with self.assertRaises(RecipeCycleError) as ctx:
            resolve_recipe_ingredients("r0", 1, chain, max_depth=3)
        self.assertEqual(ctx.exception.reason, "max_depth")
        self.assertEqual(len(resolve_recipe_ingredients("r0", 1, chain, max_depth=6).lines), 1)

    def test_diamond_is_not_a_cycle(self):
        leaf = Recipe(id="leaf", servings=1, ingredients=[RecipeIngredient("egg", 1, "piece")])
        left = Recipe(id="left", servings=1, sub_recipes=[SubRecipe("leaf", 1)])
        right = Recipe(id="right", servings=1, sub_recipes=[SubRecipe("leaf", 1)])
        top = Recipe(id="top", servings=1, sub_recipes=[SubRecipe("left", 1), SubRecipe("right", 1)])
        resolution = resolve_recipe_ingredients("top", 1, [leaf, left, right, top])
        self.assertEqual(sum(l.quantity for l in resolution.lines), 2)


if __name__ == "__main__":
    unittest.main()
