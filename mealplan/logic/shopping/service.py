"""Grocery list service: wires the repositories to the pure graph and aggregation logic.

Constructed once by the application (see mealplan.api.api_run.create_app) and
passed to whatever needs it.
"""
import logging
from datetime import datetime
from typing import Optional, Set

from mealplan.domain.DateRange import DateRange
from mealplan.domain.Recipe import Recipe, SubRecipe
from mealplan.events.Event_Bus import (
    EventBus, GROCERY_LIST_GENERATED, GROCERY_LIST_UNRESOLVED, RECIPE_SUB_RECIPE_ADDED
)
from mealplan.infra.GroceryList_Repository import GroceryListRepository
from mealplan.infra.Ingredient_Repository import IngredientRepository
from mealplan.infra.MealPlan_Repository import MealPlanRepository
from mealplan.infra.Recipe_Repository import RecipeRepository
from mealplan.logic.recipes.graph import get_excluded_recipe_ids, get_recipe_depth, would_create_circular
from mealplan.logic.recipes.importer import ImportResult, validate_recipe_import
from mealplan.logic.shopping.list_builder import GroceryListResult, aggregate_grocery_list
from mealplan.logic.shopping.list_helpers import generate_default_list_name
from mealplan.utilities.config import MAX_RECIPE_NESTING_DEPTH
from mealplan.utilities.errors import CircularRecipeError, EntityNotFoundError

logger = logging.getLogger(__name__)


class GroceryListService:
    def __init__(self, recipes: RecipeRepository, ingredients: IngredientRepository,
                 meal_plans: MealPlanRepository, grocery_lists: GroceryListRepository,
                 event_bus: Optional[EventBus] = None):
        self.recipes = recipes
        self.ingredients = ingredients
        self.meal_plans = meal_plans
        self.grocery_lists = grocery_lists
        self.event_bus = event_bus or EventBus()

    # --- grocery lists ------------------------------------------------------
    def preview(self, date_range: DateRange, name: Optional[str] = None,
                now: Optional[datetime] = None) -> GroceryListResult:
        """Aggregate without persisting anything."""
        list_name = name or generate_default_list_name(date_range.start)
        return aggregate_grocery_list(
            date_range, list_name,
            self.meal_plans.get_all_in_range(date_range),
            self.recipes.get_all(),
            self.ingredients.get_all(),
            now=now,
        )

    def generate(self, date_range: DateRange, name: Optional[str] = None,
                 now: Optional[datetime] = None) -> GroceryListResult:
        """Aggregate the meals in date_range and store the resulting list with its items."""
        result = self.preview(date_range, name, now=now)
        self.grocery_lists.persist_grocery_list(result.grocery_list, result.items)
        logger.info("Generated grocery list %s (%s) with %d items",
                    result.grocery_list.id, date_range, len(result.items))
        self.event_bus.publish(GROCERY_LIST_GENERATED, {
            "grocery_list": result.grocery_list,
            "items": result.items,
        })
        if result.unresolved:
            logger.warning("Grocery list %s skipped %d unresolved recipe reference(s)",
                           result.grocery_list.id, len(result.unresolved))
            self.event_bus.publish(GROCERY_LIST_UNRESOLVED, {
                "grocery_list": result.grocery_list,
                "unresolved": result.unresolved,
            })
        return result

    # --- sub-recipe graph ---------------------------------------------------
    def _require_recipe(self, recipe_id: str) -> Recipe:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            raise EntityNotFoundError("Recipe", recipe_id)
        return recipe

    def excluded_sub_recipes(self, recipe_id: str) -> Set[str]:
        return get_excluded_recipe_ids(recipe_id, self.recipes.get_all())

    def recipe_depth(self, recipe_id: str, max_depth: int = MAX_RECIPE_NESTING_DEPTH) -> int:
        return get_recipe_depth(recipe_id, self.recipes.get_all(), max_depth=max_depth)

    def check_sub_recipe(self, recipe_id: str, candidate_id: str) -> None:
        """Raise CircularRecipeError if candidate_id cannot be nested under recipe_id."""
        if would_create_circular(recipe_id, candidate_id, self.recipes.get_all()):
            raise CircularRecipeError(recipe_id, candidate_id)

    def add_sub_recipe(self, recipe_id: str, sub_recipe: SubRecipe) -> Recipe:
        recipe = self._require_recipe(recipe_id)
        self._require_recipe(sub_recipe.recipe_id)
        if sub_recipe.recipe_id in recipe.sub_recipe_ids():
            raise ValueError(f"Recipe '{recipe_id}' already uses '{sub_recipe.recipe_id}' as a sub-recipe")
        self.check_sub_recipe(recipe_id, sub_recipe.recipe_id)
        recipe.sub_recipes.append(sub_recipe)
        self.recipes.update(recipe)
        self.event_bus.publish(RECIPE_SUB_RECIPE_ADDED, {"recipe": recipe, "sub_recipe": sub_recipe})
        return recipe

    # --- import -------------------------------------------------------------
    def import_recipe(self, json_text: str, persist: bool = False) -> ImportResult:
        result = validate_recipe_import(json_text, self.ingredients.get_all(), self.recipes.get_all())
        if result.is_valid and persist:
            self.ingredients.add_many(result.new_ingredients)
            for sub in result.sub_recipes:
                self.recipes.add(sub)
            self.recipes.add(result.recipe)
            logger.info("Imported recipe %s (%d sub-recipes, %d new ingredients)",
                        result.recipe.id, len(result.sub_recipes), len(result.new_ingredients))
        return result
