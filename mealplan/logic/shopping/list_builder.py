"""Grocery list builder.

Provides generate_grocery_list(date_range, name, meal_plans, recipes, ingredients):
scheduled meals in the range are expanded through their sub-recipes, scaled to the
planned servings, merged per ingredient and unit family, and consolidated into
display units.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from mealplan.domain.DateRange import DateRange
from mealplan.domain.GroceryList import GroceryItem, GroceryList
from mealplan.domain.Ingredient import Ingredient
from mealplan.domain.MealPlan import MealPlan
from mealplan.domain.Recipe import Recipe
from mealplan.logic.recipes.resolver import UnresolvedReference, resolve_recipe_ingredients
from mealplan.logic.units.conversion import (
    consolidate_unit, convert_quantity, normalize_unit_for_consolidation
)
from mealplan.utilities.config import FALLBACK_CATEGORY, MAX_RESOLVE_DEPTH
from mealplan.utilities.constants import UNKNOWN_INGREDIENT_NAME
from mealplan.utilities.ids import generate_id

__all__ = ['generate_grocery_list', 'aggregate_grocery_list', 'GroceryListResult', 'ingredient_key']

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


def _stem(word: str) -> str:
    # Simple plural to singular heuristics (not perfect, acceptable for this use case)
    if word.endswith('ies') and len(word) > 3:
        return word[:-3] + 'y'  # candies -> candy
    if word.endswith('oes') and len(word) > 3:
        return word[:-3] + 'o'  # tomatoes -> tomato, potatoes -> potato
    if word.endswith('ses') and len(word) > 3:
        return word[:-2]  # classes -> classe (limitation acknowledged)
    if word.endswith('es') and len(word) > 2 and word[-3] not in 'aeiou':
        return word[:-2]  # boxes -> box, dishes -> dish
    if word.endswith('s') and not word.endswith('ss') and len(word) > 1:
        return word[:-1]
    return word


def ingredient_key(name: str) -> str:
    """Matching key for free-text ingredient names (case, whitespace and plural insensitive)."""
    return _stem(' '.join(_normalize(name).split()))


@dataclass
class _Accumulated:
    ingredient_id: Optional[str]
    display_name: Optional[str]
    unit: str
    quantity: float = 0
    meal_plan_ids: List[str] = field(default_factory=list)


@dataclass
class GroceryListResult:
    grocery_list: GroceryList
    items: List[GroceryItem]
    unresolved: List[UnresolvedReference] = field(default_factory=list)


def _merge_key(ingredient_id: Optional[str], display_name: Optional[str], unit: str) -> Tuple[str, str]:
    if ingredient_id:
        identity = f"id:{ingredient_id}"
    else:
        identity = f"name:{ingredient_key(display_name or '')}"
    return identity, normalize_unit_for_consolidation(unit)


def aggregate_grocery_list(date_range: DateRange, name: str, meal_plans: Iterable[MealPlan],
                           recipes: Iterable[Recipe], ingredients: Iterable[Ingredient], *,
                           id_factory: Callable[[], str] = generate_id,
                           now: Optional[datetime] = None,
                           max_depth: int = MAX_RESOLVE_DEPTH) -> GroceryListResult:
    """Build a grocery list and its items for the meals scheduled in date_range.

    Args:
        date_range: inclusive range of ISO dates.
        name: grocery list name.
        meal_plans: meal plan snapshot; plans outside the range are ignored.
        recipes: recipe snapshot used to expand recipe meals and their sub-recipes.
        ingredients: ingredient library used for names and categories.
        id_factory: produces ids for the list and each item.
        now: creation timestamp (defaults to the current time).
        max_depth: sub-recipe expansion limit.

    Returns:
        GroceryListResult with the list header, its items sorted by name, and the
        recipe references that could not be resolved.

    Raises:
        RecipeCycleError: the recipe snapshot contains a sub-recipe cycle reachable
            from a scheduled meal.
    """
    if not isinstance(date_range, DateRange):
        date_range = DateRange.from_dict(date_range)

    recipe_index: Dict[str, Recipe] = {r.id: r for r in recipes}
    ingredient_index: Dict[str, Ingredient] = {i.id: i for i in ingredients}

    accumulated: Dict[Tuple[str, str], _Accumulated] = {}
    unresolved: List[UnresolvedReference] = []

    for meal_plan in meal_plans:
        if not date_range.contains(meal_plan.date):
            continue
        if not meal_plan.contributes_ingredients:
            continue
        resolution = resolve_recipe_ingredients(
            meal_plan.recipe_id, meal_plan.servings, recipe_index.values(),
            max_depth=max_depth, recipe_index=recipe_index,
        )
        for ref in resolution.unresolved:
            ref.meal_plan_id = meal_plan.id
            unresolved.append(ref)

        for line in resolution.lines:
            key = _merge_key(line.ingredient_id, line.display_name, line.unit)
            canonical_unit = key[1]
            entry = accumulated.get(key)
            if entry is None:
                entry = _Accumulated(
                    ingredient_id=line.ingredient_id or None,
                    display_name=line.display_name,
                    unit=canonical_unit,
                )
                accumulated[key] = entry
            elif not entry.display_name and line.display_name:
                entry.display_name = line.display_name
            entry.quantity += convert_quantity(line.quantity, line.unit, canonical_unit)
            if meal_plan.id not in entry.meal_plan_ids:
                entry.meal_plan_ids.append(meal_plan.id)

    created = (now or datetime.now()).isoformat()
    grocery_list = GroceryList(id=id_factory(), name=name, date_range=date_range, created_at=created)

    items: List[GroceryItem] = []
    for entry in accumulated.values():
        quantity, unit = consolidate_unit(entry.quantity, entry.unit)
        library = ingredient_index.get(entry.ingredient_id) if entry.ingredient_id else None
        if library is not None:
            item_name = library.name
            category = library.category
        else:
            item_name = entry.display_name or UNKNOWN_INGREDIENT_NAME.format(id=entry.ingredient_id or '?')
            category = FALLBACK_CATEGORY
        items.append(GroceryItem(
            id=id_factory(),
            list_id=grocery_list.id,
            ingredient_id=entry.ingredient_id,
            name=item_name,
            quantity=quantity,
            unit=unit,
            category=category,
            checked=False,
            meal_plan_ids=entry.meal_plan_ids,
            created_at=created,
        ))

    items.sort(key=lambda i: (i.name.lower(), i.unit))
    if unresolved:
        logger.debug("Grocery list %r skipped %d unresolved recipe reference(s)", name, len(unresolved))
    return GroceryListResult(grocery_list=grocery_list, items=items, unresolved=unresolved)


def generate_grocery_list(date_range: Any, name: str, meal_plans: Iterable[MealPlan],
                          recipes: Iterable[Recipe], ingredients: Iterable[Ingredient],
                          **kwargs) -> Tuple[GroceryList, List[GroceryItem]]:
    """Return (GroceryList, [GroceryItem]) for the meals scheduled in date_range."""
    result = aggregate_grocery_list(date_range, name, meal_plans, recipes, ingredients, **kwargs)
    return result.grocery_list, result.items
