"""Expand a scheduled use of a recipe into flat ingredient quantities.

Sub-recipes are resolved recursively: a sub-recipe referenced at `servings`
inside a parent is requested at `servings * ratio`, where ratio is the
parent's requested servings over its base servings. Output lines are not
merged; merging happens in the grocery list builder.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from mealplan.domain.Recipe import Recipe
from mealplan.utilities.config import MAX_RESOLVE_DEPTH
from mealplan.utilities.errors import RecipeCycleError

__all__ = [
    "ResolvedIngredient", "UnresolvedReference", "Resolution",
    "resolve_recipe_ingredients", "MISSING_RECIPE", "INVALID_SERVINGS",
]

logger = logging.getLogger(__name__)

MISSING_RECIPE = "missing_recipe"
INVALID_SERVINGS = "invalid_servings"


@dataclass
class ResolvedIngredient:
    ingredient_id: str
    quantity: float
    unit: str
    display_name: Optional[str] = None
    recipe_id: Optional[str] = None


@dataclass
class UnresolvedReference:
    """A recipe reference that contributed nothing, and why."""
    recipe_id: str
    reason: str
    parent_recipe_id: Optional[str] = None
    meal_plan_id: Optional[str] = None

    def to_dict(self):
        return {
            "recipeId": self.recipe_id,
            "reason": self.reason,
            "parentRecipeId": self.parent_recipe_id,
            "mealPlanId": self.meal_plan_id,
        }


@dataclass
class Resolution:
    lines: List[ResolvedIngredient] = field(default_factory=list)
    unresolved: List[UnresolvedReference] = field(default_factory=list)

    def extend(self, other: "Resolution") -> None:
        self.lines.extend(other.lines)
        self.unresolved.extend(other.unresolved)


def _positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _resolve(recipe_id: str, servings: float, index: Dict[str, Recipe], path: List[str],
             max_depth: int, out: Resolution) -> None:
    parent = path[-1] if path else None
    if recipe_id in path:
        raise RecipeCycleError(path + [recipe_id])
    if len(path) >= max_depth:
        raise RecipeCycleError(path + [recipe_id], reason="max_depth")

    recipe = index.get(recipe_id)
    if recipe is None:
        logger.debug("Recipe %s referenced by %s not found; skipping", recipe_id, parent or "meal plan")
        out.unresolved.append(UnresolvedReference(recipe_id, MISSING_RECIPE, parent_recipe_id=parent))
        return
    if not _positive_number(recipe.servings):
        logger.debug("Recipe %s has invalid base servings %r; skipping", recipe_id, recipe.servings)
        out.unresolved.append(UnresolvedReference(recipe_id, INVALID_SERVINGS, parent_recipe_id=parent))
        return

    ratio = servings / recipe.servings
    for line in recipe.ingredients:
        out.lines.append(ResolvedIngredient(
            ingredient_id=line.ingredient_id,
            quantity=line.quantity * ratio,
            unit=line.unit,
            display_name=line.display_name,
            recipe_id=recipe.id,
        ))

    path.append(recipe_id)
    try:
        for sub in recipe.sub_recipes:
            _resolve(sub.recipe_id, sub.servings * ratio, index, path, max_depth, out)
    finally:
        path.pop()


def resolve_recipe_ingredients(recipe_id: str, requested_servings: float, recipes: Iterable[Recipe],
                               *, max_depth: int = MAX_RESOLVE_DEPTH,
                               recipe_index: Optional[Dict[str, Recipe]] = None) -> Resolution:
    """Resolve recipe_id at requested_servings into flat (ingredient, quantity, unit) lines.

    A missing recipe (at any level) contributes nothing and is reported in
    `Resolution.unresolved`. A cycle on the expansion path, or nesting deeper
    than max_depth, raises RecipeCycleError.
    """
    if requested_servings is None or requested_servings <= 0:
        raise ValueError(f"Requested servings must be positive, got {requested_servings!r}")
    index = recipe_index if recipe_index is not None else {r.id: r for r in recipes}
    out = Resolution()
    _resolve(recipe_id, requested_servings, index, [], max_depth, out)
    return out
