from typing import Optional

from fastapi import APIRouter, Query, Request

from mealplan.domain.Recipe import SubRecipe
from mealplan.utilities.config import MAX_RECIPE_NESTING_DEPTH
from mealplan.utilities.validators import RecipeImportRequest, SubRecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _service(request: Request):
    return request.app.state.grocery_service


@router.get("/")
def list_recipes(request: Request):
    recipes = _service(request).recipes.get_all()
    return {"count": len(recipes), "recipes": [r.to_dict() for r in recipes]}


@router.get("/{recipe_id}/excluded-sub-recipes")
def excluded_sub_recipes(recipe_id: str, request: Request):
    """Recipe ids that cannot be picked as sub-recipes of recipe_id."""
    excluded = _service(request).excluded_sub_recipes(recipe_id)
    return {"recipeId": recipe_id, "excluded": sorted(excluded)}


@router.get("/{recipe_id}/depth")
def recipe_depth(recipe_id: str, request: Request,
                 max_depth: Optional[int] = Query(default=None, ge=1)):
    limit = max_depth or MAX_RECIPE_NESTING_DEPTH
    depth = _service(request).recipe_depth(recipe_id, max_depth=limit)
    return {"recipeId": recipe_id, "depth": depth, "maxDepth": limit, "atLimit": depth >= limit}


@router.post("/{recipe_id}/sub-recipes")
def add_sub_recipe(recipe_id: str, payload: SubRecipeInput, request: Request):
    sub = SubRecipe(payload.recipe_id, payload.servings, payload.display_name)
    recipe = _service(request).add_sub_recipe(recipe_id, sub)
    return {"status": "ok", "recipe": recipe.to_dict()}


@router.post("/import")
def import_recipe(payload: RecipeImportRequest, request: Request):
    result = _service(request).import_recipe(payload.json_text, persist=payload.persist)
    return result.to_dict()
