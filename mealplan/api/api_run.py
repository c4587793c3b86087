from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from mealplan.api.routes import grocery_lists, recipes
from mealplan.events.Event_Bus import EventBus
from mealplan.infra.GroceryList_Repository import GroceryListRepository
from mealplan.infra.Ingredient_Repository import IngredientRepository
from mealplan.infra.MealPlan_Repository import MealPlanRepository
from mealplan.infra.Recipe_Repository import RecipeRepository
from mealplan.logic.shopping.service import GroceryListService
from mealplan.utilities.errors import (
    CircularRecipeError, EntityNotFoundError, RecipeCycleError, UnitConversionError
)

load_dotenv()

# Logging
logger = logging.getLogger("mealplan_app")


def build_service(data_dir: Optional[Path] = None, event_bus: Optional[EventBus] = None) -> GroceryListService:
    """Composition root: one repository per collection, one service, one event bus."""
    return GroceryListService(
        recipes=RecipeRepository(data_dir),
        ingredients=IngredientRepository(data_dir),
        meal_plans=MealPlanRepository(data_dir),
        grocery_lists=GroceryListRepository(data_dir),
        event_bus=event_bus or EventBus(),
    )


def create_app(data_dir: Optional[Path] = None) -> FastAPI:
    app = FastAPI(title="Meal Planner Grocery API")
    app.state.grocery_service = build_service(data_dir)

    app.include_router(recipes.router)
    app.include_router(grocery_lists.router)

    @app.exception_handler(EntityNotFoundError)
    async def _not_found(request: Request, exc: EntityNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(CircularRecipeError)
    async def _circular(request: Request, exc: CircularRecipeError):
        return JSONResponse(status_code=409, content={
            "detail": str(exc), "recipeId": exc.recipe_id, "subRecipeId": exc.sub_recipe_id,
        })

    @app.exception_handler(RecipeCycleError)
    async def _cycle(request: Request, exc: RecipeCycleError):
        logger.error("Recipe data integrity error: %s", exc)
        return JSONResponse(status_code=409, content={"detail": str(exc), "path": exc.path})

    @app.exception_handler(ValueError)
    async def _bad_request(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(UnitConversionError)
    async def _units(request: Request, exc: UnitConversionError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
