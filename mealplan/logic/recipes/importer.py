"""Recipe import validation.

Validates recipe JSON (typically pasted from an AI assistant) and maps it onto
the ingredient library. Ingredient names are matched with the same key the
grocery list builder uses for free-text items, so "Tomatoes" finds "tomato".
Embedded sub-recipes become separate recipes with fresh ids.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from mealplan.domain.Ingredient import Ingredient
from mealplan.domain.Recipe import Recipe, RecipeIngredient, SubRecipe
from mealplan.logic.shopping.list_builder import ingredient_key
from mealplan.utilities.config import MAX_RESOLVE_DEPTH
from mealplan.utilities.ids import generate_id
from mealplan.utilities.validators import ImportedRecipeInput

__all__ = ["ImportResult", "validate_recipe_import"]

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    is_valid: bool
    recipe: Optional[Recipe] = None
    sub_recipes: List[Recipe] = field(default_factory=list)
    new_ingredients: List[Ingredient] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "isValid": self.is_valid,
            "recipe": self.recipe.to_dict() if self.recipe else None,
            "subRecipes": [r.to_dict() for r in self.sub_recipes],
            "newIngredients": [i.to_dict() for i in self.new_ingredients],
            "errors": self.errors,
        }


def _format_validation_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        path = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "Invalid value")
        messages.append(f"{path}: {msg}" if path else msg)
    return messages


class _ImportBuilder:
    def __init__(self, existing_ingredients: Iterable[Ingredient], existing_recipes: Iterable[Recipe],
                 id_factory: Callable[[], str], max_depth: int):
        existing_ingredients = list(existing_ingredients)
        self.by_id: Dict[str, Ingredient] = {i.id: i for i in existing_ingredients}
        self.by_key: Dict[str, Ingredient] = {}
        for ing in existing_ingredients:
            self.by_key.setdefault(ingredient_key(ing.name), ing)
        self.recipe_ids = {r.id for r in existing_recipes}
        self.id_factory = id_factory
        self.max_depth = max_depth
        self.new_ingredients: List[Ingredient] = []
        self.created_recipes: List[Recipe] = []
        self.errors: List[str] = []

    def _ingredient_for(self, line, path: str) -> Optional[Ingredient]:
        if line.ingredient_id and line.ingredient_id in self.by_id:
            return self.by_id[line.ingredient_id]
        if not line.name:
            self.errors.append(
                f'{path}.ingredientId: Ingredient ID "{line.ingredient_id}" not found in library and no name provided'
            )
            return None
        key = ingredient_key(line.name)
        match = self.by_key.get(key)
        if match is None:
            match = Ingredient(id=line.ingredient_id or self.id_factory(), name=line.name, category=line.category)
            self.by_key[key] = match
            self.by_id[match.id] = match
            self.new_ingredients.append(match)
        return match

    def build(self, model: ImportedRecipeInput, depth: int = 1, path: str = "") -> Recipe:
        recipe = Recipe(
            id=self.id_factory(),
            name=model.name,
            servings=model.servings,
            description=model.description,
            instructions=model.instructions,
            prep_time=model.prep_time,
            cook_time=model.cook_time,
            tags=model.tags,
            image_url=model.image_url,
        )
        for idx, line in enumerate(model.ingredients):
            ing = self._ingredient_for(line, f"{path}ingredients.{idx}")
            if ing is None:
                continue
            recipe.ingredients.append(RecipeIngredient(ing.id, line.quantity, line.unit, line.display_name))

        for idx, sub in enumerate(model.sub_recipes):
            sub_path = f"{path}subRecipes.{idx}"
            if sub.recipe is not None:
                if depth >= self.max_depth:
                    self.errors.append(f"{sub_path}.recipe: Sub-recipe nesting exceeds the maximum depth of {self.max_depth}")
                    continue
                child = self.build(sub.recipe, depth + 1, f"{sub_path}.recipe.")
                recipe.sub_recipes.append(SubRecipe(child.id, sub.servings, sub.display_name or child.name))
            elif sub.recipe_id in self.recipe_ids:
                recipe.sub_recipes.append(SubRecipe(sub.recipe_id, sub.servings, sub.display_name))
            else:
                self.errors.append(f'{sub_path}.recipeId: Sub-recipe "{sub.recipe_id}" not found')
        self.created_recipes.append(recipe)
        return recipe


def validate_recipe_import(json_text: str, existing_ingredients: Iterable[Ingredient],
                           existing_recipes: Iterable[Recipe] = (), *,
                           id_factory: Callable[[], str] = generate_id,
                           max_depth: int = MAX_RESOLVE_DEPTH) -> ImportResult:
    """Validate imported recipe JSON and resolve its ingredient and sub-recipe references.

    Returns an ImportResult; problems are reported in `errors`, never raised.
    On success `recipe` is the top-level recipe, `sub_recipes` the embedded
    recipes that must be stored alongside it, and `new_ingredients` the
    library entries to create.
    """
    try:
        data = json.loads(json_text)
    except (TypeError, json.JSONDecodeError) as e:
        logger.info("Recipe import rejected: invalid JSON (%s)", e)
        return ImportResult(is_valid=False, errors=["Invalid JSON format. Please check the JSON syntax."])

    try:
        model = ImportedRecipeInput.model_validate(data)
    except ValidationError as e:
        return ImportResult(is_valid=False, errors=_format_validation_errors(e))

    builder = _ImportBuilder(existing_ingredients, existing_recipes, id_factory, max_depth)
    root = builder.build(model)
    if builder.errors:
        return ImportResult(is_valid=False, errors=builder.errors)

    return ImportResult(
        is_valid=True,
        recipe=root,
        sub_recipes=[r for r in builder.created_recipes if r is not root],
        new_ingredients=builder.new_ingredients,
    )
