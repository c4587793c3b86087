"""
Input validation schemas using Pydantic for recipe import and the HTTP API.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mealplan.utilities.constants import INGREDIENT_CATEGORIES, UNITS


def _check_unit(v):
    if v not in UNITS:
        raise ValueError(f"Unknown unit '{v}'. Expected one of: {', '.join(UNITS)}")
    return v


def _check_category(v):
    if v not in INGREDIENT_CATEGORIES:
        raise ValueError(f"Unknown category '{v}'. Expected one of: {', '.join(INGREDIENT_CATEGORIES)}")
    return v


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ImportedIngredientInput(_CamelModel):
    """Ingredient line of an imported recipe, referenced by library id or by name."""
    ingredient_id: Optional[str] = Field(None, alias="ingredientId")
    name: Optional[str] = Field(None, max_length=100)
    quantity: float = Field(..., gt=0)
    unit: str
    category: str = "Other"
    display_name: Optional[str] = Field(None, alias="displayName")

    @field_validator('name', 'display_name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        return _check_unit(v)

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)

    @model_validator(mode='after')
    def require_reference(self):
        if not self.ingredient_id and not self.name:
            raise ValueError('Ingredient needs an ingredientId or a name')
        return self


class ImportedSubRecipeInput(_CamelModel):
    """Sub-recipe of an imported recipe: an embedded recipe or an existing recipe id."""
    recipe: Optional[ImportedRecipeInput] = None
    recipe_id: Optional[str] = Field(None, alias="recipeId")
    servings: float = Field(..., gt=0)
    display_name: Optional[str] = Field(None, alias="displayName")

    @model_validator(mode='after')
    def require_recipe(self):
        if self.recipe is None and not self.recipe_id:
            raise ValueError('Sub-recipe needs an embedded recipe or a recipeId')
        return self


class ImportedRecipeInput(_CamelModel):
    """Schema for recipe import validation."""
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    servings: int = Field(..., ge=1)
    ingredients: List[ImportedIngredientInput] = Field(default_factory=list)
    sub_recipes: List[ImportedSubRecipeInput] = Field(default_factory=list, alias="subRecipes")
    instructions: List[str] = Field(default_factory=list)
    prep_time: int = Field(0, ge=0, alias="prepTime")
    cook_time: int = Field(0, ge=0, alias="cookTime")
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = Field(None, alias="imageUrl")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()

    @field_validator('instructions', 'tags')
    @classmethod
    def drop_empty(cls, v):
        """Filter out empty strings."""
        return [s.strip() for s in v if s and s.strip()]

    @model_validator(mode='after')
    def require_content(self):
        if not self.ingredients and not self.sub_recipes:
            raise ValueError('At least one ingredient or sub-recipe is required')
        return self


ImportedSubRecipeInput.model_rebuild()
ImportedRecipeInput.model_rebuild()


class GroceryListRequest(_CamelModel):
    """Schema for grocery list generation requests."""
    start: date
    end: date
    name: Optional[str] = Field(None, max_length=200)

    @model_validator(mode='after')
    def validate_range(self):
        if self.start > self.end:
            raise ValueError('Start date must be before or equal to end date')
        return self


class SubRecipeInput(_CamelModel):
    """Schema for adding a sub-recipe to a recipe."""
    recipe_id: str = Field(..., min_length=1, alias="recipeId")
    servings: float = Field(..., gt=0)
    display_name: Optional[str] = Field(None, alias="displayName")


class RecipeImportRequest(_CamelModel):
    json_text: str = Field(..., alias="json")
    persist: bool = False


class ManualItemInput(_CamelModel):
    """Schema for a user-entered grocery item."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., gt=0)
    unit: str
    category: str = "Other"

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        return _check_unit(v)

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)


class GroceryItemUpdateInput(_CamelModel):
    checked: Optional[bool] = None
    quantity: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None
