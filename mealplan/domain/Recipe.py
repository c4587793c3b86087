"""Recipe domain entity: servings, ingredient lines and sub-recipe references."""
import math
from typing import List, Optional, Union

Number = Union[int, float]


def to_number(value, field: str) -> Number:
    """Coerce stored numbers (including numeric strings) to int or float; raise ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"{field} must be finite, got {value!r}")
    return int(number) if number.is_integer() else number


class RecipeIngredient:
    """One ingredient line of a recipe, quantity given for the recipe's base servings."""

    def __init__(self, ingredient_id: str = "", quantity: float = 0, unit: str = "piece",
                 display_name: Optional[str] = None):
        self.ingredient_id = ingredient_id
        self.quantity = to_number(quantity, "Ingredient quantity")
        self.unit = unit
        self.display_name = display_name

    def __str__(self) -> str:
        label = self.display_name or self.ingredient_id
        return f"{label} - {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return RecipeIngredient(
            ingredient_id=str(d.get("ingredientId", "") or ""),
            quantity=d.get("quantity", 0) or 0,
            unit=d.get("unit", "piece") or "piece",
            display_name=d.get("displayName"),
        )

    def to_dict(self):
        data = {"ingredientId": self.ingredient_id, "quantity": self.quantity, "unit": self.unit}
        if self.display_name is not None:
            data["displayName"] = self.display_name
        return data


class SubRecipe:
    """Reference to another recipe; servings is how many of its servings go into the parent."""

    def __init__(self, recipe_id: str = "", servings: float = 1, display_name: Optional[str] = None):
        self.recipe_id = recipe_id
        self.servings = to_number(servings, "Sub-recipe servings")
        self.display_name = display_name

    def __str__(self) -> str:
        return f"{self.display_name or self.recipe_id} x{self.servings}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return SubRecipe(
            recipe_id=str(d.get("recipeId", "") or ""),
            servings=d.get("servings", 1) or 1,
            display_name=d.get("displayName"),
        )

    def to_dict(self):
        data = {"recipeId": self.recipe_id, "servings": self.servings}
        if self.display_name is not None:
            data["displayName"] = self.display_name
        return data


class Recipe:
    def __init__(self, id: str = "", name: str = "", servings: int = 1,
                 ingredients: Optional[List[RecipeIngredient]] = None,
                 sub_recipes: Optional[List[SubRecipe]] = None,
                 description: str = "", instructions: Optional[List[str]] = None,
                 prep_time: int = 0, cook_time: int = 0, tags: Optional[List[str]] = None,
                 image_url: Optional[str] = None):
        self.id = id
        self.name = name
        # non-positive values are kept; the resolver reports them as invalid servings
        self.servings = to_number(servings, "Recipe servings")
        self.ingredients = ingredients[:] if ingredients else []
        self.sub_recipes = sub_recipes[:] if sub_recipes else []
        self.description = description
        self.instructions = instructions[:] if instructions else []
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.tags = tags[:] if tags else []
        self.image_url = image_url

    def __str__(self) -> str:
        subs = f" - Sub-recipes: {', '.join(str(s) for s in self.sub_recipes)}" if self.sub_recipes else ""
        return f"{self.name} - {self.servings} servings - {len(self.ingredients)} ingredients{subs}"

    __repr__ = __str__

    @property
    def total_time(self) -> int:
        return (self.prep_time or 0) + (self.cook_time or 0)

    def sub_recipe_ids(self) -> List[str]:
        return [s.recipe_id for s in self.sub_recipes]

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Recipe(
            id=str(d.get("id", "") or ""),
            name=d.get("name", "") or "",
            servings=d.get("servings", 1),
            ingredients=[RecipeIngredient.from_dict(i) for i in d.get("ingredients", []) or []],
            sub_recipes=[SubRecipe.from_dict(s) for s in d.get("subRecipes", []) or []],
            description=d.get("description", "") or "",
            instructions=d.get("instructions", []) or [],
            prep_time=d.get("prepTime", 0) or 0,
            cook_time=d.get("cookTime", 0) or 0,
            tags=d.get("tags", []) or [],
            image_url=d.get("imageUrl"),
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "name": self.name,
            "servings": self.servings,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "subRecipes": [sub.to_dict() for sub in self.sub_recipes],
            "description": self.description,
            "instructions": self.instructions,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "tags": self.tags,
        }
        if self.image_url:
            data["imageUrl"] = self.image_url
        return data
