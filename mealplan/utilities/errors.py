"""Exceptions raised by the recipe graph and grocery list logic."""
from typing import Iterable


class RecipeGraphError(ValueError):
    """Base class for integrity problems in the sub-recipe graph."""


class CircularRecipeError(RecipeGraphError):
    """Adding a sub-recipe edge would close a cycle."""

    def __init__(self, recipe_id: str, sub_recipe_id: str):
        self.recipe_id = recipe_id
        self.sub_recipe_id = sub_recipe_id
        super().__init__(
            f"Adding sub-recipe '{sub_recipe_id}' to recipe '{recipe_id}' would create a circular reference"
        )


class RecipeCycleError(RecipeGraphError):
    """Stored recipes form a cycle (or nest too deeply) while being expanded."""

    def __init__(self, path: Iterable[str], reason: str = "cycle"):
        self.path = list(path)
        self.reason = reason
        chain = " -> ".join(self.path)
        if reason == "max_depth":
            message = f"Sub-recipe nesting exceeds the maximum depth: {chain}"
        else:
            message = f"Circular sub-recipe reference detected: {chain}"
        super().__init__(message)


class UnitConversionError(ValueError):
    """Quantity cannot be converted between units of different families."""

    def __init__(self, from_unit: str, to_unit: str):
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(f"Cannot convert from '{from_unit}' to '{to_unit}'")


class EntityNotFoundError(KeyError):
    """A stored entity with the requested id does not exist."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} '{entity_id}' not found")

    def __str__(self) -> str:
        return self.args[0]
