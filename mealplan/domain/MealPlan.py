"""MealPlan domain entity: one scheduled meal slot, either a recipe or a custom entry.

`MealPlan.from_dict` dispatches on the persisted ``type`` key:
  "recipe"                                            -> RecipeMealPlan
  "dining-out" / "takeout" / "leftovers" / "skipping" / "other" -> CustomMealPlan
"""
from typing import Optional

from mealplan.domain.DateRange import to_iso_date
from mealplan.utilities.constants import CUSTOM_MEAL_PLAN_TYPES, MEAL_TYPES, RECIPE_MEAL_PLAN


class MealPlan:
    type = ""
    contributes_ingredients = False

    def __init__(self, id: str = "", date: str = "", meal_type: str = "dinner", note: Optional[str] = None):
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"Unknown meal type: {meal_type!r}")
        self.id = id
        # zero-padded so range checks can compare strings
        self.date = to_iso_date(date)
        self.meal_type = meal_type
        self.note = note

    def __str__(self) -> str:
        return f"{self.date} {self.meal_type}: {self.type}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        kind = d.get("type", RECIPE_MEAL_PLAN)
        base = {
            "id": str(d.get("id", "") or ""),
            "date": d.get("date", "") or "",
            "meal_type": d.get("mealType", "dinner") or "dinner",
            "note": d.get("note"),
        }
        if kind == RECIPE_MEAL_PLAN:
            return RecipeMealPlan(recipe_id=str(d.get("recipeId", "") or ""),
                                  servings=d.get("servings", 1), **base)
        return CustomMealPlan(kind=kind, custom_text=d.get("customText"), **base)

    def to_dict(self):
        data = {"id": self.id, "date": self.date, "mealType": self.meal_type, "type": self.type}
        if self.note is not None:
            data["note"] = self.note
        return data


class RecipeMealPlan(MealPlan):
    type = RECIPE_MEAL_PLAN
    contributes_ingredients = True

    def __init__(self, id: str = "", date: str = "", meal_type: str = "dinner",
                 recipe_id: str = "", servings: float = 1, note: Optional[str] = None):
        super().__init__(id, date, meal_type, note)
        if servings is None or servings <= 0:
            raise ValueError(f"Meal plan servings must be positive, got {servings!r}")
        self.recipe_id = recipe_id
        self.servings = servings

    def __str__(self) -> str:
        return f"{self.date} {self.meal_type}: recipe {self.recipe_id} x{self.servings}"

    __repr__ = __str__

    def to_dict(self):
        data = super().to_dict()
        data["recipeId"] = self.recipe_id
        data["servings"] = self.servings
        return data


class CustomMealPlan(MealPlan):
    contributes_ingredients = False

    def __init__(self, id: str = "", date: str = "", meal_type: str = "dinner",
                 kind: str = "other", custom_text: Optional[str] = None, note: Optional[str] = None):
        super().__init__(id, date, meal_type, note)
        if kind not in CUSTOM_MEAL_PLAN_TYPES:
            raise ValueError(f"Unknown custom meal plan type: {kind!r}")
        self.kind = kind
        self.custom_text = custom_text

    @property
    def type(self):
        return self.kind

    def __str__(self) -> str:
        text = f" ({self.custom_text})" if self.custom_text else ""
        return f"{self.date} {self.meal_type}: {self.kind}{text}"

    __repr__ = __str__

    def to_dict(self):
        data = super().to_dict()
        if self.custom_text is not None:
            data["customText"] = self.custom_text
        return data
