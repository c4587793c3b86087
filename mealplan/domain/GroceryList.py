"""GroceryList aggregate header and the GroceryItem lines produced for it."""
from datetime import datetime
from typing import List, Optional

from mealplan.domain.DateRange import DateRange
from mealplan.domain.Recipe import to_number


class GroceryItem:
    def __init__(self, id: str = "", list_id: str = "", name: str = "", quantity: float = 0,
                 unit: str = "piece", category: str = "Other", ingredient_id: Optional[str] = None,
                 checked: bool = False, meal_plan_ids: Optional[List[str]] = None,
                 notes: Optional[str] = None, created_at: Optional[str] = None):
        self.id = id
        self.list_id = list_id
        self.ingredient_id = ingredient_id
        self.name = name
        self.quantity = to_number(quantity, "Grocery item quantity")
        self.unit = unit
        self.category = category
        self.checked = checked
        self.meal_plan_ids = meal_plan_ids[:] if meal_plan_ids else []
        self.notes = notes
        self.created_at = created_at or datetime.now().isoformat()

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.name} - {self.quantity} {self.unit} ({self.category})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return GroceryItem(
            id=str(d.get("id", "") or ""),
            list_id=str(d.get("listId", "") or ""),
            name=d.get("name", "") or "",
            quantity=d.get("quantity", 0) or 0,
            unit=d.get("unit", "piece") or "piece",
            category=d.get("category", "Other") or "Other",
            ingredient_id=d.get("ingredientId") or None,
            checked=bool(d.get("checked", False)),
            meal_plan_ids=d.get("mealPlanIds", []) or [],
            notes=d.get("notes"),
            created_at=d.get("createdAt"),
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "listId": self.list_id,
            "ingredientId": self.ingredient_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "checked": self.checked,
            "mealPlanIds": self.meal_plan_ids,
            "createdAt": self.created_at,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data


class GroceryList:
    def __init__(self, id: str = "", name: str = "", date_range: Optional[DateRange] = None,
                 created_at: Optional[str] = None, updated_at: Optional[str] = None,
                 note: Optional[str] = None):
        if date_range is None:
            raise ValueError("Grocery list requires a date range")
        self.id = id
        self.name = name
        self.date_range = date_range
        self.created_at = created_at or datetime.now().isoformat()
        self.updated_at = updated_at or self.created_at
        self.note = note

    def __str__(self) -> str:
        return f"{self.name} ({self.date_range})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return GroceryList(
            id=str(d.get("id", "") or ""),
            name=d.get("name", "") or "",
            date_range=DateRange.from_dict(d.get("dateRange") or {}),
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
            note=d.get("note"),
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "name": self.name,
            "dateRange": self.date_range.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.note is not None:
            data["note"] = self.note
        return data
