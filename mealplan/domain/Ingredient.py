"""Ingredient domain entity: library entry with id, name, grocery category and canonical unit."""
from datetime import datetime
from typing import Optional

from mealplan.utilities.constants import INGREDIENT_CATEGORIES


class Ingredient:
    def __init__(self, id: str = "", name: str = "", category: str = "Other",
                 unit: Optional[str] = None, created_at: Optional[str] = None,
                 updated_at: Optional[str] = None):
        self.id = id
        self.name = name
        self.category = category if category in INGREDIENT_CATEGORIES else "Other"
        self.unit = unit
        now = datetime.now().isoformat()
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at

    def __str__(self) -> str:
        parts = [f"{self.name} ({self.category})"]
        if self.unit:
            parts.append(f"Unit: {self.unit}")
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.id, self.name, self.category, self.unit) == (other.id, other.name, other.category, other.unit)

    def __hash__(self) -> int:
        return hash(self.id)

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            id=str(d.get("id", "")),
            name=d.get("name", "") or "",
            category=d.get("category", "Other") or "Other",
            unit=d.get("unit") or None,
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        '''Converts the Ingredient object to a dictionary for JSON persistence.'''
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.unit:
            data["unit"] = self.unit
        return data
