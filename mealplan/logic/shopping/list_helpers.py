"""Grocery list helpers used around generation: date ranges, naming, grouping, check-off."""
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from mealplan.domain.DateRange import DateRange
from mealplan.domain.GroceryList import GroceryItem, GroceryList
from mealplan.domain.MealPlan import MealPlan
from mealplan.utilities.config import QUICK_RANGE_DAYS
from mealplan.utilities.constants import INGREDIENT_CATEGORIES, UNITS
from mealplan.utilities.ids import generate_id

__all__ = [
    "get_quick_date_range", "generate_default_list_name", "get_most_recent_list",
    "separate_checked_items", "group_items_by_category", "get_sorted_categories",
    "count_recipe_meals_in_range", "create_manual_item",
]


def get_quick_date_range(days: int = QUICK_RANGE_DAYS, today: Optional[date] = None) -> DateRange:
    """Range covering `days` calendar days starting today (inclusive)."""
    if days < 1:
        raise ValueError(f"Quick range needs at least one day, got {days}")
    start = today or date.today()
    return DateRange(start, start + timedelta(days=days - 1))


def generate_default_list_name(start: date) -> str:
    if isinstance(start, str):
        start = date.fromisoformat(start)
    return f"Grocery List - {start.month}/{start.day}/{start.year}"


def get_most_recent_list(lists: Iterable[GroceryList]) -> Optional[GroceryList]:
    lists = list(lists)
    if not lists:
        return None
    return max(lists, key=lambda gl: gl.created_at)


def separate_checked_items(items: Iterable[GroceryItem]) -> Tuple[List[GroceryItem], List[GroceryItem]]:
    """Return (checked, unchecked) keeping the original order."""
    checked: List[GroceryItem] = []
    unchecked: List[GroceryItem] = []
    for item in items:
        (checked if item.checked else unchecked).append(item)
    return checked, unchecked


def group_items_by_category(items: Iterable[GroceryItem]) -> Dict[str, List[GroceryItem]]:
    groups: Dict[str, List[GroceryItem]] = OrderedDict()
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return groups


def get_sorted_categories(grouped: Dict[str, List[GroceryItem]]) -> List[str]:
    return sorted(grouped.keys(), key=str.lower)


def count_recipe_meals_in_range(meal_plans: Iterable[MealPlan], date_range: DateRange) -> int:
    return sum(
        1 for mp in meal_plans
        if mp.contributes_ingredients and mp.recipe_id and date_range.contains(mp.date)
    )


def create_manual_item(list_id: str, name: str, quantity: float, unit: str,
                       category: str = "Other", id_factory=generate_id) -> GroceryItem:
    """A user-entered grocery item that did not come from any meal."""
    if not name or not name.strip():
        raise ValueError("Item name is required")
    if quantity is None or quantity <= 0:
        raise ValueError(f"Quantity must be positive, got {quantity!r}")
    if unit not in UNITS:
        raise ValueError(f"Unknown unit: {unit!r}")
    if category not in INGREDIENT_CATEGORIES:
        raise ValueError(f"Unknown category: {category!r}")
    return GroceryItem(
        id=id_factory(),
        list_id=list_id,
        name=name.strip(),
        quantity=quantity,
        unit=unit,
        category=category,
        checked=False,
        meal_plan_ids=[],
    )
