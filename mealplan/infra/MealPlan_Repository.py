"""Meal plan repository (file persistence)."""
from pathlib import Path
from typing import List, Optional

from mealplan.domain.DateRange import DateRange
from mealplan.domain.MealPlan import MealPlan
from mealplan.infra.Json_Store import JsonCollection
from mealplan.infra.paths import MEAL_PLANS_FILE_NAME, data_file


class MealPlanRepository(JsonCollection[MealPlan]):
    def __init__(self, data_dir: Optional[Path] = None):
        super().__init__(data_file(MEAL_PLANS_FILE_NAME, data_dir), MealPlan.from_dict, "Meal plan")

    def get_all_in_range(self, date_range: DateRange) -> List[MealPlan]:
        """Meal plans whose date falls inside the range, ordered by date."""
        plans = [mp for mp in self.get_all() if date_range.contains(mp.date)]
        plans.sort(key=lambda mp: mp.date)
        return plans
