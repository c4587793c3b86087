from pathlib import Path
from typing import Optional

from mealplan.utilities.config import DATA_DIR

# Centralized data file names (single source of truth)
RECIPES_FILE_NAME = 'recipes.json'
INGREDIENTS_FILE_NAME = 'ingredients.json'
MEAL_PLANS_FILE_NAME = 'meal_plans.json'
GROCERY_LISTS_FILE_NAME = 'grocery_lists.json'


def data_file(file_name: str, data_dir: Optional[Path] = None) -> Path:
    return (Path(data_dir) if data_dir else DATA_DIR) / file_name


__all__ = ['DATA_DIR', 'RECIPES_FILE_NAME', 'INGREDIENTS_FILE_NAME', 'MEAL_PLANS_FILE_NAME',
           'GROCERY_LISTS_FILE_NAME', 'data_file']
