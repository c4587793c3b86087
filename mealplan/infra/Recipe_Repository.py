"""Recipe repository (file persistence)."""
from pathlib import Path
from typing import Optional

from mealplan.domain.Recipe import Recipe
from mealplan.infra.Json_Store import JsonCollection
from mealplan.infra.paths import RECIPES_FILE_NAME, data_file


class RecipeRepository(JsonCollection[Recipe]):
    def __init__(self, data_dir: Optional[Path] = None):
        super().__init__(data_file(RECIPES_FILE_NAME, data_dir), Recipe.from_dict, "Recipe")
