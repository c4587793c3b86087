"""Ingredient library repository (file persistence)."""
from pathlib import Path
from typing import Iterable, List, Optional

from mealplan.domain.Ingredient import Ingredient
from mealplan.infra.Json_Store import JsonCollection
from mealplan.infra.paths import INGREDIENTS_FILE_NAME, data_file


class IngredientRepository(JsonCollection[Ingredient]):
    def __init__(self, data_dir: Optional[Path] = None):
        super().__init__(data_file(INGREDIENTS_FILE_NAME, data_dir), Ingredient.from_dict, "Ingredient")

    def add_many(self, ingredients: Iterable[Ingredient]) -> List[Ingredient]:
        """Add several library entries in one write; ids already present are skipped."""
        with self._lock:
            current = self.get_all()
            known = {i.id for i in current}
            added = [i for i in ingredients if i.id not in known]
            if added:
                self.replace_all(current + added)
            return added
