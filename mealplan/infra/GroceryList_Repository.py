"""Grocery list repository: lists and their items stored together in one JSON document.

Layout of grocery_lists.json:
    { "lists": [ {GroceryList}, ... ], "items": [ {GroceryItem}, ... ] }

Keeping both collections in one file lets persist_grocery_list write a list and
all of its items with a single atomic replace.
"""
import logging
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional

from mealplan.domain.GroceryList import GroceryItem, GroceryList
from mealplan.infra.Json_Store import atomic_write_json, parse_entries, read_json
from mealplan.infra.paths import GROCERY_LISTS_FILE_NAME, data_file
from mealplan.utilities.errors import EntityNotFoundError

logger = logging.getLogger(__name__)

_UPDATABLE_ITEM_FIELDS = {"checked", "quantity", "notes", "name", "unit", "category"}


class GroceryListRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = data_file(GROCERY_LISTS_FILE_NAME, data_dir)
        self._lock = RLock()

    # --- raw document -----------------------------------------------------
    def _load(self) -> Dict[str, List[dict]]:
        doc = read_json(self.path, {})
        if not isinstance(doc, dict):
            logger.error(f"Expected an object in {self.path}, found {type(doc).__name__}")
            doc = {}
        return {"lists": list(doc.get("lists") or []), "items": list(doc.get("items") or [])}

    def _save(self, doc: Dict[str, List[dict]]) -> None:
        atomic_write_json(self.path, doc)

    # --- lists ------------------------------------------------------------
    def get_all(self) -> List[GroceryList]:
        with self._lock:
            return parse_entries(self._load()["lists"], GroceryList.from_dict, "Grocery list", self.path.name)

    def get(self, list_id: str) -> Optional[GroceryList]:
        for gl in self.get_all():
            if gl.id == list_id:
                return gl
        return None

    def persist_grocery_list(self, grocery_list: GroceryList, items: List[GroceryItem]) -> None:
        """Store a freshly generated list together with its items in one write."""
        with self._lock:
            doc = self._load()
            if any(d.get("id") == grocery_list.id for d in doc["lists"]):
                raise ValueError(f"Grocery list '{grocery_list.id}' already exists")
            doc["lists"].append(grocery_list.to_dict())
            doc["items"].extend(item.to_dict() for item in items)
            self._save(doc)
        logger.info(f"Stored grocery list {grocery_list.id} with {len(items)} items")

    def update_list(self, grocery_list: GroceryList) -> GroceryList:
        with self._lock:
            doc = self._load()
            for idx, d in enumerate(doc["lists"]):
                if d.get("id") == grocery_list.id:
                    grocery_list.updated_at = datetime.now().isoformat()
                    doc["lists"][idx] = grocery_list.to_dict()
                    self._save(doc)
                    return grocery_list
        raise EntityNotFoundError("Grocery list", grocery_list.id)

    def delete_list(self, list_id: str) -> bool:
        """Delete a list and all of its items."""
        with self._lock:
            doc = self._load()
            lists = [d for d in doc["lists"] if d.get("id") != list_id]
            if len(lists) == len(doc["lists"]):
                return False
            doc["lists"] = lists
            doc["items"] = [d for d in doc["items"] if d.get("listId") != list_id]
            self._save(doc)
            return True

    def replace_all_lists(self, lists: List[GroceryList]) -> None:
        with self._lock:
            doc = self._load()
            doc["lists"] = [gl.to_dict() for gl in lists]
            self._save(doc)

    # --- items ------------------------------------------------------------
    def get_all_items(self) -> List[GroceryItem]:
        with self._lock:
            return parse_entries(self._load()["items"], GroceryItem.from_dict, "Grocery item", self.path.name)

    def get_items(self, list_id: str) -> List[GroceryItem]:
        return [item for item in self.get_all_items() if item.list_id == list_id]

    def add_item(self, item: GroceryItem) -> GroceryItem:
        with self._lock:
            doc = self._load()
            if not any(d.get("id") == item.list_id for d in doc["lists"]):
                raise EntityNotFoundError("Grocery list", item.list_id)
            doc["items"].append(item.to_dict())
            self._save(doc)
        return item

    def update_item(self, item_id: str, **updates: Any) -> GroceryItem:
        unknown = set(updates) - _UPDATABLE_ITEM_FIELDS
        if unknown:
            raise ValueError(f"Cannot update grocery item fields: {', '.join(sorted(unknown))}")
        with self._lock:
            doc = self._load()
            for idx, d in enumerate(doc["items"]):
                if d.get("id") == item_id:
                    item = GroceryItem.from_dict(d)
                    for key, value in updates.items():
                        setattr(item, key, value)
                    doc["items"][idx] = item.to_dict()
                    self._save(doc)
                    return item
        raise EntityNotFoundError("Grocery item", item_id)

    def remove_item(self, item_id: str) -> bool:
        with self._lock:
            doc = self._load()
            items = [d for d in doc["items"] if d.get("id") != item_id]
            if len(items) == len(doc["items"]):
                return False
            doc["items"] = items
            self._save(doc)
            return True

    def replace_all_items(self, items: List[GroceryItem]) -> None:
        with self._lock:
            doc = self._load()
            doc["items"] = [item.to_dict() for item in items]
            self._save(doc)
