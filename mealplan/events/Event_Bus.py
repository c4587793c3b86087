"""Simple Event Bus / Observer implementation for grocery list and recipe events.

Event names used so far:
  grocery_list.generated  -> payload {"grocery_list": GroceryList, "items": [GroceryItem]}
  grocery_list.unresolved -> payload {"grocery_list": GroceryList, "unresolved": [UnresolvedReference]}
  recipe.sub_recipe_added -> payload {"recipe": Recipe, "sub_recipe": SubRecipe}

Subscribers are callables taking (event_name, payload). The application creates
one bus and passes it to the services that publish on it.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
GROCERY_LIST_GENERATED = "grocery_list.generated"
GROCERY_LIST_UNRESOLVED = "grocery_list.unresolved"
RECIPE_SUB_RECIPE_ADDED = "recipe.sub_recipe_added"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# a failing subscriber must not break the publisher
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = ['EventBus', 'GROCERY_LIST_GENERATED', 'GROCERY_LIST_UNRESOLVED', 'RECIPE_SUB_RECIPE_ADDED']
