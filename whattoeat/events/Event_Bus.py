"""Simple Event Bus / Observer implementation for store and lottery notifications.

Event names:
  food.added       -> payload {"food": FoodItem, "count": int}
  food.deleted     -> payload {"id": int, "removed": bool, "count": int}
  lottery.started  -> payload {"eligible": int, "max_ticks": int}
  lottery.frame    -> payload {"tick": int, "food": FoodItem, "icon": str}
  lottery.result   -> payload {"food": FoodItem, "icon": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
FOOD_ADDED = "food.added"
FOOD_DELETED = "food.deleted"
LOTTERY_STARTED = "lottery.started"
LOTTERY_FRAME = "lottery.frame"
LOTTERY_RESULT = "lottery.result"


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

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:  # a failing observer must not break the store operation
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = [
	'EventBus', 'FOOD_ADDED', 'FOOD_DELETED',
	'LOTTERY_STARTED', 'LOTTERY_FRAME', 'LOTTERY_RESULT',
]
