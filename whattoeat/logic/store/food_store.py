"""Food store: owns the food list, the current filter, persistence, filtering and random picks."""
import logging
import random
import threading
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from whattoeat.domain.FoodItem import FoodItem, normalize_tags
from whattoeat.domain.MealPeriod import MealPeriod, is_filter_value
from whattoeat.events.Event_Bus import EventBus
from whattoeat.events.event_helpers import publish_food_added, publish_food_deleted
from whattoeat.infra.Food_Repository import FoodRepository
from whattoeat.utilities.constants import FILTER_ALL, FILTER_VALUES, SEED_FOODS
from whattoeat.utilities.exceptions import InvalidTagError

logger = logging.getLogger(__name__)


def seed_foods() -> List[FoodItem]:
    return [FoodItem.from_dict(entry) for entry in SEED_FOODS]


def _normalize_filter(value):
    if isinstance(value, MealPeriod):
        return value.value
    if isinstance(value, str):
        return value.strip().lower()
    return value


class FoodStore:
    """Single owner of the in-memory food list.

    Created once at startup and handed to the presenter. Every mutation is
    persisted through the repository before returning; storage errors
    propagate to the caller.
    """

    def __init__(self, repository: FoodRepository,
                 clock: Optional[Callable[[], datetime]] = None,
                 rng: Optional[random.Random] = None,
                 event_bus: Optional[EventBus] = None):
        self.repository = repository
        self._clock = clock or datetime.now
        self._rng = rng or random.Random()
        self._event_bus = event_bus
        self._current_filter = FILTER_ALL
        self._lock = threading.RLock()
        self._foods: List[FoodItem] = self.load()
        self._last_id = max((f.id for f in self._foods), default=0)

    # --- Persistence -------------------------------------------------------
    def load(self) -> List[FoodItem]:
        """Stored foods if any, otherwise the seed list."""
        stored = self.repository.read_foods()
        if stored is None:
            logger.info("No stored foods, using %d seed items", len(SEED_FOODS))
            return seed_foods()
        return stored

    def _save(self):
        self.repository.write_foods(self._foods)

    # --- Reads ---------------------------------------------------------------
    @property
    def foods(self) -> List[FoodItem]:
        with self._lock:
            return list(self._foods)

    def __len__(self) -> int:
        return len(self._foods)

    def get(self, food_id: int) -> Optional[FoodItem]:
        for food in self._foods:
            if food.id == food_id:
                return food
        return None

    @property
    def current_filter(self) -> str:
        return self._current_filter

    @current_filter.setter
    def current_filter(self, value: str):
        value = _normalize_filter(value)
        if not is_filter_value(value):
            raise InvalidTagError(f"Unknown filter: {value!r}", details={"allowed": list(FILTER_VALUES)})
        self._current_filter = value

    def filter_by_tag(self, tag: str) -> List[FoodItem]:
        tag = _normalize_filter(tag)
        if tag == FILTER_ALL:
            return list(self._foods)
        if not is_filter_value(tag):
            raise InvalidTagError(f"Unknown filter: {tag!r}", details={"allowed": list(FILTER_VALUES)})
        return [food for food in self._foods if food.has_tag(tag)]

    def current_items(self) -> List[FoodItem]:
        """Items matching the current filter (what the list view shows)."""
        return self.filter_by_tag(self._current_filter)

    def now(self) -> datetime:
        return self._clock()

    def current_period(self) -> MealPeriod:
        return MealPeriod.for_hour(self._clock().hour)

    def items_for_current_period(self) -> List[FoodItem]:
        return self.filter_by_tag(self.current_period())

    def pick_random(self, items: Optional[Sequence[FoodItem]]) -> Optional[FoodItem]:
        if not items:
            return None
        return self._rng.choice(list(items))

    # --- Mutations -----------------------------------------------------------
    # Sync FastAPI endpoints run in a threadpool; _lock serializes id
    # allocation, list changes and the persist that follows them.
    def _next_id(self) -> int:
        self._last_id = max(self._last_id, max((f.id for f in self._foods), default=0)) + 1
        return self._last_id

    def add_food(self, name: Optional[str], tags: Optional[Iterable[str]] = None) -> Optional[FoodItem]:
        """Append a new item and return it, or None when the trimmed name is empty."""
        name = (name or "").strip()
        if not name:
            logger.debug("Rejected food with empty name")
            return None
        tag_list = normalize_tags(tags)
        with self._lock:
            food = FoodItem(self._next_id(), name, tag_list)
            self._foods = self._foods + [food]
            self._save()
            count = len(self._foods)
        logger.info("Added food %s", food)
        publish_food_added(self._event_bus, food, count)
        return food

    def add(self, name: Optional[str], tags: Optional[Iterable[str]] = None) -> bool:
        """Append a new item. Returns False when the trimmed name is empty."""
        return self.add_food(name, tags) is not None

    def delete(self, food_id: int) -> None:
        """Remove the item with this id if present; persist either way."""
        with self._lock:
            before = len(self._foods)
            self._foods = [food for food in self._foods if food.id != food_id]
            count = len(self._foods)
            self._save()
        removed = count < before
        if removed:
            logger.info("Deleted food #%s", food_id)
        else:
            logger.debug("Delete of unknown food id %s ignored", food_id)
        publish_food_deleted(self._event_bus, food_id, removed, count)
