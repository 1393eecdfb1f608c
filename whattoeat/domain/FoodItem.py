"""FoodItem domain entity: id, name, meal-period tags."""
from typing import Iterable, List, Optional

from whattoeat.domain.MealPeriod import MealPeriod
from whattoeat.utilities.constants import MEAL_PERIODS
from whattoeat.utilities.exceptions import InvalidTagError, StorageCorruptedError, ValidationError


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Validate tags, drop duplicates (first occurrence wins), default to every period."""
    result: List[str] = []
    for tag in tags or []:
        value = tag.value if isinstance(tag, MealPeriod) else str(tag).strip().lower()
        if value not in MEAL_PERIODS:
            raise InvalidTagError(f"Unknown meal period: {tag!r}", details={"allowed": list(MEAL_PERIODS)})
        if value not in result:
            result.append(value)
    return result or list(MEAL_PERIODS)


class FoodItem:
    __slots__ = ("_id", "_name", "_tags")

    def __init__(self, id: int, name: str, tags: Optional[Iterable[str]] = None):
        # bool is an int subclass; "5" or 1.7 from storage are not ids
        if isinstance(id, bool) or not isinstance(id, int):
            raise ValidationError(f"Food id must be an integer, got {id!r}")
        if name is not None and not isinstance(name, str):
            raise ValidationError(f"Food name must be text, got {name!r}")
        name = (name or "").strip()
        if not name:
            raise ValidationError("Food name cannot be empty")
        self._id = id
        self._name = name
        self._tags = tuple(normalize_tags(tags))

    # Items are never mutated in place
    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    def __eq__(self, other) -> bool:
        if not isinstance(other, FoodItem):
            return NotImplemented
        return (self._id, self._name, self._tags) == (other._id, other._name, other._tags)

    def __hash__(self) -> int:
        return hash((self._id, self._name, self._tags))

    def __str__(self) -> str:
        return f"#{self._id} {self._name} - Tags: {', '.join(self._tags)}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a FoodItem from a stored dictionary. Ignores unknown keys.'''
        if not isinstance(data, dict):
            raise StorageCorruptedError(f"Food entry is not an object: {data!r}")
        try:
            return FoodItem(data["id"], data["name"], data.get("tags"))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise StorageCorruptedError(f"Invalid food entry {data!r}: {e}") from e

    def to_dict(self):
        '''Converts the FoodItem to a dictionary for JSON persistence.'''
        return {"id": self._id, "name": self._name, "tags": list(self._tags)}
