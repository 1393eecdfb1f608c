"""Food list persistence: (de)serialization of the versioned `foods` record."""
import json
import logging
from typing import List, Optional

from whattoeat.domain.FoodItem import FoodItem
from whattoeat.infra.Local_Storage import LocalStorage
from whattoeat.utilities.constants import SCHEMA_VERSION, STORAGE_KEY
from whattoeat.utilities.exceptions import StorageCorruptedError, UnsupportedSchemaError

logger = logging.getLogger(__name__)


def decode_foods(text: str) -> List[FoodItem]:
    """Parse a stored record.

    Accepts `{"version": 1, "foods": [...]}` and the legacy unversioned
    bare array. Anything else raises.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageCorruptedError(f"Stored '{STORAGE_KEY}' record is not valid JSON: {e}") from e

    if isinstance(data, list):
        logger.info("Loading legacy unversioned '%s' record (%d entries)", STORAGE_KEY, len(data))
        entries = data
    elif isinstance(data, dict):
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise UnsupportedSchemaError(
                f"Unsupported '{STORAGE_KEY}' schema version: {version!r}",
                details={"supported": SCHEMA_VERSION},
            )
        entries = data.get("foods")
        if not isinstance(entries, list):
            raise StorageCorruptedError(f"Stored '{STORAGE_KEY}' record has no food list")
    else:
        raise StorageCorruptedError(f"Stored '{STORAGE_KEY}' record has unexpected type {type(data).__name__}")

    foods = [FoodItem.from_dict(entry) for entry in entries]
    ids = [f.id for f in foods]
    if len(ids) != len(set(ids)):
        raise StorageCorruptedError(f"Stored '{STORAGE_KEY}' record contains duplicate ids")
    return foods


def encode_foods(foods: List[FoodItem]) -> str:
    return json.dumps(
        {"version": SCHEMA_VERSION, "foods": [f.to_dict() for f in foods]},
        ensure_ascii=False,
    )


class FoodRepository:
    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def read_foods(self) -> Optional[List[FoodItem]]:
        """Return the stored list, or None when nothing has been stored yet."""
        text = self.storage.get_item(self.key)
        if not text:
            return None
        return decode_foods(text)

    def write_foods(self, foods: List[FoodItem]) -> None:
        self.storage.set_item(self.key, encode_foods(foods))
