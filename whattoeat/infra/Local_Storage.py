"""File-backed key/value text storage (the server-side stand-in for browser localStorage)."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional

from whattoeat.utilities.exceptions import StorageCorruptedError, StorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    """Maps string keys to string values inside one JSON file.

    Every set/remove rewrites the whole file atomically. A missing file is
    an empty storage; an unreadable or malformed file raises.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in storage file %s: %s", self.path, e)
            raise StorageCorruptedError(f"Storage file is not valid JSON: {self.path}") from e
        except OSError as e:
            logger.error("Cannot read storage file %s: %s", self.path, e)
            raise StorageError(f"Cannot read storage file: {self.path}") from e
        if not isinstance(data, dict):
            raise StorageCorruptedError(f"Storage file does not hold a key/value object: {self.path}")
        return data

    def _atomic_write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".storage_", suffix=".json")
        except OSError as e:
            logger.error("Cannot prepare storage file %s: %s", self.path, e)
            raise StorageError(f"Cannot write storage file: {self.path}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        except OSError as e:
            logger.error("Cannot write storage file %s: %s", self.path, e)
            raise StorageError(f"Cannot write storage file: {self.path}") from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageCorruptedError(f"Stored value for {key!r} is not text")
        return value

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._atomic_write(data)

