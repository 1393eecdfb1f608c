from pathlib import Path

from whattoeat.utilities.config import DATA_DIR as _DATA_DIR, FOODS_FILE as _FOODS_FILE, TEMPLATES_DIR as _TEMPLATES_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR: Path = _DATA_DIR.resolve()
FOODS_FILE: Path = _FOODS_FILE.resolve()
TEMPLATES_DIR: Path = _TEMPLATES_DIR.resolve()

__all__ = ['DATA_DIR', 'FOODS_FILE', 'TEMPLATES_DIR']
