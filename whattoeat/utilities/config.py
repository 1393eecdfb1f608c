"""Configuration management for the What-To-Eat application."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
BASE_DIR: Final[Path] = Path(__file__).parent.parent
_env_path = BASE_DIR.parent / '.env'
if _env_path.exists():
    load_dotenv(_env_path)


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, '').strip()
    return int(raw) if raw else None


# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Randomness (unset -> seeded from OS entropy once per process)
RANDOM_SEED: Final[Optional[int]] = _optional_int('RANDOM_SEED')

# Lottery timing
LOTTERY_MAX_TICKS: Final[int] = int(os.getenv('LOTTERY_MAX_TICKS', '20'))
LOTTERY_TICK_MS: Final[int] = int(os.getenv('LOTTERY_TICK_MS', '100'))
LOTTERY_SETTLE_MS: Final[int] = int(os.getenv('LOTTERY_SETTLE_MS', '500'))
LOTTERY_COOLDOWN_MS: Final[int] = int(os.getenv('LOTTERY_COOLDOWN_MS', '2000'))
CLOCK_REFRESH_MS: Final[int] = int(os.getenv('CLOCK_REFRESH_MS', '1000'))

# File Paths
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
FOODS_FILE: Final[Path] = Path(os.getenv('FOODS_FILE', str(DATA_DIR / 'storage.json')))
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
