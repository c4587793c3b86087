"""Configuration management for the meal planning core."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Recipe graph limits
MAX_RECIPE_NESTING_DEPTH: Final[int] = int(os.getenv('MAX_RECIPE_NESTING_DEPTH', '2'))
MAX_RESOLVE_DEPTH: Final[int] = int(os.getenv('MAX_RESOLVE_DEPTH', '32'))

# Grocery list generation
UNIT_CONVERSION_POLICY: Final[str] = os.getenv('UNIT_CONVERSION_POLICY', 'passthrough').lower()
FALLBACK_CATEGORY: Final[str] = os.getenv('FALLBACK_CATEGORY', 'Other')
QUICK_RANGE_DAYS: Final[int] = int(os.getenv('QUICK_RANGE_DAYS', '7'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALPLAN_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
