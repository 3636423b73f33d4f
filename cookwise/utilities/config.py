"""Configuration management for the CookWise kitchen backend."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Household used when a request carries no X-Household-Id header
DEFAULT_HOUSEHOLD_ID: Final[str] = os.getenv('DEFAULT_HOUSEHOLD_ID', 'home')

# Planning / pantry settings
DEFAULT_SERVINGS: Final[int] = int(os.getenv('DEFAULT_SERVINGS', '4'))
DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('DAYS_BEFORE_EXPIRY', '5'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('COOKWISE_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
