"""Configuration management for the Kitchen analytics service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Inventory API (stock + waste records)
INVENTORY_API_URL: Final[str] = os.getenv('INVENTORY_API_URL', 'http://localhost:8080').rstrip('/')
INVENTORY_API_TOKEN: Final[str] = os.getenv('INVENTORY_API_TOKEN', '')
INVENTORY_API_TIMEOUT: Final[float] = float(os.getenv('INVENTORY_API_TIMEOUT', '10'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Report Settings
MONTH_LOCALE: Final[str] = os.getenv('MONTH_LOCALE', 'es').lower()
WASTE_WINDOW_DAYS: Final[int] = int(os.getenv('WASTE_WINDOW_DAYS', '30'))
