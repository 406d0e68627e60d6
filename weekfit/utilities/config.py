"""Configuration management for the WeekFit application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Hosted backend (database + auth)
SUPABASE_URL: Final[str] = os.getenv('SUPABASE_URL', '')
SUPABASE_ANON_KEY: Final[str] = os.getenv('SUPABASE_ANON_KEY', '')

# AI gateway (OpenAI-compatible chat completions)
AI_API_KEY: Final[str] = os.getenv('AI_API_KEY') or os.getenv('LOVABLE_API_KEY', '')
AI_BASE_URL: Final[str] = os.getenv('AI_BASE_URL', 'https://ai.gateway.lovable.dev/v1')
AI_MODEL: Final[str] = os.getenv('AI_MODEL', 'google/gemini-2.5-flash')

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('WEEKFIT_DATA_DIR', str(BASE_DIR / 'data')))
LOCAL_STORE_FILE: Final[Path] = Path(os.getenv('LOCAL_STORE_FILE', str(DATA_DIR / 'local_store.json')))
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
