"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)

from .colors import Colors


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


@dataclass
class Config:
    """Application-wide configuration."""

    # Google Cloud Translation v2
    # Store the key in an environment variable or .env file: GOOGLE_TRANSLATE_API_KEY
    GOOGLE_TRANSLATE_API_KEY: str = os.environ.get("GOOGLE_TRANSLATE_API_KEY", "")
    TRANSLATE_API_URL: str = os.environ.get(
        "TRANSLATE_API_URL", "https://translation.googleapis.com/language/translate/v2"
    )
    TRANSLATE_TIMEOUT: int = _env_int("TRANSLATE_TIMEOUT", 10)
    TRANSLATE_COOLDOWN: float = _env_float("TRANSLATE_COOLDOWN", 5.0)
    MAX_TRANSLATE_CHARS: int = 100

    MAX_FOLDER_NAME_LENGTH: int = 21

    # Card defaults
    DEFAULT_FRONT_LANG: str = "en-US"
    DEFAULT_BACK_LANG: str = "tr-TR"
    DEFAULT_FRONT_COLOR: str = Colors.WHITE
    DEFAULT_BACK_COLOR: str = Colors.SECONDARY

    # Storage: json | sqlite | memory
    STORAGE_BACKEND: str = os.environ.get("STORAGE_BACKEND", "json")

    # BASE_DIR is the project root (parent of flashdeck/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()
    DATA_DIR: str = os.environ.get("FLASHDECK_DATA_DIR", str(BASE_DIR / "data"))
    STORAGE_FILE: str = str(Path(DATA_DIR) / "flashdeck.json")
    DB_FILE: str = str(Path(DATA_DIR) / "flashdeck.db")
    SETTINGS_FILE: str = str(Path(DATA_DIR) / "settings.json")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.environ.get("LOG_FILE", "")
