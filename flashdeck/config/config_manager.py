"""
User settings for FlashDeck, persisted as JSON.

Precedence: environment variable > settings file > Config default. Every
known key has a coercer; a value that does not parse or is out of range is
logged and replaced by its default when loading, and rejected by set().
"""

import json
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, Optional

from ..exceptions import ValidationError
from .languages import is_supported
from .settings import Config

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("json", "sqlite", "memory")


def _positive_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("expected a number")
    number = float(value)
    if number <= 0:
        raise ValueError("must be greater than zero")
    return number


def _storage_backend(value: Any) -> str:
    backend = str(value).strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"must be one of {', '.join(STORAGE_BACKENDS)}")
    return backend


def _language_tag(value: Any) -> str:
    if not is_supported(value):
        raise ValueError("unsupported language tag")
    return value


def _log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError("unknown logging level")
    return level


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("expected a string")
    return value


class SettingsManager:
    """
    Singleton holding the user's settings.

    Usage:
        settings = SettingsManager()
        library = FlashcardLibrary.from_settings(settings)
        settings.set("STORAGE_BACKEND", "sqlite")
    """

    _instance: Optional["SettingsManager"] = None
    _lock: Lock = Lock()

    # NOTE: the API key belongs in the environment or .env, not in the file
    DEFAULTS: Dict[str, Any] = {
        "GOOGLE_TRANSLATE_API_KEY": Config.GOOGLE_TRANSLATE_API_KEY,
        "TRANSLATE_API_URL": Config.TRANSLATE_API_URL,
        "TRANSLATE_TIMEOUT": float(Config.TRANSLATE_TIMEOUT),
        "TRANSLATE_COOLDOWN": float(Config.TRANSLATE_COOLDOWN),
        "STORAGE_BACKEND": Config.STORAGE_BACKEND,
        "STORAGE_FILE": Config.STORAGE_FILE,
        "DB_FILE": Config.DB_FILE,
        "DEFAULT_FRONT_LANG": Config.DEFAULT_FRONT_LANG,
        "DEFAULT_BACK_LANG": Config.DEFAULT_BACK_LANG,
        "DEFAULT_FRONT_COLOR": Config.DEFAULT_FRONT_COLOR,
        "DEFAULT_BACK_COLOR": Config.DEFAULT_BACK_COLOR,
        "LOG_LEVEL": Config.LOG_LEVEL,
    }

    COERCERS: Dict[str, Callable[[Any], Any]] = {
        "TRANSLATE_TIMEOUT": _positive_number,
        "TRANSLATE_COOLDOWN": _positive_number,
        "STORAGE_BACKEND": _storage_backend,
        "DEFAULT_FRONT_LANG": _language_tag,
        "DEFAULT_BACK_LANG": _language_tag,
        "LOG_LEVEL": _log_level,
    }

    def __new__(cls, settings_file: Optional[str] = None) -> "SettingsManager":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._initialized = False
                    cls._instance = instance
        return cls._instance

    def __init__(self, settings_file: Optional[str] = None) -> None:
        """
        Args:
            settings_file: Path to the settings JSON file.
                           Defaults to Config.SETTINGS_FILE.
        """
        if getattr(self, "_initialized", False):
            return

        self._settings_file = Path(settings_file or Config.SETTINGS_FILE)
        self._settings: Dict[str, Any] = dict(self.DEFAULTS)
        self._file_lock = Lock()

        self._load_settings()
        self._initialized = True

    def _coerce(self, key: str, value: Any) -> Any:
        if key not in self.DEFAULTS:
            return value
        return self.COERCERS.get(key, _text)(value)

    def _apply(self, key: str, value: Any, source: str) -> None:
        try:
            self._settings[key] = self._coerce(key, value)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring %s from %s (%r): %s", key, source, value, e)

    def _load_settings(self) -> None:
        if self._settings_file.exists():
            try:
                with open(self._settings_file, "r", encoding="utf-8") as f:
                    stored = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Could not load settings file %s: %s", self._settings_file, e)
                stored = {}
            if isinstance(stored, dict):
                for key, value in stored.items():
                    self._apply(key, value, str(self._settings_file))
            else:
                logger.warning("Settings file %s does not hold an object", self._settings_file)

        for key in self.DEFAULTS:
            env_value = os.environ.get(key)
            if env_value is not None:
                self._apply(key, env_value, "environment")

        self._save_settings()

    def _save_settings(self) -> None:
        with self._file_lock:
            try:
                self._settings_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self._settings_file, "w", encoding="utf-8") as f:
                    json.dump(self._settings, f, indent=2, ensure_ascii=False)
            except IOError as e:
                logger.warning("Could not save settings file %s: %s", self._settings_file, e)

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Validate, store and persist one setting.

        Raises:
            ValidationError: If the value is not valid for the key
        """
        try:
            self._settings[key] = self._coerce(key, value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid value for {key}: {value!r} ({e})") from e
        self._save_settings()

    def reset(self, key: str) -> None:
        """Restore one setting to its default."""
        if key in self.DEFAULTS:
            self._settings[key] = self.DEFAULTS[key]
            self._save_settings()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton. Useful for testing."""
        with cls._lock:
            cls._instance = None
