"""
Persisted user settings.
"""
import json
import logging
import threading

from pydantic import ValidationError

from app.core.game_config import SETTINGS_KEY
from app.schemas.settings import GameSettings
from app.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


class SettingsStore:
    """Loads, updates and saves settings through a key-value store."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.Lock()
        self._settings = self.load()

    @property
    def settings(self) -> GameSettings:
        return self._settings.model_copy()

    def load(self) -> GameSettings:
        """Load settings, filling fields missing from older payloads with defaults."""
        try:
            payload = self.store.get(SETTINGS_KEY)
            if payload:
                merged = {**GameSettings().model_dump(), **json.loads(payload)}
                return GameSettings.model_validate(merged)
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning(f"Stored settings are invalid, using defaults: {e}")
        except Exception as e:
            logger.error(f"Failed to load settings: {e}")
        return GameSettings()

    def update(self, **changes) -> GameSettings:
        """Apply changes, ignoring None values, and save."""
        changes = {key: value for key, value in changes.items() if value is not None}
        with self._lock:
            self._settings = GameSettings.model_validate({**self._settings.model_dump(), **changes})
            logger.info(f"Settings updated: {sorted(changes)}")
            self._save()
            return self.settings

    def reset(self) -> GameSettings:
        with self._lock:
            self._settings = GameSettings()
            logger.info("Settings reset to defaults")
            self._save()
            return self.settings

    def _save(self) -> None:
        try:
            self.store.set(SETTINGS_KEY, self._settings.model_dump_json())
        except Exception as e:
            logger.error(f"Failed to save settings: {e}")
