"""
String-keyed key-value persistence for statistics, history and settings.
"""
import logging
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from app.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface for a simple string-keyed store."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, *keys: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and ephemeral runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, *keys: str) -> None:
        for key in keys:
            self.data.pop(key, None)


class SQLKeyValueStore(KeyValueStore):
    """Store backed by the ``storage_entries`` table, one session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            entry = db.query(StorageEntry).filter(StorageEntry.key == key).first()
            return entry.value if entry else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            entry = db.query(StorageEntry).filter(StorageEntry.key == key).first()
            if entry:
                entry.value = value
            else:
                db.add(StorageEntry(key=key, value=value))
            db.commit()
            logger.debug(f"Stored {len(value)} bytes under {key}")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, *keys: str) -> None:
        db = self.session_factory()
        try:
            db.query(StorageEntry).filter(
                StorageEntry.key.in_(keys)
            ).delete(synchronize_session=False)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
