"""Persistent key/value collaborators and the saved-settings blob."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from seo_keywords.database import get_session
from seo_keywords.models.storage import StorageItem

logger = logging.getLogger(__name__)

SETTINGS_STORAGE_KEY = "seo-tool-settings"


class StorageError(Exception):
    """A key/value store could not read or write a value."""


class KeyValueStore(ABC):
    """String-keyed store with get/set/remove semantics."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for ephemeral runs."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SQLKeyValueStore(KeyValueStore):
    """Store rows in the ``storage_items`` table via the shared session factory.

    Call :func:`seo_keywords.database.init_db` before first use.
    """

    def get(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                item = session.get(StorageItem, key)
                return item.value if item is not None else None
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to read {key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with get_session() as session:
                item = session.get(StorageItem, key)
                if item is None:
                    session.add(StorageItem(key=key, value=value))
                else:
                    item.value = value
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to write {key!r}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            with get_session() as session:
                item = session.get(StorageItem, key)
                if item is not None:
                    session.delete(item)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to remove {key!r}: {exc}") from exc


class SettingsStore:
    """Load and save the settings blob (currently just the API key).

    Read and write failures are logged and reported through return
    values; nothing here raises.
    """

    def __init__(self, kv_store: KeyValueStore, storage_key: str = SETTINGS_STORAGE_KEY):
        self._kv = kv_store
        self._key = storage_key

    def load(self) -> dict[str, Any]:
        try:
            raw = self._kv.get(self._key)
        except StorageError as exc:
            logger.warning("Failed to load settings: %s", exc)
            return {}
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Stored settings are not valid JSON: %s", exc)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, settings: dict[str, Any]) -> bool:
        try:
            self._kv.set(self._key, json.dumps(settings))
        except StorageError as exc:
            logger.warning("Failed to save settings: %s", exc)
            return False
        return True

    def get_api_key(self) -> str:
        return str(self.load().get("apiKey", "") or "")

    def set_api_key(self, api_key: str) -> bool:
        settings = self.load()
        settings["apiKey"] = api_key.strip()
        return self.save(settings)

    def clear(self) -> bool:
        try:
            self._kv.remove(self._key)
        except StorageError as exc:
            logger.warning("Failed to clear settings: %s", exc)
            return False
        return True
