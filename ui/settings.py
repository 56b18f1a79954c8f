"""Persisted table preferences (visible columns and sorting per table)."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

APP_STORAGE_KEY = "Company_Database_app"

TABLE_IDS = (
    "projects",
    "companies",
    "people",
    "contacts",
    "users",
    "collaborations-companies",
    "collaborations-projects",
    "collaborations-users",
)


@dataclass
class TablePreferences:
    visible_columns: list[str] = field(default_factory=list)
    sort_field: str | None = None
    sort_direction: str = "asc"

    def to_dict(self) -> dict:
        return {
            "visibleColumns": list(self.visible_columns),
            "sortField": self.sort_field,
            "sortDirection": self.sort_direction,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TablePreferences":
        return cls(
            visible_columns=list(data.get("visibleColumns") or []),
            sort_field=data.get("sortField"),
            sort_direction=data.get("sortDirection") or "asc",
        )


SORT_DIRECTIONS = ("asc", "desc")


def _valid_field(key: str, value: Any) -> bool:
    if key == "visibleColumns":
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if key == "sortField":
        return value is None or isinstance(value, str)
    if key == "sortDirection":
        return value in SORT_DIRECTIONS
    return False


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage, mostly for tests."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage:
    """String values kept in a single JSON file on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
        )

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class TablePreferencesRepository:
    """Reads and writes preferences of every table under one root key.

    Without a storage backend every read returns the defaults and writes are
    dropped. Broken stored data never raises; it is logged and ignored.
    """

    def __init__(self, storage: KeyValueStorage | None) -> None:
        self._storage = storage

    @property
    def available(self) -> bool:
        return self._storage is not None

    def _load_all(self) -> dict[str, Any]:
        if self._storage is None:
            return {}
        try:
            raw = self._storage.get_item(APP_STORAGE_KEY)
            data = json.loads(raw) if raw else {}
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to read table preferences: %s", e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Stored table preferences are not an object, using defaults")
            return {}
        return data

    def _save_all(self, data: dict[str, Any]) -> None:
        if self._storage is None:
            return
        try:
            self._storage.set_item(APP_STORAGE_KEY, json.dumps(data, ensure_ascii=False))
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to save table preferences: %s", e)

    def get(self, table_id: str, defaults: TablePreferences) -> TablePreferences:
        stored = self._load_all().get(table_id)
        if not isinstance(stored, dict):
            return copy.deepcopy(defaults)
        valid = {key: value for key, value in stored.items() if _valid_field(key, value)}
        if len(valid) != len(stored):
            logger.warning(
                "Ignoring invalid stored preferences for %s: %s",
                table_id,
                sorted(set(stored) - set(valid)),
            )
        merged = {**defaults.to_dict(), **valid}
        return TablePreferences.from_dict(merged)

    def set(self, table_id: str, preferences: TablePreferences) -> None:
        data = self._load_all()
        data[table_id] = preferences.to_dict()
        self._save_all(data)

    def clear(self, table_id: str) -> None:
        data = self._load_all()
        if data.pop(table_id, None) is not None:
            self._save_all(data)

    def clear_all(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.remove_item(APP_STORAGE_KEY)
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to clear table preferences: %s", e)
