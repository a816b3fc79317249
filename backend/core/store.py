"""Flat key/value persistence: one JSON collection per key."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

from backend.core.app_logging import get_logger

WORKERS_KEY = "workers"
MATERIALS_KEY = "materials"
PROJECTS_KEY = "projects"
READ_NOTIFICATIONS_KEY = "readNotifications"

logger = get_logger(__name__)


def _base_root() -> Path:
    env_root = os.getenv("SITETRACK_DATA_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "data"


class KeyValueStore(Protocol):
    """Persistence contract: raw serialized text per key."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class JsonFileStore:
    """Keeps each key in ``<root>/<key>.json``."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = Path(root) if root is not None else _base_root()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        return self._root / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        target = self._path(key)
        staging = target.with_suffix(".json.tmp")
        staging.write_text(value, encoding="utf-8")
        staging.replace(target)


class InMemoryStore:
    """Simple in-memory store for fast iteration and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value


def load_collection(store: KeyValueStore, key: str) -> list[Any] | None:
    """Return the stored sequence for ``key``, or ``None`` when absent or unreadable."""

    try:
        raw = store.read(key)
        if raw is None:
            return None
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("store_key_unparseable", key=key)
        return None
    if not isinstance(data, list):
        logger.warning("store_key_not_a_list", key=key, found=type(data).__name__)
        return None
    return data


def save_collection(store: KeyValueStore, key: str, items: list[Any]) -> None:
    store.write(key, json.dumps(items, ensure_ascii=False))
