"""Entity repositories backed by the flat key/value store.

Each repository loads its whole collection once and writes it back in full
after every mutation.
"""
from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from backend.core.app_logging import get_logger
from backend.core.defaults import seed_materials
from backend.core.schema import MaterialRecord, ProjectRecord, WorkerRecord
from backend.core.store import (
    MATERIALS_KEY,
    PROJECTS_KEY,
    READ_NOTIFICATIONS_KEY,
    WORKERS_KEY,
    KeyValueStore,
    load_collection,
    save_collection,
)
from backend.domain import Material, Project, Worker

logger = get_logger(__name__)

T = TypeVar("T")


class _CollectionRepository(Generic[T]):
    key: ClassVar[str]
    record_type: ClassVar[type[BaseModel]]

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._items: list[T] = self._load()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _load(self) -> list[T]:
        rows = load_collection(self._store, self.key)
        if rows is None:
            return self._default()
        items: list[T] = []
        for position, row in enumerate(rows):
            try:
                record = self.record_type.model_validate(row)
            except ValidationError as exc:
                logger.warning("store_entry_skipped", key=self.key, position=position, errors=exc.error_count())
                continue
            items.append(record.to_domain())  # type: ignore[attr-defined]
        return items

    def _default(self) -> list[T]:
        return []

    def _serialise(self, item: T) -> dict[str, Any]:
        record = self.record_type.from_domain(item)  # type: ignore[attr-defined]
        return record.model_dump(mode="json", by_alias=True)

    # ------------------------------------------------------------------
    # collection access
    # ------------------------------------------------------------------
    def all(self) -> list[T]:
        """Return the live collection; callers must ``save`` after mutating it."""

        return self._items

    def save(self) -> None:
        save_collection(self._store, self.key, [self._serialise(item) for item in self._items])

    def __len__(self) -> int:
        return len(self._items)


class WorkerRepository(_CollectionRepository[Worker]):
    key = WORKERS_KEY
    record_type = WorkerRecord

    def get(self, worker_id: int) -> Worker:
        for worker in self._items:
            if worker.id == worker_id:
                return worker
        raise KeyError(worker_id)

    def add(self, worker: Worker) -> None:
        self._items.append(worker)
        self.save()

    def remove(self, worker_id: int) -> Worker:
        worker = self.get(worker_id)
        self._items.remove(worker)
        self.save()
        return worker

    def assigned_to(self, project_name: str) -> list[Worker]:
        return [worker for worker in self._items if worker.project == project_name and worker.status == "assigned"]


class ProjectRepository(_CollectionRepository[Project]):
    key = PROJECTS_KEY
    record_type = ProjectRecord

    def get(self, project_id: int) -> Project:
        for project in self._items:
            if project.id == project_id:
                return project
        raise KeyError(project_id)

    def add(self, project: Project) -> None:
        self._items.append(project)
        self.save()

    def remove(self, project_id: int) -> Project:
        project = self.get(project_id)
        self._items.remove(project)
        self.save()
        return project

    def names(self) -> list[str]:
        return [project.name for project in self._items]


class MaterialRepository(_CollectionRepository[Material]):
    key = MATERIALS_KEY
    record_type = MaterialRecord

    def _default(self) -> list[Material]:
        materials = seed_materials()
        save_collection(self._store, self.key, [self._serialise(item) for item in materials])
        logger.info("materials_seeded", count=len(materials))
        return materials

    def get(self, position: int) -> Material:
        if position < 0 or position >= len(self._items):
            raise IndexError(position)
        return self._items[position]

    def add(self, material: Material) -> int:
        self._items.append(material)
        self.save()
        return len(self._items) - 1


class ReadLedger:
    """Persisted set of acknowledged notification ids, kept in insertion order."""

    key = READ_NOTIFICATIONS_KEY

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        rows = load_collection(store, self.key) or []
        self._ids: list[int] = []
        for value in rows:
            if isinstance(value, int) and not isinstance(value, bool) and value not in self._ids:
                self._ids.append(value)

    def ids(self) -> list[int]:
        return list(self._ids)

    def __contains__(self, notification_id: object) -> bool:
        return notification_id in self._ids

    def replace(self, ids: list[int]) -> None:
        self._ids = list(dict.fromkeys(ids))
        save_collection(self._store, self.key, self._ids)
