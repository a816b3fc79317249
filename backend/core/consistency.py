"""Keeps worker assignment and project existence mutually consistent.

A worker is ``assigned`` exactly when its ``project`` field names a project.
Two paths clear an assignment and they differ on purpose:

* editing a worker and clearing the project field keeps ``on-leave``;
* deleting the project resets every member to ``available``, whatever
  its previous status.
"""
from __future__ import annotations

from typing import Any, Iterable

from backend.core.validation import ValidationError
from backend.domain import Project, Worker
from backend.domain.resources import WorkerStatus

PROJECT_PLACEHOLDERS = frozenset({"", "-- Select Project --", "-- No Project --"})
MANUAL_STATUSES: frozenset[str] = frozenset({"available", "on-leave"})


def normalise_project_selection(value: Any) -> str | None:
    """Map a form selection to a project name, or ``None`` for empty/placeholder."""

    if value is None:
        return None
    selection = str(value).strip()
    if selection in PROJECT_PLACEHOLDERS:
        return None
    return selection


def resolve_status(project: str | None, requested: str | None, prior: WorkerStatus) -> WorkerStatus:
    if project is not None:
        return "assigned"
    candidate = requested if requested is not None else prior
    if candidate == "on-leave":
        return "on-leave"
    return "available"


def ensure_project_exists(project: str | None, projects: Iterable[Project]) -> None:
    if project is None:
        return
    if not any(item.name == project for item in projects):
        raise ValidationError(f'Project "{project}" does not exist')


def ensure_unique_project_name(name: str, projects: Iterable[Project]) -> None:
    candidate = name.strip().lower()
    if any(item.name.strip().lower() == candidate for item in projects):
        raise ValidationError(f'A project named "{name.strip()}" already exists. Please use a unique name.')


def assign(worker: Worker, project: str | None, requested_status: str | None = None) -> Worker:
    """Apply a project selection to ``worker`` in place and return it."""

    worker.status = resolve_status(project, requested_status, worker.status)
    worker.project = project
    return worker


def check_manual_status(worker: Worker, status: str) -> WorkerStatus:
    if worker.project is not None:
        raise ValidationError("Status cannot be changed while the worker is assigned to a project")
    if status not in MANUAL_STATUSES:
        raise ValidationError("status must be available or on-leave")
    return status  # type: ignore[return-value]


def cascade_project_deletion(workers: Iterable[Worker], project_name: str) -> list[Worker]:
    """Release every worker on ``project_name``; returns the workers that changed."""

    released: list[Worker] = []
    for worker in workers:
        if worker.project == project_name:
            worker.project = None
            worker.status = "available"
            released.append(worker)
    return released


def assignment_violations(workers: Iterable[Worker]) -> list[Worker]:
    return [worker for worker in workers if (worker.status == "assigned") != (worker.project is not None)]
