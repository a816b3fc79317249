"""Infrastructure layer exports."""

from .repositories import MaterialRepository, ProjectRepository, ReadLedger, WorkerRepository

__all__ = [
    "MaterialRepository",
    "ProjectRepository",
    "ReadLedger",
    "WorkerRepository",
]
