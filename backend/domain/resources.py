"""Domain entities for site resource tracking."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

WorkerStatus = Literal["available", "assigned", "on-leave"]
MaterialStatus = Literal["In Stock", "Out of Stock"]
NotificationType = Literal["warning", "success", "info"]

IN_STOCK: MaterialStatus = "In Stock"
OUT_OF_STOCK: MaterialStatus = "Out of Stock"


@dataclass(slots=True)
class Worker:
    """A labourer, optionally assigned to a project by name."""

    id: int
    name: str
    role: str
    status: WorkerStatus = "available"
    project: str | None = None


@dataclass(slots=True)
class Material:
    """An inventory line. Materials have no identifier besides their position."""

    name: str
    status: MaterialStatus = IN_STOCK
    quantity: int = 0


@dataclass(slots=True)
class Project:
    """A site project. ``workers`` is the headcount snapshot taken at creation."""

    id: int
    name: str
    deadline: date
    progress: int = 0
    sq_ft: float = 0
    workers: int = 0


@dataclass(slots=True, frozen=True)
class Notification:
    id: int
    type: NotificationType
    message: str
    time: str
