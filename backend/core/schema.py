"""Stored shapes of each collection, as written to the key/value store."""
from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.domain import Material, Project, Worker


class WorkerRecord(BaseModel):
    id: int
    name: str
    role: str
    status: Literal["available", "assigned", "on-leave"] = "available"
    project: str | None = None

    def to_domain(self) -> Worker:
        return Worker(id=self.id, name=self.name, role=self.role, status=self.status, project=self.project)

    @classmethod
    def from_domain(cls, worker: Worker) -> "WorkerRecord":
        return cls(id=worker.id, name=worker.name, role=worker.role, status=worker.status, project=worker.project)


class MaterialRecord(BaseModel):
    name: str
    status: Literal["In Stock", "Out of Stock"] = "In Stock"
    quantity: int = Field(default=0, ge=0)

    def to_domain(self) -> Material:
        return Material(name=self.name, status=self.status, quantity=self.quantity)

    @classmethod
    def from_domain(cls, material: Material) -> "MaterialRecord":
        return cls(name=material.name, status=material.status, quantity=material.quantity)


class ProjectRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    deadline: date
    progress: int = 0
    sq_ft: int = Field(alias="sqFt", gt=0)
    workers: int = Field(default=0, ge=0)

    @field_validator("progress")
    @classmethod
    def clamp_progress(cls, value: int) -> int:
        return min(100, max(0, value))

    def to_domain(self) -> Project:
        return Project(
            id=self.id,
            name=self.name,
            deadline=self.deadline,
            progress=self.progress,
            sq_ft=self.sq_ft,
            workers=self.workers,
        )

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectRecord":
        return cls(
            id=project.id,
            name=project.name,
            deadline=project.deadline,
            progress=project.progress,
            sq_ft=project.sq_ft,
            workers=project.workers,
        )


class UserRecord(BaseModel):
    """Operator allowed through the sign-in gate. Plain-text, not a security boundary."""

    email: str
    password: str
    name: str
    role: Literal["admin", "manager", "user"] = "user"

    def public(self) -> dict[str, str]:
        return {"email": self.email, "name": self.name, "role": self.role}
