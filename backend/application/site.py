"""Application service layer for site resource tracking."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from backend.core import consistency, metrics, notifications
from backend.core.app_logging import bind_user_context, get_logger
from backend.core.defaults import load_users
from backend.core.schema import UserRecord
from backend.core.store import KeyValueStore
from backend.core.validation import (
    ValidationError,
    require_text,
    validate_project_fields,
    validate_quantity,
    validate_worker_fields,
)
from backend.domain import IN_STOCK, OUT_OF_STOCK, Material, Notification, Project, Worker
from backend.infrastructure import MaterialRepository, ProjectRepository, ReadLedger, WorkerRepository

logger = get_logger(__name__)

UnreadListener = Callable[[int], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppState:
    """Session state shared with the presentation layer.

    ``unread_count`` is the last value published by the service; listeners
    (a navigation badge, for instance) are called every time it is
    republished.
    """

    user: UserRecord | None = None
    show_all: bool = False
    unread_count: int = 0
    listeners: list[UnreadListener] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def subscribe(self, listener: UnreadListener) -> None:
        self.listeners.append(listener)

    def publish_unread(self, count: int) -> None:
        self.unread_count = max(0, count)
        for listener in list(self.listeners):
            listener(self.unread_count)


class SiteService:
    """Coordinates worker, project, material and notification use cases."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] | None = None,
        users: list[UserRecord] | None = None,
        state: AppState | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utcnow
        self._users = users if users is not None else load_users()
        self.state = state or AppState()
        self._notifications: list[Notification] = []
        self.reload()

    # ------------------------------------------------------------------
    # session lifecycle
    # ------------------------------------------------------------------
    def reload(self) -> None:
        """Read every collection from the store and re-derive notifications."""

        self.workers = WorkerRepository(self._store)
        self.projects = ProjectRepository(self._store)
        self.materials = MaterialRepository(self._store)
        self.ledger = ReadLedger(self._store)

        broken = consistency.assignment_violations(self.workers.all())
        if broken:
            logger.warning("assignment_inconsistent", worker_ids=[worker.id for worker in broken])

        self.refresh_notifications()

    def now(self) -> datetime:
        return self._clock()

    def _next_id(self, taken: set[int]) -> int:
        candidate = int(self.now().timestamp() * 1000)
        while candidate in taken:
            candidate += 1
        return candidate

    # ------------------------------------------------------------------
    # sign-in gate
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> UserRecord:
        for user in self._users:
            if user.email == email and user.password == password:
                self.state.user = user
                bind_user_context(user.email)
                logger.info("user_logged_in", role=user.role)
                return user
        logger.info("login_rejected")
        raise ValidationError("Invalid email or password")

    def logout(self) -> None:
        if self.state.user is not None:
            logger.info("user_logged_out")
        self.state.user = None
        bind_user_context(None)

    # ------------------------------------------------------------------
    # workers
    # ------------------------------------------------------------------
    def list_workers(self) -> list[Worker]:
        return list(self.workers.all())

    def labour_summary(self) -> dict[str, int]:
        workers = self.workers.all()
        return {
            "total": len(workers),
            "available": sum(1 for worker in workers if worker.status == "available"),
            "assigned": sum(1 for worker in workers if worker.status == "assigned"),
            "on_leave": sum(1 for worker in workers if worker.status == "on-leave"),
        }

    def add_worker(self, name: Any, role: Any, project: Any = None) -> Worker:
        name, role = validate_worker_fields(name, role)
        selection = consistency.normalise_project_selection(project)
        consistency.ensure_project_exists(selection, self.projects.all())

        worker = Worker(id=self._next_id({item.id for item in self.workers.all()}), name=name, role=role)
        consistency.assign(worker, selection)
        self.workers.add(worker)
        logger.info("worker_added", worker_id=worker.id, status=worker.status, project=worker.project)
        return worker

    def edit_worker(self, worker_id: int, updates: dict[str, Any]) -> Worker:
        """Apply an edit-form submission.

        Keys absent from ``updates`` keep their current value. A submitted
        ``status`` only matters when the worker ends up without a project.
        """

        worker = self.workers.get(worker_id)
        name, role = validate_worker_fields(updates.get("name", worker.name), updates.get("role", worker.role))
        if "project" in updates:
            selection = consistency.normalise_project_selection(updates["project"])
        else:
            selection = worker.project
        consistency.ensure_project_exists(selection, self.projects.all())
        requested = updates.get("status")
        if requested is not None and requested not in {"available", "assigned", "on-leave"}:
            raise ValidationError("status must be available or on-leave")

        worker.name = name
        worker.role = role
        consistency.assign(worker, selection, requested)
        self.workers.save()
        logger.info("worker_edited", worker_id=worker.id, status=worker.status, project=worker.project)
        return worker

    def set_worker_status(self, worker_id: int, status: str) -> Worker:
        worker = self.workers.get(worker_id)
        worker.status = consistency.check_manual_status(worker, status)
        self.workers.save()
        logger.info("worker_status_changed", worker_id=worker.id, status=worker.status)
        return worker

    def delete_worker(self, worker_id: int) -> Worker:
        worker = self.workers.remove(worker_id)
        logger.info("worker_deleted", worker_id=worker.id)
        return worker

    # ------------------------------------------------------------------
    # projects
    # ------------------------------------------------------------------
    def list_projects(self) -> list[Project]:
        return list(self.projects.all())

    def project_card(self, project: Project) -> dict[str, Any]:
        return {
            "id": project.id,
            "name": project.name,
            "deadline": project.deadline.isoformat(),
            "progress": project.progress,
            "sq_ft": project.sq_ft,
            "workers": project.workers,
            "status": metrics.project_status(project.progress),
            "materials": asdict(metrics.required_materials(project.sq_ft)),
            "assigned_workers": [
                {"id": worker.id, "name": worker.name, "role": worker.role}
                for worker in self.workers.assigned_to(project.name)
            ],
        }

    def project_cards(self) -> list[dict[str, Any]]:
        return [self.project_card(project) for project in self.projects.all()]

    def add_project(self, name: Any, deadline: Any, sq_ft: Any) -> Project:
        name, due, area = validate_project_fields(name, deadline, sq_ft)
        consistency.ensure_unique_project_name(name, self.projects.all())

        project = Project(
            id=self._next_id({item.id for item in self.projects.all()}),
            name=name,
            deadline=due,
            progress=0,
            sq_ft=area,
            workers=metrics.required_workers(area),
        )
        self.projects.add(project)
        logger.info("project_added", project_id=project.id, name=project.name, required_workers=project.workers)
        return project

    def delete_project(self, project_id: int) -> Project:
        project = self.projects.remove(project_id)
        released = consistency.cascade_project_deletion(self.workers.all(), project.name)
        self.workers.save()
        logger.info("project_deleted", project_id=project.id, name=project.name)
        if released:
            logger.info("workers_unassigned", project=project.name, worker_ids=[worker.id for worker in released])
        return project

    def adjust_progress(self, project_id: int, delta: int) -> Project:
        project = self.projects.get(project_id)
        project.progress = metrics.clamp_progress(project.progress + delta)
        self.projects.save()
        logger.info("project_progress_changed", project_id=project.id, progress=project.progress)
        return project

    # ------------------------------------------------------------------
    # materials
    # ------------------------------------------------------------------
    def list_materials(self) -> list[Material]:
        return list(self.materials.all())

    def add_material(self, name: Any, quantity: Any, status: str = IN_STOCK) -> Material:
        material_name = require_text(name, "Material name")
        amount = validate_quantity(quantity)
        if status not in {IN_STOCK, OUT_OF_STOCK}:
            raise ValidationError("status must be In Stock or Out of Stock")

        material = Material(name=material_name, status=status, quantity=amount)  # type: ignore[arg-type]
        position = self.materials.add(material)
        logger.info("material_added", position=position, name=material.name)
        return material

    def toggle_material_status(self, position: int) -> Material:
        material = self.materials.get(position)
        material.status = OUT_OF_STOCK if material.status == IN_STOCK else IN_STOCK
        self.materials.save()
        logger.info("material_status_toggled", position=position, status=material.status)
        return material

    def set_material_quantity(self, position: int, quantity: Any) -> Material:
        material = self.materials.get(position)
        material.quantity = validate_quantity(quantity)
        self.materials.save()
        logger.info("material_quantity_changed", position=position, quantity=material.quantity)
        return material

    # ------------------------------------------------------------------
    # notifications
    # ------------------------------------------------------------------
    def _publish_unread(self) -> int:
        count = notifications.unread_count(self._notifications, self.ledger.ids())
        self.state.publish_unread(count)
        return count

    def refresh_notifications(self) -> list[Notification]:
        """Re-derive the notification list from the current collections."""

        self._notifications = notifications.derive(self.projects.all(), self.materials.all(), self.now())
        self._publish_unread()
        return list(self._notifications)

    def current_notifications(self) -> list[Notification]:
        return list(self._notifications)

    def visible_notifications(self) -> list[Notification]:
        return notifications.visible(self._notifications, self.ledger.ids(), self.state.show_all)

    def is_read(self, notification_id: int) -> bool:
        return notification_id in self.ledger

    def mark_notification_read(self, notification_id: int) -> int:
        self.ledger.replace(notifications.mark_read(self.ledger.ids(), notification_id))
        logger.info("notification_read", notification_id=notification_id)
        return self._publish_unread()

    def mark_all_read(self) -> int:
        self.ledger.replace(notifications.mark_all_read(self._notifications))
        logger.info("notifications_all_read", count=len(self._notifications))
        return self._publish_unread()

    def toggle_show_read(self) -> bool:
        self.state.show_all = not self.state.show_all
        return self.state.show_all

    def unread_count(self) -> int:
        return self.state.unread_count

    # ------------------------------------------------------------------
    # dashboard
    # ------------------------------------------------------------------
    def dashboard_summary(self) -> dict[str, Any]:
        workers = self.workers.all()
        materials = self.materials.all()
        projects = self.projects.all()
        by_deadline = sorted(projects, key=lambda project: project.deadline)
        return {
            "active_labour": sum(1 for worker in workers if worker.status in {"available", "assigned"}),
            "materials_in_stock": sum(1 for material in materials if material.status == IN_STOCK),
            "materials_out_of_stock": sum(1 for material in materials if material.status == OUT_OF_STOCK),
            "average_progress": metrics.average_progress(projects),
            "top_projects": [{"id": project.id, "name": project.name, "progress": project.progress} for project in projects[:3]],
            "progress_chart": [
                {"label": f"{project.name} ({project.deadline.isoformat()})", "progress": project.progress}
                for project in by_deadline
            ],
        }
