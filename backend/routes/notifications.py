from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.application import SiteService
from backend.core.notifications import badge_label
from backend.domain import Notification
from backend.routes.deps import require_user

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _serialise(service: SiteService, notification: Notification) -> dict:
    return {
        "id": notification.id,
        "type": notification.type,
        "message": notification.message,
        "time": notification.time,
        "read": service.is_read(notification.id),
    }


def _listing(service: SiteService) -> dict:
    unread = service.unread_count()
    return {
        "items": [_serialise(service, item) for item in service.visible_notifications()],
        "total": len(service.current_notifications()),
        "unread": unread,
        "badge": badge_label(unread),
        "show_all": service.state.show_all,
    }


@router.get("")
async def list_notifications(service: SiteService = Depends(require_user)) -> dict:
    """Opening the notifications view re-derives the list from current data."""
    service.refresh_notifications()
    return _listing(service)


@router.get("/unread")
async def get_unread_count(service: SiteService = Depends(require_user)) -> dict:
    unread = service.unread_count()
    return {"unread": unread, "badge": badge_label(unread)}


@router.post("/read-all")
async def mark_all_read(service: SiteService = Depends(require_user)) -> dict:
    service.mark_all_read()
    return _listing(service)


@router.post("/show-read")
async def toggle_show_read(service: SiteService = Depends(require_user)) -> dict:
    service.toggle_show_read()
    return _listing(service)


@router.post("/{notification_id}/read")
async def mark_notification_read(notification_id: int, service: SiteService = Depends(require_user)) -> dict:
    service.mark_notification_read(notification_id)
    return _listing(service)
