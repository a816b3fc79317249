from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.application import SiteService
from backend.routes.deps import require_user

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(service: SiteService = Depends(require_user)) -> dict:
    return service.dashboard_summary()
