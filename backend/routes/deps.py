from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from backend.application import SiteService


def get_site_service(request: Request) -> SiteService:
    """FastAPI dependency returning the service bound to this application."""

    return request.app.state.site_service


def require_user(service: SiteService = Depends(get_site_service)) -> SiteService:
    if not service.state.is_authenticated:
        raise HTTPException(status_code=401, detail="login required")
    return service
