from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.application import SiteService
from backend.core.validation import ValidationError
from backend.routes.deps import get_site_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(payload: dict, service: SiteService = Depends(get_site_service)) -> dict:
    email = str(payload.get("email") or "")
    password = str(payload.get("password") or "")
    if not email or not password:
        raise HTTPException(status_code=400, detail="email and password are required")
    try:
        user = service.login(email, password)
    except ValidationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return {"user": user.public()}


@router.post("/logout")
async def logout(service: SiteService = Depends(get_site_service)) -> dict:
    service.logout()
    return {"authenticated": False}


@router.get("/me")
async def current_user(service: SiteService = Depends(get_site_service)) -> dict:
    user = service.state.user
    return {"authenticated": user is not None, "user": user.public() if user else None}
