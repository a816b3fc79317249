from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from backend.application import SiteService
from backend.domain import IN_STOCK
from backend.routes.deps import require_user

router = APIRouter(prefix="/materials", tags=["materials"])


@router.get("")
async def list_materials(service: SiteService = Depends(require_user)) -> dict:
    return {"items": [asdict(material) for material in service.list_materials()]}


@router.post("")
async def add_material(payload: dict, service: SiteService = Depends(require_user)) -> dict:
    material = service.add_material(payload.get("name"), payload.get("quantity"), str(payload.get("status") or IN_STOCK))
    return asdict(material)


@router.post("/{position}/toggle")
async def toggle_material_status(position: int, service: SiteService = Depends(require_user)) -> dict:
    try:
        material = service.toggle_material_status(position)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail="material not found") from exc
    return asdict(material)


@router.put("/{position}/quantity")
async def set_material_quantity(position: int, payload: dict, service: SiteService = Depends(require_user)) -> dict:
    try:
        material = service.set_material_quantity(position, payload.get("quantity"))
    except IndexError as exc:
        raise HTTPException(status_code=404, detail="material not found") from exc
    return asdict(material)
