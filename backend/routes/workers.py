from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from backend.application import SiteService
from backend.routes.deps import require_user

router = APIRouter(prefix="/workers", tags=["labour"])

EDITABLE_FIELDS = ("name", "role", "project", "status")


@router.get("")
async def list_workers(service: SiteService = Depends(require_user)) -> dict:
    items = [asdict(worker) for worker in service.list_workers()]
    return {"items": items, "summary": service.labour_summary()}


@router.post("")
async def add_worker(payload: dict, service: SiteService = Depends(require_user)) -> dict:
    worker = service.add_worker(payload.get("name"), payload.get("role"), payload.get("project"))
    return asdict(worker)


@router.put("/{worker_id}")
async def edit_worker(worker_id: int, payload: dict, service: SiteService = Depends(require_user)) -> dict:
    updates = {key: payload[key] for key in EDITABLE_FIELDS if key in payload}
    if not updates:
        raise HTTPException(status_code=400, detail="no valid updates provided")
    try:
        worker = service.edit_worker(worker_id, updates)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="worker not found") from exc
    return asdict(worker)


@router.post("/{worker_id}/status")
async def set_worker_status(worker_id: int, payload: dict, service: SiteService = Depends(require_user)) -> dict:
    status = payload.get("status")
    if not status:
        raise HTTPException(status_code=400, detail="status is required")
    try:
        worker = service.set_worker_status(worker_id, str(status))
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="worker not found") from exc
    return asdict(worker)


@router.delete("/{worker_id}")
async def delete_worker(worker_id: int, service: SiteService = Depends(require_user)) -> dict:
    try:
        worker = service.delete_worker(worker_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="worker not found") from exc
    return {"deleted": worker.id}
