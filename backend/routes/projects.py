from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.application import SiteService
from backend.core.validation import ValidationError, parse_int
from backend.routes.deps import require_user

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("")
async def list_projects(service: SiteService = Depends(require_user)) -> dict:
    return {"items": service.project_cards()}


@router.post("")
async def add_project(payload: dict, service: SiteService = Depends(require_user)) -> dict:
    sq_ft = payload.get("sq_ft", payload.get("sqFt"))
    project = service.add_project(payload.get("name"), payload.get("deadline"), sq_ft)
    return service.project_card(project)


@router.delete("/{project_id}")
async def delete_project(project_id: int, service: SiteService = Depends(require_user)) -> dict:
    try:
        project = service.delete_project(project_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="project not found") from exc
    return {"deleted": project.id, "workers": service.labour_summary()}


@router.post("/{project_id}/progress")
async def adjust_progress(project_id: int, payload: dict, service: SiteService = Depends(require_user)) -> dict:
    if "delta" not in payload:
        raise HTTPException(status_code=400, detail="delta is required")
    try:
        delta = parse_int(payload["delta"], "delta")
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    try:
        project = service.adjust_progress(project_id, delta)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="project not found") from exc
    return service.project_card(project)
