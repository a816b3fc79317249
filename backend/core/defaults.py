from __future__ import annotations

from pathlib import Path

import yaml

from backend.core.schema import MaterialRecord, UserRecord
from backend.domain import Material

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

DEFAULT_MATERIALS: tuple[dict, ...] = (
    {"name": "Cement", "status": "In Stock", "quantity": 200},
    {"name": "Steel", "status": "Out of Stock", "quantity": 0},
    {"name": "Bricks", "status": "In Stock", "quantity": 500},
    {"name": "Sand", "status": "In Stock", "quantity": 300},
)


def _load_yaml(name: str) -> dict:
    path = CONFIG_DIR / name
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fp:
        return yaml.safe_load(fp) or {}


def seed_materials() -> list[Material]:
    rows = _load_yaml("materials.seed.yaml").get("materials") or list(DEFAULT_MATERIALS)
    return [MaterialRecord(**row).to_domain() for row in rows]


def load_users() -> list[UserRecord]:
    rows = _load_yaml("users.yaml").get("users") or []
    return [UserRecord(**row) for row in rows]
