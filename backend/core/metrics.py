"""Derived metrics: pure functions, recomputed on demand and never stored."""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Iterable, Literal

from backend.domain import Project

ProjectStatus = Literal["Not Started", "In Progress", "Completed"]

SQ_FT_PER_WORKER = 500
CEMENT_BAGS_PER_SQ_FT = Decimal("0.5")
BRICKS_PER_SQ_FT = Decimal("10")
STEEL_RODS_PER_SQ_FT = Decimal("0.1")


@dataclass(frozen=True)
class MaterialEstimate:
    cement_bags: int = 0
    bricks: int = 0
    steel_rods: int = 0


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def required_workers(sq_ft: float) -> int:
    if sq_ft <= 0:
        return 0
    return max(1, math.ceil(sq_ft / SQ_FT_PER_WORKER))


def required_materials(sq_ft: float) -> MaterialEstimate:
    if sq_ft <= 0:
        return MaterialEstimate()
    # Decimal keeps 600 * 0.1 at exactly 60 before the ceiling is taken.
    area = Decimal(str(sq_ft))
    return MaterialEstimate(
        cement_bags=_ceil(area * CEMENT_BAGS_PER_SQ_FT),
        bricks=_ceil(area * BRICKS_PER_SQ_FT),
        steel_rods=_ceil(area * STEEL_RODS_PER_SQ_FT),
    )


def average_progress(projects: Iterable[Project]) -> int:
    progress = [project.progress for project in projects]
    if not progress:
        return 0
    mean = Decimal(sum(progress)) / Decimal(len(progress))
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def project_status(progress: int) -> ProjectStatus:
    if progress <= 0:
        return "Not Started"
    if progress >= 100:
        return "Completed"
    return "In Progress"


def clamp_progress(progress: int) -> int:
    return min(100, max(0, progress))
