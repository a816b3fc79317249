from backend.core.metrics import (
    MaterialEstimate,
    average_progress,
    clamp_progress,
    project_status,
    required_materials,
    required_workers,
)
from backend.domain import Project

from conftest import NOW


def _project(progress: int) -> Project:
    return Project(id=1, name=f"P{progress}", deadline=NOW.date(), progress=progress, sq_ft=100, workers=1)


def test_required_workers():
    assert required_workers(1000) == 2
    assert required_workers(0) == 0
    assert required_workers(-20) == 0
    assert required_workers(1) == 1
    assert required_workers(500) == 1
    assert required_workers(501) == 2
    assert required_workers(600) == 2


def test_required_materials():
    assert required_materials(1000) == MaterialEstimate(cement_bags=500, bricks=10000, steel_rods=100)
    assert required_materials(600) == MaterialEstimate(cement_bags=300, bricks=6000, steel_rods=60)
    assert required_materials(3) == MaterialEstimate(cement_bags=2, bricks=30, steel_rods=1)
    assert required_materials(0) == MaterialEstimate()
    assert required_materials(-1) == MaterialEstimate(0, 0, 0)


def test_average_progress_rounds_half_up():
    assert average_progress([]) == 0
    assert average_progress([_project(10), _project(15)]) == 13
    assert average_progress([_project(0), _project(50), _project(100)]) == 50
    assert average_progress([_project(33), _project(33), _project(34)]) == 33


def test_project_status_is_derived_from_progress():
    assert project_status(0) == "Not Started"
    assert project_status(1) == "In Progress"
    assert project_status(99) == "In Progress"
    assert project_status(100) == "Completed"


def test_clamp_progress():
    assert clamp_progress(-10) == 0
    assert clamp_progress(110) == 100
    assert clamp_progress(40) == 40
