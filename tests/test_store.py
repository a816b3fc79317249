import json

from backend.application import SiteService
from backend.core.defaults import seed_materials
from backend.core.store import InMemoryStore, JsonFileStore, load_collection
from backend.domain import Material

from conftest import NOW

SEED = [
    Material(name="Cement", status="In Stock", quantity=200),
    Material(name="Steel", status="Out of Stock", quantity=0),
    Material(name="Bricks", status="In Stock", quantity=500),
    Material(name="Sand", status="In Stock", quantity=300),
]


def _service(store) -> SiteService:
    return SiteService(store, clock=lambda: NOW)


def test_first_run_seeds_materials():
    store = InMemoryStore()
    service = _service(store)

    assert service.list_materials() == SEED
    assert seed_materials() == SEED
    assert json.loads(store.read("materials"))[1] == {"name": "Steel", "status": "Out of Stock", "quantity": 0}


def test_malformed_keys_are_treated_as_absent():
    store = InMemoryStore(
        {
            "workers": "{not json",
            "projects": json.dumps({"id": 1}),
            "materials": "[[[",
            "readNotifications": "oops",
        }
    )
    service = _service(store)

    assert service.list_workers() == []
    assert service.list_projects() == []
    assert service.list_materials() == SEED
    assert service.ledger.ids() == []


def test_invalid_entries_are_skipped():
    workers = [
        {"id": 1, "name": "Ravi", "role": "Mason", "status": "available", "project": None},
        {"id": 2, "name": "Broken", "role": "Mason", "status": "sleeping"},
    ]
    materials = [{"name": "Glass", "status": "In Stock", "quantity": "12"}, {"name": "Tar", "quantity": -3}]
    store = InMemoryStore(
        {
            "workers": json.dumps(workers),
            "materials": json.dumps(materials),
            "readNotifications": json.dumps([3001, "3002", 3001, True, 1044]),
        }
    )
    service = _service(store)

    assert [worker.id for worker in service.list_workers()] == [1]
    assert service.list_materials() == [Material(name="Glass", status="In Stock", quantity=12)]
    assert service.ledger.ids() == [3001, 1044]


def test_stored_project_shape(store, service):
    service.add_project("Site X", "2025-03-12", 600)
    [stored] = json.loads(store.read("projects"))
    assert stored == {
        "id": int(NOW.timestamp() * 1000),
        "name": "Site X",
        "deadline": "2025-03-12",
        "progress": 0,
        "sqFt": 600,
        "workers": 2,
    }


def test_json_file_store_layout(tmp_path):
    store = JsonFileStore(tmp_path)
    assert store.read("workers") is None

    service = _service(store)
    service.add_worker("Ravi", "Mason")

    assert (tmp_path / "workers.json").exists()
    assert (tmp_path / "materials.json").exists()
    assert load_collection(store, "workers")[0]["name"] == "Ravi"


def test_json_file_store_root_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SITETRACK_DATA_ROOT", str(tmp_path / "site"))
    store = JsonFileStore()
    store.write("projects", "[]")
    assert (tmp_path / "site" / "projects.json").read_text(encoding="utf-8") == "[]"


def test_undecodable_store_file_is_treated_as_absent(tmp_path):
    (tmp_path / "workers.json").write_bytes(b"[\xff\xfe]")
    (tmp_path / "materials.json").write_bytes(b"\xff")

    service = _service(JsonFileStore(tmp_path))

    assert service.list_workers() == []
    assert service.list_materials() == SEED
    service.add_worker("Ravi", "Mason")
    assert json.loads((tmp_path / "workers.json").read_text(encoding="utf-8"))[0]["name"] == "Ravi"
