import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.application import SiteService
from backend.core.store import InMemoryStore, JsonFileStore

NOW = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)
NOW_MS = int(NOW.timestamp() * 1000)


class FrozenClock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment = self.moment + timedelta(**kwargs)


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def service(store, clock) -> SiteService:
    return SiteService(store, clock=clock)


@pytest.fixture()
def client(tmp_path, monkeypatch, clock):
    monkeypatch.setenv("SITETRACK_DATA_ROOT", str(tmp_path))
    from backend.app import create_app

    app = create_app(SiteService(JsonFileStore(tmp_path), clock=clock))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def operator(client):
    response = client.post("/api/auth/login", json={"email": "admin@sitetrack.local", "password": "admin123"})
    assert response.status_code == 200
    return client
