from fastapi import FastAPI
from fastapi.testclient import TestClient

from inventory_service.app.main import create_app
from inventory_service.app.routers.health import health_router
from tests.conftest import FakeServerRepository, FakeStore, build_app, make_settings


def test_live_is_always_200(test_app):
    client = TestClient(test_app)
    r = client.get("/health/live")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_ready_503_when_store_missing():
    app = FastAPI()
    app.include_router(health_router)
    client = TestClient(app)
    r = client.get("/health/ready")
    assert r.status_code == 503
    assert r.json() == {"status": "not_ready", "store": None, "reason": "store_not_initialized"}


def test_ready_503_when_store_ping_fails(test_app):
    test_app.state.store = FakeStore(ping_ok=False)
    client = TestClient(test_app)
    r = client.get("/health/ready")
    assert r.status_code == 503
    assert r.json()["reason"] == "ping_failed"
    assert r.json()["store"] == "fake.db"


def test_ready_503_when_store_ping_times_out(tmp_path):
    app = build_app(
        store=FakeStore(ping_delay=1.0),
        repository=FakeServerRepository(),
        settings=make_settings(tmp_path / "unused.db", READINESS_PING_TIMEOUT_SECONDS=0.05),
    )
    client = TestClient(app)
    r = client.get("/health/ready")
    assert r.status_code == 503
    assert r.json()["reason"] == "ping_timeout"


def test_ready_200_when_ready(test_app):
    test_app.state.store = FakeStore(ping_ok=True)
    client = TestClient(test_app)
    r = client.get("/health/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ready", "store": "fake.db", "reason": None}


def test_ready_200_with_real_sqlite_store(settings):
    with TestClient(create_app(settings)) as client:
        r = client.get("/health/ready")
    assert r.status_code == 200
    assert r.json()["store"] == settings.database_url
