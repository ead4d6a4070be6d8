import pytest
from fastapi.testclient import TestClient

from inventory_service.app.main import create_app
from tests.test_data import IPV6_SERVER, WEB_SERVER


@pytest.mark.integration
def test_app_lifespan_opens_store_and_persists_across_restarts(tmp_path, monkeypatch):
    db_path = tmp_path / "data" / "main.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")

    app = create_app()

    with TestClient(app) as client:
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["store"] == str(db_path)
        created = client.post("/inventory", json=WEB_SERVER).json()["data"]
        client.post("/inventory", json=IPV6_SERVER)

    assert db_path.exists()

    with TestClient(app) as client:
        assert client.get(f"/inventory/{created['id']}").json() == {"data": created}
        assert len(client.get("/inventory").json()["data"]) == 2
        r = client.get("/inventory", params={"format": "yaml"})
        assert r.status_code == 200
        assert "edge01.example.com" in r.text


@pytest.mark.integration
def test_app_lifespan_fails_when_store_cannot_open(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setenv("DATABASE_URL", str(blocker / "main.db"))
    monkeypatch.setenv("MAX_CONNECTION_ATTEMPTS", "1")

    with pytest.raises(OSError):
        with TestClient(create_app()):
            pass


@pytest.mark.integration
def test_app_lifespan_rejects_unsupported_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://db.example.com/inventory")

    with pytest.raises(ValueError, match="Unsupported database url scheme"):
        with TestClient(create_app()):
            pass
