from __future__ import annotations

import json

from fastapi.testclient import TestClient

from app.main import create_app
from app.settings import Settings


def _client(tmp_path) -> TestClient:
    settings = Settings(database_path=str(tmp_path / "database.json"))
    return TestClient(create_app(settings))


def test_create_then_list(tmp_path):
    client = _client(tmp_path)

    resp = client.post("/records", json={"id": 1, "name": "hw1", "complete": False})
    assert resp.status_code == 200, resp.text
    assert resp.content == b""

    resp = client.get("/records")
    assert resp.status_code == 200
    assert resp.json() == [{"id": 1, "name": "hw1", "complete": False}]


def test_put_overwrites_instead_of_duplicating(tmp_path):
    client = _client(tmp_path)
    client.post("/records", json={"id": 1, "name": "hw1", "complete": False})

    resp = client.put("/records", json={"id": 1, "name": "hw1", "complete": True})
    assert resp.status_code == 200

    resp = client.get("/records/1")
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "name": "hw1", "complete": True}
    assert len(client.get("/records").json()) == 1


def test_post_and_put_are_the_same_upsert(tmp_path):
    client = _client(tmp_path)

    # PUT on an unknown id creates it; POST on a known id overwrites it.
    assert client.put("/records", json={"id": 3, "name": "lab", "complete": False}).status_code == 200
    assert client.post("/records", json={"id": 3, "name": "lab v2", "complete": True}).status_code == 200

    assert client.get("/records/3").json() == {"id": 3, "name": "lab v2", "complete": True}


def test_delete_then_get_is_not_found(tmp_path):
    client = _client(tmp_path)
    client.post("/records", json={"id": 1, "name": "hw1", "complete": False})

    resp = client.delete("/records/1")
    assert resp.status_code == 200

    resp = client.get("/records/1")
    assert resp.status_code == 404
    assert resp.content == b""


def test_delete_missing_id_is_ok(tmp_path):
    client = _client(tmp_path)
    client.post("/records", json={"id": 1, "name": "hw1", "complete": False})

    assert client.delete("/records/99").status_code == 200
    assert client.get("/records").json() == [{"id": 1, "name": "hw1", "complete": False}]


def test_get_missing_id_is_not_found(tmp_path):
    client = _client(tmp_path)
    assert client.get("/records/5").status_code == 404


def test_list_returns_every_distinct_record(tmp_path):
    client = _client(tmp_path)
    for i in range(20):
        client.post("/records", json={"id": i, "name": f"task-{i}", "complete": False})
    client.put("/records", json={"id": 4, "name": "task-4", "complete": True})

    data = client.get("/records").json()
    assert len(data) == 20
    by_id = {r["id"]: r for r in data}
    assert by_id[4]["complete"] is True
    assert by_id[19]["name"] == "task-19"


def test_bad_payload_is_rejected_before_the_store(tmp_path):
    client = _client(tmp_path)

    resp = client.post("/records", json={"id": "not-a-number", "name": "hw1"})
    assert 400 <= resp.status_code < 500

    resp = client.put("/records", content=b"{broken", headers={"Content-Type": "application/json"})
    assert 400 <= resp.status_code < 500

    assert client.get("/records").json() == []
    assert not (tmp_path / "database.json").exists()


def test_missing_complete_field_is_rejected(tmp_path):
    client = _client(tmp_path)

    resp = client.post("/records", json={"id": 1, "name": "hw1"})
    assert 400 <= resp.status_code < 500

    resp = client.put("/records", json={"id": 1, "name": "hw1"})
    assert 400 <= resp.status_code < 500

    assert client.get("/records").json() == []
    assert client.get("/records/1").status_code == 404
    assert not (tmp_path / "database.json").exists()


def test_mutations_are_written_to_snapshot(tmp_path):
    client = _client(tmp_path)
    path = tmp_path / "database.json"

    client.post("/records", json={"id": 1, "name": "hw1", "complete": False})
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["assignments"]["1"]["name"] == "hw1"

    client.delete("/records/1")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["assignments"] == {}


def test_reads_do_not_write_snapshot(tmp_path):
    client = _client(tmp_path)

    client.get("/records")
    client.get("/records/1")

    assert not (tmp_path / "database.json").exists()


def test_record_survives_restart(tmp_path):
    first = _client(tmp_path)
    first.post("/records", json={"id": 1, "name": "hw1", "complete": True})
    first.post("/register", json={"id": 1, "username": "alice", "password": "pw"})

    # A new app on the same snapshot path stands in for a process restart.
    second = _client(tmp_path)
    assert second.get("/records/1").json() == {"id": 1, "name": "hw1", "complete": True}
    assert second.post("/login", json={"username": "alice", "password": "pw"}).status_code == 200


def test_startup_with_malformed_snapshot_starts_empty(tmp_path):
    (tmp_path / "database.json").write_text("{definitely not json", encoding="utf-8")

    client = _client(tmp_path)
    assert client.get("/records").json() == []

    client.post("/records", json={"id": 2, "name": "fresh", "complete": False})
    data = json.loads((tmp_path / "database.json").read_text(encoding="utf-8"))
    assert list(data["assignments"]) == ["2"]


def test_write_failure_still_returns_success(tmp_path):
    # Snapshot path is a directory, so every save fails.
    (tmp_path / "database.json").mkdir()
    client = _client(tmp_path)

    resp = client.post("/records", json={"id": 1, "name": "hw1", "complete": False})
    assert resp.status_code == 200
    assert resp.content == b""
    assert client.get("/records/1").json() == {"id": 1, "name": "hw1", "complete": False}


def test_healthz(tmp_path):
    client = _client(tmp_path)
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_cors_allows_localhost_origins(tmp_path):
    client = _client(tmp_path)

    resp = client.options(
        "/records",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"

    resp = client.options(
        "/records",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert "access-control-allow-origin" not in resp.headers
