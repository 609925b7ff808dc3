import logging

from app.infrastructure.db import mongo


def test_ping(client):
    resp = client.get("/api/ping")
    assert resp.status_code == 200
    assert resp.json() == {"message": "pong"}


def test_health_reports_db(client, db):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "db": True}


def test_health_without_db(client, monkeypatch):
    monkeypatch.setattr(mongo, "_db", None)

    assert client.get("/api/health").json() == {"ok": True, "db": False}


def test_request_id_is_echoed(client):
    resp = client.get("/api/ping", headers={"X-Request-Id": "abc123"})
    assert resp.headers["X-Request-Id"] == "abc123"


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Not Found"
    assert resp.json()["request_id"]


def test_debug_status_route_is_not_exposed(client):
    assert client.get("/api/_debug/status").status_code == 404


def test_each_request_is_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="notegraph.request"):
        client.get("/api/ping", headers={"X-Request-Id": "req-1"})

    lines = [r.getMessage() for r in caplog.records if r.name == "notegraph.request"]
    assert any("path=/api/ping status=200" in line and "request_id=req-1" in line for line in lines)
