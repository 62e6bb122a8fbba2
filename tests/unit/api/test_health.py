from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

import qrdine.api.routes.health as health_route
from qrdine.api.main import app


def test_live_health_endpoint() -> None:
    client = TestClient(app)
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-Id"]


def test_ready_health_endpoint_healthy_with_mocks(monkeypatch) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda timeout_seconds=1.0: True)
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: True)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "checks": {"database": True, "redis": True}}


def test_ready_health_endpoint_reports_failed_checks(monkeypatch) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda timeout_seconds=1.0: True)
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: False)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {
        "status": "unavailable",
        "checks": {"database": True, "redis": False},
    }


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    client = TestClient(app)
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")


def test_request_id_is_echoed_only_when_well_formed() -> None:
    client = TestClient(app)

    kept = client.get("/health/live", headers={"X-Request-Id": "req-123"})
    replaced = client.get("/health/live", headers={"X-Request-Id": "x" * 200})

    assert kept.headers["X-Request-Id"] == "req-123"
    assert replaced.headers["X-Request-Id"] != "x" * 200
    assert len(replaced.headers["X-Request-Id"]) == 36
