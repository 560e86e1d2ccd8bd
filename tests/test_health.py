"""
tests/test_health.py -- Integration tests for GET /api/v1/health.

Covers:
  - 200 response with status, version, and components fields
  - components.database reports 'ok' against the test database
  - degraded status when the database round trip fails
  - No authentication required
"""

from __future__ import annotations

from api.main import API_VERSION


def test_health_returns_200_with_components(api_client):
    """Health endpoint returns 200 with status, version, and components."""
    client, _ = api_client
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["version"] == API_VERSION
    assert data["components"] == {"app": "ok", "database": "ok"}


def test_health_degraded_when_database_fails(api_client, monkeypatch):
    client, _ = api_client
    user_store = client.app.state.user_store

    def broken_ping():
        raise RuntimeError("database is gone")

    monkeypatch.setattr(user_store, "ping", broken_ping)
    data = client.get("/api/v1/health").json()
    assert data["status"] == "degraded"
    assert data["components"]["database"] == "error"


def test_health_no_auth_required(api_client):
    """Health endpoint is accessible without any authentication headers."""
    client, _ = api_client
    resp = client.get("/api/v1/health", headers={})
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
