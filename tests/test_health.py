"""
tests/test_health.py -- Integration tests for GET /api/v1/health and the frontend page.

Covers:
  - 200 response with status, version, and components fields
  - components.database reports 'ok' when both stores answer
  - No authentication required
  - GET / serves the frontend page
"""

from __future__ import annotations


def test_health_returns_200_with_components(api_client):
    """Health endpoint returns 200 with status, version, and components."""
    resp = api_client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert data["components"]["app"] == "ok"
    assert data["components"]["database"] == "ok"


def test_health_no_auth_required(api_client):
    """Health endpoint is accessible without any cookies or headers."""
    resp = api_client.get("/api/v1/health", headers={})
    assert resp.status_code == 200


def test_frontend_index_served(api_client):
    """The single-page frontend is served at / when asgi.py mounts the web router."""
    import asgi  # noqa: F401 -- mounts web.routes onto the shared app

    resp = api_client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Taskboard" in resp.text
