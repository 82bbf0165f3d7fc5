"""
Tests for the health checks and the shared error envelope.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from clubhub.core.config import settings

API = settings.API_PREFIX


def test_health_reports_service_identity(client: TestClient) -> None:
    body = client.get(f"{API}/health").json()
    assert body == {
        "success": True,
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }


def test_database_check_ok(client: TestClient) -> None:
    response = client.get(f"{API}/health/db")
    assert response.status_code == 200
    assert response.json()["database"] == "ok"


def test_database_check_unavailable(client: TestClient) -> None:
    """A failing store turns the check into a 503 instead of a crash."""
    with patch(
        "sqlmodel.Session.connection",
        side_effect=OperationalError("SELECT 1", {}, Exception("gone")),
    ):
        response = client.get(f"{API}/health/db")
    assert response.status_code == 503
    assert response.json() == {"success": False, "status": "unhealthy", "database": "error"}


def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    response = client.get(f"{API}/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "http_error"
