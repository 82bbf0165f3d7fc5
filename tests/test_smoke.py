"""Fast smoke checks for critical workflows."""

import pytest
from fastapi.testclient import TestClient

from clubhub.core.config import settings
from clubhub.models.account import Account

API = settings.API_PREFIX


@pytest.mark.smoke
def test_smoke_health_endpoint(client: TestClient) -> None:
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.smoke
def test_smoke_public_pages(client: TestClient) -> None:
    for path in ("/events", "/news", "/announcements", "/gallery", "/leadership", "/resources", "/reports"):
        response = client.get(f"{API}{path}")
        assert response.status_code == 200, path
        assert response.json()["success"] is True


@pytest.mark.smoke
def test_smoke_login_to_dashboard(client: TestClient, super_admin: Account) -> None:
    token = client.post(f"{API}/auth/login", json={"username": "admin", "password": "admin123"}).json()["token"]
    response = client.get(f"{API}/admin/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert set(response.json()["stats"]) >= {"totalMembers", "upcomingEvents", "newContacts"}
