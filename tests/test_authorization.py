"""
Tests for the verify -> hydrate -> role authorization chain.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from clubhub.api.deps import ADMINS, STAFF, SUPER, require_role
from clubhub.core.config import settings
from clubhub.core.errors import AuthenticationError, AuthorizationError
from clubhub.models.account import AccountRole
from clubhub.schemas.token import TokenPayload

API = settings.API_PREFIX

ROLE_SETS = {"super": SUPER, "admins": ADMINS, "staff": STAFF}

# One representative read route per allow-list.
GUARDED_ROUTES = {
    "super": "/admin/users",
    "admins": "/system-settings/all",
    "staff": "/admin/dashboard",
}


def _request() -> SimpleNamespace:
    return SimpleNamespace(url=SimpleNamespace(path="/api/test"))


@pytest.mark.parametrize("allowed", list(ROLE_SETS))
@pytest.mark.parametrize("role", [role.value for role in AccountRole])
def test_require_role_accepts_iff_role_listed(allowed: str, role: str) -> None:
    """The role check admits exactly the roles on its allow-list."""
    check = require_role(*ROLE_SETS[allowed])
    claims = TokenPayload(id="a" * 32, username="someone", role=role)

    if role in {r.value for r in ROLE_SETS[allowed]}:
        assert check(_request(), claims) is claims
    else:
        with pytest.raises(AuthorizationError) as exc_info:
            check(_request(), claims)
        assert exc_info.value.status_code == 403


def test_require_role_without_claims_is_401() -> None:
    check = require_role(*STAFF)
    with pytest.raises(AuthenticationError) as exc_info:
        check(_request(), None)
    assert exc_info.value.status_code == 401


def test_require_role_rejects_unknown_role() -> None:
    claims = TokenPayload(id="a" * 32, username="someone", role="member")
    with pytest.raises(AuthorizationError):
        require_role(*STAFF)(_request(), claims)


@pytest.mark.parametrize("route_set", list(GUARDED_ROUTES))
def test_role_matrix_over_http(
    client: TestClient,
    route_set: str,
    super_headers: dict,
    admin_headers: dict,
    editor_headers: dict,
) -> None:
    """Each role gets 200 on routes whose allow-list includes it and 403 elsewhere."""
    headers_by_role = {
        AccountRole.SUPER_ADMIN: super_headers,
        AccountRole.ADMIN: admin_headers,
        AccountRole.EDITOR: editor_headers,
    }
    for role, headers in headers_by_role.items():
        response = client.get(f"{API}{GUARDED_ROUTES[route_set]}", headers=headers)
        expected = 200 if role in ROLE_SETS[route_set] else 403
        assert response.status_code == expected, (role, route_set)


@pytest.mark.parametrize("path", list(GUARDED_ROUTES.values()))
def test_guarded_routes_without_token(client: TestClient, path: str) -> None:
    response = client.get(f"{API}{path}")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_forbidden_envelope(client: TestClient, editor_headers: dict) -> None:
    response = client.get(f"{API}/admin/users", headers=editor_headers)
    assert response.json() == {
        "success": False,
        "message": "Insufficient permissions.",
        "error": "authorization_error",
    }


def test_leadership_writes_check_token_and_role_only(client: TestClient, editor_headers: dict) -> None:
    """Leadership writes need an admin role; editors are refused."""
    response = client.post(f"{API}/leadership", headers=editor_headers, data={"name": "Ada", "position": "Chair"})
    assert response.status_code == 403
