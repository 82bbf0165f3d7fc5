"""
Tests for authentication endpoints.
"""

from datetime import timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlmodel import Session

from clubhub.core.config import settings
from clubhub.core.security import decode_access_token
from clubhub.models.account import Account, AccountStatus
from clubhub.models.base import utcnow

API = settings.API_PREFIX


def test_login_seeded_super_admin(client: TestClient, super_admin: Account) -> None:
    """Seeded admin/admin123 logs in and receives a super_admin token."""
    response = client.post(f"{API}/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Login successful"
    assert decode_access_token(data["token"]).role == "super_admin"
    assert data["user"]["username"] == "admin"
    assert data["user"]["firstName"] == "Super"
    assert data["user"]["lastLogin"] is not None
    assert "hashedPassword" not in data["user"]


def test_login_then_list_users_without_passwords(client: TestClient, super_admin: Account) -> None:
    """The login token opens the user list, and no entry exposes a password."""
    token = client.post(f"{API}/auth/login", json={"username": "admin", "password": "admin123"}).json()["token"]
    response = client.get(f"{API}/admin/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert "admin" in [user["username"] for user in data["users"]]
    for user in data["users"]:
        assert not any("password" in key.lower() for key in user)


def test_login_with_email(client: TestClient, super_admin: Account) -> None:
    """The username field also accepts the account's email."""
    response = client.post(f"{API}/auth/login", json={"username": "admin@example.com", "password": "admin123"})
    assert response.status_code == 200


def test_login_wrong_password(client: TestClient, super_admin: Account) -> None:
    response = client.post(f"{API}/auth/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid credentials", "error": "authentication_error"}


def test_login_inactive_account(client: TestClient, session: Session, editor: Account) -> None:
    """Inactive accounts cannot log in even with the right password."""
    editor.status = AccountStatus.INACTIVE
    session.add(editor)
    session.commit()
    response = client.post(f"{API}/auth/login", json={"username": "editor", "password": "editorpass"})
    assert response.status_code == 401


def test_login_missing_fields(client: TestClient) -> None:
    response = client.post(f"{API}/auth/login", json={"username": "admin"})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Missing required fields: password"


def test_password_whitespace_is_significant(client: TestClient, super_headers: dict) -> None:
    """Passwords are stored and checked exactly as typed."""
    created = client.post(
        f"{API}/admin/users",
        headers=super_headers,
        json={
            "username": "spacey",
            "email": "spacey@example.com",
            "password": "  padded pass  ",
            "firstName": "Space",
            "lastName": "Cadet",
            "role": "editor",
        },
    )
    assert created.status_code == 201

    trimmed = client.post(f"{API}/auth/login", json={"username": "spacey", "password": "padded pass"})
    assert trimmed.status_code == 401
    exact = client.post(f"{API}/auth/login", json={"username": "spacey", "password": "  padded pass  "})
    assert exact.status_code == 200


def test_profile(client: TestClient, editor_headers: dict) -> None:
    response = client.get(f"{API}/auth/profile", headers=editor_headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["username"] == "editor"
    assert user["role"] == "editor"
    assert "resetToken" not in user


def test_profile_without_token(client: TestClient) -> None:
    response = client.get(f"{API}/auth/profile")
    assert response.status_code == 401
    assert response.json()["error"] == "token_missing"


def test_profile_with_bad_token(client: TestClient) -> None:
    response = client.get(f"{API}/auth/profile", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error"] == "token_invalid"


def test_deactivated_account_rejected_with_valid_token(
    client: TestClient, session: Session, editor: Account, editor_headers: dict
) -> None:
    """A still-valid token stops working as soon as the account is deactivated."""
    editor.status = AccountStatus.SUSPENDED
    session.add(editor)
    session.commit()

    response = client.get(f"{API}/auth/profile", headers=editor_headers)
    assert response.status_code == 401
    assert response.json()["message"] == "User not found or inactive"


def test_forgot_password_same_response_for_unknown_email(client: TestClient, editor: Account) -> None:
    """The response does not reveal whether an email has an account."""
    known = client.post(f"{API}/auth/forgot-password", json={"email": "editor@example.com"})
    unknown = client.post(f"{API}/auth/forgot-password", json={"email": "nobody@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert "resetToken" not in known.json()


def test_forgot_password_queues_email(client: TestClient, session: Session, editor: Account) -> None:
    with patch("clubhub.api.routes.auth.try_enqueue") as mock_enqueue:
        response = client.post(f"{API}/auth/forgot-password", json={"email": "editor@example.com"})
    assert response.status_code == 200
    session.refresh(editor)
    mock_enqueue.assert_called_once()
    assert mock_enqueue.call_args.args[1] == "editor@example.com"
    assert mock_enqueue.call_args.args[3] == editor.reset_token


def test_forgot_password_debug_echoes_token(client: TestClient, session: Session, editor: Account, monkeypatch) -> None:
    monkeypatch.setattr(settings, "DEBUG", True)
    response = client.post(f"{API}/auth/forgot-password", json={"email": "editor@example.com"})
    session.refresh(editor)
    assert response.json()["resetToken"] == editor.reset_token


def test_reset_password_flow(client: TestClient, session: Session, editor: Account) -> None:
    """A reset token sets the new password once, then stops working."""
    client.post(f"{API}/auth/forgot-password", json={"email": "editor@example.com"})
    session.refresh(editor)
    token = editor.reset_token
    assert token

    response = client.post(f"{API}/auth/reset-password", json={"token": token, "newPassword": "brand-new"})
    assert response.status_code == 200
    assert response.json()["message"] == "Password reset successful"

    session.refresh(editor)
    assert editor.reset_token is None
    assert client.post(f"{API}/auth/login", json={"username": "editor", "password": "brand-new"}).status_code == 200

    reuse = client.post(f"{API}/auth/reset-password", json={"token": token, "newPassword": "another-one"})
    assert reuse.status_code == 400
    assert reuse.json()["message"] == "Invalid or expired reset token"


def test_reset_password_expired_token(client: TestClient, session: Session, editor: Account) -> None:
    client.post(f"{API}/auth/forgot-password", json={"email": "editor@example.com"})
    session.refresh(editor)
    token = editor.reset_token
    editor.reset_token_expiry = utcnow() - timedelta(minutes=1)
    session.add(editor)
    session.commit()

    response = client.post(f"{API}/auth/reset-password", json={"token": token, "newPassword": "brand-new"})
    assert response.status_code == 400


def test_reset_password_too_short(client: TestClient) -> None:
    response = client.post(f"{API}/auth/reset-password", json={"token": "abc", "newPassword": "123"})
    assert response.status_code == 400
    assert "at least 6 characters" in response.json()["message"]


def test_change_password(client: TestClient, editor_headers: dict) -> None:
    response = client.post(
        f"{API}/auth/change-password",
        headers=editor_headers,
        json={"currentPassword": "editorpass", "newPassword": "editorpass2"},
    )
    assert response.status_code == 200
    assert client.post(f"{API}/auth/login", json={"username": "editor", "password": "editorpass2"}).status_code == 200


def test_change_password_wrong_current(client: TestClient, editor_headers: dict) -> None:
    response = client.post(
        f"{API}/auth/change-password",
        headers=editor_headers,
        json={"currentPassword": "nope", "newPassword": "editorpass2"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Current password is incorrect"


def test_logout(client: TestClient, editor_headers: dict) -> None:
    response = client.post(f"{API}/auth/logout", headers=editor_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_logout_requires_token(client: TestClient) -> None:
    assert client.post(f"{API}/auth/logout").status_code == 401
