"""
Tests for comments and likes on announcements, including ownership rules.
"""

from fastapi.testclient import TestClient
from sqlmodel import Session

from clubhub.core.config import settings
from clubhub.models.account import Account
from clubhub.models.announcement import Announcement, AnnouncementComment, AnnouncementLike

API = settings.API_PREFIX
COMMENTS = f"{API}/announcement-comments"
LIKES = f"{API}/announcement-likes"


def _comment(client: TestClient, announcement: Announcement, headers: dict, text: str = "Great news") -> dict:
    response = client.post(
        COMMENTS,
        headers=headers,
        json={"announcementId": announcement.id, "commentText": text},
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_authenticated_comment_is_approved(
    client: TestClient, editor_headers: dict, editor: Account, announcement: Announcement
) -> None:
    data = _comment(client, announcement, editor_headers)
    assert data["status"] == "approved"
    assert data["userId"] == editor.id
    assert data["userName"] == "Editor Tester"
    assert data["userEmail"] == "editor@example.com"

    listed = client.get(f"{COMMENTS}/announcement/{announcement.id}").json()
    assert [c["id"] for c in listed["data"]] == [data["id"]]


def test_guest_comment_waits_for_moderation(client: TestClient, announcement: Announcement) -> None:
    response = client.post(
        COMMENTS,
        json={
            "announcementId": announcement.id,
            "commentText": "Count me in",
            "userName": "Guest Reader",
            "userEmail": "guest@example.com",
        },
    )
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "pending"
    assert response.json()["data"]["userId"] is None

    assert client.get(f"{COMMENTS}/announcement/{announcement.id}").json()["count"] == 0
    stats = client.get(f"{COMMENTS}/announcement/{announcement.id}/stats").json()["stats"]
    assert stats == {"total": 1, "approved": 0, "pending": 1}


def test_guest_comment_requires_identity(client: TestClient, announcement: Announcement) -> None:
    response = client.post(COMMENTS, json={"announcementId": announcement.id, "commentText": "Anonymous"})
    assert response.status_code == 400
    assert "userName" in response.json()["message"]


def test_comment_on_missing_announcement(client: TestClient, editor_headers: dict) -> None:
    response = client.post(COMMENTS, headers=editor_headers, json={"announcementId": "0" * 32, "commentText": "Hi"})
    assert response.status_code == 404


def test_owner_can_edit_and_delete_comment(
    client: TestClient, editor_headers: dict, announcement: Announcement
) -> None:
    comment = _comment(client, announcement, editor_headers)

    response = client.put(f"{COMMENTS}/{comment['id']}", headers=editor_headers, json={"commentText": "Edited"})
    assert response.status_code == 200
    assert response.json()["data"]["commentText"] == "Edited"

    response = client.delete(f"{COMMENTS}/{comment['id']}", headers=editor_headers)
    assert response.status_code == 200


def test_non_owner_cannot_edit_or_delete_comment(
    client: TestClient,
    session: Session,
    editor_headers: dict,
    admin_headers: dict,
    announcement: Announcement,
) -> None:
    """Other accounts and guests get 404 and the comment is unchanged."""
    comment = _comment(client, announcement, editor_headers, text="Original")

    for headers in (admin_headers, {}):
        edit = client.put(f"{COMMENTS}/{comment['id']}", headers=headers, json={"commentText": "Hijacked"})
        assert edit.status_code == 404
        assert edit.json()["message"] == "Comment not found or you do not have permission to edit it"

        delete = client.delete(f"{COMMENTS}/{comment['id']}", headers=headers)
        assert delete.status_code == 404

    session.expire_all()
    stored = session.get(AnnouncementComment, comment["id"])
    assert stored is not None
    assert stored.comment_text == "Original"


def test_guest_like_toggles(client: TestClient, announcement: Announcement) -> None:
    body = {"announcementId": announcement.id, "userName": "Guest", "userEmail": "guest@example.com"}

    first = client.post(f"{LIKES}/toggle", json=body).json()
    assert first["liked"] is True
    assert first["count"] == 1

    check = client.get(f"{LIKES}/announcement/{announcement.id}/check", params={"email": "guest@example.com"}).json()
    assert check["liked"] is True

    second = client.post(f"{LIKES}/toggle", json=body).json()
    assert second["liked"] is False
    assert second["count"] == 0


def test_authenticated_like_is_keyed_by_account(
    client: TestClient, editor_headers: dict, announcement: Announcement
) -> None:
    response = client.post(f"{LIKES}/toggle", headers=editor_headers, json={"announcementId": announcement.id})
    assert response.json()["liked"] is True

    check = client.get(f"{LIKES}/announcement/{announcement.id}/check", headers=editor_headers).json()
    assert check == {"success": True, "liked": True, "count": 1}

    details = client.get(f"{LIKES}/announcement/{announcement.id}/details").json()
    assert details["data"][0]["userEmail"] == "editor@example.com"


def test_guest_like_requires_identity(client: TestClient, announcement: Announcement) -> None:
    response = client.post(f"{LIKES}/toggle", json={"announcementId": announcement.id})
    assert response.status_code == 400


def test_non_owner_cannot_delete_like(
    client: TestClient,
    session: Session,
    editor_headers: dict,
    admin_headers: dict,
    announcement: Announcement,
) -> None:
    client.post(f"{LIKES}/toggle", headers=editor_headers, json={"announcementId": announcement.id})
    like_id = client.get(f"{LIKES}/announcement/{announcement.id}/details").json()["data"][0]["id"]

    assert client.delete(f"{LIKES}/{like_id}", headers=admin_headers).status_code == 404
    assert client.delete(f"{LIKES}/{like_id}").status_code == 404
    session.expire_all()
    assert session.get(AnnouncementLike, like_id) is not None

    assert client.delete(f"{LIKES}/{like_id}", headers=editor_headers).status_code == 200
    assert client.get(f"{LIKES}/announcement/{announcement.id}").json()["count"] == 0
