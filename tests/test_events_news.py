"""
Tests for events and news: generic CRUD behavior.
"""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlmodel import Session

from clubhub.core.config import settings
from clubhub.models.base import as_utc, utcnow
from clubhub.models.event import Event, NewsArticle

API = settings.API_PREFIX

EVENT = {
    "title": "Hack Night",
    "description": "Bring a laptop.",
    "category": "Workshop",
    "eventDate": "2030-05-01T18:00:00",
    "location": "Room 101",
    "organizer": "Tech Committee",
    "maxParticipants": 40,
}


def _parse(value: str) -> datetime:
    """Wire timestamp as aware UTC; a missing offset means UTC."""
    return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def test_event_round_trip(client: TestClient, editor_headers: dict) -> None:
    """Fetched fields echo what was sent, plus server-assigned id and timestamps."""
    created = client.post(f"{API}/events", headers=editor_headers, json=EVENT)
    assert created.status_code == 201
    event_id = created.json()["id"]
    assert len(event_id) == 32

    fetched = client.get(f"{API}/events/{event_id}").json()["data"]
    for key, value in EVENT.items():
        if key == "eventDate":
            assert _parse(fetched[key]) == _parse(value)
        else:
            assert fetched[key] == value, key
    assert fetched["id"] == event_id
    assert fetched["status"] == "upcoming"
    assert fetched["createdAt"]
    assert fetched["updatedAt"]


def test_create_event_missing_fields(client: TestClient, editor_headers: dict) -> None:
    response = client.post(f"{API}/events", headers=editor_headers, json={"title": "Half an event"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("Missing required fields: description")


def test_create_event_requires_staff(client: TestClient) -> None:
    assert client.post(f"{API}/events", json=EVENT).status_code == 401


def test_update_event_partial(client: TestClient, editor_headers: dict) -> None:
    event_id = client.post(f"{API}/events", headers=editor_headers, json=EVENT).json()["id"]
    response = client.put(f"{API}/events/{event_id}", headers=editor_headers, json={"status": "cancelled"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "cancelled"
    assert data["title"] == "Hack Night"


def test_update_event_cannot_blank_required(client: TestClient, editor_headers: dict) -> None:
    event_id = client.post(f"{API}/events", headers=editor_headers, json=EVENT).json()["id"]
    response = client.put(f"{API}/events/{event_id}", headers=editor_headers, json={"location": ""})
    assert response.status_code == 400


def test_event_date_offset_is_normalised_to_utc(client: TestClient, editor_headers: dict) -> None:
    body = {**EVENT, "eventDate": "2030-05-01T20:00:00+02:00"}
    event_id = client.post(f"{API}/events", headers=editor_headers, json=body).json()["id"]

    fetched = client.get(f"{API}/events/{event_id}").json()["data"]
    assert _parse(fetched["eventDate"]) == datetime(2030, 5, 1, 18, 0, tzinfo=timezone.utc)


def test_update_event_rejects_null_and_whitespace(client: TestClient, editor_headers: dict) -> None:
    """Non-nullable fields cannot be cleared; the record is left as it was."""
    event_id = client.post(f"{API}/events", headers=editor_headers, json=EVENT).json()["id"]

    for body in ({"status": None}, {"eventDate": None}, {"title": "   "}, {"title": None}):
        response = client.put(f"{API}/events/{event_id}", headers=editor_headers, json=body)
        assert response.status_code == 400, body
        assert response.json()["success"] is False

    fetched = client.get(f"{API}/events/{event_id}").json()["data"]
    assert fetched["status"] == "upcoming"
    assert fetched["title"] == "Hack Night"


def test_event_id_errors(client: TestClient) -> None:
    bad = client.get(f"{API}/events/123")
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid event ID"

    missing = client.get(f"{API}/events/{'a' * 32}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Event not found"


def test_upcoming_events(client: TestClient, session: Session) -> None:
    now = utcnow()
    for title, offset, status in [
        ("later", 10, "upcoming"),
        ("soon", 1, "upcoming"),
        ("past", -1, "upcoming"),
        ("cancelled", 2, "cancelled"),
    ]:
        session.add(
            Event(
                title=title,
                description="d",
                category="c",
                event_date=now + timedelta(days=offset),
                location="l",
                organizer="o",
                status=status,
            )
        )
    session.commit()

    data = client.get(f"{API}/events/upcoming").json()
    assert [e["title"] for e in data["data"]] == ["soon", "later"]


def test_list_events_filter(client: TestClient, editor_headers: dict) -> None:
    client.post(f"{API}/events", headers=editor_headers, json=EVENT)
    client.post(f"{API}/events", headers=editor_headers, json={**EVENT, "title": "Talk", "category": "Lecture"})

    data = client.get(f"{API}/events", params={"category": "Lecture"}).json()
    assert data["count"] == 1
    assert data["data"][0]["title"] == "Talk"


def test_delete_event(client: TestClient, editor_headers: dict, admin_headers: dict) -> None:
    event_id = client.post(f"{API}/events", headers=editor_headers, json=EVENT).json()["id"]
    assert client.delete(f"{API}/events/{event_id}", headers=editor_headers).status_code == 403
    assert client.delete(f"{API}/events/{event_id}", headers=admin_headers).json() == {
        "success": True,
        "message": "Event deleted successfully",
    }
    assert client.get(f"{API}/events/{event_id}").status_code == 404


def test_public_news_shows_published_only(client: TestClient, session: Session, editor_headers: dict) -> None:
    session.add(NewsArticle(title="Out now", content="..."))
    session.add(NewsArticle(title="Coming soon", content="...", status="draft"))
    session.commit()

    public = client.get(f"{API}/news").json()
    assert [a["title"] for a in public["data"]] == ["Out now"]

    everything = client.get(f"{API}/news/admin", headers=editor_headers).json()
    assert everything["count"] == 2


def test_news_crud(client: TestClient, editor_headers: dict, admin_headers: dict) -> None:
    created = client.post(
        f"{API}/news",
        headers=editor_headers,
        json={"title": "Results", "content": "We won.", "category": "Sports"},
    )
    assert created.status_code == 201
    article_id = created.json()["id"]
    assert created.json()["data"]["status"] == "published"

    updated = client.put(f"{API}/news/{article_id}", headers=editor_headers, json={"content": "We won again."})
    assert updated.json()["data"]["content"] == "We won again."

    assert client.delete(f"{API}/news/{article_id}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/news/{article_id}").status_code == 404
