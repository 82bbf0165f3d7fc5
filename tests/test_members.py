"""
Tests for member registration, management and export.
"""

from io import BytesIO

from fastapi.testclient import TestClient
from openpyxl import load_workbook
from sqlmodel import Session

from clubhub.core.config import settings
from clubhub.models.member import Member
from clubhub.services.member_export import XLSX_MEDIA_TYPE

API = settings.API_PREFIX

REGISTRATION = {
    "fullName": "Grace Hopper",
    "email": "grace@example.com",
    "studentId": "S-1906",
    "department": "Computer Science",
    "year": 3,
    "phone": "555-0100",
    "interests": "Compilers",
}


def test_register_member(client: TestClient, session: Session) -> None:
    """Public registration stores the member as active."""
    response = client.post(f"{API}/members/register", json=REGISTRATION)
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    member = session.get(Member, data["memberId"])
    assert member.full_name == "Grace Hopper"
    assert member.student_id == "S-1906"
    assert member.year == "3"
    assert member.status == "active"


def test_register_member_snake_case_fields(client: TestClient, session: Session) -> None:
    """Older clients may still send snake_case names."""
    response = client.post(
        f"{API}/members/register",
        json={"full_name": "Alan Turing", "email": "alan@example.com", "student_id": "S-1912"},
    )
    assert response.status_code == 201
    member = session.get(Member, response.json()["memberId"])
    assert member.full_name == "Alan Turing"
    assert member.student_id == "S-1912"


def test_register_duplicate_email(client: TestClient) -> None:
    client.post(f"{API}/members/register", json=REGISTRATION)
    response = client.post(f"{API}/members/register", json={**REGISTRATION, "fullName": "Someone Else"})
    assert response.status_code == 400
    assert response.json()["message"] == "Member with this email already exists"


def test_register_missing_fields(client: TestClient) -> None:
    response = client.post(f"{API}/members/register", json={"email": "x@example.com"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("Missing required fields")


def test_register_invalid_email(client: TestClient) -> None:
    response = client.post(f"{API}/members/register", json={"fullName": "X", "email": "not-an-email"})
    assert response.status_code == 400


def test_staff_create_and_get(client: TestClient, editor_headers: dict) -> None:
    created = client.post(f"{API}/members", headers=editor_headers, json=REGISTRATION)
    assert created.status_code == 201
    member_id = created.json()["memberId"]

    response = client.get(f"{API}/members/{member_id}", headers=editor_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["fullName"] == "Grace Hopper"
    assert data["department"] == "Computer Science"
    assert "joinedAt" in data


def test_list_members_requires_staff(client: TestClient) -> None:
    assert client.get(f"{API}/members").status_code == 401


def test_list_members_filters_and_search(client: TestClient, session: Session, editor_headers: dict) -> None:
    session.add(Member(full_name="Grace Hopper", email="grace@example.com", department="CS"))
    session.add(Member(full_name="Ada Lovelace", email="ada@example.com", department="Math"))
    session.add(Member(full_name="Old Member", email="old@example.com", department="CS", status="inactive"))
    session.commit()

    data = client.get(f"{API}/members", headers=editor_headers, params={"department": "CS"}).json()
    assert data["count"] == 2

    data = client.get(f"{API}/members", headers=editor_headers, params={"search": "lovelace"}).json()
    assert [m["fullName"] for m in data["data"]] == ["Ada Lovelace"]

    data = client.get(f"{API}/members", headers=editor_headers, params={"status": "inactive"}).json()
    assert data["count"] == 1


def test_update_member(client: TestClient, session: Session, editor_headers: dict) -> None:
    member = Member(full_name="Grace Hopper", email="grace@example.com")
    session.add(member)
    session.commit()

    response = client.put(f"{API}/members/{member.id}", headers=editor_headers, json={"department": "Navy"})
    assert response.status_code == 200
    assert response.json()["data"]["department"] == "Navy"
    assert response.json()["data"]["fullName"] == "Grace Hopper"


def test_update_member_rejects_cleared_fields(client: TestClient, session: Session, editor_headers: dict) -> None:
    member = Member(full_name="Grace Hopper", email="grace@example.com", phone="555-0100")
    session.add(member)
    session.commit()

    for body in ({"status": None}, {"fullName": "  "}, {"email": None}):
        response = client.put(f"{API}/members/{member.id}", headers=editor_headers, json=body)
        assert response.status_code == 400, body

    cleared = client.put(f"{API}/members/{member.id}", headers=editor_headers, json={"phone": None})
    assert cleared.status_code == 200
    data = cleared.json()["data"]
    assert data["phone"] is None
    assert data["status"] == "active"
    assert data["fullName"] == "Grace Hopper"


def test_update_member_email_taken(client: TestClient, session: Session, editor_headers: dict) -> None:
    first = Member(full_name="Grace Hopper", email="grace@example.com")
    second = Member(full_name="Ada Lovelace", email="ada@example.com")
    session.add(first)
    session.add(second)
    session.commit()

    response = client.put(f"{API}/members/{second.id}", headers=editor_headers, json={"email": "grace@example.com"})
    assert response.status_code == 400


def test_delete_member_requires_admin(
    client: TestClient, session: Session, editor_headers: dict, admin_headers: dict
) -> None:
    member = Member(full_name="Grace Hopper", email="grace@example.com")
    session.add(member)
    session.commit()
    member_id = member.id

    assert client.delete(f"{API}/members/{member_id}", headers=editor_headers).status_code == 403
    assert client.delete(f"{API}/members/{member_id}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/members/{member_id}", headers=admin_headers).status_code == 404


def test_export_members(client: TestClient, session: Session, editor_headers: dict) -> None:
    session.add(Member(full_name="Grace Hopper", email="grace@example.com", department="CS"))
    session.commit()

    response = client.get(f"{API}/members/export", headers=editor_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    assert "members.xlsx" in response.headers["content-disposition"]

    ws = load_workbook(BytesIO(response.content)).active
    assert ws["A1"].value == "Full Name"
    assert ws["A2"].value == "Grace Hopper"
    assert ws["B2"].value == "grace@example.com"
    assert ws.max_row == 2
