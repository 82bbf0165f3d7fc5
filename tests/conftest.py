"""
Pytest configuration and fixtures.
Provides test database, client, accounts and auth headers.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DISABLE_BOOTSTRAP_USERS", "true")

from typing import Dict, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import clubhub.models  # noqa: E402,F401
from clubhub.core.config import settings  # noqa: E402
from clubhub.db.session import get_session  # noqa: E402
from clubhub.main import app  # noqa: E402
from clubhub.models.account import Account, AccountRole  # noqa: E402
from clubhub.models.announcement import Announcement  # noqa: E402
from clubhub.schemas.account import AccountCreate  # noqa: E402
from clubhub.services.account_service import AccountService  # noqa: E402
from clubhub.services.file_storage_service import FileStorageService, get_file_storage  # noqa: E402

API = settings.API_PREFIX


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="storage")
def storage_fixture(tmp_path) -> FileStorageService:
    """File storage rooted in a per-test temporary directory."""
    return FileStorageService(tmp_path / "uploads")


@pytest.fixture(name="client")
def client_fixture(session: Session, storage: FileStorageService) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_file_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _create_account(session: Session, username: str, password: str, role: AccountRole) -> Account:
    return AccountService.create(
        session,
        AccountCreate(
            username=username,
            email=f"{username}@example.com",
            password=password,
            first_name=username.capitalize(),
            last_name="Tester",
            role=role,
        ),
    )


def _login(client: TestClient, username: str, password: str) -> Dict[str, str]:
    response = client.post(f"{API}/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture(name="super_admin")
def super_admin_fixture(session: Session) -> Account:
    """The bootstrap super admin (admin / admin123)."""
    return AccountService.ensure_first_superuser(session)


@pytest.fixture(name="admin")
def admin_fixture(session: Session) -> Account:
    return _create_account(session, "manager", "managerpass", AccountRole.ADMIN)


@pytest.fixture(name="editor")
def editor_fixture(session: Session) -> Account:
    return _create_account(session, "editor", "editorpass", AccountRole.EDITOR)


@pytest.fixture(name="super_headers")
def super_headers_fixture(client: TestClient, super_admin: Account) -> Dict[str, str]:
    return _login(client, "admin", "admin123")


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(client: TestClient, admin: Account) -> Dict[str, str]:
    return _login(client, "manager", "managerpass")


@pytest.fixture(name="editor_headers")
def editor_headers_fixture(client: TestClient, editor: Account) -> Dict[str, str]:
    return _login(client, "editor", "editorpass")


@pytest.fixture(name="announcement")
def announcement_fixture(session: Session, super_admin: Account) -> Announcement:
    """A published, public announcement."""
    announcement = Announcement(
        title="Welcome back",
        content="The club year starts on Monday.",
        created_by=super_admin.id,
    )
    session.add(announcement)
    session.commit()
    session.refresh(announcement)
    return announcement
