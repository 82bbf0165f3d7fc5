"""
Database engine lifecycle and session dependency.

The engine is built explicitly at startup (see ``clubhub.main.lifespan``),
kept on ``app.state`` and disposed at shutdown. Routes receive sessions via
the ``get_session`` dependency, which tests override.
"""

from pathlib import Path
from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from clubhub.core.config import settings
from clubhub.core.logging import get_logger

logger = get_logger(__name__)


def create_db_engine(database_uri: str | None = None) -> Engine:
    """
    Create a database engine with settings appropriate to the backend.

    Args:
        database_uri: Optional override of the configured URI

    Returns:
        SQLAlchemy engine
    """
    uri = database_uri or settings.DATABASE_URI
    if uri.startswith("sqlite"):
        if uri.startswith("sqlite:///./"):
            Path(uri.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            uri,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},  # Allow multi-threading for SQLite
        )

    # pool_pre_ping ensures connections are alive before using them
    return create_engine(
        uri,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def init_db(engine: Engine) -> None:
    """Create all tables. Importing the models registers them on the metadata."""
    import clubhub.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ensured")


def get_session(request: Request) -> Generator[Session, None, None]:
    """
    Dependency that provides a database session for FastAPI routes.
    Uncommitted work is rolled back when the request fails.

    Yields:
        Database session instance
    """
    with Session(request.app.state.engine) as session:
        yield session
