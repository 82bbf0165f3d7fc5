"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

from typing import Any, List

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "ClubHub API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    PORT: int = 3001

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    RESET_TOKEN_EXPIRE_MINUTES: int = 60
    MIN_PASSWORD_LENGTH: int = 6

    # Database
    DATABASE_URL: str | None = None  # e.g. sqlite:///./data/clubhub.db
    DB_NAME: str = "clubhub"
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None

    @property
    def DATABASE_URI(self) -> str:
        """Get database URI - supports both SQLite and PostgreSQL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.POSTGRES_SERVER and self.POSTGRES_USER and self.POSTGRES_PASSWORD:
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.DB_NAME}"
            )

        return f"sqlite:///./data/{self.DB_NAME}.db"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URI.startswith("sqlite")

    # Redis (background e-mail jobs)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # Mail (delivery happens in the worker)
    MAIL_HOST: str | None = None
    MAIL_PORT: int = 587
    MAIL_USERNAME: str | None = None
    MAIL_PASSWORD: str | None = None
    MAIL_FROM: str | None = None

    @property
    def mail_enabled(self) -> bool:
        return bool(self.MAIL_USERNAME and self.MAIL_PASSWORD)

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str] | str:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # First super admin (created on startup)
    DISABLE_BOOTSTRAP_USERS: bool = False
    FIRST_SUPERUSER_USERNAME: str = "admin"
    FIRST_SUPERUSER_EMAIL: str = "admin@example.com"
    FIRST_SUPERUSER_PASSWORD: str = "admin123"  # Max 72 bytes for bcrypt

    @field_validator("FIRST_SUPERUSER_PASSWORD", mode="after")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length for bcrypt (max 72 bytes)."""
        if v and len(v.encode("utf-8")) > 72:
            raise ValueError(
                f"FIRST_SUPERUSER_PASSWORD is too long ({len(v.encode('utf-8'))} bytes). "
                "Bcrypt has a maximum of 72 bytes. Please use a shorter password."
            )
        return v

    # File uploads
    UPLOAD_DIR: str = "./uploads"
    MAX_IMAGE_UPLOAD_BYTES: int = 5 * 1024 * 1024
    MAX_MEDIA_UPLOAD_BYTES: int = 50 * 1024 * 1024


settings = Settings()  # type: ignore
