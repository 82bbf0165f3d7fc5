"""
Security utilities for password hashing and JWT token management.

Default hashing uses ``pbkdf2_sha256`` for stable cross-platform behavior in
tests and local development. ``bcrypt`` verification is still supported so
accounts seeded by older tooling keep working.
"""

import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from clubhub.core.config import settings
from clubhub.core.errors import AuthenticationError, AuthErrorKind, ConfigurationError
from clubhub.schemas.token import TokenPayload

# Prefer pbkdf2 for new hashes while still verifying legacy bcrypt hashes.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


class TokenIssuer:
    """
    Mints and validates bearer tokens carrying ``{id, username, role}``.

    The issuer is a pure function of its secret and the payload: it keeps no
    record of issued tokens, so a token stays valid until it expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_delta: timedelta | None = None):
        if not secret:
            raise ConfigurationError("SECRET_KEY is not configured; refusing to issue tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(self, account: Any, expires_delta: timedelta | None = None) -> str:
        """
        Encode an account's identity claims into a signed token.

        Args:
            account: Any object exposing ``id``, ``username`` and ``role``
            expires_delta: Optional override of the default lifetime

        Returns:
            Encoded JWT token string
        """
        role = getattr(account.role, "value", account.role)
        expire = datetime.now(timezone.utc) + (expires_delta or self.expires_delta)
        to_encode = {
            "id": str(account.id),
            "username": account.username,
            "role": str(role),
            "exp": expire,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenPayload:
        """
        Decode a token and check its signature and expiry.

        Raises:
            AuthenticationError: kind ``missing``, ``invalid`` or ``expired``
        """
        if not token:
            raise AuthenticationError(kind=AuthErrorKind.MISSING)
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError(kind=AuthErrorKind.EXPIRED)
        except JWTError:
            raise AuthenticationError(kind=AuthErrorKind.INVALID)

        try:
            return TokenPayload.model_validate(payload)
        except PydanticValidationError:
            raise AuthenticationError(kind=AuthErrorKind.INVALID)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide issuer built from settings. Called once at startup."""
    return TokenIssuer(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_access_token(account: Any, expires_delta: timedelta | None = None) -> str:
    """Issue a token for ``account`` with the configured issuer."""
    return get_token_issuer().issue(account, expires_delta=expires_delta)


def decode_access_token(token: str | None) -> TokenPayload:
    """Verify ``token`` with the configured issuer."""
    return get_token_issuer().verify(token)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using the configured default scheme.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def generate_reset_token() -> str:
    """Random 64-character hex token for password resets."""
    return secrets.token_hex(32)
