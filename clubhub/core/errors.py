"""
Error taxonomy shared by every route.

Each error carries the HTTP status it maps to and a short machine-readable
code. The handlers in ``clubhub.main`` render them into the standard
``{success: false, message, error}`` envelope.
"""

from enum import Enum
from typing import Optional

from fastapi import status


class ClubHubError(Exception):
    """Base class for errors that terminate a single request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "error"

    def __init__(self, message: str, *, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class ValidationError(ClubHubError):
    """Missing or malformed field or identifier."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class AuthErrorKind(str, Enum):
    """Why a bearer token was rejected."""

    MISSING = "missing"
    INVALID = "invalid"
    EXPIRED = "expired"


_AUTH_MESSAGES = {
    AuthErrorKind.MISSING: "Access denied. No token provided.",
    AuthErrorKind.INVALID: "Invalid token.",
    AuthErrorKind.EXPIRED: "Token has expired.",
}


class AuthenticationError(ClubHubError):
    """Missing, malformed or expired credentials, or an unusable account."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_error"

    def __init__(self, message: Optional[str] = None, *, kind: Optional[AuthErrorKind] = None):
        self.kind = kind
        if message is None:
            message = _AUTH_MESSAGES.get(kind, "Authentication required.") if kind else "Authentication required."
        super().__init__(message, code=f"token_{kind.value}" if kind else None)


class AuthorizationError(ClubHubError):
    """Valid token whose role is not on the allow-list."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "authorization_error"

    def __init__(self, message: str = "Insufficient permissions."):
        super().__init__(message)


class NotFoundError(ClubHubError):
    """No matching document, or one the caller does not own."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class StoreError(ClubHubError):
    """The underlying store failed. The message sent to clients stays generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_error"

    def __init__(self, message: str = "Database error"):
        super().__init__(message)


class UploadError(ClubHubError):
    """File rejected by the type/size filter (400) or failed to write (500)."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "upload_error"
