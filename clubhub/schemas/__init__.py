"""Pydantic schemas for request/response validation."""

from clubhub.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    CurrentUser,
    LoginRequest,
    LoginUser,
)
from clubhub.schemas.token import TokenPayload

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "AccountUpdate",
    "CurrentUser",
    "LoginRequest",
    "LoginUser",
    "TokenPayload",
]
