"""
Account schemas for API request/response validation.
Separates internal models from API contracts using Pydantic.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from clubhub.models.account import AccountRole, AccountStatus
from clubhub.schemas.common import APIModel, PasswordStr, RequiredStr


class LoginRequest(APIModel):
    """``username`` may be either the username or the email."""

    username: RequiredStr
    password: PasswordStr


class LoginUser(APIModel):
    """User block returned by a successful login."""

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: AccountRole
    last_login: Optional[datetime] = None


class AccountResponse(APIModel):
    """
    Account data in API responses.
    Excludes sensitive information like the password hash and reset token.
    """

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: AccountRole
    status: AccountStatus
    last_login: Optional[datetime] = None
    created_at: datetime


class CurrentUser(AccountResponse):
    """Sanitized view of the acting account attached to a request."""

    pass


class AccountCreate(APIModel):
    username: RequiredStr
    email: EmailStr
    password: PasswordStr
    first_name: RequiredStr
    last_name: RequiredStr
    role: AccountRole


class AccountUpdate(APIModel):
    username: RequiredStr
    email: EmailStr
    first_name: RequiredStr
    last_name: RequiredStr
    role: AccountRole
    status: AccountStatus


class ForgotPasswordRequest(APIModel):
    email: RequiredStr


class ResetPasswordRequest(APIModel):
    token: RequiredStr
    new_password: PasswordStr


class ChangePasswordRequest(APIModel):
    current_password: PasswordStr
    new_password: PasswordStr
