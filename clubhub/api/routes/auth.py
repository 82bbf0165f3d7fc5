"""
Authentication routes: login, profile and password management.
Provides JWT bearer-token authentication.
"""

from fastapi import APIRouter

from clubhub.api.deps import ClaimsDep, CurrentUserDep, SessionDep
from clubhub.core.config import settings
from clubhub.core.errors import AuthenticationError
from clubhub.core.logging import get_logger
from clubhub.core.security import create_access_token
from clubhub.schemas.account import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginUser,
    ResetPasswordRequest,
)
from clubhub.services.account_service import AccountService
from clubhub.workers.queue import try_enqueue
from clubhub.workers.tasks import send_password_reset_email_task

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

RESET_SENT_MESSAGE = "If the email exists, a reset link has been sent"


@router.post("/login")
def login(body: LoginRequest, session: SessionDep) -> dict:
    """
    Exchange a username (or email) and password for a bearer token.

    Raises:
        AuthenticationError: Unknown login, wrong password or inactive account
    """
    account = AccountService.authenticate(session, body.username, body.password)
    if not account:
        logger.warning(f"Failed login attempt for: {body.username}")
        raise AuthenticationError("Invalid credentials")

    account = AccountService.touch_last_login(session, account)
    token = create_access_token(account)
    logger.info(f"Account logged in: {account.username} (ID: {account.id})")

    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": LoginUser.model_validate(account),
    }


@router.get("/profile")
def get_profile(user: CurrentUserDep) -> dict:
    return {"success": True, "user": user}


@router.post("/forgot-password")
def forgot_password(body: ForgotPasswordRequest, session: SessionDep) -> dict:
    """
    Start a password reset.

    The response is identical whether or not the email belongs to an account.
    The reset token is only echoed back when ``DEBUG`` is on.
    """
    response: dict = {"success": True, "message": RESET_SENT_MESSAGE}

    token = AccountService.issue_reset_token(session, body.email)
    if token is None:
        logger.info("Password reset requested for unknown or inactive email")
        return response

    account = AccountService.get_by_email(session, body.email)
    try_enqueue(send_password_reset_email_task, account.email, account.display_name, token)
    logger.info(f"Password reset token issued for account {account.id}")
    if settings.DEBUG:
        response["resetToken"] = token
    return response


@router.post("/reset-password")
def reset_password(body: ResetPasswordRequest, session: SessionDep) -> dict:
    account = AccountService.reset_password(session, body.token, body.new_password)
    logger.info(f"Password reset completed for account {account.id}")
    return {"success": True, "message": "Password reset successful"}


@router.post("/change-password")
def change_password(body: ChangePasswordRequest, user: CurrentUserDep, session: SessionDep) -> dict:
    account = AccountService.get_by_id(session, user.id)
    AccountService.change_password(session, account, body.current_password, body.new_password)
    logger.info(f"Password changed for account {user.id}")
    return {"success": True, "message": "Password changed successfully"}


@router.post("/logout")
def logout(claims: ClaimsDep) -> dict:
    """Tokens are stateless; the client discards its copy."""
    logger.info(f"Account logged out: {claims.username}")
    return {"success": True, "message": "Logged out successfully"}
