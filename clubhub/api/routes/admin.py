"""
Administrative account management and the staff dashboard.
Every route runs the full chain: token, live account, role allow-list.
"""

from fastapi import APIRouter, Depends, status

from clubhub.api.deps import STAFF, SUPER, CurrentUserDep, SessionDep, get_current_user, require_role
from clubhub.core.errors import NotFoundError
from clubhub.core.logging import get_logger
from clubhub.schemas.account import AccountCreate, AccountResponse, AccountUpdate
from clubhub.services.account_service import AccountService
from clubhub.services.collection_service import ensure_valid_id
from clubhub.services.guards import ensure_not_self_delete, ensure_not_self_lockout
from clubhub.services.stats_service import dashboard_stats, recent_activities

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

super_admin_only = [Depends(get_current_user), Depends(require_role(*SUPER))]


def _get_account_or_404(session, account_id: str):
    ensure_valid_id(account_id, "user ID")
    account = AccountService.get_by_id(session, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return account


@router.get("/users", dependencies=super_admin_only)
def list_users(session: SessionDep) -> dict:
    accounts = AccountService.list(session)
    return {
        "success": True,
        "users": [AccountResponse.model_validate(account) for account in accounts],
    }


@router.post("/users", dependencies=super_admin_only, status_code=status.HTTP_201_CREATED)
def create_user(body: AccountCreate, session: SessionDep, user: CurrentUserDep) -> dict:
    AccountService.check_password_length(body.password)
    account = AccountService.create(session, body)
    logger.info(f"Account {account.username} created by {user.username}")
    return {
        "success": True,
        "message": "User created successfully",
        "id": account.id,
        "user": AccountResponse.model_validate(account),
    }


@router.put("/users/{account_id}", dependencies=super_admin_only)
def update_user(account_id: str, body: AccountUpdate, session: SessionDep, user: CurrentUserDep) -> dict:
    """
    Replace an account's profile, role and status.

    Raises:
        ValidationError: Caller would demote or deactivate itself
    """
    ensure_valid_id(account_id, "user ID")
    ensure_not_self_lockout(user.id, account_id, body.role, body.status)

    account = _get_account_or_404(session, account_id)
    account = AccountService.update(session, account, body)
    logger.info(f"Account {account.id} updated by {user.username}")
    return {
        "success": True,
        "message": "User updated successfully",
        "user": AccountResponse.model_validate(account),
    }


@router.delete("/users/{account_id}", dependencies=super_admin_only)
def delete_user(account_id: str, session: SessionDep, user: CurrentUserDep) -> dict:
    ensure_valid_id(account_id, "user ID")
    ensure_not_self_delete(user.id, account_id)

    account = _get_account_or_404(session, account_id)
    AccountService.delete(session, account)
    logger.info(f"Account {account_id} deleted by {user.username}")
    return {"success": True, "message": "User deleted successfully"}


@router.get("/dashboard", dependencies=[Depends(get_current_user), Depends(require_role(*STAFF))])
def dashboard(session: SessionDep) -> dict:
    """
    Headline counts across collections plus the latest activity.

    Queries run one after another on the request's session; any that fail
    report 0.
    """
    return {
        "success": True,
        "stats": dashboard_stats(session),
        "recentActivities": recent_activities(session),
    }
