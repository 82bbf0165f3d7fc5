"""
Self-action guards for account management.

An account may not lock itself out: it cannot demote its own role away from
super admin, deactivate itself or delete its own record. Both checks are pure
predicates over the caller, the target and the proposed fields.
"""

from typing import Any

from clubhub.core.errors import ValidationError
from clubhub.models.account import AccountRole, AccountStatus


def _value(field: Any) -> Any:
    return getattr(field, "value", field)


def ensure_not_self_lockout(caller_id: str, target_id: str, role: Any, status: Any) -> None:
    """
    Reject a self-update that changes the caller's own role or status.

    Raises:
        ValidationError: Caller targets itself with a non super-admin role or non-active status
    """
    if caller_id != target_id:
        return
    if _value(role) != AccountRole.SUPER_ADMIN.value:
        raise ValidationError("You cannot change your own role")
    if _value(status) != AccountStatus.ACTIVE.value:
        raise ValidationError("You cannot deactivate your own account")


def ensure_not_self_delete(caller_id: str, target_id: str) -> None:
    """
    Raises:
        ValidationError: Caller targets itself
    """
    if caller_id == target_id:
        raise ValidationError("You cannot delete your own account")
