"""
API dependencies for FastAPI dependency injection.

The authorization chain is three composable stages that routes list
explicitly, in this order where used:

1. ``verify_token``: bearer header to claims, or 401.
2. ``get_current_user``: re-fetch the account and require ``active``, or 401.
3. ``require_role(...)``: the token's role claim must be on the allow-list;
   401 without claims, 403 otherwise.

Public routes use none of them. Routes that accept optional authentication
use ``get_current_user_optional``.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from clubhub.core.errors import AuthenticationError, AuthErrorKind, AuthorizationError
from clubhub.core.logging import get_logger
from clubhub.core.security import decode_access_token
from clubhub.db.session import get_session
from clubhub.models.account import AccountRole, AccountStatus
from clubhub.schemas.account import CurrentUser
from clubhub.schemas.token import TokenPayload
from clubhub.services.account_service import AccountService
from clubhub.services.file_storage_service import FileStorageService, get_file_storage

logger = get_logger(__name__)

# Bearer scheme; missing credentials are handled by the stages below.
bearer_scheme = HTTPBearer(auto_error=False)

SUPER = (AccountRole.SUPER_ADMIN,)
ADMINS = (AccountRole.SUPER_ADMIN, AccountRole.ADMIN)
STAFF = (AccountRole.SUPER_ADMIN, AccountRole.ADMIN, AccountRole.EDITOR)

SessionDep = Annotated[Session, Depends(get_session)]
StorageDep = Annotated[FileStorageService, Depends(get_file_storage)]


def get_optional_claims(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Optional[TokenPayload]:
    """
    Decode the bearer token if one was sent.

    Returns:
        Claims, or None when no Authorization header is present

    Raises:
        AuthenticationError: A token was sent but is invalid or expired
    """
    if credentials is None:
        return None
    try:
        claims = decode_access_token(credentials.credentials)
    except AuthenticationError as e:
        logger.warning(f"Token rejected ({e.kind.value if e.kind else 'unknown'}) on {request.url.path}")
        raise
    request.state.claims = claims
    return claims


def verify_token(
    request: Request,
    claims: Annotated[Optional[TokenPayload], Depends(get_optional_claims)],
) -> TokenPayload:
    """
    Require a valid bearer token.

    Raises:
        AuthenticationError: Token missing, invalid or expired
    """
    if claims is None:
        logger.warning(f"Missing bearer token on {request.url.path}")
        raise AuthenticationError(kind=AuthErrorKind.MISSING)
    return claims


def _hydrate(request: Request, session: Session, claims: TokenPayload) -> CurrentUser:
    account = AccountService.get_by_id(session, claims.id)
    if account is None:
        logger.warning(f"Token for unknown account {claims.id}")
        raise AuthenticationError("User not found or inactive")
    if account.status != AccountStatus.ACTIVE:
        logger.warning(f"Inactive account {account.id} attempted access")
        raise AuthenticationError("User not found or inactive")
    user = CurrentUser.model_validate(account)
    request.state.user = user
    return user


def get_current_user(
    request: Request,
    session: SessionDep,
    claims: Annotated[TokenPayload, Depends(verify_token)],
) -> CurrentUser:
    """
    Dependency to get the current active account from the verified token.

    The token is a claim, not a fact: the account is re-read on every request
    so deactivation takes effect immediately.

    Returns:
        Sanitized view of the account (no password hash or reset token)

    Raises:
        AuthenticationError: Account missing or not active
    """
    return _hydrate(request, session, claims)


def get_current_user_optional(
    request: Request,
    session: SessionDep,
    claims: Annotated[Optional[TokenPayload], Depends(get_optional_claims)],
) -> Optional[CurrentUser]:
    """Like ``get_current_user`` but passes through None when no token was sent."""
    if claims is None:
        return None
    return _hydrate(request, session, claims)


def require_role(*roles: AccountRole) -> Callable[..., TokenPayload]:
    """
    Build a dependency that admits only tokens whose role claim is in ``roles``.

    The role is read from the signed token, so a role change applies once the
    account's old token expires. Status is still checked live by
    ``get_current_user``.
    """
    allowed = {role.value for role in roles}

    def check_role(
        request: Request,
        claims: Annotated[Optional[TokenPayload], Depends(get_optional_claims)],
    ) -> TokenPayload:
        if claims is None:
            raise AuthenticationError()
        if claims.role not in allowed:
            logger.warning(f"Account {claims.id} with role {claims.role} denied {request.url.path}")
            raise AuthorizationError()
        return claims

    return check_role


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUserDep = Annotated[Optional[CurrentUser], Depends(get_current_user_optional)]
ClaimsDep = Annotated[TokenPayload, Depends(verify_token)]
