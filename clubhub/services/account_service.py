"""
Account service layer implementing business logic for administrative accounts.
Separates business logic from API routes and database operations.
"""

from datetime import timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, or_, select

from clubhub.core.config import settings
from clubhub.core.errors import StoreError, ValidationError
from clubhub.core.logging import get_logger
from clubhub.core.security import generate_reset_token, get_password_hash, verify_password
from clubhub.models.account import Account, AccountRole, AccountStatus
from clubhub.models.base import as_utc, utcnow
from clubhub.schemas.account import AccountCreate, AccountUpdate

logger = get_logger(__name__)


class AccountService:
    """Service class for account-related operations."""

    @staticmethod
    def get_by_id(session: Session, account_id: str) -> Optional[Account]:
        """
        Retrieve an account by ID.

        Args:
            session: Database session
            account_id: Account ID to search for

        Returns:
            Account if found, None otherwise
        """
        return session.get(Account, account_id)

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[Account]:
        statement = select(Account).where(Account.email == email)
        return session.exec(statement).first()

    @staticmethod
    def get_by_login(session: Session, login: str) -> Optional[Account]:
        """
        Retrieve an account whose username or email equals ``login``.

        Args:
            session: Database session
            login: Username or email address

        Returns:
            Account if found, None otherwise
        """
        statement = select(Account).where(or_(Account.username == login, Account.email == login))
        return session.exec(statement).first()

    @staticmethod
    def exists(session: Session, username: str, email: str, exclude_id: Optional[str] = None) -> bool:
        """True if another account already uses ``username`` or ``email``."""
        statement = select(Account).where(or_(Account.username == username, Account.email == email))
        if exclude_id:
            statement = statement.where(Account.id != exclude_id)
        return session.exec(statement).first() is not None

    @staticmethod
    def list(session: Session) -> List[Account]:
        statement = select(Account).order_by(Account.created_at.desc())
        return list(session.exec(statement))

    @staticmethod
    def create(session: Session, account_in: AccountCreate) -> Account:
        """
        Create a new account with hashed password.

        The pre-check gives a friendly message; the unique constraints on
        ``username`` and ``email`` close the race between two concurrent creates.

        Args:
            session: Database session
            account_in: Account creation data

        Returns:
            Created account instance

        Raises:
            ValidationError: Username or email already taken
        """
        if AccountService.exists(session, account_in.username, account_in.email):
            raise ValidationError("Username or email already exists")

        account = Account(
            username=account_in.username,
            email=account_in.email,
            hashed_password=get_password_hash(account_in.password),
            first_name=account_in.first_name,
            last_name=account_in.last_name,
            role=account_in.role,
        )
        session.add(account)
        AccountService._commit(session)
        session.refresh(account)
        return account

    @staticmethod
    def update(session: Session, account: Account, account_in: AccountUpdate) -> Account:
        if AccountService.exists(session, account_in.username, account_in.email, exclude_id=account.id):
            raise ValidationError("Username or email already exists")

        account.username = account_in.username
        account.email = account_in.email
        account.first_name = account_in.first_name
        account.last_name = account_in.last_name
        account.role = account_in.role
        account.status = account_in.status
        account.updated_at = utcnow()
        session.add(account)
        AccountService._commit(session)
        session.refresh(account)
        return account

    @staticmethod
    def delete(session: Session, account: Account) -> None:
        session.delete(account)
        AccountService._commit(session)

    @staticmethod
    def authenticate(session: Session, login: str, password: str) -> Optional[Account]:
        """
        Authenticate an account by username-or-email and password.

        Args:
            session: Database session
            login: Username or email
            password: Plain text password

        Returns:
            Account if authentication successful, None otherwise
        """
        account = AccountService.get_by_login(session, login)
        if not account:
            return None
        if account.status != AccountStatus.ACTIVE:
            return None
        if not verify_password(password, account.hashed_password):
            return None
        return account

    @staticmethod
    def touch_last_login(session: Session, account: Account) -> Account:
        account.last_login = utcnow()
        session.add(account)
        AccountService._commit(session)
        session.refresh(account)
        return account

    @staticmethod
    def issue_reset_token(session: Session, email: str) -> Optional[str]:
        """
        Store a fresh reset token on the active account with ``email``.

        Returns:
            The token, or None when no active account uses that email
        """
        account = AccountService.get_by_email(session, email)
        if not account or account.status != AccountStatus.ACTIVE:
            return None

        token = generate_reset_token()
        account.reset_token = token
        account.reset_token_expiry = utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
        session.add(account)
        AccountService._commit(session)
        return token

    @staticmethod
    def reset_password(session: Session, token: str, new_password: str) -> Account:
        """
        Consume a reset token and set a new password.

        Raises:
            ValidationError: Password too short, or token unknown/expired
        """
        AccountService.check_password_length(new_password)

        account = session.exec(select(Account).where(Account.reset_token == token)).first()
        if not account or not account.reset_token_expiry:
            raise ValidationError("Invalid or expired reset token")
        if as_utc(account.reset_token_expiry) <= utcnow():
            raise ValidationError("Invalid or expired reset token")

        account.hashed_password = get_password_hash(new_password)
        account.reset_token = None
        account.reset_token_expiry = None
        account.updated_at = utcnow()
        session.add(account)
        AccountService._commit(session)
        return account

    @staticmethod
    def change_password(session: Session, account: Account, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, account.hashed_password):
            raise ValidationError("Current password is incorrect")
        AccountService.check_password_length(new_password)

        account.hashed_password = get_password_hash(new_password)
        account.updated_at = utcnow()
        session.add(account)
        AccountService._commit(session)

    @staticmethod
    def check_password_length(password: str) -> None:
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
            )

    @staticmethod
    def ensure_first_superuser(session: Session) -> Optional[Account]:
        """
        Create the configured super admin unless an account with that
        username or email already exists.

        Returns:
            The created account, or None if nothing was created
        """
        if AccountService.exists(session, settings.FIRST_SUPERUSER_USERNAME, settings.FIRST_SUPERUSER_EMAIL):
            return None
        return AccountService.create(
            session,
            AccountCreate(
                username=settings.FIRST_SUPERUSER_USERNAME,
                email=settings.FIRST_SUPERUSER_EMAIL,
                password=settings.FIRST_SUPERUSER_PASSWORD,
                first_name="Super",
                last_name="Admin",
                role=AccountRole.SUPER_ADMIN,
            ),
        )

    @staticmethod
    def _commit(session: Session) -> None:
        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.error(f"Account constraint violation: {e.orig}")
            raise StoreError()
