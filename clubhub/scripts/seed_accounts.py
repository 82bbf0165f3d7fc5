"""
Seed administrative accounts. Run from project root:
  python -m clubhub.scripts.seed_accounts [--password PASSWORD] [--first-superuser-only]
Existing usernames or emails are skipped, so the script can be re-run safely.
"""
import argparse
import sys

from sqlmodel import Session

from clubhub.core.config import settings
from clubhub.db.session import create_db_engine, init_db
from clubhub.models.account import AccountRole
from clubhub.schemas.account import AccountCreate
from clubhub.services.account_service import AccountService

DEFAULT_ACCOUNTS = [
    ("superadmin", "superadmin@example.com", "Super", "Admin", AccountRole.SUPER_ADMIN),
    ("admin", "admin@example.com", "Admin", "User", AccountRole.ADMIN),
    ("editor", "editor@example.com", "Editor", "User", AccountRole.EDITOR),
]


def seed_defaults(session: Session, password: str) -> int:
    created = 0
    for username, email, first_name, last_name, role in DEFAULT_ACCOUNTS:
        if AccountService.exists(session, username, email):
            print(f"User already exists: {username}")
            continue
        AccountService.create(
            session,
            AccountCreate(
                username=username,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=role,
            ),
        )
        print(f"Created user: {username} ({role.value})")
        created += 1
    return created


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed ClubHub administrative accounts.")
    parser.add_argument("--password", default="admin123", help="Password for the seeded accounts")
    parser.add_argument(
        "--first-superuser-only",
        action="store_true",
        help="Only create the FIRST_SUPERUSER_* account from settings",
    )
    args = parser.parse_args()

    if len(args.password) < settings.MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters.", file=sys.stderr)
        return 1

    engine = create_db_engine()
    init_db(engine)
    try:
        with Session(engine) as session:
            if args.first_superuser_only:
                account = AccountService.ensure_first_superuser(session)
                if account:
                    print(f"Created super admin '{account.username}'.")
                else:
                    print(f"User already exists: {settings.FIRST_SUPERUSER_USERNAME}")
                return 0
            created = seed_defaults(session, args.password)
        print(f"Done! {created} account(s) created.")
        return 0
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
