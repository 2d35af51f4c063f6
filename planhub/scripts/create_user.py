"""
Create a pre-approved user (e.g. first admin) directly in the JSON store.
Run from project root:
  python -m planhub.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m planhub.scripts.create_user Admin admin@watchearn.com your-secure-password admin
"""
import argparse
import logging
import sys
from datetime import UTC, datetime

from planhub.core.config import get_settings
from planhub.core.errors import Conflict, StoreError
from planhub.core.security import hash_password
from planhub.core.store import JsonStore
from planhub.models import User, normalize_email

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a PlanHub user, approved, bypassing registration.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Email (normalized to lowercase)")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    parser.add_argument("--data-file", default=None, help="Override DATA_FILE")
    args = parser.parse_args(argv)

    settings = get_settings()
    email = normalize_email(args.email)
    name = args.name.strip()
    if not email or not name:
        print("Name and email must be non-empty.", file=sys.stderr)
        return 1
    if len(args.password) < settings.PASSWORD_MIN_LEN:
        print(f"Password must be at least {settings.PASSWORD_MIN_LEN} characters.", file=sys.stderr)
        return 1

    store = JsonStore(args.data_file or settings.DATA_FILE)
    password_hash = hash_password(args.password)
    try:
        with store.transaction() as document:
            if email in document.users:
                raise Conflict(f"User '{email}' already exists.")
            document.users[email] = User(
                email=email,
                name=name,
                password_hash=password_hash,
                role=args.role,
                approved=True,
                purchases=[],
                created_at=datetime.now(UTC),
            )
    except Conflict as e:
        print(e.message, file=sys.stderr)
        return 1
    except StoreError as e:
        logger.exception("Create user failed: %s", e)
        return 1
    print(f"Created user '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
