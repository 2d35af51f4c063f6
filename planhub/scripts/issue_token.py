"""
Print a bearer token for an existing user. Useful when ISSUE_TOKENS=false
and admin routes still need a token:
  python -m planhub.scripts.issue_token admin@watchearn.com
"""
import argparse
import logging
import sys

from planhub.core.config import get_settings
from planhub.core.errors import StoreError
from planhub.core.store import JsonStore
from planhub.services.auth import ensure_user_defaults, issue_token

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Issue a JWT for an existing PlanHub user.")
    parser.add_argument("email", help="User email")
    parser.add_argument("--data-file", default=None, help="Override DATA_FILE")
    args = parser.parse_args(argv)

    settings = get_settings()
    store = JsonStore(args.data_file or settings.DATA_FILE)
    try:
        document = store.load()
    except StoreError as e:
        logger.exception("Cannot load data file: %s", e)
        return 1
    user = document.get_user(args.email)
    if user is None:
        print(f"User '{args.email}' not found.", file=sys.stderr)
        return 1
    print(issue_token(ensure_user_defaults(user, settings), settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
