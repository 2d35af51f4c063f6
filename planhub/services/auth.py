"""Registration, login, token issue/verification and role checks."""

import hmac
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import jwt

from planhub.core.errors import Conflict, Forbidden, InvalidCredentials, InvalidToken, ValidationError
from planhub.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from planhub.models import Document, Role, User, normalize_email
from planhub.schemas.auth import CurrentUser, UserPublic
from planhub.services.approvals import record_approval

if TYPE_CHECKING:
    from planhub.core.config import Settings

logger = logging.getLogger(__name__)


def role_for_email(email: str, settings: "Settings") -> Role:
    """'admin' iff the normalized email is the configured admin address."""
    return "admin" if normalize_email(email) == settings.ADMIN_EMAIL else "user"


def ensure_user_defaults(user: User, settings: "Settings") -> User:
    """Fill the role legacy records may lack. Missing purchases are defaulted on load."""
    if user.role is None:
        user.role = role_for_email(user.email, settings)
    return user


def public_user(user: User) -> UserPublic:
    """User view with password fields stripped."""
    return UserPublic(
        name=user.name,
        email=user.email,
        role=user.role or "user",
        approved=user.approved,
        plan_id=user.plan_id,
        purchases=list(user.purchases),
        created_at=user.created_at,
    )


def register_user(
    document: Document,
    settings: "Settings",
    name: str | None,
    email: str | None,
    password: str | None,
    password_hash: str | None = None,
) -> User:
    """
    Create a user keyed by normalized email. Raises ValidationError for
    missing fields and Conflict if the email is already registered.

    password_hash, when given, must be hash_password(password); callers
    holding the store lock pass it in so bcrypt runs outside the lock.

    With REQUIRE_APPROVAL the user starts unapproved and a pending signup
    approval is recorded; the admin address is always approved.
    """
    if not name or not email or not password:
        raise ValidationError("Missing required fields")
    normalized = normalize_email(email)
    if not normalized or not name.strip():
        raise ValidationError("Missing required fields")
    if len(password) < settings.PASSWORD_MIN_LEN:
        raise ValidationError(
            f"Password must be at least {settings.PASSWORD_MIN_LEN} characters"
        )
    if normalized in document.users:
        raise Conflict("Email already registered")

    role = role_for_email(normalized, settings)
    approved = role == "admin" or not settings.REQUIRE_APPROVAL
    user = User(
        email=normalized,
        name=name.strip(),
        password_hash=password_hash or hash_password(password),
        role=role,
        approved=approved,
        purchases=[],
        created_at=datetime.now(UTC),
    )
    document.users[normalized] = user
    if not approved:
        record_approval(document, "signup", normalized, name=user.name)

    logger.info(
        "User registered",
        extra={"email": normalized, "role": role, "approved": approved},
    )
    return user


def _check_password(user: User, password: str) -> bool:
    if user.password_hash:
        return verify_password(password, user.password_hash)
    if user.password is not None:
        return hmac.compare_digest(user.password.encode("utf-8"), password.encode("utf-8"))
    return False


def verify_credentials(document: Document, email: str | None, password: str | None) -> User:
    """
    Check email/password against the document without modifying it.
    Raises ValidationError for missing fields, InvalidCredentials otherwise.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")
    normalized = normalize_email(email)
    user = document.users.get(normalized)
    if user is None or not _check_password(user, password):
        logger.info("Login failed", extra={"email": normalized})
        raise InvalidCredentials("Invalid email or password")
    return user


def complete_login(
    document: Document,
    settings: "Settings",
    email: str,
    rehashed_password: str | None = None,
) -> User:
    """
    Apply the writes of a verified login: fill defaults, replace a legacy
    plaintext password with rehashed_password, and with REQUIRE_APPROVAL
    record a pending login approval for non-admin users.
    """
    normalized = normalize_email(email)
    user = document.users.get(normalized)
    if user is None:
        raise InvalidCredentials("Invalid email or password")

    ensure_user_defaults(user, settings)
    if not user.password_hash and rehashed_password:
        user.password_hash = rehashed_password
        user.password = None
        logger.info("Re-hashed legacy password", extra={"email": normalized})

    if settings.REQUIRE_APPROVAL and user.role != "admin":
        record_approval(document, "login", normalized)
    return user


def authenticate_user(
    document: Document,
    settings: "Settings",
    email: str | None,
    password: str | None,
) -> User:
    """
    Return the user for valid credentials; raise InvalidCredentials otherwise.

    Single-document form of verify_credentials + complete_login. A legacy
    plaintext password is re-hashed on the first successful login.
    """
    user = verify_credentials(document, email, password)
    rehashed = None if user.password_hash else hash_password(password)
    return complete_login(document, settings, user.email, rehashed)


def issue_token(user: User, settings: "Settings") -> str:
    return create_access_token(user.email, user.role or "user", settings)


def verify_token(token: str, settings: "Settings") -> CurrentUser:
    """Decode a bearer token into the caller's email and role."""
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        raise InvalidToken("Invalid token") from e
    email = payload.get("sub")
    role = payload.get("role")
    if not email or role not in ("user", "admin"):
        raise InvalidToken("Invalid token")
    return CurrentUser(email=email, role=role)


def require_role(current_user: CurrentUser, role: Role) -> CurrentUser:
    if current_user.role != role:
        raise Forbidden("Forbidden")
    return current_user


def list_users(document: Document, settings: "Settings") -> list[UserPublic]:
    """All users, defaults filled, passwords stripped."""
    return [public_user(ensure_user_defaults(u, settings)) for u in document.users.values()]
