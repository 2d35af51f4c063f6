"""Registration and login endpoints."""

from fastapi import APIRouter, status

from planhub.api.deps import SettingsDep, StoreDep
from planhub.core.security import hash_password
from planhub.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
)
from planhub.services.auth import (
    complete_login,
    issue_token,
    public_user,
    register_user,
    verify_credentials,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(body: RegisterRequest, store: StoreDep, settings: SettingsDep) -> RegisterResponse:
    """Create an account. Duplicate normalized emails are rejected with 400."""
    # bcrypt runs before the store lock is taken
    password_hash = hash_password(body.password) if body.password else None
    with store.transaction() as document:
        user = register_user(
            document, settings, body.name, body.email, body.password, password_hash
        )
    return RegisterResponse(
        message="Registration successful",
        user=RegisteredUser(name=user.name, email=user.email, role=user.role),
    )


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
def login(body: LoginRequest, store: StoreDep, settings: SettingsDep) -> LoginResponse:
    """
    Authenticate with email and password; returns the user without password.
    When token issuing is enabled, also returns a JWT for the Authorization
    header as: Bearer <token>

    Credentials are checked against a snapshot outside the store lock; only
    the resulting writes run inside the transaction.
    """
    user = verify_credentials(store.load(), body.email, body.password)
    rehashed = None if user.password_hash else hash_password(body.password)
    with store.transaction() as document:
        user = complete_login(document, settings, user.email, rehashed)
        result = public_user(user)
    token = issue_token(user, settings) if settings.ISSUE_TOKENS else None
    return LoginResponse(message="Login successful", user=result, token=token)
