"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import Field

from planhub.models import Purchase, Role
from planhub.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Registration body. Fields are optional so missing ones map to a 400."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str | None = None
    password: str | None = None


class UserPublic(CamelModel):
    """User as returned to clients (no password fields)."""

    name: str
    email: str
    role: Role
    approved: bool
    plan_id: str | None = None
    purchases: list[Purchase] = Field(default_factory=list)
    created_at: datetime | None = None


class RegisteredUser(CamelModel):
    name: str
    email: str
    role: Role


class RegisterResponse(CamelModel):
    success: bool = True
    message: str
    user: RegisteredUser


class LoginResponse(CamelModel):
    """Login result; token is omitted when token issuing is disabled."""

    success: bool = True
    message: str
    user: UserPublic
    token: str | None = Field(default=None, description="JWT bearer token")


class CurrentUser(CamelModel):
    """Authenticated caller decoded from the bearer token."""

    email: str
    role: Role


class UsersListResponse(CamelModel):
    """Response for GET /admin/users (admin only)."""

    success: bool = True
    users: list[UserPublic]
