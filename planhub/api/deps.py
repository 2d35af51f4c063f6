"""Shared FastAPI dependencies: settings, store, bearer auth and admin gate."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from planhub.core.config import Settings, get_settings
from planhub.core.errors import Unauthorized
from planhub.core.store import JsonStore, get_store
from planhub.schemas.auth import CurrentUser
from planhub.services.auth import require_role, verify_token

security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[JsonStore, Depends(get_store)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(security)]


def get_current_user(credentials: BearerDep, settings: SettingsDep) -> CurrentUser:
    """Dependency: require a valid Bearer JWT. Raises Unauthorized/InvalidToken (401)."""
    if credentials is None:
        raise Unauthorized("Unauthorized")
    return verify_token(credentials.credentials, settings)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require role 'admin'. Raises Forbidden (403) otherwise."""
    return require_role(current_user, "admin")
