"""Pydantic request/response schemas."""

from planhub.schemas.approvals import ApprovalResponse, ApprovalsListResponse, ApproveRequest
from planhub.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
    UsersListResponse,
)
from planhub.schemas.health import HealthResponse, HelloResponse
from planhub.schemas.plans import PlanRequest, PlanResponse

__all__ = [
    "ApprovalResponse",
    "ApprovalsListResponse",
    "ApproveRequest",
    "CurrentUser",
    "HealthResponse",
    "HelloResponse",
    "LoginRequest",
    "LoginResponse",
    "PlanRequest",
    "PlanResponse",
    "RegisteredUser",
    "RegisterRequest",
    "RegisterResponse",
    "UserPublic",
    "UsersListResponse",
]
