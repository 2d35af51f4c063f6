"""Request/response schemas for the admin approval endpoints."""

from planhub.models import Approval
from planhub.schemas.base import CamelModel


class ApproveRequest(CamelModel):
    """Decision body: approval id and target status."""

    id: str | None = None
    status: str | None = None


class ApprovalResponse(CamelModel):
    success: bool = True
    approval: Approval


class ApprovalsListResponse(CamelModel):
    success: bool = True
    approvals: list[Approval]
