"""Admin endpoints: list users, list approvals, decide approvals."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from planhub.api.deps import SettingsDep, StoreDep, require_admin
from planhub.schemas.approvals import ApprovalResponse, ApprovalsListResponse, ApproveRequest
from planhub.schemas.auth import CurrentUser, UsersListResponse
from planhub.services.approvals import decide, list_approvals
from planhub.services.auth import list_users

logger = logging.getLogger(__name__)
router = APIRouter()

AdminDep = Annotated[CurrentUser, Depends(require_admin)]


@router.get("/users", response_model=UsersListResponse)
def get_users(_admin: AdminDep, store: StoreDep, settings: SettingsDep) -> UsersListResponse:
    """List all users (admin only). Legacy records get their defaults filled and saved."""
    with store.transaction() as document:
        users = list_users(document, settings)
    return UsersListResponse(users=users)


@router.get("/approvals", response_model=ApprovalsListResponse, response_model_exclude_none=True)
def get_approvals(_admin: AdminDep, store: StoreDep) -> ApprovalsListResponse:
    """All approvals in creation order (admin only)."""
    return ApprovalsListResponse(approvals=list_approvals(store.load()))


@router.post("/approve", response_model=ApprovalResponse, response_model_exclude_none=True)
def post_approve(body: ApproveRequest, admin: AdminDep, store: StoreDep) -> ApprovalResponse:
    """Set an approval's status; signup approvals update the user's approved flag."""
    with store.transaction() as document:
        approval = decide(document, body.id, body.status)
    logger.info(
        "Admin decision applied",
        extra={"admin_email": admin.email, "approval_id": approval.id, "status": approval.status},
    )
    return ApprovalResponse(approval=approval)
