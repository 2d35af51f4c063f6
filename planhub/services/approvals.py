"""Approval workflow: record pending actions and apply admin decisions."""

import logging
from datetime import UTC, datetime
from typing import Any

from planhub.core.errors import NotFound, ValidationError
from planhub.core.ids import generate_id
from planhub.models import (
    APPROVAL_STATUSES,
    Approval,
    ApprovalStatus,
    ApprovalType,
    Document,
    Purchase,
    normalize_email,
)

logger = logging.getLogger(__name__)


def record_approval(
    document: Document,
    approval_type: ApprovalType,
    email: str,
    **extra: Any,
) -> Approval:
    """Append a new pending approval to the document and return it."""
    approval = Approval(
        id=generate_id(),
        type=approval_type,
        email=normalize_email(email),
        status="pending",
        created_at=datetime.now(UTC),
        **extra,
    )
    document.approvals.append(approval)
    logger.info(
        "Approval recorded",
        extra={"approval_id": approval.id, "approval_type": approval_type, "email": approval.email},
    )
    return approval


def list_approvals(document: Document) -> list[Approval]:
    """All approvals, oldest first."""
    return list(document.approvals)


def _validate_status(status: str | None) -> ApprovalStatus:
    if not status or status not in APPROVAL_STATUSES:
        raise ValidationError(
            f"status must be one of {sorted(APPROVAL_STATUSES)}"
        )
    return status  # type: ignore[return-value]


def decide(document: Document, approval_id: str | None, status: str | None) -> Approval:
    """
    Set an approval's status and updated_at, then propagate to the user.

    signup: user.approved follows (status == "approved"); a user that no
    longer exists is skipped. plan: approving appends the held purchase and
    sets the user's plan_id once. Raises NotFound for an unknown id, before
    anything is touched.
    """
    if not approval_id:
        raise ValidationError("id and status are required")
    new_status = _validate_status(status)
    approval = document.get_approval(approval_id)
    if approval is None:
        raise NotFound("Approval not found")

    now = datetime.now(UTC)
    approval.status = new_status
    approval.updated_at = now

    user = document.get_user(approval.email)
    if approval.type == "signup":
        if user is not None:
            user.approved = new_status == "approved"
    elif approval.type == "plan" and new_status == "approved":
        if user is not None and approval.plan_id:
            purchase_id = approval.purchase_id or generate_id()
            if all(p.id != purchase_id for p in user.purchases):
                user.purchases.append(
                    Purchase(id=purchase_id, plan_id=approval.plan_id, purchased_at=now)
                )
            user.plan_id = approval.plan_id

    logger.info(
        "Approval decided",
        extra={
            "approval_id": approval.id,
            "approval_type": approval.type,
            "status": new_status,
            "user_found": user is not None,
        },
    )
    return approval
