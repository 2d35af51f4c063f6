"""Plan purchase: immediate or held behind a plan approval."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from planhub.core.errors import NotFound, ValidationError
from planhub.core.ids import generate_id
from planhub.models import Approval, Document, Purchase, normalize_email
from planhub.services.approvals import record_approval

if TYPE_CHECKING:
    from planhub.core.config import Settings

logger = logging.getLogger(__name__)


def purchase_plan(
    document: Document,
    settings: "Settings",
    email: str | None,
    plan_id: str | None,
) -> tuple[Purchase, Approval | None]:
    """
    Create a purchase of plan_id for the user.

    REQUIRE_APPROVAL=false: the purchase is appended to the user and the
    user's plan_id is set; returns (purchase, None).
    REQUIRE_APPROVAL=true: the user is untouched and a pending plan approval
    holding plan_id and the purchase id is recorded; returns (purchase, approval).
    """
    if not plan_id:
        raise ValidationError("planId is required")
    if not email:
        raise ValidationError("email is required")
    normalized = normalize_email(email)
    user = document.users.get(normalized)
    if user is None:
        raise NotFound("User not found")

    purchase = Purchase(id=generate_id(), plan_id=plan_id, purchased_at=datetime.now(UTC))
    if settings.REQUIRE_APPROVAL:
        approval = record_approval(
            document, "plan", normalized, plan_id=plan_id, purchase_id=purchase.id
        )
        logger.info(
            "Plan purchase pending approval",
            extra={"email": normalized, "plan_id": plan_id, "approval_id": approval.id},
        )
        return purchase, approval

    user.purchases.append(purchase)
    user.plan_id = plan_id
    logger.info(
        "Plan purchased",
        extra={"email": normalized, "plan_id": plan_id, "purchase_id": purchase.id},
    )
    return purchase, None
