"""Approval records: pending decisions gating signup, login and plan purchase."""

from datetime import datetime
from typing import Literal

from planhub.models.base import Record

ApprovalType = Literal["signup", "login", "plan"]
ApprovalStatus = Literal["pending", "approved", "rejected"]

APPROVAL_STATUSES: frozenset[str] = frozenset({"pending", "approved", "rejected"})


class Approval(Record):
    """
    Approval entry. Created pending; moved to approved/rejected by an admin.

    Type-dependent extras: name (signup), plan_id and purchase_id (plan).
    Unknown extra keys found in the document are kept as-is.
    """

    id: str
    type: ApprovalType
    email: str
    status: ApprovalStatus = "pending"
    created_at: datetime
    updated_at: datetime | None = None

    name: str | None = None
    plan_id: str | None = None
    purchase_id: str | None = None
