"""Request/response schemas for plan purchase."""

from pydantic import Field

from planhub.models import Approval, Purchase
from planhub.schemas.base import CamelModel


class PlanRequest(CamelModel):
    """Purchase body. email is read only when token issuing is disabled."""

    plan_id: str | None = None
    email: str | None = None


class PlanResponse(CamelModel):
    """
    Immediate purchase returns purchase; approval-gated purchase returns
    plan_id and the pending approval.
    """

    success: bool = True
    message: str
    purchase: Purchase | None = None
    plan_id: str | None = None
    approval: Approval | None = Field(default=None)
