"""Plan purchase endpoint."""

from fastapi import APIRouter

from planhub.api.deps import BearerDep, SettingsDep, StoreDep, get_current_user
from planhub.schemas.plans import PlanRequest, PlanResponse
from planhub.services.purchases import purchase_plan

router = APIRouter()


@router.post("/plan", response_model=PlanResponse, response_model_exclude_none=True)
@router.post("/purchase-plan", response_model=PlanResponse, response_model_exclude_none=True)
def post_plan(
    body: PlanRequest,
    credentials: BearerDep,
    store: StoreDep,
    settings: SettingsDep,
) -> PlanResponse:
    """
    Purchase a plan for the caller. With token issuing enabled the buyer is
    the bearer token's email; otherwise the body must carry email.
    """
    if settings.ISSUE_TOKENS:
        email = get_current_user(credentials, settings).email
    else:
        email = body.email

    with store.transaction() as document:
        purchase, approval = purchase_plan(document, settings, email, body.plan_id)

    if approval is not None:
        return PlanResponse(
            message="Plan purchase submitted for approval",
            plan_id=purchase.plan_id,
            approval=approval,
        )
    return PlanResponse(message="Plan purchase successful", purchase=purchase)
