"""Subscription API routes."""

from fastapi import APIRouter

from assetflow.core.auth.dependencies import CurrentIdentity, OrganizationId
from assetflow.modules.billing.schemas import (
    CheckoutRequest,
    PlanResponse,
    RedirectResponse,
    SubscriptionStatusResponse,
)
from assetflow.modules.billing.services import BillingSvc, list_plans
from assetflow.modules.billing.webhooks import webhook_router


router = APIRouter(prefix="/subscription", tags=["subscription"])

# Webhooks authenticate by signature, not by bearer token
router.include_router(webhook_router)


@router.get(
    "/plans",
    response_model=list[PlanResponse],
    summary="List plans",
    description="Public plan catalogue with prices in cents and limits (-1 is unlimited).",
)
async def get_plans() -> list[PlanResponse]:
    return list_plans()


@router.get(
    "/status",
    response_model=SubscriptionStatusResponse,
    summary="Get subscription status",
    description="Current tier, billing status, plan limits and usage of the caller's organization.",
)
async def get_status(
    organization_id: OrganizationId,
    service: BillingSvc,
) -> SubscriptionStatusResponse:
    return await service.get_status(organization_id)


@router.post(
    "/create-checkout",
    response_model=RedirectResponse,
    summary="Create checkout session",
    description="Returns a Stripe Checkout URL for upgrading to PRO or ENTERPRISE.",
)
async def create_checkout(
    data: CheckoutRequest,
    identity: CurrentIdentity,
    organization_id: OrganizationId,
    service: BillingSvc,
) -> RedirectResponse:
    return await service.create_checkout(identity, organization_id, data.tier.value)


@router.post(
    "/portal",
    response_model=RedirectResponse,
    summary="Create portal session",
    description="Returns a Stripe billing portal URL for managing the subscription.",
)
async def create_portal(
    organization_id: OrganizationId,
    service: BillingSvc,
) -> RedirectResponse:
    return await service.create_portal(organization_id)
