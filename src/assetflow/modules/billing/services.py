"""Billing service for subscription status, checkout and portal."""

from typing import Annotated

import structlog
from fastapi import Depends

from assetflow.api.dependencies import DBSession
from assetflow.config import settings
from assetflow.core.auth.schemas import Identity
from assetflow.core.errors import BadRequestError, NotFoundError
from assetflow.modules.billing.limits import count_usage
from assetflow.modules.billing.plans import PLANS, get_plan, resolve_price_id
from assetflow.modules.billing.schemas import (
    PlanResponse,
    PlanSummary,
    RedirectResponse,
    SubscriptionStatusResponse,
    UsageResponse,
)
from assetflow.modules.billing.stripe_client import StripeClient, get_stripe_client
from assetflow.modules.organizations.models import Organization
from assetflow.modules.organizations.repos import OrganizationRepository


logger = structlog.get_logger()


def list_plans() -> list[PlanResponse]:
    """Return the public plan catalogue."""
    return [
        PlanResponse(
            tier=plan.tier.value,
            name=plan.name,
            price=plan.price,
            limits=plan.limits,
        )
        for plan in PLANS.values()
    ]


class BillingService:
    """Service for billing operations.

    Checkout never changes the organization's tier; only verified webhooks
    do. The one local write here is the lazily created Stripe customer.
    """

    def __init__(
        self,
        db: DBSession,
        stripe_client: Annotated[StripeClient, Depends(get_stripe_client)],
    ) -> None:
        self.db = db
        self.stripe = stripe_client
        self.organization_repo = OrganizationRepository(db)

    async def get_status(self, organization_id: int) -> SubscriptionStatusResponse:
        organization = await self._get_organization(organization_id)
        plan = get_plan(organization.subscription_tier)

        return SubscriptionStatusResponse(
            tier=organization.subscription_tier,
            status=organization.subscription_status,
            current_period_end=organization.current_period_end,
            plan=PlanSummary(name=plan.name, price=plan.price, limits=plan.limits),
            usage=UsageResponse(
                assets=await count_usage(self.db, "asset", organization_id),
                tickets=await count_usage(self.db, "ticket", organization_id),
                users=await count_usage(self.db, "user", organization_id),
            ),
        )

    async def create_checkout(
        self,
        identity: Identity,
        organization_id: int,
        tier: str,
    ) -> RedirectResponse:
        """Start a Stripe Checkout for a paid tier.

        Raises:
            BadRequestError: If already on the tier or the tier has no price
        """
        organization = await self._get_organization(organization_id)

        if organization.subscription_tier == tier:
            raise BadRequestError(
                "You are already on this plan", error_code="already_on_plan"
            )

        price_id = resolve_price_id(tier)
        if not price_id:
            raise BadRequestError(
                "Stripe price ID not configured for this plan",
                error_code="price_not_configured",
            )

        customer_id = organization.stripe_customer_id
        if not customer_id:
            customer = await self.stripe.create_customer(
                email=identity.email,
                metadata={"organization_id": str(organization_id)},
            )
            customer_id = customer.id
            await self.organization_repo.update(
                organization, {"stripe_customer_id": customer_id}
            )
            # Keep the customer even if the checkout call below fails
            await self.db.commit()
            logger.info(
                "stripe_customer_created",
                organization_id=organization_id,
                customer_id=customer_id,
            )

        session = await self.stripe.create_checkout_session(
            customer_id=customer_id,
            price_id=price_id,
            success_url=f"{settings.frontend_url}/billing?success=true",
            cancel_url=f"{settings.frontend_url}/billing?canceled=true",
            metadata={"organization_id": str(organization_id), "tier": tier},
        )

        logger.info("checkout_session_created", organization_id=organization_id, tier=tier)
        return RedirectResponse(url=session.url)

    async def create_portal(self, organization_id: int) -> RedirectResponse:
        """Open the Stripe billing portal.

        Raises:
            BadRequestError: If the organization never checked out
        """
        organization = await self._get_organization(organization_id)
        if not organization.stripe_customer_id:
            raise BadRequestError(
                "No active subscription found", error_code="no_subscription"
            )

        session = await self.stripe.create_portal_session(
            customer_id=organization.stripe_customer_id,
            return_url=f"{settings.frontend_url}/billing",
        )
        return RedirectResponse(url=session.url)

    async def _get_organization(self, organization_id: int) -> Organization:
        organization = await self.organization_repo.get_by_id(organization_id)
        if not organization:
            raise NotFoundError(
                "Organization not found",
                resource="organization",
                resource_id=str(organization_id),
            )
        return organization


# Type alias for dependency injection
BillingSvc = Annotated[BillingService, Depends(BillingService)]
