"""Stripe webhook handlers.

Every handled event is an unconditional overwrite of organization state,
so redelivered events converge to the same result. Events are applied in
arrival order; no event-timestamp ordering is enforced.
"""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Annotated, Any

import stripe
import structlog
from fastapi import APIRouter, Depends, Header, Request, status

from assetflow.api.dependencies import DBSession
from assetflow.config import settings
from assetflow.core.errors import (
    AppException,
    WebhookProcessingError,
    WebhookSignatureError,
)
from assetflow.core.notifications import Mailer, get_mailer, send_subscription_email
from assetflow.modules.billing.schemas import WebhookAck
from assetflow.modules.billing.stripe_client import StripeClient
from assetflow.modules.organizations.models import SubscriptionTier
from assetflow.modules.organizations.repos import OrganizationRepository
from assetflow.modules.users.repos import UserRepository


logger = structlog.get_logger()

webhook_router = APIRouter()

StripeObject = dict[str, Any]


def _timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=UTC)


def _subscription_period_end(subscription: StripeObject) -> datetime | None:
    """Read current_period_end from a subscription.

    Newer Stripe API versions moved the field onto the subscription items.
    """
    if subscription.get("current_period_end") is not None:
        return _timestamp(subscription["current_period_end"])

    items = (subscription.get("items") or {}).get("data") or []
    if items:
        return _timestamp(items[0].get("current_period_end"))
    return None


class WebhookProcessor:
    """Applies verified Stripe events to organizations."""

    def __init__(
        self,
        db: DBSession,
        mailer: Annotated[Mailer, Depends(get_mailer)],
    ) -> None:
        self.mailer = mailer
        self.organization_repo = OrganizationRepository(db)
        self.user_repo = UserRepository(db)
        self._handlers: dict[str, Callable[[StripeObject], Awaitable[None]]] = {
            "checkout.session.completed": self.handle_checkout_completed,
            "customer.subscription.updated": self.handle_subscription_updated,
            "customer.subscription.deleted": self.handle_subscription_deleted,
        }

    async def process(self, event: StripeObject) -> None:
        event_type = event.get("type")
        handler = self._handlers.get(event_type or "")
        if handler is None:
            logger.info("stripe_webhook_ignored", event_type=event_type)
            return

        await handler(event["data"]["object"])

    # ============================================================
    # Checkout Handlers
    # ============================================================

    async def handle_checkout_completed(self, session: StripeObject) -> None:
        """Activate the purchased tier for the organization in the metadata."""
        metadata = session.get("metadata") or {}
        raw_organization_id = metadata.get("organization_id")
        tier = metadata.get("tier")

        if raw_organization_id is None or tier not in SubscriptionTier.__members__:
            logger.warning(
                "stripe_webhook_unmatched",
                event_type="checkout.session.completed",
                session_id=session.get("id"),
            )
            return

        organization_id = int(raw_organization_id)
        organization = await self.organization_repo.get_by_id(organization_id)
        if not organization:
            logger.warning(
                "stripe_webhook_unmatched",
                event_type="checkout.session.completed",
                organization_id=organization_id,
            )
            return

        await self.organization_repo.update(
            organization,
            {
                "subscription_tier": tier,
                "stripe_subscription_id": session.get("subscription"),
                "subscription_status": "active",
                "current_period_end": _timestamp(session.get("current_period_end")),
            },
        )
        logger.info(
            "subscription_activated",
            organization_id=organization_id,
            tier=tier,
        )

        admins = await self.user_repo.list_admins(organization_id)
        if admins:
            await send_subscription_email(
                self.mailer, admins[0].email, admins[0].name, tier, "active"
            )

    # ============================================================
    # Subscription Handlers
    # ============================================================

    async def handle_subscription_updated(self, subscription: StripeObject) -> None:
        """Mirror the subscription's status and billing period."""
        organization = await self.organization_repo.get_by_stripe_subscription_id(
            subscription["id"]
        )
        if not organization:
            logger.warning(
                "stripe_webhook_unmatched",
                event_type="customer.subscription.updated",
                subscription_id=subscription["id"],
            )
            return

        await self.organization_repo.update(
            organization,
            {
                "subscription_status": subscription["status"],
                "current_period_end": _subscription_period_end(subscription),
            },
        )
        logger.info(
            "subscription_updated",
            organization_id=organization.id,
            status=subscription["status"],
        )

    async def handle_subscription_deleted(self, subscription: StripeObject) -> None:
        """Downgrade the organization to FREE."""
        organization = await self.organization_repo.get_by_stripe_subscription_id(
            subscription["id"]
        )
        if not organization:
            logger.warning(
                "stripe_webhook_unmatched",
                event_type="customer.subscription.deleted",
                subscription_id=subscription["id"],
            )
            return

        await self.organization_repo.update(
            organization,
            {
                "subscription_tier": SubscriptionTier.FREE.value,
                "subscription_status": "canceled",
                "stripe_subscription_id": None,
                "current_period_end": None,
            },
        )
        logger.info("subscription_canceled", organization_id=organization.id)


@webhook_router.post(
    "/webhook",
    response_model=WebhookAck,
    status_code=status.HTTP_200_OK,
    summary="Stripe webhook endpoint",
    description="Receives and processes Stripe webhook events.",
    include_in_schema=False,
)
async def stripe_webhook(
    request: Request,
    processor: Annotated[WebhookProcessor, Depends(WebhookProcessor)],
    stripe_signature: Annotated[str, Header(alias="Stripe-Signature")] = "",
) -> WebhookAck:
    """Handle Stripe webhook events.

    The body is read as raw bytes so the signature is verified over exactly
    what Stripe sent.
    """
    payload = await request.body()

    try:
        event = StripeClient.construct_webhook_event(
            payload=payload,
            sig_header=stripe_signature,
            webhook_secret=settings.stripe_webhook_secret or "",
        )
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning("stripe_webhook_rejected", error=str(e))
        raise WebhookSignatureError(f"Webhook Error: {e}") from e

    event_type = event.get("type")
    logger.info("stripe_webhook_received", event_type=event_type, event_id=event.get("id"))

    try:
        await processor.process(event)
    except AppException:
        raise
    except Exception as e:
        logger.exception("stripe_webhook_failed", event_type=event_type)
        raise WebhookProcessingError() from e

    return WebhookAck()
