"""Stripe client wrapper for async operations."""

import asyncio
from functools import lru_cache
from typing import Any

import stripe
import structlog

from assetflow.config import settings
from assetflow.core.errors import ServiceUnavailableError


logger = structlog.get_logger()


def configure_stripe() -> None:
    """Configure the Stripe SDK with API key."""
    stripe.api_key = settings.stripe_secret_key


class StripeClient:
    """Async wrapper for the Stripe API operations billing needs.

    SDK calls are blocking and run in a worker thread.
    """

    def __init__(self) -> None:
        configure_stripe()

    @property
    def is_configured(self) -> bool:
        return bool(settings.stripe_secret_key)

    def _ensure_configured(self) -> None:
        if not self.is_configured:
            raise ServiceUnavailableError(
                "Billing provider is not configured",
                error_code="billing_unavailable",
            )

    # ============================================================
    # Customers
    # ============================================================

    async def create_customer(
        self,
        email: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> stripe.Customer:
        """Create a new Stripe customer."""
        self._ensure_configured()
        return await asyncio.to_thread(
            stripe.Customer.create,
            email=email,
            metadata=metadata or {},
        )

    # ============================================================
    # Checkout Sessions
    # ============================================================

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        mode: str = "subscription",
        quantity: int = 1,
        metadata: dict[str, str] | None = None,
    ) -> stripe.checkout.Session:
        """Create a Stripe Checkout session."""
        self._ensure_configured()
        return await asyncio.to_thread(
            stripe.checkout.Session.create,
            customer=customer_id,
            mode=mode,
            payment_method_types=["card"],
            line_items=[{"price": price_id, "quantity": quantity}],
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata or {},
        )

    # ============================================================
    # Customer Portal
    # ============================================================

    async def create_portal_session(
        self, customer_id: str, return_url: str
    ) -> stripe.billing_portal.Session:
        """Create a Stripe Customer Portal session."""
        self._ensure_configured()
        return await asyncio.to_thread(
            stripe.billing_portal.Session.create,
            customer=customer_id,
            return_url=return_url,
        )

    # ============================================================
    # Webhooks
    # ============================================================

    @staticmethod
    def construct_webhook_event(
        payload: bytes,
        sig_header: str,
        webhook_secret: str,
    ) -> dict[str, Any]:
        """Construct and verify a webhook event.

        The signature is checked against the exact bytes received; the event
        is returned as plain nested dicts.

        Raises:
            stripe.SignatureVerificationError: If the signature is invalid
            ValueError: If the payload is not valid JSON
        """
        event = stripe.Webhook.construct_event(payload, sig_header, webhook_secret)
        return event.to_dict()


@lru_cache
def get_stripe_client() -> StripeClient:
    """Dependency that provides the process-wide Stripe client."""
    return StripeClient()
