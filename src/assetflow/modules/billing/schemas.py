"""Pydantic schemas for billing operations."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from assetflow.modules.billing.plans import PURCHASABLE_TIERS, PlanLimits
from assetflow.modules.organizations.models import SubscriptionTier


class PlanResponse(BaseModel):
    """A catalogue entry."""

    tier: str
    name: str
    price: int
    limits: PlanLimits


class PlanSummary(BaseModel):
    name: str
    price: int
    limits: PlanLimits


class UsageResponse(BaseModel):
    assets: int
    tickets: int
    users: int


class SubscriptionStatusResponse(BaseModel):
    """Current subscription state and usage of the caller's organization."""

    tier: str
    status: str
    current_period_end: datetime | None = None
    plan: PlanSummary
    usage: UsageResponse


class CheckoutRequest(BaseModel):
    """Only paid tiers can be purchased."""

    tier: SubscriptionTier

    @field_validator("tier")
    @classmethod
    def tier_purchasable(cls, v: SubscriptionTier) -> SubscriptionTier:
        if v not in PURCHASABLE_TIERS:
            raise ValueError(
                "Tier must be one of: " + ", ".join(PURCHASABLE_TIERS)
            )
        return v


class RedirectResponse(BaseModel):
    """A Stripe-hosted page to send the browser to."""

    url: str


class WebhookAck(BaseModel):
    received: bool = True
