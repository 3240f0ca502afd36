"""Subscription plan catalogue.

Prices are in cents. A limit of ``UNLIMITED`` (-1) disables the quota for
that resource kind.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from assetflow.config import settings
from assetflow.core.constants import UNLIMITED
from assetflow.modules.organizations.models import SubscriptionTier


ResourceKind = Literal["asset", "ticket", "user"]


class PlanLimits(BaseModel):
    """Per-organization quotas for a plan."""

    model_config = ConfigDict(frozen=True)

    max_assets: int
    max_tickets: int
    max_users: int

    def for_kind(self, kind: ResourceKind) -> int:
        return {
            "asset": self.max_assets,
            "ticket": self.max_tickets,
            "user": self.max_users,
        }[kind]


class Plan(BaseModel):
    """A subscription plan."""

    model_config = ConfigDict(frozen=True)

    tier: SubscriptionTier
    name: str
    price: int
    limits: PlanLimits


PLANS: dict[SubscriptionTier, Plan] = {
    SubscriptionTier.FREE: Plan(
        tier=SubscriptionTier.FREE,
        name="Free",
        price=0,
        limits=PlanLimits(max_assets=5, max_tickets=10, max_users=2),
    ),
    SubscriptionTier.PRO: Plan(
        tier=SubscriptionTier.PRO,
        name="Pro",
        price=2900,
        limits=PlanLimits(max_assets=50, max_tickets=UNLIMITED, max_users=10),
    ),
    SubscriptionTier.ENTERPRISE: Plan(
        tier=SubscriptionTier.ENTERPRISE,
        name="Enterprise",
        price=9900,
        limits=PlanLimits(
            max_assets=UNLIMITED, max_tickets=UNLIMITED, max_users=UNLIMITED
        ),
    ),
}

PURCHASABLE_TIERS = (SubscriptionTier.PRO, SubscriptionTier.ENTERPRISE)


def get_plan(tier: str) -> Plan:
    """Look up a plan by tier, falling back to FREE for unknown tiers."""
    try:
        return PLANS[SubscriptionTier(tier)]
    except ValueError:
        return PLANS[SubscriptionTier.FREE]


def resolve_price_id(tier: str) -> str | None:
    """Return the Stripe price configured for a tier, if any.

    Read from settings at call time so a redeploy with new price IDs needs
    no code change.
    """
    if tier == SubscriptionTier.PRO:
        return settings.stripe_pro_price_id
    if tier == SubscriptionTier.ENTERPRISE:
        return settings.stripe_enterprise_price_id
    return None
