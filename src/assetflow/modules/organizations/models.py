"""Organization database models."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from assetflow.core.constants import (
    MAX_NAME_LENGTH,
    MAX_SLUG_LENGTH,
    MAX_STATUS_LENGTH,
    MAX_STRIPE_ID_LENGTH,
)
from assetflow.core.database.base import Base, IntegerIdMixin, TimestampMixin


class SubscriptionTier(StrEnum):
    """Subscription levels; quotas and prices live in the plan catalogue."""

    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"


class Organization(Base, IntegerIdMixin, TimestampMixin):
    """Organization model, the tenant boundary.

    All assets, tickets and users reference this table via organization_id.

    Attributes:
        slug: Globally unique URL-safe identifier
        subscription_tier: Current plan tier
        subscription_status: Verbatim mirror of the Stripe subscription status
        current_period_end: End of the paid billing period, if any
        stripe_customer_id: Stripe customer, created lazily at first checkout
        stripe_subscription_id: Stripe subscription, set by webhooks
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    subscription_tier: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SubscriptionTier.FREE.value,
    )
    subscription_status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        nullable=False,
        default="active",
    )
    current_period_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    stripe_customer_id: Mapped[str | None] = mapped_column(
        String(MAX_STRIPE_ID_LENGTH),
        nullable=True,
        unique=True,
    )
    stripe_subscription_id: Mapped[str | None] = mapped_column(
        String(MAX_STRIPE_ID_LENGTH),
        nullable=True,
        unique=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug}, tier={self.subscription_tier})>"
