"""Unit tests for the plan catalogue."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from assetflow.config import settings
from assetflow.core.constants import UNLIMITED
from assetflow.modules.billing.plans import (
    PLANS,
    PURCHASABLE_TIERS,
    get_plan,
    resolve_price_id,
)
from assetflow.modules.billing.schemas import CheckoutRequest
from assetflow.modules.billing.services import list_plans
from assetflow.modules.organizations.models import SubscriptionTier


class TestCatalogue:
    def test_free_plan(self):
        plan = PLANS[SubscriptionTier.FREE]

        assert plan.name == "Free"
        assert plan.price == 0
        assert (plan.limits.max_assets, plan.limits.max_tickets, plan.limits.max_users) == (
            5,
            10,
            2,
        )

    def test_pro_plan(self):
        plan = PLANS[SubscriptionTier.PRO]

        assert plan.price == 2900
        assert plan.limits.max_assets == 50
        assert plan.limits.max_tickets == UNLIMITED
        assert plan.limits.max_users == 10

    def test_enterprise_plan_is_unlimited(self):
        plan = PLANS[SubscriptionTier.ENTERPRISE]

        assert plan.price == 9900
        assert plan.limits.for_kind("asset") == UNLIMITED
        assert plan.limits.for_kind("ticket") == UNLIMITED
        assert plan.limits.for_kind("user") == UNLIMITED

    def test_only_paid_tiers_are_purchasable(self):
        assert SubscriptionTier.FREE not in PURCHASABLE_TIERS

    @pytest.mark.parametrize("tier", ["PRO", "ENTERPRISE"])
    def test_checkout_accepts_paid_tiers(self, tier):
        assert CheckoutRequest(tier=tier).tier == tier

    @pytest.mark.parametrize("tier", ["FREE", "PLATINUM"])
    def test_checkout_rejects_other_tiers(self, tier):
        with pytest.raises(PydanticValidationError):
            CheckoutRequest(tier=tier)

    @pytest.mark.parametrize(
        ("kind", "expected"), [("asset", 5), ("ticket", 10), ("user", 2)]
    )
    def test_limits_for_kind(self, kind, expected):
        assert PLANS[SubscriptionTier.FREE].limits.for_kind(kind) == expected

    def test_list_plans_in_tier_order(self):
        plans = list_plans()

        assert [p.tier for p in plans] == ["FREE", "PRO", "ENTERPRISE"]
        assert plans[2].limits.max_users == -1


class TestLookup:
    def test_get_plan_by_tier(self):
        assert get_plan("PRO").name == "Pro"

    def test_unknown_tier_falls_back_to_free(self):
        assert get_plan("PLATINUM").tier == SubscriptionTier.FREE

    def test_resolve_price_id(self):
        assert resolve_price_id("PRO") == settings.stripe_pro_price_id
        assert resolve_price_id("ENTERPRISE") == settings.stripe_enterprise_price_id

    def test_free_has_no_price(self):
        assert resolve_price_id("FREE") is None

    def test_price_read_at_call_time(self, monkeypatch):
        monkeypatch.setattr(settings, "stripe_pro_price_id", "price_rotated")

        assert resolve_price_id("PRO") == "price_rotated"
