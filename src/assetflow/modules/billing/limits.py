"""Plan quota enforcement.

``require_plan_capacity(kind)`` builds a FastAPI dependency that rejects a
create request when the organization is at or over its plan quota for that
resource kind. The count and the insert are not one transaction, so the
quota is a soft limit under concurrent requests.
"""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.api.dependencies import DBSession
from assetflow.core.auth.dependencies import OrganizationId
from assetflow.core.constants import UNLIMITED
from assetflow.core.errors import NotFoundError, PlanLimitError, SubscriptionInactiveError
from assetflow.modules.assets.repos import AssetRepository
from assetflow.modules.billing.plans import Plan, PlanLimits, ResourceKind, get_plan
from assetflow.modules.organizations.models import SubscriptionTier
from assetflow.modules.organizations.repos import OrganizationRepository
from assetflow.modules.tickets.repos import TicketRepository
from assetflow.modules.users.repos import UserRepository


logger = structlog.get_logger()


class PlanContext(BaseModel):
    """The caller's plan, attached to the request once a quota check passes."""

    model_config = ConfigDict(frozen=True)

    tier: str
    plan: Plan
    limits: PlanLimits


async def count_usage(
    db: AsyncSession, kind: ResourceKind, organization_id: int
) -> int:
    """Count an organization's rows of one resource kind."""
    if kind == "asset":
        return await AssetRepository(db).count_by_organization(organization_id)
    if kind == "ticket":
        return await TicketRepository(db).count_by_organization(organization_id)
    return await UserRepository(db).count_by_organization(organization_id)


def require_plan_capacity(
    kind: ResourceKind,
) -> Callable[..., Awaitable[PlanContext]]:
    """Build a dependency enforcing the plan quota for ``kind``.

    Usage:
        @router.post("/tickets")
        async def create(
            plan: Annotated[PlanContext, Depends(require_plan_capacity("ticket"))],
        ): ...
    """

    async def check_plan_capacity(
        request: Request,
        organization_id: OrganizationId,
        db: DBSession,
    ) -> PlanContext:
        organization = await OrganizationRepository(db).get_by_id(organization_id)
        if not organization:
            raise NotFoundError(
                "Organization not found",
                resource="organization",
                resource_id=str(organization_id),
            )

        tier = organization.subscription_tier
        if (
            organization.subscription_status != "active"
            and tier != SubscriptionTier.FREE
        ):
            logger.info(
                "subscription_inactive",
                organization_id=organization_id,
                status=organization.subscription_status,
            )
            raise SubscriptionInactiveError()

        plan = get_plan(tier)
        limit = plan.limits.for_kind(kind)

        if limit != UNLIMITED:
            current = await count_usage(db, kind, organization_id)
            if current >= limit:
                logger.info(
                    "plan_limit_reached",
                    organization_id=organization_id,
                    kind=kind,
                    current_count=current,
                    limit=limit,
                    tier=tier,
                )
                raise PlanLimitError(
                    f"Your {plan.name} plan allows up to {limit} {kind}s. "
                    "Please upgrade to add more.",
                    current_count=current,
                    limit=limit,
                    tier=tier,
                )

        context = PlanContext(tier=tier, plan=plan, limits=plan.limits)
        request.state.subscription = context
        return context

    return check_plan_capacity
