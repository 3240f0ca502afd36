"""Analytics service for the admin dashboard."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import Depends

from assetflow.api.dependencies import DBSession
from assetflow.core.constants import TIMELINE_DAYS, UNKNOWN_ASSET_NAME
from assetflow.modules.analytics.schemas import (
    AssetTicketCount,
    DashboardResponse,
    DashboardSummary,
    TimelineBucket,
)
from assetflow.modules.assets.repos import AssetRepository
from assetflow.modules.tickets.models import TicketStatus
from assetflow.modules.tickets.repos import TicketRepository


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes; they are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def build_timeline(
    tickets: Iterable[tuple[datetime, str]],
    now: datetime,
    days: int = TIMELINE_DAYS,
) -> list[TimelineBucket]:
    """Bucket (created_at, status) pairs by UTC calendar date.

    Only tickets created within ``days`` before ``now`` are counted. Days
    without tickets are omitted; buckets are in ascending date order.
    """
    since = _as_utc(now) - timedelta(days=days)
    buckets: dict[str, TimelineBucket] = {}

    for created_at, status in tickets:
        created_at = _as_utc(created_at)
        if created_at < since:
            continue

        key = created_at.date().isoformat()
        bucket = buckets.setdefault(key, TimelineBucket(date=key))
        if status == TicketStatus.OPEN:
            bucket.open += 1
        else:
            bucket.closed += 1

    return [buckets[key] for key in sorted(buckets)]


class AnalyticsService:
    """Aggregates an organization's tickets and assets for the dashboard."""

    def __init__(self, db: DBSession) -> None:
        self.ticket_repo = TicketRepository(db)
        self.asset_repo = AssetRepository(db)

    async def get_dashboard(
        self,
        organization_id: int,
        now: datetime | None = None,
    ) -> DashboardResponse:
        now = now or datetime.now(UTC)

        summary = DashboardSummary(
            total_tickets=await self.ticket_repo.count_by_organization(organization_id),
            open_tickets=await self.ticket_repo.count_by_organization(
                organization_id, TicketStatus.OPEN
            ),
            closed_tickets=await self.ticket_repo.count_by_organization(
                organization_id, TicketStatus.CLOSED
            ),
            total_assets=await self.asset_repo.count_by_organization(organization_id),
        )

        tickets_by_asset = [
            AssetTicketCount(
                asset_id=asset_id,
                asset_name=asset_name or UNKNOWN_ASSET_NAME,
                count=count,
            )
            for asset_id, asset_name, count in await self.ticket_repo.count_by_asset(
                organization_id
            )
        ]

        recent = await self.ticket_repo.list_created_since(
            organization_id, now - timedelta(days=TIMELINE_DAYS)
        )

        return DashboardResponse(
            summary=summary,
            tickets_by_asset=tickets_by_asset,
            timeline=build_timeline(recent, now),
        )


# Type alias for dependency injection
AnalyticsSvc = Annotated[AnalyticsService, Depends(AnalyticsService)]
