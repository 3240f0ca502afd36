"""Pydantic schemas for dashboard analytics."""

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    total_tickets: int
    open_tickets: int
    closed_tickets: int
    total_assets: int


class AssetTicketCount(BaseModel):
    asset_id: int | None = None
    asset_name: str
    count: int


class TimelineBucket(BaseModel):
    """Tickets created on one UTC calendar day, by current status."""

    date: str
    open: int = 0
    closed: int = 0


class DashboardResponse(BaseModel):
    summary: DashboardSummary
    tickets_by_asset: list[AssetTicketCount]
    timeline: list[TimelineBucket]
