"""Ticket repository for database operations."""

from datetime import datetime
from sqlalchemy import func, select

from assetflow.api.dependencies import DBSession
from assetflow.modules.assets.models import Asset
from assetflow.modules.tickets.models import Ticket, TicketStatus


class TicketRepository:
    """Repository for Ticket database operations.

    Every query is scoped to a single organization.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, ticket: Ticket) -> Ticket:
        """Insert a ticket and return it with reporter and asset loaded."""
        self.session.add(ticket)
        await self.session.flush()
        return await self._reload(ticket.id)

    async def get_by_id(self, ticket_id: int, organization_id: int) -> Ticket | None:
        """Get a ticket by ID within an organization.

        Returns None both for missing tickets and for tickets owned by
        another organization.
        """
        stmt = select(Ticket).where(
            Ticket.id == ticket_id,
            Ticket.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def has_open_ticket(self, asset_id: int, organization_id: int) -> bool:
        stmt = (
            select(Ticket.id)
            .where(
                Ticket.asset_id == asset_id,
                Ticket.organization_id == organization_id,
                Ticket.status == TicketStatus.OPEN,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def set_status(self, ticket: Ticket, status: TicketStatus) -> Ticket:
        ticket.status = status.value
        await self.session.flush()
        return await self._reload(ticket.id)

    async def list_by_organization(self, organization_id: int) -> list[Ticket]:
        """List an organization's tickets, newest first."""
        stmt = (
            select(Ticket)
            .where(Ticket.organization_id == organization_id)
            .order_by(Ticket.created_at.desc(), Ticket.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_organization(
        self,
        organization_id: int,
        status: TicketStatus | None = None,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Ticket)
            .where(Ticket.organization_id == organization_id)
        )
        if status is not None:
            stmt = stmt.where(Ticket.status == status)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_by_asset(
        self, organization_id: int
    ) -> list[tuple[int | None, str | None, int]]:
        """Count tickets per asset as (asset_id, asset_name, count) rows.

        Tickets whose asset was deleted are grouped under a None asset.
        """
        stmt = (
            select(Ticket.asset_id, Asset.name, func.count(Ticket.id))
            .outerjoin(Asset, Asset.id == Ticket.asset_id)
            .where(Ticket.organization_id == organization_id)
            .group_by(Ticket.asset_id, Asset.name)
            .order_by(func.count(Ticket.id).desc(), Ticket.asset_id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def list_created_since(
        self, organization_id: int, since: datetime
    ) -> list[tuple[datetime, str]]:
        """Return (created_at, status) for tickets created at or after ``since``."""
        stmt = (
            select(Ticket.created_at, Ticket.status)
            .where(
                Ticket.organization_id == organization_id,
                Ticket.created_at >= since,
            )
            .order_by(Ticket.created_at)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def _reload(self, ticket_id: int) -> Ticket:
        stmt = (
            select(Ticket)
            .where(Ticket.id == ticket_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
