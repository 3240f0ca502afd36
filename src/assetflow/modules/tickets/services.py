"""Ticket service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from assetflow.api.dependencies import DBSession
from assetflow.core.auth.schemas import Identity
from assetflow.core.errors import ConflictError, NotFoundError
from assetflow.core.notifications import (
    Mailer,
    Recipient,
    get_mailer,
    send_ticket_notification,
)
from assetflow.modules.assets.repos import AssetRepository
from assetflow.modules.tickets.models import Ticket, TicketStatus
from assetflow.modules.tickets.repos import TicketRepository
from assetflow.modules.tickets.schemas import TicketCreate
from assetflow.modules.users.repos import UserRepository


logger = structlog.get_logger()

DUPLICATE_OPEN_MESSAGE = "This asset already has an active failure report."


class TicketService:
    """Service for the ticket lifecycle.

    A ticket is created OPEN and may be closed exactly once; there is no
    reopening.
    """

    def __init__(
        self,
        db: DBSession,
        mailer: Annotated[Mailer, Depends(get_mailer)],
    ) -> None:
        self.mailer = mailer
        self.repo = TicketRepository(db)
        self.asset_repo = AssetRepository(db)
        self.user_repo = UserRepository(db)

    async def create_ticket(
        self,
        identity: Identity,
        organization_id: int,
        data: TicketCreate,
    ) -> Ticket:
        """File a failure report against an asset.

        Raises:
            NotFoundError: If the asset is not in the caller's organization
            ConflictError: If the asset already has an OPEN ticket
        """
        asset = await self.asset_repo.get_by_id(data.asset_id, organization_id)
        if not asset:
            raise NotFoundError(
                "Asset not found or access denied",
                resource="asset",
                resource_id=str(data.asset_id),
            )

        if await self.repo.has_open_ticket(asset.id, organization_id):
            raise ConflictError(DUPLICATE_OPEN_MESSAGE, error_code="ticket_already_open")

        try:
            ticket = await self.repo.create(
                Ticket(
                    title=f"Issue with {asset.name}",
                    description=data.description,
                    status=TicketStatus.OPEN.value,
                    user_id=identity.id,
                    asset_id=asset.id,
                    organization_id=organization_id,
                )
            )
        except IntegrityError as e:
            # A concurrent request won the partial unique index
            raise ConflictError(
                DUPLICATE_OPEN_MESSAGE, error_code="ticket_already_open"
            ) from e

        logger.info(
            "ticket_created",
            ticket_id=ticket.id,
            asset_id=asset.id,
            organization_id=organization_id,
        )

        admins = await self.user_repo.list_admins(organization_id)
        await send_ticket_notification(
            self.mailer,
            [Recipient(email=a.email, name=a.name) for a in admins],
            asset_name=asset.name,
            asset_location=asset.location,
            description=ticket.description,
            reporter=Recipient(email=ticket.reporter.email, name=ticket.reporter.name),
            created_at=ticket.created_at,
        )

        return ticket

    async def list_tickets(self, organization_id: int) -> list[Ticket]:
        return await self.repo.list_by_organization(organization_id)

    async def close_ticket(self, organization_id: int, ticket_id: int) -> Ticket:
        """Close an OPEN ticket.

        Raises:
            NotFoundError: If the ticket is not in the caller's organization
            ConflictError: If the ticket is already closed
        """
        ticket = await self.repo.get_by_id(ticket_id, organization_id)
        if not ticket:
            raise NotFoundError(
                "Ticket not found or access denied",
                resource="ticket",
                resource_id=str(ticket_id),
            )

        if ticket.status == TicketStatus.CLOSED:
            raise ConflictError("Ticket is already closed", error_code="ticket_closed")

        ticket = await self.repo.set_status(ticket, TicketStatus.CLOSED)
        logger.info("ticket_closed", ticket_id=ticket.id, organization_id=organization_id)
        return ticket


# Type alias for dependency injection
TicketSvc = Annotated[TicketService, Depends(TicketService)]
