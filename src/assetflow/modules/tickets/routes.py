"""Ticket API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from assetflow.core.auth.dependencies import (
    CurrentIdentity,
    OrganizationId,
    require_admin,
)
from assetflow.modules.billing.limits import PlanContext, require_plan_capacity
from assetflow.modules.tickets.schemas import TicketCreate, TicketResponse
from assetflow.modules.tickets.services import TicketSvc


router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.post(
    "",
    response_model=TicketResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report an asset failure",
    description="Files an OPEN ticket against an asset. At most one OPEN ticket per asset.",
)
async def create_ticket(
    data: TicketCreate,
    identity: CurrentIdentity,
    organization_id: OrganizationId,
    _plan: Annotated[PlanContext, Depends(require_plan_capacity("ticket"))],
    service: TicketSvc,
) -> TicketResponse:
    ticket = await service.create_ticket(identity, organization_id, data)
    return TicketResponse.model_validate(ticket)


@router.get(
    "",
    response_model=list[TicketResponse],
    dependencies=[Depends(require_admin)],
    summary="List tickets",
    description="Admin only. Newest first.",
)
async def list_tickets(
    organization_id: OrganizationId,
    service: TicketSvc,
) -> list[TicketResponse]:
    tickets = await service.list_tickets(organization_id)
    return [TicketResponse.model_validate(t) for t in tickets]


@router.patch(
    "/{ticket_id}/close",
    response_model=TicketResponse,
    dependencies=[Depends(require_admin)],
    summary="Close a ticket",
    description="Admin only. Closing an already closed ticket is rejected.",
)
async def close_ticket(
    ticket_id: int,
    organization_id: OrganizationId,
    service: TicketSvc,
) -> TicketResponse:
    ticket = await service.close_ticket(organization_id, ticket_id)
    return TicketResponse.model_validate(ticket)
