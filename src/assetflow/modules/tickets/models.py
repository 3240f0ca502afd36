"""Ticket database models."""

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetflow.core.constants import MAX_NAME_LENGTH
from assetflow.core.database.base import (
    Base,
    IntegerIdMixin,
    OrganizationMixin,
    TimestampMixin,
)


if TYPE_CHECKING:
    from assetflow.modules.assets.models import Asset
    from assetflow.modules.users.models import User


class TicketStatus(StrEnum):
    """OPEN is initial, CLOSED is terminal."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


OPEN_TICKET_INDEX = "uq_tickets_open_asset_organization"


class Ticket(Base, IntegerIdMixin, TimestampMixin, OrganizationMixin):
    """A failure report filed against an asset.

    At most one OPEN ticket may exist per (asset_id, organization_id); the
    partial unique index below enforces it in the database.
    """

    __tablename__ = "tickets"
    __table_args__ = (
        Index(
            OPEN_TICKET_INDEX,
            "asset_id",
            "organization_id",
            unique=True,
            postgresql_where=text("status = 'OPEN'"),
            sqlite_where=text("status = 'OPEN'"),
        ),
    )

    title: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH + 20),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TicketStatus.OPEN.value,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Nullable so tickets survive the deletion of their asset
    asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    reporter: Mapped["User"] = relationship(
        "User",
        lazy="selectin",
    )
    asset: Mapped["Asset | None"] = relationship(
        "Asset",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, asset_id={self.asset_id}, status={self.status})>"
