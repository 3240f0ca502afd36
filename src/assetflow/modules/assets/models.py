"""Asset database models."""

from enum import StrEnum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from assetflow.core.constants import MAX_NAME_LENGTH, MAX_SERIAL_NUMBER_LENGTH
from assetflow.core.database.base import (
    Base,
    IntegerIdMixin,
    OrganizationMixin,
    TimestampMixin,
)


class AssetStatus(StrEnum):
    OPERATIONAL = "OPERATIONAL"
    REPAIR = "REPAIR"
    RETIRED = "RETIRED"


class Asset(Base, IntegerIdMixin, TimestampMixin, OrganizationMixin):
    """A piece of equipment owned by an organization."""

    __tablename__ = "assets"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    serial_number: Mapped[str] = mapped_column(
        String(MAX_SERIAL_NUMBER_LENGTH),
        nullable=False,
        unique=True,
    )
    type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.OPERATIONAL.value,
    )
    location: Mapped[str | None] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, serial_number={self.serial_number})>"
