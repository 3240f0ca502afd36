"""User database models."""

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetflow.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from assetflow.core.database.base import (
    Base,
    IntegerIdMixin,
    OrganizationMixin,
    TimestampMixin,
)


if TYPE_CHECKING:
    from assetflow.modules.organizations.models import Organization


class UserRole(StrEnum):
    """Roles inside an organization."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class User(Base, IntegerIdMixin, TimestampMixin, OrganizationMixin):
    """User model representing an authenticated member of an organization.

    Attributes:
        email: Globally unique email address
        password_hash: Bcrypt hash, never serialized to clients
        name: Display name
        role: ADMIN for the organization's founder, EMPLOYEE for invitees
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.EMPLOYEE.value,
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(
        "Organization",
        lazy="selectin",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, organization_id={self.organization_id})>"
