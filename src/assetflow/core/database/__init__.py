"""Database layer - session management, base models, and mixins."""

from assetflow.core.database.base import (
    Base,
    IntegerIdMixin,
    OrganizationMixin,
    TimestampMixin,
)
from assetflow.core.database.session import Database, get_db


__all__ = [
    "Base",
    "Database",
    "IntegerIdMixin",
    "OrganizationMixin",
    "TimestampMixin",
    "get_db",
]
