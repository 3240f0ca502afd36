"""User repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from assetflow.api.dependencies import DBSession
from assetflow.modules.users.models import User, UserRole


class UserRepository:
    """Repository for User database operations.

    Lookups by ID and email are global (emails are unique across all
    organizations); listings and counts are always scoped to one
    organization.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> User | None:
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_organization(self, organization_id: int) -> list[User]:
        """List an organization's members, newest first."""
        stmt = (
            select(User)
            .where(User.organization_id == organization_id)
            .order_by(User.created_at.desc(), User.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_admins(self, organization_id: int) -> list[User]:
        """List an organization's admins, oldest first."""
        stmt = (
            select(User)
            .where(
                User.organization_id == organization_id,
                User.role == UserRole.ADMIN,
            )
            .order_by(User.created_at, User.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_organization(self, organization_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(User)
            .where(User.organization_id == organization_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
