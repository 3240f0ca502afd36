"""Organization repository for database operations."""

from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import select

from assetflow.api.dependencies import DBSession
from assetflow.modules.organizations.models import Organization


class OrganizationRepository:
    """Repository for Organization database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, organization: Organization) -> Organization:
        """Create a new organization.

        Args:
            organization: Organization instance to create

        Returns:
            The created organization with ID populated
        """
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

    async def get_by_id(self, organization_id: int) -> Organization | None:
        return await self.session.get(Organization, organization_id)

    async def get_by_stripe_subscription_id(
        self, subscription_id: str
    ) -> Organization | None:
        """Find the organization linked to a Stripe subscription."""
        stmt = select(Organization).where(
            Organization.stripe_subscription_id == subscription_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(
        self, organization: Organization, data: dict[str, Any]
    ) -> Organization:
        """Overwrite the given fields on an organization.

        Args:
            organization: The organization to update
            data: Column values to set

        Returns:
            The updated organization
        """
        for key, value in data.items():
            setattr(organization, key, value)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization


# Type alias for dependency injection
OrganizationRepo = Annotated[OrganizationRepository, Depends(OrganizationRepository)]
