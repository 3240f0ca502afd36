"""Asset repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from assetflow.api.dependencies import DBSession
from assetflow.modules.assets.models import Asset


class AssetRepository:
    """Repository for Asset database operations.

    Every query is scoped to a single organization.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, asset: Asset) -> Asset:
        self.session.add(asset)
        await self.session.flush()
        await self.session.refresh(asset)
        return asset

    async def get_by_id(self, asset_id: int, organization_id: int) -> Asset | None:
        """Get an asset by ID within an organization.

        Returns None both for missing assets and for assets owned by
        another organization.
        """
        stmt = select(Asset).where(
            Asset.id == asset_id,
            Asset.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_serial_number(self, serial_number: str) -> Asset | None:
        # Serial numbers are unique across all organizations
        stmt = select(Asset).where(Asset.serial_number == serial_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_organization(self, organization_id: int) -> list[Asset]:
        stmt = (
            select(Asset)
            .where(Asset.organization_id == organization_id)
            .order_by(Asset.name, Asset.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_organization(self, organization_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Asset)
            .where(Asset.organization_id == organization_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()


# Type alias for dependency injection
AssetRepo = Annotated[AssetRepository, Depends(AssetRepository)]
