"""Asset API routes."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError

from assetflow.core.auth.dependencies import OrganizationId, require_admin
from assetflow.core.errors import ConflictError
from assetflow.modules.assets.models import Asset
from assetflow.modules.assets.repos import AssetRepo
from assetflow.modules.assets.schemas import AssetCreate, AssetResponse
from assetflow.modules.billing.limits import PlanContext, require_plan_capacity


logger = structlog.get_logger()

router = APIRouter(prefix="/assets", tags=["assets"])

SERIAL_IN_USE_MESSAGE = "An asset with this serial number already exists."


@router.get(
    "",
    response_model=list[AssetResponse],
    summary="List assets",
    description="Returns the caller's organization assets ordered by name.",
)
async def list_assets(
    organization_id: OrganizationId,
    repo: AssetRepo,
) -> list[AssetResponse]:
    assets = await repo.list_by_organization(organization_id)
    return [AssetResponse.model_validate(a) for a in assets]


@router.post(
    "",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Register an asset",
    description="Admin only. Subject to the plan's asset quota.",
)
async def create_asset(
    data: AssetCreate,
    organization_id: OrganizationId,
    _plan: Annotated[PlanContext, Depends(require_plan_capacity("asset"))],
    repo: AssetRepo,
) -> AssetResponse:
    if await repo.get_by_serial_number(data.serial_number):
        raise ConflictError(SERIAL_IN_USE_MESSAGE, error_code="serial_number_exists")

    try:
        asset = await repo.create(
            Asset(
                name=data.name,
                serial_number=data.serial_number,
                type=data.type,
                status=data.status.value,
                location=data.location,
                organization_id=organization_id,
            )
        )
    except IntegrityError as e:
        raise ConflictError(
            SERIAL_IN_USE_MESSAGE, error_code="serial_number_exists"
        ) from e

    logger.info("asset_created", asset_id=asset.id, organization_id=organization_id)
    return AssetResponse.model_validate(asset)
