"""User API routes."""

from fastapi import APIRouter, Depends

from assetflow.core.auth.dependencies import OrganizationId, require_admin
from assetflow.modules.users.repos import UserRepo
from assetflow.modules.users.schemas import UserResponse


router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserResponse],
    dependencies=[Depends(require_admin)],
    summary="List organization members",
    description="Admin only. Returns the caller's organization members, newest first.",
)
async def list_users(
    organization_id: OrganizationId,
    repo: UserRepo,
) -> list[UserResponse]:
    users = await repo.list_by_organization(organization_id)
    return [UserResponse.model_validate(u) for u in users]
