"""Authentication API routes.

Provides endpoints for:
- Registration (founds a new organization)
- Login
- Current user profile
- Inviting employees
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from assetflow.core.auth.dependencies import (
    CurrentIdentity,
    OrganizationId,
    require_admin,
)
from assetflow.core.auth.service import AuthSvc
from assetflow.modules.billing.limits import PlanContext, require_plan_capacity
from assetflow.modules.users.schemas import (
    InviteRequest,
    InviteResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
    UserSummary,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user and organization",
    description="Creates a new organization and its first user, who becomes ADMIN.",
)
async def register(
    data: RegisterRequest,
    service: AuthSvc,
) -> RegisterResponse:
    """Register a new user and organization."""
    user, token = await service.register(
        name=data.name,
        email=data.email,
        password=data.password,
    )
    return RegisterResponse(user=UserSummary.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with email and password",
    description="Authenticate with email and password to receive a bearer token.",
)
async def login(
    data: LoginRequest,
    service: AuthSvc,
) -> LoginResponse:
    """Login with email and password."""
    user, token = await service.login(email=data.email, password=data.password)
    return LoginResponse(user=UserProfile.model_validate(user), token=token)


@router.get(
    "/me",
    response_model=UserProfile,
    summary="Get current user",
    description="Returns the authenticated user's profile with organization.",
)
async def get_me(
    identity: CurrentIdentity,
    service: AuthSvc,
) -> UserProfile:
    """Get current user profile."""
    user = await service.get_me(identity)
    return UserProfile.model_validate(user)


@router.post(
    "/invite",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Invite an employee",
    description="Admin only. Creates an EMPLOYEE in the caller's organization, subject to the plan's user quota.",
)
async def invite(
    data: InviteRequest,
    organization_id: OrganizationId,
    _plan: Annotated[PlanContext, Depends(require_plan_capacity("user"))],
    service: AuthSvc,
) -> InviteResponse:
    """Invite a user into the caller's organization."""
    user = await service.invite(
        organization_id=organization_id,
        name=data.name,
        email=data.email,
        password=data.password,
    )
    return InviteResponse(user=UserSummary.model_validate(user))
