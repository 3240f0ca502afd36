"""FastAPI dependencies for authentication and tenant gating.

Handlers compose these in a fixed order:

    get_identity -> require_admin -> attach_organization
        -> require_organization -> plan gate -> handler

Admin-only routes declare ``Depends(require_admin)`` in the route decorator,
which FastAPI resolves before the handler's own parameters.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from assetflow.core.auth.backend import decode_token
from assetflow.core.auth.schemas import Identity
from assetflow.core.errors import BadRequestError, ForbiddenError, UnauthorizedError


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    """Extract and validate the caller identity from the Authorization header.

    Raises:
        UnauthorizedError: If no bearer token was sent
        ForbiddenError: If the token is invalid, forged or expired
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError(
            "Access denied. No token provided.",
            error_code="missing_token",
        )

    identity = decode_token(credentials.credentials)
    if not identity:
        raise ForbiddenError(
            "Invalid or expired token.",
            error_code="invalid_token",
        )

    request.state.identity = identity
    request.state.user_id = identity.id
    return identity


async def require_admin(
    identity: Annotated[Identity, Depends(get_identity)],
) -> Identity:
    """Ensure the caller holds the ADMIN role.

    Raises:
        ForbiddenError: If the caller is not an admin
    """
    if not identity.is_admin:
        raise ForbiddenError(
            "Access denied. Admin privileges required.",
            error_code="admin_required",
        )
    return identity


async def attach_organization(
    request: Request,
    identity: Annotated[Identity, Depends(get_identity)],
) -> int | None:
    """Copy the caller's organization onto the request, if it has one."""
    if identity.organization_id is not None:
        request.state.organization_id = identity.organization_id
    return identity.organization_id


async def require_organization(
    organization_id: Annotated[int | None, Depends(attach_organization)],
) -> int:
    """Ensure an organization context is attached to the request.

    Raises:
        BadRequestError: If the caller has no organization
    """
    if organization_id is None:
        raise BadRequestError(
            "Organization context is required.",
            error_code="organization_required",
        )
    return organization_id


# Type aliases for cleaner dependency injection
CurrentIdentity = Annotated[Identity, Depends(get_identity)]
OrganizationId = Annotated[int, Depends(require_organization)]
