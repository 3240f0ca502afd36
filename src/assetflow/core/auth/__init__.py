"""Authentication module for JWT and password handling."""

from assetflow.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from assetflow.core.auth.dependencies import (
    CurrentIdentity,
    OrganizationId,
    attach_organization,
    get_identity,
    require_admin,
    require_organization,
)
from assetflow.core.auth.middleware import (
    OrganizationContextMiddleware,
    RequestIdMiddleware,
)
from assetflow.core.auth.schemas import Identity


__all__ = [
    # Dependencies
    "CurrentIdentity",
    # Schemas
    "Identity",
    # Middleware
    "OrganizationContextMiddleware",
    "OrganizationId",
    "RequestIdMiddleware",
    "attach_organization",
    # Token utilities
    "create_access_token",
    "decode_token",
    "get_identity",
    # Password utilities
    "hash_password",
    "require_admin",
    "require_organization",
    "verify_password",
]
