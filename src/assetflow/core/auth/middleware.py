"""Organization context and request tracing middleware.

This module provides middleware for:
- Injecting organization context into the log context
- Request tracing with unique IDs
"""

import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from assetflow.core.auth.backend import decode_token


if TYPE_CHECKING:
    from starlette.types import ASGIApp


class OrganizationContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds the caller's organization to the log context.

    Extracts organization_id and user_id from the JWT token (if present)
    and adds them to request.state and structlog's context variables.
    Authorization itself is enforced by the route dependencies.
    """

    def __init__(
        self,
        app: "ASGIApp",
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or [
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/api/v1/auth/login",
            "/api/v1/auth/register",
            "/api/v1/subscription/webhook",
        ]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            identity = decode_token(auth_header.split(" ", 1)[1])

            if identity:
                request.state.user_id = identity.id
                structlog.contextvars.bind_contextvars(user_id=identity.id)
                if identity.organization_id is not None:
                    request.state.organization_id = identity.organization_id
                    structlog.contextvars.bind_contextvars(
                        organization_id=identity.organization_id,
                    )

        try:
            return await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("organization_id", "user_id")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id  # Alias for error handler

        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars(
                "request_id", "organization_id", "user_id"
            )

        response.headers["X-Request-ID"] = request_id
        return response
