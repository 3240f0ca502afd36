"""Error handling module with RFC 7807 Problem Details."""

from assetflow.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PlanLimitError,
    ServiceUnavailableError,
    SubscriptionInactiveError,
    UnauthorizedError,
    ValidationError,
    WebhookProcessingError,
    WebhookSignatureError,
)
from assetflow.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    "ConflictError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "PlanLimitError",
    "ProblemDetail",
    "ServiceUnavailableError",
    "SubscriptionInactiveError",
    "UnauthorizedError",
    "ValidationError",
    "WebhookProcessingError",
    "WebhookSignatureError",
    "register_exception_handlers",
]
