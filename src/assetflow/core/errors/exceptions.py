"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to RFC 7807 Problem Details responses by the exception handlers.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Resources owned by another organization are reported through this
    error as well, with the same message as a genuinely missing row.

    Example:
        raise NotFoundError("Ticket not found", resource="ticket", resource_id="42")
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class BadRequestError(AppException):
    """Raised for general client errors.

    Example:
        raise BadRequestError("Invalid request format")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class ConflictError(BadRequestError):
    """Raised when a request violates a business rule on existing data.

    Reported as 400 like other client errors; the error_code tells the
    cases apart.

    Example:
        raise ConflictError("Ticket is already closed", error_code="ticket_closed")
    """

    message = "Resource conflict"
    error_code = "conflict"


class ValidationError(BadRequestError):
    """Raised when request data fails validation.

    Example:
        raise ValidationError(
            "Invalid input data",
            errors=[{"field": "email", "message": "Invalid email format"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class PlanLimitError(BadRequestError):
    """Raised when an organization is at or over its plan quota."""

    message = "Limit reached"
    error_code = "plan_limit_reached"

    def __init__(
        self,
        message: str | None = None,
        current_count: int = 0,
        limit: int = 0,
        tier: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details.update(current_count=current_count, limit=limit, tier=tier)
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid.

    Example:
        raise UnauthorizedError("Invalid email or password")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when the caller lacks privilege for a resource.

    Example:
        raise ForbiddenError("Access denied. Admin privileges required.")
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class SubscriptionInactiveError(ForbiddenError):
    """Raised when a paid plan is not in the ``active`` billing state."""

    message = (
        "Your subscription is not active. Please update your payment method."
    )
    error_code = "subscription_inactive"


class WebhookSignatureError(BadRequestError):
    """Raised when a webhook payload fails signature verification.

    The message carries the verification failure reason; it contains no
    tenant data and is safe to return.
    """

    message = "Webhook signature verification failed"
    error_code = "webhook_signature_invalid"


class WebhookProcessingError(AppException):
    """Raised when a verified webhook could not be applied.

    A 5xx answer makes the billing provider redeliver the event later.
    """

    message = "Webhook handler failed"
    error_code = "webhook_failed"
    status_code = 500


class ServiceUnavailableError(AppException):
    """Raised when a required service is unavailable.

    Example:
        raise ServiceUnavailableError("Billing provider is not configured")
    """

    message = "Service temporarily unavailable"
    error_code = "service_unavailable"
    status_code = 503
