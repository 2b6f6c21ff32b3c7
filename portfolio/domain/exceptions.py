"""Domain exceptions for the Portfolio application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The envelope
layer maps them to error envelopes and HTTP status codes.
"""

from typing import Any


class PortfolioException(Exception):
    """Base exception for all Portfolio application errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. The envelope layer maps these to
    responses using message, error_code, status_code and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        status_code: HTTP status associated with the error code.
        details: Additional error context (e.g. field, resource_id).
    """

    status_code: int = 400
    default_code: str = "BAD_REQUEST"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to the class code.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error info shape used inside envelopes."""
        payload: dict[str, Any] = {"code": self.error_code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class BadRequestException(PortfolioException):
    """Raised for malformed requests that are not field validation failures."""

    status_code = 400
    default_code = "BAD_REQUEST"


class ValidationException(PortfolioException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    status_code = 422
    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            details: Optional extra context (e.g. pydantic error list).
        """
        merged = dict(details or {})
        if field:
            merged["field"] = field
        super().__init__(message, details=merged)


class AuthenticationException(PortfolioException):
    """Raised when no valid credential accompanies the request."""

    status_code = 401
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AuthorizationException(PortfolioException):
    """Raised when the caller lacks permission for the operation."""

    status_code = 403
    default_code = "FORBIDDEN"

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Access denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource name (e.g. 'properties').
            action: Optional action that was attempted (e.g. 'create').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action and message == "Access denied":
            message = f"Access denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, details=details)


class ResourceNotFoundException(PortfolioException):
    """Raised when a resource is missing, soft-deleted or not visible to the caller."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: str | None = None) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Resource name (e.g. 'loans').
            resource_id: The ID that was not found, when known.
        """
        label = resource_type.replace("-", " ").replace("_", " ")
        super().__init__(f"{label} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictException(PortfolioException):
    """Raised when a write would violate a uniqueness rule."""

    status_code = 409
    default_code = "CONFLICT"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else None)


class StoreError(Exception):
    """Failure reported by the resource store.

    Not a PortfolioException: store messages may carry driver text and are
    sanitized (or replaced) before they reach a caller.

    Attributes:
        code: ROW_NOT_FOUND, CONSTRAINT_VIOLATION or STORE_FAILURE.
        message: Driver or store message.
    """

    ROW_NOT_FOUND = "ROW_NOT_FOUND"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    STORE_FAILURE = "STORE_FAILURE"

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)
