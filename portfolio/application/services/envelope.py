"""Envelope constructors and the error classifier.

Every access-layer operation returns an Envelope built here. Error
messages always pass through sanitize_message before they are stored in
an envelope or written to a log.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from portfolio.application.dtos.envelope import Envelope, ErrorInfo, PaginationMeta
from portfolio.application.dtos.query import PaginationParams
from portfolio.application.services.pagination import compute_meta
from portfolio.domain.exceptions import PortfolioException, StoreError
from portfolio.shared.utils.sanitization import sanitize_message

logger = logging.getLogger(__name__)


def _failure(status_code: int, code: str, message: str, details: Any = None) -> Envelope:
    return Envelope(
        success=False,
        error=ErrorInfo(code=code, message=sanitize_message(message), details=details),
        status_code=status_code,
    )


def success(data: Any, meta: PaginationMeta | None = None, status_code: int = 200) -> Envelope:
    return Envelope(success=True, data=data, meta=meta, status_code=status_code)


def paginated(data: list[Any], page: int, limit: int, total: int) -> Envelope:
    meta = compute_meta(PaginationParams(page=page, limit=limit), total)
    return Envelope(success=True, data=data, meta=meta, status_code=200)


def unauthorized(message: str = "Authentication required") -> Envelope:
    return _failure(401, "UNAUTHORIZED", message)


def forbidden(message: str = "Access denied") -> Envelope:
    return _failure(403, "FORBIDDEN", message)


def not_found(message: str = "Resource not found") -> Envelope:
    return _failure(404, "NOT_FOUND", message)


def validation_error(message: str, details: Any = None) -> Envelope:
    return _failure(422, "VALIDATION_ERROR", message, details)


def conflict(message: str) -> Envelope:
    return _failure(409, "CONFLICT", message)


def bad_request(message: str) -> Envelope:
    return _failure(400, "BAD_REQUEST", message)


def internal_error(message: str = "Internal server error") -> Envelope:
    return _failure(500, "INTERNAL_ERROR", message)


def from_exception(exc: PortfolioException) -> Envelope:
    """Envelope for a domain exception using its own status and error code."""
    return _failure(exc.status_code, exc.error_code, exc.message, exc.details or None)


def pydantic_error_details(exc: PydanticValidationError) -> list[dict[str, str]]:
    """Field-level details ({field, message}) without echoing input values."""
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]


def classify_exception(exc: Exception, context: str, resource: str | None = None) -> Envelope:
    """Map any exception raised inside the access layer to an envelope.

    Logs the failure once: warning for caller errors, error for internal ones.

    Args:
        exc: Raised exception.
        context: Operation label for the log line (e.g. "list loans").
        resource: Resource name, used for the NotFound message on ROW_NOT_FOUND.

    Returns:
        Failure envelope. Raw driver text never reaches InternalError bodies.
    """
    if isinstance(exc, PortfolioException):
        logger.warning("%s failed: %s (%s)", context, sanitize_message(exc.message), exc.error_code)
        return from_exception(exc)

    if isinstance(exc, PydanticValidationError):
        details = pydantic_error_details(exc)
        logger.warning("%s failed validation: %d error(s)", context, len(details))
        return validation_error("Validation failed", details)

    if isinstance(exc, StoreError):
        if exc.code == StoreError.ROW_NOT_FOUND:
            logger.warning("%s: row not found", context)
            label = (resource or "resource").replace("-", " ")
            return not_found(f"{label} not found")
        if exc.code == StoreError.CONSTRAINT_VIOLATION:
            logger.warning("%s rejected by store: %s", context, sanitize_message(exc.message))
            return bad_request(exc.message)
        logger.error("%s store failure: %s", context, sanitize_message(exc.message))
        return internal_error()

    logger.error("%s unexpected error: %s: %s", context, type(exc).__name__, sanitize_message(str(exc)))
    return internal_error()
