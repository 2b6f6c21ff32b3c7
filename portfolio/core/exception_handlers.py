"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Everything that escapes a
route is rendered in the same envelope shape the access layer returns, so
clients only ever parse {success, data, meta?} or {success, error}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.application.dtos.envelope import Envelope, ErrorInfo
from portfolio.application.services import envelope as envelopes
from portfolio.domain.exceptions import PortfolioException
from portfolio.shared.utils.sanitization import sanitize_message

logger = logging.getLogger(__name__)

# Status codes raised by the framework itself (routing, method, body size).
_HTTP_STATUS_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    415: "UNSUPPORTED_MEDIA_TYPE",
    429: "RATE_LIMITED",
}


def envelope_response(envelope: Envelope) -> JSONResponse:
    """Render an Envelope with its own status code."""
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_dict())


def _portfolio_exception_handler(request: Request, exc: PortfolioException) -> JSONResponse:
    return envelope_response(envelopes.from_exception(exc))


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 with field/message pairs (input values are not echoed)."""
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return envelope_response(envelopes.validation_error("Request validation failed", details))


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    envelope = Envelope(
        success=False,
        error=ErrorInfo(code=code, message=sanitize_message(message)),
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.to_dict(),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded: %s %s", request.method, request.url.path)
    envelope = Envelope(
        success=False,
        error=ErrorInfo(code="RATE_LIMITED", message=f"Rate limit exceeded: {exc.detail}"),
        status_code=429,
    )
    return envelope_response(envelope)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 with a generic message; the sanitized error is only logged."""
    logger.error(
        "Unhandled exception on %s %s: %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        sanitize_message(str(exc)),
    )
    return envelope_response(envelopes.internal_error())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PortfolioException (and
    subclasses), RequestValidationError, StarletteHTTPException,
    RateLimitExceeded, generic Exception.
    """
    app.add_exception_handler(PortfolioException, _portfolio_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
