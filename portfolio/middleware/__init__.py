"""HTTP middleware: timeout, request ID, security headers.

Raw ASGI callables; order matters (first added = outermost). Wired in
portfolio.main.create_app.
"""

from portfolio.middleware.request_id import RequestIDMiddleware
from portfolio.middleware.security_headers import SecurityHeadersMiddleware
from portfolio.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
