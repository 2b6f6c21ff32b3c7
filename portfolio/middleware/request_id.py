"""Request ID middleware.

Forwards a well-formed client X-Request-ID or mints a new one, stores it on
request.state.request_id and echoes it on the response. The id ends up in
RequestContext so access-layer log lines can be correlated.
"""

import re
import uuid
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
# Only ids safe to write into log lines are forwarded.
_ALLOWED = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header(scope: dict, name: str) -> str | None:
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace").strip()
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw when it is a safe id, otherwise a fresh uuid4 hex string."""
    if raw and _ALLOWED.match(raw):
        return raw
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request id to scope state and the response headers. Raw ASGI."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_bytes, request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_id)

    return asgi_app
