"""Rate limiter instance for SlowAPI.

Shared so main (app.state.limiter) and the route modules use one instance.
Limit strings live here; decorated endpoints must accept `request: Request`.
create_app() sets limiter.enabled from settings.rate_limit_enabled.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
