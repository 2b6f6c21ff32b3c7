"""FastAPI dependencies (composition root).

Routes depend only on these functions, never on infrastructure directly.
"""

from portfolio.api.v1.dependencies.access import (
    AccessLayerDep,
    RequestContextDep,
    build_access_layer,
    get_access_layer,
    get_auth_provider,
    get_cache_backend,
    get_request_context,
    get_session_factory_dep,
)

__all__ = [
    "AccessLayerDep",
    "RequestContextDep",
    "build_access_layer",
    "get_access_layer",
    "get_auth_provider",
    "get_cache_backend",
    "get_request_context",
    "get_session_factory_dep",
]
