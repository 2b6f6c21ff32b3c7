"""Access-layer and auth dependencies (composition root).

The ResourceAccessLayer is built once per app (lifespan, or lazily on the
first request when the lifespan did not run) and kept on app.state.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.application.dtos.access import RequestContext
from portfolio.application.interfaces.services import ICacheService
from portfolio.application.resources.catalog import build_registry
from portfolio.application.services.resource_access import ResourceAccessLayer
from portfolio.core.config import Settings, get_settings
from portfolio.infrastructure.cache.cache_aside import CacheAside
from portfolio.infrastructure.cache.memory_cache import MemoryCache
from portfolio.infrastructure.persistence.database import get_session_factory
from portfolio.infrastructure.persistence.repositories import SqlResourceStore, UserRepository
from portfolio.infrastructure.security.auth_provider import JwtAuthProvider
from portfolio.infrastructure.security.password import get_password_hash

# auto_error=False: a missing header must reach the access layer as a None credential.
_bearer = HTTPBearer(auto_error=False)


def build_access_layer(
    session_factory: async_sessionmaker[AsyncSession],
    cache: ICacheService | None,
    settings: Settings | None = None,
) -> ResourceAccessLayer:
    """Wire registry, store, auth and cache into one access layer.

    Args:
        session_factory: Session factory for the store and user lookups.
        cache: Cache backend; None disables list caching.
        settings: Settings for TTL and pagination limits (defaults to get_settings()).

    Returns:
        Ready ResourceAccessLayer.
    """
    settings = settings or get_settings()
    registry = build_registry(get_password_hash)
    users = UserRepository(session_factory)
    return ResourceAccessLayer(
        registry=registry,
        store=SqlResourceStore(session_factory, registry),
        auth=JwtAuthProvider(users),
        users=users,
        cache=CacheAside(cache),
        list_ttl_seconds=settings.cache_ttl_lists,
        max_limit=settings.pagination_max_limit,
        default_limit=settings.pagination_default_limit,
    )


def get_session_factory_dep() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory (overridden in tests)."""
    return get_session_factory()


def get_cache_backend(request: Request) -> Any:
    """Cache backend from app.state; an in-process cache when none was set up."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        cache = MemoryCache(default_ttl=get_settings().cache_ttl_lists)
        request.app.state.cache = cache
    return cache


def get_access_layer(
    request: Request,
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)],
    cache: Annotated[Any, Depends(get_cache_backend)],
) -> ResourceAccessLayer:
    layer = getattr(request.app.state, "access_layer", None)
    if layer is None:
        layer = build_access_layer(session_factory, cache)
        request.app.state.access_layer = layer
    return layer


def get_auth_provider(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)],
) -> JwtAuthProvider:
    """Login collaborator over the users table."""
    return JwtAuthProvider(UserRepository(session_factory))


def get_request_context(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> RequestContext:
    """Bearer credential and request id for the access layer."""
    return RequestContext(
        credential=credentials.credentials if credentials else None,
        request_id=getattr(request.state, "request_id", None),
    )


AccessLayerDep = Annotated[ResourceAccessLayer, Depends(get_access_layer)]
RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
