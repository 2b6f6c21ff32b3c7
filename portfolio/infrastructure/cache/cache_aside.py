"""Cache-aside wrapper for LIST handlers and per-principal invalidation.

A wrapped handler keeps the (principal, spec) -> Envelope signature. Keys
are derived only from the resource name, the principal id returned by
get_principal_id, and the QuerySpec's canonical signature, so two calls with the
same inputs always hit the same entry. Only success envelopes are stored.
"""

import logging
from collections.abc import Awaitable, Callable

from portfolio.application.dtos.access import Principal
from portfolio.application.dtos.envelope import Envelope
from portfolio.application.dtos.query import QuerySpec
from portfolio.application.interfaces.services import ICacheService
from portfolio.infrastructure.cache.keys import list_key, resource_prefix

logger = logging.getLogger(__name__)

ListHandler = Callable[[Principal | None, QuerySpec], Awaitable[Envelope]]
PrincipalIdFn = Callable[[Principal | None], str | None]


def principal_id_of(principal: Principal | None) -> str | None:
    return principal.id if principal is not None else None


class CacheAside:
    """Wraps LIST handlers with a cache and invalidates by key prefix.

    With no cache backend every wrapped call goes straight to the handler.
    Backend errors are logged and treated as a miss (reads) or ignored
    (invalidation).
    """

    def __init__(self, cache: ICacheService | None) -> None:
        self.cache = cache

    def wrap(
        self,
        handler: ListHandler,
        *,
        resource_name: str,
        ttl_seconds: int,
        get_principal_id: PrincipalIdFn = principal_id_of,
    ) -> ListHandler:
        """Return a handler with the same signature that reads through the cache.

        Args:
            handler: Uncached LIST handler.
            resource_name: Resource namespace for the key.
            ttl_seconds: Lifetime of stored entries.
            get_principal_id: Pure function giving the key's principal segment.

        Returns:
            Cached handler.
        """
        cache = self.cache

        async def cached_handler(principal: Principal | None, spec: QuerySpec) -> Envelope:
            if cache is None:
                return await handler(principal, spec)
            key = list_key(resource_name, get_principal_id(principal), spec.signature())
            hit = await self._read(key)
            if hit is not None:
                return hit
            envelope = await handler(principal, spec)
            if envelope.success:
                await self._write(key, envelope, ttl_seconds)
            return envelope

        cached_handler.__name__ = getattr(handler, "__name__", "cached_handler")
        return cached_handler

    async def _read(self, key: str) -> Envelope | None:
        try:
            payload = await self.cache.get(key)  # type: ignore[union-attr]
        except Exception as e:
            logger.warning("Cache read failed for %s: %s", key, type(e).__name__)
            return None
        if not isinstance(payload, dict) or payload.get("success") is not True:
            return None
        try:
            return Envelope.from_dict(payload)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed cache entry %s", key)
            return None

    async def _write(self, key: str, envelope: Envelope, ttl_seconds: int) -> None:
        try:
            await self.cache.set(key, envelope.to_dict(), ttl_seconds)  # type: ignore[union-attr]
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", key, type(e).__name__)

    async def invalidate_resource(self, resource_name: str, principal_id: str | None = None) -> int:
        """Delete cached LIST entries for a resource.

        Args:
            resource_name: Resource namespace.
            principal_id: Limit to this principal's entries; None clears the namespace.

        Returns:
            Number of keys removed (0 without a backend or on failure).
        """
        if self.cache is None:
            return 0
        try:
            return await self.cache.delete_prefix(resource_prefix(resource_name, principal_id))
        except Exception as e:
            logger.warning(
                "Cache invalidation failed for %s (principal %s): %s",
                resource_name,
                principal_id or "*",
                type(e).__name__,
            )
            return 0
