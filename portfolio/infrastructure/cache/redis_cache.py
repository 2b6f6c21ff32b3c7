"""Redis-based cache service for enveloped LIST results.

Provides async Redis caching with TTL and prefix invalidation. Every
Redis failure degrades to a miss (reads) or a no-op (writes and deletes)
so the API keeps serving from the database. Key format lives in
portfolio.infrastructure.cache.keys (DRY).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from portfolio.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DELETE_CHUNK = 500


def _escape_glob(value: str) -> str:
    """Escape Redis MATCH glob metacharacters so a prefix is matched literally."""
    return "".join(f"\\{ch}" if ch in "*?[]\\" else ch for ch in value)


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown. When Redis is
    unreachable at connect time the service stays unavailable and every
    call is a miss / no-op.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError, OSError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op: str,
        target: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run one Redis call; reconnect once on connection loss, else return default."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await call(self.redis)
                except redis.RedisError as e:
                    logger.warning("Cache %s failed for %s after reconnect: %s", op, target, e)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op, target)
            return default
        except redis.RedisError as e:
            logger.warning("Cache %s error for %s: %s", op, target, e)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        raw = await self._run("get", key, lambda client: client.get(key), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Cache entry %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with TTL (defaults to cache_ttl_lists). Returns True on success."""
        expire = ttl or self.settings.cache_ttl_lists
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache set skipped for key %s (value not JSON-serializable)", key)
            return False

        async def _setex(client: redis.Redis) -> bool:
            await client.setex(key, expire, serialized)
            return True

        stored = await self._run("set", key, _setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, expire)
        return stored

    async def delete(self, key: str) -> bool:
        """Remove one key. Returns True if a key was removed."""

        async def _delete(client: redis.Redis) -> bool:
            return bool(await client.delete(key))

        return await self._run("delete", key, _delete, False)

    async def delete_prefix(self, prefix: str) -> int:
        """Delete all keys starting with prefix using SCAN + batched UNLINK.

        Args:
            prefix: Literal key prefix (glob characters are escaped).

        Returns:
            Number of keys deleted (0 when Redis is unavailable).
        """
        pattern = f"{_escape_glob(prefix)}*"

        async def _unlink_all(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern, count=_DELETE_CHUNK):
                chunk.append(key)
                if len(chunk) >= _DELETE_CHUNK:
                    deleted += int(await client.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await client.unlink(*chunk) or 0)
            return deleted

        deleted = await self._run("delete_prefix", pattern, _unlink_all, 0)
        if deleted:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def ping(self) -> bool:
        """Return True if Redis answers PING."""

        async def _ping(client: redis.Redis) -> bool:
            return bool(await client.ping())

        return await self._run("ping", "server", _ping, False)
