"""In-process TTL cache used when Redis is disabled (and in tests).

Values are stored JSON-serialized so callers always get a fresh copy,
matching the Redis service.
"""

import json
import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


class MemoryCache:
    """Dict-backed cache with per-entry expiry on the monotonic clock."""

    def __init__(self, default_ttl: int = 300, clock: Any = time.monotonic) -> None:
        self._entries: dict[str, tuple[float, str]] = {}
        self._default_ttl = default_ttl
        self._clock = clock

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(payload)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache set skipped for key %s (value not JSON-serializable)", key)
            return False
        self._entries[key] = (self._clock() + (ttl or self._default_ttl), payload)
        return True

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def delete_prefix(self, prefix: str) -> int:
        doomed = [key for key in self._entries if key.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        if doomed:
            logger.debug("Cache INVALIDATE: %s* (%s keys)", prefix, len(doomed))
        return len(doomed)

    async def clear(self) -> None:
        self._entries.clear()

    async def ping(self) -> bool:
        return True
