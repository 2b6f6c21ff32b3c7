"""Service interfaces (ports) for the application layer.

Protocols define contracts for auth and cache collaborators (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from portfolio.application.dtos.access import AuthUser


class IAuthProvider(Protocol):
    """Resolves a bearer credential to an identity."""

    async def get_current_user(self, credential: str | None) -> AuthUser | None:
        """Return the identity for a valid credential, None otherwise. Never raises for bad tokens."""


class ICacheService(Protocol):
    """Key/value cache with TTL and prefix deletion.

    Implementations degrade to miss / no-op when the backend is unreachable.
    """

    async def get(self, key: str) -> Any | None:
        """Return the cached JSON value or None on miss."""

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a JSON-serializable value. Returns False on failure."""

    async def delete(self, key: str) -> bool:
        """Delete one key."""

    async def delete_prefix(self, prefix: str) -> int:
        """Delete all keys starting with prefix. Returns number deleted."""
