"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs and descriptors only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from portfolio.application.dtos.query import QuerySpec
    from portfolio.application.resources.descriptors import OwnershipScope, ResourceDescriptor


class IResourceStore(Protocol):
    """Protocol for the descriptor-driven row store (DIP).

    Rows are plain dicts with JSON-ready values. Soft-deleted rows are
    never returned. Failures are raised as StoreError.
    """

    async def fetch(self, descriptor: ResourceDescriptor, resource_id: str) -> dict[str, Any] | None:
        """Return the live row with this id, or None."""

    async def select(
        self, descriptor: ResourceDescriptor, spec: QuerySpec, scope: OwnershipScope | None
    ) -> list[dict[str, Any]]:
        """Return one page of rows matching spec filters, search and ownership scope."""

    async def count(
        self, descriptor: ResourceDescriptor, spec: QuerySpec, scope: OwnershipScope | None
    ) -> int:
        """Return the number of rows matching spec filters and scope (ignores range)."""

    async def exists(
        self,
        descriptor: ResourceDescriptor,
        match: dict[str, Any],
        exclude_id: str | None = None,
    ) -> bool:
        """Return True if a live row equals match on every column."""

    async def insert(self, descriptor: ResourceDescriptor, values: dict[str, Any]) -> dict[str, Any]:
        """Insert one row in its own committed transaction and return it."""

    async def update(
        self, descriptor: ResourceDescriptor, resource_id: str, values: dict[str, Any]
    ) -> dict[str, Any]:
        """Update one live row and return it. ROW_NOT_FOUND if none matched."""

    async def delete(self, descriptor: ResourceDescriptor, resource_id: str) -> None:
        """Soft-delete (or hard-delete when the descriptor says so). ROW_NOT_FOUND if none."""


class IUserRepository(Protocol):
    """Protocol for credential lookups used by auth (DIP)."""

    async def get_credentials_by_email(self, email: str) -> tuple[str, str] | None:
        """Return (user_id, password_hash) for a live user, or None."""

    async def get_principal_row(self, user_id: str) -> dict[str, Any] | None:
        """Return {id, email, role} for a live user, or None."""
