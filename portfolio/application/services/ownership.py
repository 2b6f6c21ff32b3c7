"""Ownership resolver: decides whether a principal may see or attach to a row.

A row is owned when at least one of its descriptor's ownership chains
resolves through live (not soft-deleted) parents to an owner column equal
to the principal id. Reads, updates and deletes of rows that are not owned
fail with NotFound, so other users' data is indistinguishable from missing
data. Creates that attach to a parent the principal does not own fail with
Forbidden.
"""

from collections.abc import Mapping
from typing import Any

from portfolio.application.dtos.access import Principal
from portfolio.application.interfaces.repositories import IResourceStore
from portfolio.application.resources.descriptors import (
    OwnershipScope,
    ResourceDescriptor,
    ResourceRegistry,
)
from portfolio.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)


class OwnershipResolver:
    """Walks ownership chains hop by hop using the resource store."""

    def __init__(self, store: IResourceStore, registry: ResourceRegistry) -> None:
        self.store = store
        self.registry = registry

    def _bypasses(self, principal: Principal, descriptor: ResourceDescriptor) -> bool:
        return descriptor.admin_bypass and principal.is_admin

    async def _owns_id(
        self,
        principal: Principal,
        descriptor: ResourceDescriptor,
        resource_id: str,
    ) -> bool:
        row = await self.store.fetch(descriptor, resource_id)
        if row is None:
            return False
        return await self.owns_row(principal, descriptor, row)

    async def owns_row(
        self,
        principal: Principal,
        descriptor: ResourceDescriptor,
        row: Mapping[str, Any],
    ) -> bool:
        """Return True if any configured path from row reaches the principal."""
        if descriptor.owner_column and row.get(descriptor.owner_column) == principal.id:
            return True
        for link in descriptor.parents:
            parent_id = row.get(link.column)
            if not parent_id:
                continue
            parent = self.registry.get(link.resource)
            if await self._owns_id(principal, parent, parent_id):
                return True
        return False

    async def authorize_read(
        self,
        principal: Principal,
        descriptor: ResourceDescriptor,
        resource_id: str,
    ) -> dict[str, Any]:
        """Return the live row if the principal owns it.

        Raises:
            ResourceNotFoundException: Row missing, soft-deleted, or not owned
                through any chain.
        """
        row = await self.store.fetch(descriptor, resource_id)
        if row is None:
            raise ResourceNotFoundException(descriptor.name, resource_id)
        if self._bypasses(principal, descriptor):
            return row
        if not await self.owns_row(principal, descriptor, row):
            raise ResourceNotFoundException(descriptor.name, resource_id)
        return row

    async def authorize_write(
        self,
        principal: Principal,
        descriptor: ResourceDescriptor,
        parent_ids: Mapping[str, Any],
        *,
        creating: bool = True,
    ) -> None:
        """Check every declared parent id before a row is written.

        Args:
            principal: Caller.
            descriptor: Resource being written.
            parent_ids: Write payload (only parent link columns are read).
            creating: When True, a parent-owned resource must declare a parent.

        Raises:
            ValidationException: Creating a parent-owned row with no parent.
            AuthorizationException: A declared parent is missing or not owned.
        """
        declared = [
            (link, parent_ids[link.column])
            for link in descriptor.parents
            if parent_ids.get(link.column)
        ]
        if creating and descriptor.requires_parent and not declared:
            columns = ", ".join(descriptor.parent_columns)
            raise ValidationException(
                f"One of {columns} is required",
                field=descriptor.parent_columns[0],
            )
        for link, parent_id in declared:
            parent = self.registry.get(link.resource)
            if not await self._owns_id(principal, parent, str(parent_id)):
                raise AuthorizationException(
                    descriptor.name,
                    "create" if creating else "update",
                    message=f"Access denied: {link.resource.replace('-', ' ')} not owned",
                )

    def list_scope(
        self, principal: Principal, descriptor: ResourceDescriptor
    ) -> OwnershipScope | None:
        """Ownership predicate for LIST; None when the principal bypasses ownership."""
        if self._bypasses(principal, descriptor):
            return None
        return OwnershipScope(principal_id=principal.id, chains=self.registry.chains(descriptor.name))
