"""Per-resource write policies applied by the resource access layer.

Hooks run after ownership is resolved and before the store write.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from portfolio.application.dtos.access import Principal
from portfolio.domain.enums import OccupancyStatus
from portfolio.domain.exceptions import AuthorizationException


class ResourcePolicy:
    """No-op base; subclasses override the hooks they need."""

    async def before_create(self, principal: Principal, data: dict[str, Any]) -> dict[str, Any]:
        return data

    async def before_update(
        self, principal: Principal, row: dict[str, Any], patch: dict[str, Any]
    ) -> dict[str, Any]:
        return patch

    async def before_delete(self, principal: Principal, row: dict[str, Any]) -> None:
        return None


_TENANT_FIELDS = ("tenant_name", "lease_start_date", "lease_end_date")


class RentRollPolicy(ResourcePolicy):
    """A vacant unit carries no tenant: status "vacant" nulls tenant and lease fields."""

    @staticmethod
    def _clear_tenant(values: dict[str, Any]) -> dict[str, Any]:
        if values.get("occupancy_status") == OccupancyStatus.VACANT.value:
            values = {**values, **dict.fromkeys(_TENANT_FIELDS)}
        return values

    async def before_create(self, principal: Principal, data: dict[str, Any]) -> dict[str, Any]:
        return self._clear_tenant(data)

    async def before_update(
        self, principal: Principal, row: dict[str, Any], patch: dict[str, Any]
    ) -> dict[str, Any]:
        return self._clear_tenant(patch)


class UserPolicy(ResourcePolicy):
    """Only admins create users, change roles, or delete users.

    Plain passwords are replaced by password_hash before the write.
    """

    def __init__(self, hash_password: Callable[[str], str]) -> None:
        self._hash_password = hash_password

    async def _hash(self, values: dict[str, Any]) -> dict[str, Any]:
        if "password" in values:
            values = dict(values)
            values["password_hash"] = await asyncio.to_thread(
                self._hash_password, values.pop("password")
            )
        return values

    async def before_create(self, principal: Principal, data: dict[str, Any]) -> dict[str, Any]:
        if not principal.is_admin:
            raise AuthorizationException(
                "users", "create", message="Only administrators can create users"
            )
        return await self._hash(data)

    async def before_update(
        self, principal: Principal, row: dict[str, Any], patch: dict[str, Any]
    ) -> dict[str, Any]:
        if "role" in patch and patch["role"] != row.get("role") and not principal.is_admin:
            raise AuthorizationException(
                "users", "update", message="Only administrators can change user roles"
            )
        return await self._hash(patch)

    async def before_delete(self, principal: Principal, row: dict[str, Any]) -> None:
        if not principal.is_admin:
            raise AuthorizationException(
                "users", "delete", message="Only administrators can delete users"
            )
