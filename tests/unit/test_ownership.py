"""Tests for OwnershipResolver using an in-memory fake store."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from portfolio.application.dtos.access import Principal
from portfolio.application.resources.catalog import (
    LOAN_REPAYMENTS,
    LOANS,
    PROPERTIES,
    USERS,
    build_registry,
)
from portfolio.application.resources.descriptors import ResourceDescriptor, ResourceRegistry
from portfolio.application.services.ownership import OwnershipResolver
from portfolio.domain.enums import UserRole
from portfolio.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

ALICE = Principal(id="alice", email="alice@example.com", role=UserRole.OWNER)
BOB = Principal(id="bob", email="bob@example.com", role=UserRole.OWNER)
ADMIN = Principal(id="root", email="root@example.com", role=UserRole.ADMIN)

ROWS: dict[tuple[str, str], dict[str, Any]] = {
    (PROPERTIES, "p1"): {"id": "p1", "user_id": "alice"},
    ("owners", "o1"): {"id": "o1", "user_id": "bob"},
    (LOANS, "l1"): {"id": "l1", "property_id": "p1", "owner_id": None},
    (LOANS, "l2"): {"id": "l2", "property_id": None, "owner_id": "o1"},
    (LOAN_REPAYMENTS, "r1"): {"id": "r1", "loan_id": "l1"},
    (USERS, "bob"): {"id": "bob", "email": "bob@example.com", "role": "owner"},
}


@pytest.fixture
def registry() -> ResourceRegistry:
    return build_registry(lambda password: password)


@pytest.fixture
def resolver(registry: ResourceRegistry) -> OwnershipResolver:
    store = AsyncMock()

    async def fetch(descriptor: ResourceDescriptor, resource_id: str) -> dict[str, Any] | None:
        return ROWS.get((descriptor.name, resource_id))

    store.fetch.side_effect = fetch
    return OwnershipResolver(store, registry)


async def test_read_owned_through_property(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    """A loan attached to alice's property is readable by alice."""
    row = await resolver.authorize_read(ALICE, registry.get(LOANS), "l1")
    assert row["id"] == "l1"


async def test_read_owned_through_second_chain(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    """A loan reached only through an owner entity resolves via the owner chain."""
    row = await resolver.authorize_read(BOB, registry.get(LOANS), "l2")
    assert row["owner_id"] == "o1"


async def test_read_not_owned_is_not_found(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    """Other users' rows are indistinguishable from missing rows."""
    with pytest.raises(ResourceNotFoundException):
        await resolver.authorize_read(BOB, registry.get(LOANS), "l1")
    with pytest.raises(ResourceNotFoundException):
        await resolver.authorize_read(ALICE, registry.get(LOANS), "missing")


async def test_two_hop_chain(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    """A repayment resolves through its loan and the loan's property."""
    row = await resolver.authorize_read(ALICE, registry.get(LOAN_REPAYMENTS), "r1")
    assert row["loan_id"] == "l1"
    with pytest.raises(ResourceNotFoundException):
        await resolver.authorize_read(BOB, registry.get(LOAN_REPAYMENTS), "r1")


async def test_write_requires_a_parent(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    """Creating a loan with neither property_id nor owner_id is a validation error."""
    with pytest.raises(ValidationException):
        await resolver.authorize_write(ALICE, registry.get(LOANS), {"lender_name": "Bank"})


async def test_write_to_foreign_parent_is_forbidden(
    resolver: OwnershipResolver, registry: ResourceRegistry
) -> None:
    """Every declared parent must be owned, not just one of them."""
    with pytest.raises(AuthorizationException):
        await resolver.authorize_write(
            ALICE, registry.get(LOANS), {"property_id": "p1", "owner_id": "o1"}
        )
    await resolver.authorize_write(ALICE, registry.get(LOANS), {"property_id": "p1"})


async def test_update_without_parent_skips_requirement(
    resolver: OwnershipResolver, registry: ResourceRegistry
) -> None:
    await resolver.authorize_write(ALICE, registry.get(LOANS), {}, creating=False)


async def test_admin_bypasses_users_only(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    """Admins read any user row but get no bypass on portfolio data."""
    row = await resolver.authorize_read(ADMIN, registry.get(USERS), "bob")
    assert row["email"] == "bob@example.com"
    assert resolver.list_scope(ADMIN, registry.get(USERS)) is None
    with pytest.raises(ResourceNotFoundException):
        await resolver.authorize_read(ADMIN, registry.get(LOANS), "l1")


async def test_users_row_is_self_owned(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    await resolver.authorize_read(BOB, registry.get(USERS), "bob")
    with pytest.raises(ResourceNotFoundException):
        await resolver.authorize_read(ALICE, registry.get(USERS), "bob")


def test_list_scope_carries_all_chains(resolver: OwnershipResolver, registry: ResourceRegistry) -> None:
    scope = resolver.list_scope(ALICE, registry.get(LOANS))
    assert scope is not None
    assert scope.principal_id == "alice"
    assert len(scope.chains) == 2
