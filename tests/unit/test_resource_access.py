"""Tests for ResourceAccessLayer with mocked store, auth and user collaborators."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from portfolio.application.dtos.access import AuthUser, RequestContext
from portfolio.application.resources.catalog import LOANS, PROPERTIES, RENT_ROLLS, USERS, build_registry
from portfolio.application.resources.descriptors import ResourceDescriptor
from portfolio.application.services.resource_access import ResourceAccessLayer
from portfolio.domain.exceptions import StoreError
from portfolio.infrastructure.cache.cache_aside import CacheAside
from portfolio.infrastructure.cache.keys import resource_prefix
from portfolio.infrastructure.cache.memory_cache import MemoryCache

CTX = RequestContext(credential="token-alice", request_id="req-1")

PROPERTY_ROW = {"id": "p1", "user_id": "alice", "name": "Tower"}
LOAN_BODY = {
    "property_id": "p1",
    "lender_name": "First Bank",
    "loan_type": "mortgage",
    "principal_amount": 1000000,
    "current_balance": 900000,
    "interest_rate": 1.2,
    "loan_term_months": 360,
    "monthly_payment": 3500,
}


class FakeStore:
    """Records calls; rows keyed by (resource, id)."""

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], dict[str, Any]] = {(PROPERTIES, "p1"): PROPERTY_ROW}
        self.calls: list[str] = []
        self.fail_insert: StoreError | None = None
        self.duplicate = False

    async def fetch(self, descriptor: ResourceDescriptor, resource_id: str) -> dict[str, Any] | None:
        self.calls.append(f"fetch:{descriptor.name}")
        return self.rows.get((descriptor.name, resource_id))

    async def select(self, descriptor, spec, scope) -> list[dict[str, Any]]:
        self.calls.append(f"select:{descriptor.name}")
        return [row for (name, _), row in self.rows.items() if name == descriptor.name]

    async def count(self, descriptor, spec, scope) -> int:
        return len([1 for (name, _) in self.rows if name == descriptor.name])

    async def exists(self, descriptor, match, exclude_id=None) -> bool:
        self.calls.append(f"exists:{descriptor.name}")
        return self.duplicate

    async def insert(self, descriptor, values) -> dict[str, Any]:
        self.calls.append(f"insert:{descriptor.name}")
        if self.fail_insert is not None:
            raise self.fail_insert
        row = {"id": f"{descriptor.name}-1", **values}
        self.rows[(descriptor.name, row["id"])] = row
        return row

    async def update(self, descriptor, resource_id, values) -> dict[str, Any]:
        self.calls.append(f"update:{descriptor.name}")
        row = {**self.rows[(descriptor.name, resource_id)], **values}
        self.rows[(descriptor.name, resource_id)] = row
        return row

    async def delete(self, descriptor, resource_id) -> None:
        self.calls.append(f"delete:{descriptor.name}")
        self.rows.pop((descriptor.name, resource_id))


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def users() -> AsyncMock:
    repo = AsyncMock()
    repo.get_principal_row.return_value = {"id": "alice", "email": "alice@example.com", "role": "owner"}
    return repo


@pytest.fixture
def auth() -> AsyncMock:
    provider = AsyncMock()
    provider.get_current_user.return_value = AuthUser(id="alice", email="alice@example.com")
    return provider


@pytest.fixture
def memory() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def layer(store: FakeStore, auth: AsyncMock, users: AsyncMock, memory: MemoryCache) -> ResourceAccessLayer:
    return ResourceAccessLayer(
        build_registry(lambda password: f"hashed:{password}"),
        store,
        auth,
        users,
        CacheAside(memory),
    )


async def test_missing_credential_is_unauthorized(layer: ResourceAccessLayer, auth: AsyncMock) -> None:
    """No identity from the auth provider yields a 401 envelope, never an exception."""
    auth.get_current_user.return_value = None
    envelope = await layer.list(LOANS, RequestContext(credential=None), {})
    assert envelope.status_code == 401
    assert envelope.error.code == "UNAUTHORIZED"


async def test_deleted_user_is_unauthorized(layer: ResourceAccessLayer, users: AsyncMock) -> None:
    users.get_principal_row.return_value = None
    envelope = await layer.get(PROPERTIES, CTX, "p1")
    assert envelope.status_code == 401


async def test_validation_runs_before_ownership(layer: ResourceAccessLayer, store: FakeStore) -> None:
    """An invalid body fails with 422 without touching the store."""
    envelope = await layer.create(LOANS, CTX, {"property_id": "p1"})
    assert envelope.status_code == 422
    assert envelope.error.code == "VALIDATION_ERROR"
    assert store.calls == []


async def test_create_checks_parent_then_writes(layer: ResourceAccessLayer, store: FakeStore) -> None:
    envelope = await layer.create(LOANS, CTX, LOAN_BODY)
    assert envelope.status_code == 201
    assert envelope.data["lender_name"] == "First Bank"
    assert store.calls == ["fetch:properties", "insert:loans"]


async def test_create_on_foreign_parent_is_forbidden(
    layer: ResourceAccessLayer, store: FakeStore
) -> None:
    store.rows[(PROPERTIES, "p1")] = {**PROPERTY_ROW, "user_id": "bob"}
    envelope = await layer.create(LOANS, CTX, LOAN_BODY)
    assert envelope.status_code == 403
    assert "insert:loans" not in store.calls


async def test_client_cannot_choose_owner_column(layer: ResourceAccessLayer, store: FakeStore) -> None:
    """user_id is not part of the create body; the principal id is stamped instead."""
    body = {
        "name": "Annex",
        "address": "1-2-3 Chiyoda",
        "property_type": "office",
        "purchase_price": 5000000,
        "purchase_date": "2020-04-01",
    }
    rejected = await layer.create(PROPERTIES, CTX, {**body, "user_id": "bob"})
    assert rejected.status_code == 422

    created = await layer.create(PROPERTIES, CTX, body)
    assert created.data["user_id"] == "alice"


async def test_duplicate_room_is_conflict(layer: ResourceAccessLayer, store: FakeStore) -> None:
    store.duplicate = True
    envelope = await layer.create(
        RENT_ROLLS, CTX, {"property_id": "p1", "room_number": "101", "monthly_rent": 80000}
    )
    assert envelope.status_code == 409
    assert envelope.error.message == "room_number already exists within this property"
    assert "insert:rent-rolls" not in store.calls


async def test_vacant_unit_drops_tenant(layer: ResourceAccessLayer) -> None:
    envelope = await layer.create(
        RENT_ROLLS,
        CTX,
        {
            "property_id": "p1",
            "room_number": "102",
            "monthly_rent": 80000,
            "occupancy_status": "vacant",
            "tenant_name": "Sato",
        },
    )
    assert envelope.success is True
    assert envelope.data["tenant_name"] is None


async def test_store_constraint_error_maps_to_bad_request(
    layer: ResourceAccessLayer, store: FakeStore
) -> None:
    store.fail_insert = StoreError(StoreError.CONSTRAINT_VIOLATION, "Invalid reference")
    envelope = await layer.create(LOANS, CTX, LOAN_BODY)
    assert envelope.status_code == 400


async def test_store_failure_hides_driver_text(layer: ResourceAccessLayer, store: FakeStore) -> None:
    store.fail_insert = StoreError(StoreError.STORE_FAILURE, "connection to 10.0.0.5 refused")
    envelope = await layer.create(LOANS, CTX, LOAN_BODY)
    assert envelope.status_code == 500
    assert "10.0.0.5" not in envelope.error.message


async def test_list_is_cached_and_write_invalidates(
    layer: ResourceAccessLayer, store: FakeStore, memory: MemoryCache
) -> None:
    """A write clears the caller's cached lists for the resource and its dependents."""
    first = await layer.list(PROPERTIES, CTX, {})
    await layer.list(PROPERTIES, CTX, {})
    assert store.calls.count("select:properties") == 1
    assert first.meta.total == 1

    await layer.update(PROPERTIES, CTX, "p1", {"name": "Renamed"})
    refreshed = await layer.list(PROPERTIES, CTX, {})
    assert store.calls.count("select:properties") == 2
    assert refreshed.data[0]["name"] == "Renamed"


async def test_invalidation_failure_does_not_fail_write(
    store: FakeStore, auth: AsyncMock, users: AsyncMock
) -> None:
    backend = AsyncMock()
    backend.get.return_value = None
    backend.delete_prefix.side_effect = ConnectionError("redis down")
    layer = ResourceAccessLayer(
        build_registry(lambda password: password), store, auth, users, CacheAside(backend)
    )
    envelope = await layer.create(LOANS, CTX, LOAN_BODY)
    assert envelope.status_code == 201
    backend.delete_prefix.assert_any_await(resource_prefix(LOANS, "alice"))


async def test_update_of_unowned_row_is_not_found(layer: ResourceAccessLayer, store: FakeStore) -> None:
    store.rows[(PROPERTIES, "p2")] = {"id": "p2", "user_id": "bob", "name": "Other"}
    envelope = await layer.update(PROPERTIES, CTX, "p2", {"name": "Mine now"})
    assert envelope.status_code == 404
    assert "update:properties" not in store.calls


async def test_patch_cannot_null_required_field(layer: ResourceAccessLayer) -> None:
    envelope = await layer.update(PROPERTIES, CTX, "p1", {"name": None})
    assert envelope.status_code == 422


async def test_delete_then_delete_again(layer: ResourceAccessLayer) -> None:
    first = await layer.delete(PROPERTIES, CTX, "p1")
    assert first.success is True
    assert first.data == {"message": "Properties deleted"}
    second = await layer.delete(PROPERTIES, CTX, "p1")
    assert second.status_code == 404


async def test_non_admin_cannot_create_users(layer: ResourceAccessLayer, store: FakeStore) -> None:
    envelope = await layer.create(
        USERS,
        CTX,
        {"email": "carol@example.com", "name": "Carol", "password": "Secr3tPass"},
    )
    assert envelope.status_code == 403
    assert "insert:users" not in store.calls


async def test_admin_creates_user_with_hashed_password(
    layer: ResourceAccessLayer, store: FakeStore, users: AsyncMock
) -> None:
    users.get_principal_row.return_value = {"id": "alice", "email": "alice@example.com", "role": "admin"}
    envelope = await layer.create(
        USERS,
        CTX,
        {"email": "carol@example.com", "name": "Carol", "password": "Secr3tPass"},
    )
    assert envelope.status_code == 201
    stored = store.rows[(USERS, "users-1")]
    assert stored["password_hash"] == "hashed:Secr3tPass"
    assert "password" not in stored
