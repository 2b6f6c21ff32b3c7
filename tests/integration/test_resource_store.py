"""Integration tests for SqlResourceStore against in-memory SQLite."""

from datetime import date
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.application.dtos.query import FilterClause, QuerySpec
from portfolio.application.resources.catalog import (
    LOAN_REPAYMENTS,
    LOANS,
    OWNERS,
    PROPERTIES,
    USERS,
    build_registry,
)
from portfolio.application.resources.descriptors import OwnershipScope, ResourceRegistry
from portfolio.domain.exceptions import StoreError
from portfolio.infrastructure.persistence.repositories import SqlResourceStore, UserRepository


@pytest.fixture
def registry() -> ResourceRegistry:
    return build_registry(lambda password: password)


@pytest.fixture
def store(
    session_factory: async_sessionmaker[AsyncSession], registry: ResourceRegistry
) -> SqlResourceStore:
    return SqlResourceStore(session_factory, registry)


async def _user(store: SqlResourceStore, registry: ResourceRegistry, email: str) -> str:
    row = await store.insert(
        registry.get(USERS),
        {"email": email, "name": email.split("@")[0], "role": "owner", "password_hash": "x"},
    )
    return row["id"]


async def _property(
    store: SqlResourceStore, registry: ResourceRegistry, user_id: str, name: str = "Tower"
) -> dict[str, Any]:
    return await store.insert(
        registry.get(PROPERTIES),
        {
            "user_id": user_id,
            "name": name,
            "address": "1-1 Marunouchi",
            "property_type": "apartment",
            "purchase_price": 10000000,
            "purchase_date": date(2020, 1, 15),
        },
    )


def _loan(lender: str, **parents: str) -> dict[str, Any]:
    return {
        "lender_name": lender,
        "loan_type": "mortgage",
        "principal_amount": 500000,
        "current_balance": 400000,
        "interest_rate": 1.5,
        "loan_term_months": 240,
        "monthly_payment": 2500,
        **parents,
    }


async def test_insert_hides_password_hash(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    user_id = await _user(store, registry, "alice@example.com")
    row = await store.fetch(registry.get(USERS), user_id)
    assert row is not None
    assert row["email"] == "alice@example.com"
    assert "password_hash" not in row


async def test_rows_are_json_ready(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    user_id = await _user(store, registry, "alice@example.com")
    prop = await _property(store, registry, user_id)
    assert prop["purchase_date"] == "2020-01-15"
    assert isinstance(prop["created_at"], str)
    assert prop["deleted_at"] is None


async def test_scope_follows_both_loan_chains(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    """Loans are visible through the property chain or the owner chain."""
    alice = await _user(store, registry, "alice@example.com")
    bob = await _user(store, registry, "bob@example.com")
    prop = await _property(store, registry, alice)
    owner = await store.insert(registry.get(OWNERS), {"user_id": alice, "name": "Alice KK", "owner_kind": "corporation"})
    await store.insert(registry.get(LOANS), _loan("Via property", property_id=prop["id"]))
    await store.insert(registry.get(LOANS), _loan("Via owner", owner_id=owner["id"]))
    bob_prop = await _property(store, registry, bob, name="Bob House")
    await store.insert(registry.get(LOANS), _loan("Bob's", property_id=bob_prop["id"]))

    loans = registry.get(LOANS)
    scope = OwnershipScope(principal_id=alice, chains=registry.chains(LOANS))
    spec = QuerySpec(sort="lender_name", order="asc")

    rows = await store.select(loans, spec, scope)
    assert [row["lender_name"] for row in rows] == ["Via owner", "Via property"]
    assert await store.count(loans, spec, scope) == 2


async def test_deleted_parent_hides_children(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    alice = await _user(store, registry, "alice@example.com")
    prop = await _property(store, registry, alice)
    loan = await store.insert(registry.get(LOANS), _loan("Bank", property_id=prop["id"]))
    await store.insert(
        registry.get(LOAN_REPAYMENTS),
        {
            "loan_id": loan["id"],
            "payment_date": date(2024, 1, 31),
            "amount": 2500,
            "principal_amount": 2000,
            "interest_amount": 500,
        },
    )
    scope = OwnershipScope(principal_id=alice, chains=registry.chains(LOAN_REPAYMENTS))
    assert await store.count(registry.get(LOAN_REPAYMENTS), QuerySpec(), scope) == 1

    await store.delete(registry.get(PROPERTIES), prop["id"])
    assert await store.count(registry.get(LOAN_REPAYMENTS), QuerySpec(), scope) == 0


async def test_soft_delete_then_second_delete_is_row_not_found(
    store: SqlResourceStore, registry: ResourceRegistry
) -> None:
    alice = await _user(store, registry, "alice@example.com")
    prop = await _property(store, registry, alice)
    await store.delete(registry.get(PROPERTIES), prop["id"])
    assert await store.fetch(registry.get(PROPERTIES), prop["id"]) is None
    with pytest.raises(StoreError) as exc_info:
        await store.delete(registry.get(PROPERTIES), prop["id"])
    assert exc_info.value.code == StoreError.ROW_NOT_FOUND


async def test_update_missing_row_is_row_not_found(
    store: SqlResourceStore, registry: ResourceRegistry
) -> None:
    with pytest.raises(StoreError) as exc_info:
        await store.update(registry.get(PROPERTIES), "nope", {"name": "x"})
    assert exc_info.value.code == StoreError.ROW_NOT_FOUND


async def test_search_treats_wildcards_literally(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    alice = await _user(store, registry, "alice@example.com")
    await _property(store, registry, alice, name="100% Tower")
    await _property(store, registry, alice, name="Plain House")
    descriptor = registry.get(PROPERTIES)
    spec = QuerySpec(search="100%", search_fields=("name", "address"))
    rows = await store.select(descriptor, spec, None)
    assert [row["name"] for row in rows] == ["100% Tower"]
    assert await store.count(descriptor, QuerySpec(search="%", search_fields=("name",)), None) == 1


async def test_filters_and_paging(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    alice = await _user(store, registry, "alice@example.com")
    for index in range(5):
        await _property(store, registry, alice, name=f"P{index}")
    descriptor = registry.get(PROPERTIES)
    spec = QuerySpec(
        filters=(FilterClause("user_id", "eq", alice),), sort="name", order="desc", page=2, limit=2
    )
    rows = await store.select(descriptor, spec, None)
    assert [row["name"] for row in rows] == ["P2", "P1"]
    assert await store.count(descriptor, spec, None) == 5


async def test_offset_beyond_sql_integer_range_selects_nothing(
    store: SqlResourceStore, registry: ResourceRegistry
) -> None:
    alice = await _user(store, registry, "alice@example.com")
    await _property(store, registry, alice)
    descriptor = registry.get(PROPERTIES)
    spec = QuerySpec(sort="name", page=10**19, limit=20)
    assert await store.select(descriptor, spec, None) == []
    assert await store.count(descriptor, spec, None) == 1


async def test_exists_ignores_excluded_and_deleted_rows(
    store: SqlResourceStore, registry: ResourceRegistry
) -> None:
    users = registry.get(USERS)
    user_id = await _user(store, registry, "alice@example.com")
    assert await store.exists(users, {"email": "alice@example.com"}) is True
    assert await store.exists(users, {"email": "alice@example.com"}, exclude_id=user_id) is False
    await store.delete(users, user_id)
    assert await store.exists(users, {"email": "alice@example.com"}) is False


async def test_hard_delete_removes_repayment(store: SqlResourceStore, registry: ResourceRegistry) -> None:
    alice = await _user(store, registry, "alice@example.com")
    prop = await _property(store, registry, alice)
    loan = await store.insert(registry.get(LOANS), _loan("Bank", property_id=prop["id"]))
    repayment = await store.insert(
        registry.get(LOAN_REPAYMENTS),
        {
            "loan_id": loan["id"],
            "payment_date": date(2024, 2, 29),
            "amount": 2500,
            "principal_amount": 2000,
            "interest_amount": 500,
        },
    )
    await store.delete(registry.get(LOAN_REPAYMENTS), repayment["id"])
    assert await store.fetch(registry.get(LOAN_REPAYMENTS), repayment["id"]) is None


async def test_user_repository_lookups(
    store: SqlResourceStore,
    registry: ResourceRegistry,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    user_id = await _user(store, registry, "Alice@Example.com")
    repo = UserRepository(session_factory)
    assert await repo.get_credentials_by_email(" alice@example.com ") == (user_id, "x")
    assert await repo.get_principal_row(user_id) == {
        "id": user_id,
        "email": "Alice@Example.com",
        "role": "owner",
    }
    assert await repo.get_principal_row("missing") is None
