"""End-to-end tests for the generic resource routes (ownership, paging, caching)."""

from typing import Any

from httpx import AsyncClient

from tests.api.helpers import create, loan_body, property_body


async def test_loans_paging_sort_and_meta(client: AsyncClient, alice: dict[str, Any]) -> None:
    """25 loans, page 2 of 10 sorted by lender name ascending."""
    prop = await create(client, "properties", property_body(), alice["headers"])
    for index in range(25):
        await create(
            client, "loans", loan_body(f"Lender {index:02d}", property_id=prop["id"]), alice["headers"]
        )

    response = await client.get(
        "/api/v1/loans",
        params={"page": 2, "limit": 10, "sort": "lender_name", "order": "asc"},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    body = response.json()
    assert [row["lender_name"] for row in body["data"]] == [f"Lender {i:02d}" for i in range(10, 20)]
    assert body["meta"] == {
        "page": 2,
        "limit": 10,
        "total": 25,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": True,
    }


async def test_invalid_paging_is_validation_error(client: AsyncClient, alice: dict[str, Any]) -> None:
    response = await client.get("/api/v1/loans", params={"limit": 0}, headers=alice["headers"])
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_huge_page_is_an_empty_page(client: AsyncClient, alice: dict[str, Any]) -> None:
    """A page whose offset no SQL integer can hold is past the end, not an error."""
    await create(client, "properties", property_body(), alice["headers"])
    response = await client.get(
        "/api/v1/properties", params={"page": 10**19}, headers=alice["headers"]
    )
    assert response.status_code == 200
    body = response.json()
    assert body["data"] == []
    assert body["meta"]["page"] == 10**19
    assert body["meta"]["total"] == 1
    assert body["meta"]["hasNext"] is False


async def test_other_users_rows_are_not_found(
    client: AsyncClient, alice: dict[str, Any], bob: dict[str, Any]
) -> None:
    """Bob can neither see nor modify Alice's rows; they look missing."""
    prop = await create(client, "properties", property_body(), alice["headers"])
    url = f"/api/v1/properties/{prop['id']}"

    assert (await client.get(url, headers=bob["headers"])).status_code == 404
    assert (await client.patch(url, json={"name": "Mine"}, headers=bob["headers"])).status_code == 404
    assert (await client.delete(url, headers=bob["headers"])).status_code == 404

    listing = await client.get("/api/v1/properties", headers=bob["headers"])
    assert listing.json()["data"] == []
    assert listing.json()["meta"]["total"] == 0


async def test_attaching_to_foreign_parent_is_forbidden(
    client: AsyncClient, alice: dict[str, Any], bob: dict[str, Any]
) -> None:
    prop = await create(client, "properties", property_body(), alice["headers"])
    response = await client.post(
        "/api/v1/loans", json=loan_body(property_id=prop["id"]), headers=bob["headers"]
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


async def test_loan_requires_a_parent(client: AsyncClient, alice: dict[str, Any]) -> None:
    response = await client.post("/api/v1/loans", json=loan_body(), headers=alice["headers"])
    assert response.status_code == 422


async def test_loan_owned_through_owner_entity(client: AsyncClient, alice: dict[str, Any]) -> None:
    owner = await create(
        client, "owners", {"name": "Alice Holdings", "owner_kind": "corporation"}, alice["headers"]
    )
    loan = await create(client, "loans", loan_body(owner_id=owner["id"]), alice["headers"])
    response = await client.get(f"/api/v1/loans/{loan['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["data"]["owner_id"] == owner["id"]


async def test_delete_is_idempotent_from_the_callers_view(
    client: AsyncClient, alice: dict[str, Any]
) -> None:
    prop = await create(client, "properties", property_body(), alice["headers"])
    url = f"/api/v1/properties/{prop['id']}"
    first = await client.delete(url, headers=alice["headers"])
    assert first.status_code == 200
    assert first.json() == {"success": True, "data": {"message": "Properties deleted"}}
    second = await client.delete(url, headers=alice["headers"])
    assert second.status_code == 404
    assert (await client.get(url, headers=alice["headers"])).status_code == 404


async def test_list_reflects_writes_immediately(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Cached lists are invalidated for the writer after create, update and delete."""
    headers = alice["headers"]
    assert (await client.get("/api/v1/properties", headers=headers)).json()["meta"]["total"] == 0

    prop = await create(client, "properties", property_body(), headers)
    listing = await client.get("/api/v1/properties", headers=headers)
    assert [row["id"] for row in listing.json()["data"]] == [prop["id"]]

    await client.patch(f"/api/v1/properties/{prop['id']}", json={"name": "Renamed"}, headers=headers)
    listing = await client.get("/api/v1/properties", headers=headers)
    assert listing.json()["data"][0]["name"] == "Renamed"

    await client.delete(f"/api/v1/properties/{prop['id']}", headers=headers)
    listing = await client.get("/api/v1/properties", headers=headers)
    assert listing.json()["meta"]["total"] == 0


async def test_parent_write_invalidates_child_lists(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Deleting a property hides its loans from the (previously cached) loan list."""
    headers = alice["headers"]
    prop = await create(client, "properties", property_body(), headers)
    await create(client, "loans", loan_body(property_id=prop["id"]), headers)
    assert (await client.get("/api/v1/loans", headers=headers)).json()["meta"]["total"] == 1

    await client.delete(f"/api/v1/properties/{prop['id']}", headers=headers)
    assert (await client.get("/api/v1/loans", headers=headers)).json()["meta"]["total"] == 0


async def test_create_rejects_client_owner_and_unknown_fields(
    client: AsyncClient, alice: dict[str, Any], bob: dict[str, Any]
) -> None:
    response = await client.post(
        "/api/v1/properties", json=property_body(user_id=bob["id"]), headers=alice["headers"]
    )
    assert response.status_code == 422
    details = response.json()["error"]["details"]
    assert any(detail["field"] == "user_id" for detail in details)


async def test_filters_and_search(client: AsyncClient, alice: dict[str, Any]) -> None:
    headers = alice["headers"]
    await create(client, "properties", property_body("Harbor View", property_type="office"), headers)
    await create(client, "properties", property_body("Hill House", property_type="house"), headers)

    by_type = await client.get("/api/v1/properties", params={"property_type": "house"}, headers=headers)
    assert [row["name"] for row in by_type.json()["data"]] == ["Hill House"]

    by_search = await client.get("/api/v1/properties", params={"search": "harbor"}, headers=headers)
    assert [row["name"] for row in by_search.json()["data"]] == ["Harbor View"]

    bad = await client.get("/api/v1/properties", params={"property_type": "castle"}, headers=headers)
    assert bad.status_code == 422


async def test_unsortable_field_is_rejected(client: AsyncClient, alice: dict[str, Any]) -> None:
    response = await client.get("/api/v1/users", params={"sort": "password_hash"}, headers=alice["headers"])
    assert response.status_code == 422
    assert response.json()["error"]["details"] == {"field": "sort"}


async def test_nested_repayments_list(
    client: AsyncClient, alice: dict[str, Any], bob: dict[str, Any]
) -> None:
    headers = alice["headers"]
    prop = await create(client, "properties", property_body(), headers)
    loan = await create(client, "loans", loan_body(property_id=prop["id"]), headers)
    other = await create(client, "loans", loan_body("Other Bank", property_id=prop["id"]), headers)
    for day, loan_id in (("2024-01-31", loan["id"]), ("2024-02-29", loan["id"]), ("2024-01-31", other["id"])):
        await create(
            client,
            "loan-repayments",
            {
                "loan_id": loan_id,
                "payment_date": day,
                "amount": 210000,
                "principal_amount": 150000,
                "interest_amount": 60000,
            },
            headers,
        )

    response = await client.get(f"/api/v1/loans/{loan['id']}/repayments", headers=headers)
    assert response.status_code == 200
    assert [row["payment_date"] for row in response.json()["data"]] == ["2024-02-29", "2024-01-31"]

    hidden = await client.get(f"/api/v1/loans/{loan['id']}/repayments", headers=bob["headers"])
    assert hidden.status_code == 404


async def test_malformed_json_body_is_validation_error(
    client: AsyncClient, alice: dict[str, Any]
) -> None:
    response = await client.post(
        "/api/v1/properties",
        content=b"{not json",
        headers={**alice["headers"], "Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["success"] is False
