"""Request payload builders shared by API tests."""

from typing import Any

from httpx import AsyncClient


def property_body(name: str = "Sakura Tower", **overrides: Any) -> dict[str, Any]:
    return {
        "name": name,
        "address": "2-1 Shibuya, Tokyo",
        "property_type": "apartment",
        "purchase_price": 120000000,
        "purchase_date": "2019-06-01",
        **overrides,
    }


def loan_body(lender_name: str = "Mizuho", **overrides: Any) -> dict[str, Any]:
    return {
        "lender_name": lender_name,
        "loan_type": "mortgage",
        "principal_amount": 80000000,
        "current_balance": 75000000,
        "interest_rate": 0.9,
        "loan_term_months": 420,
        "monthly_payment": 210000,
        **overrides,
    }


async def create(
    client: AsyncClient, resource: str, body: dict[str, Any], headers: dict[str, str]
) -> dict[str, Any]:
    """POST and return the created row, asserting 201."""
    response = await client.post(f"/api/v1/{resource}", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]
