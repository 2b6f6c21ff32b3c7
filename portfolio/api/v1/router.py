"""API v1 router aggregation.

Every catalog resource is mounted from the generic resource router; auth
and health have their own modules.
"""

from fastapi import APIRouter

from portfolio.api.v1.endpoints import auth, health
from portfolio.api.v1.endpoints.resources import build_resource_router
from portfolio.application.resources.catalog import (
    EXPENSES,
    LOAN_REPAYMENTS,
    LOANS,
    OWNERS,
    PROPERTIES,
    RENT_ROLLS,
    USERS,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

for resource, nested in (
    (PROPERTIES, ()),
    (OWNERS, ()),
    (LOANS, (("repayments", LOAN_REPAYMENTS),)),
    (LOAN_REPAYMENTS, ()),
    (RENT_ROLLS, ()),
    (EXPENSES, ()),
    (USERS, ()),
):
    api_router.include_router(
        build_resource_router(resource, nested), prefix=f"/{resource}", tags=[resource]
    )
