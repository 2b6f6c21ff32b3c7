"""Application services: envelopes, pagination, ownership, resource access."""

from portfolio.application.services.ownership import OwnershipResolver
from portfolio.application.services.query_builder import build_query_spec
from portfolio.application.services.resource_access import ResourceAccessLayer

__all__ = [
    "OwnershipResolver",
    "ResourceAccessLayer",
    "build_query_spec",
]
