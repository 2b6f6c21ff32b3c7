"""Application DTOs (no ORM dependency)."""

from portfolio.application.dtos.access import AuthUser, Principal, RequestContext
from portfolio.application.dtos.envelope import Envelope, ErrorInfo, PaginationMeta
from portfolio.application.dtos.query import FilterClause, PaginationParams, QuerySpec

__all__ = [
    "AuthUser",
    "Envelope",
    "ErrorInfo",
    "FilterClause",
    "PaginationMeta",
    "PaginationParams",
    "Principal",
    "QuerySpec",
    "RequestContext",
]
