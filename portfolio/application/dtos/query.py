"""Query DTOs: resolved pagination parameters and the explicit Query Spec
interpreted by the resource store."""

import json
from dataclasses import dataclass, field
from typing import Any, Literal

FilterOp = Literal["eq", "gte", "lte"]


@dataclass(frozen=True)
class PaginationParams:
    """Validated page, limit, sort and order from a LIST request."""

    page: int = 1
    limit: int = 20
    sort: str | None = None
    order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class FilterClause:
    """Single predicate: column, operator, typed value."""

    column: str
    op: FilterOp
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"column": self.column, "op": self.op, "value": self.value}


@dataclass(frozen=True)
class QuerySpec:
    """Filters, search, sort and range for one LIST call.

    The same spec built from the same request always yields the same
    signature(), which is what the list cache key is derived from.
    """

    filters: tuple[FilterClause, ...] = ()
    search: str | None = None
    search_fields: tuple[str, ...] = field(default=())
    sort: str = "created_at"
    order: str = "desc"
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def signature(self) -> str:
        """Canonical JSON (sorted keys, sorted filters, no whitespace)."""
        payload = {
            "filters": sorted(
                (c.to_dict() for c in self.filters),
                key=lambda c: (c["column"], c["op"], str(c["value"])),
            ),
            "search": self.search,
            "sort": self.sort,
            "order": self.order,
            "page": self.page,
            "limit": self.limit,
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
