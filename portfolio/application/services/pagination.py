"""Pagination calculator: query params to PaginationParams, meta and store range.

Pure functions, no I/O.
"""

import math
from collections.abc import Mapping
from typing import Any

from portfolio.application.dtos.envelope import PaginationMeta
from portfolio.application.dtos.query import PaginationParams, QuerySpec
from portfolio.core.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from portfolio.domain.enums import SortOrder
from portfolio.domain.exceptions import ValidationException


def _parse_int(raw: Any, name: str) -> int | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationException(f"{name} must be an integer", field=name)
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValidationException(f"{name} must be an integer", field=name) from None


def extract_params(
    query: Mapping[str, Any],
    *,
    max_limit: int = MAX_LIMIT,
    default_limit: int = DEFAULT_LIMIT,
) -> PaginationParams:
    """Read page, limit, sort and order from raw query parameters.

    page defaults to 1 and is floored at 1. limit defaults to default_limit
    and is capped at max_limit; zero or negative limits are rejected.
    order is "asc" or "desc" (default "desc").

    Args:
        query: Raw query mapping (string values as received).
        max_limit: Upper bound for limit.
        default_limit: limit used when none is given.

    Returns:
        PaginationParams.

    Raises:
        ValidationException: Non-integer page/limit, limit < 1, unknown order.
    """
    page = _parse_int(query.get("page"), "page")
    page = DEFAULT_PAGE if page is None else max(page, 1)

    limit = _parse_int(query.get("limit"), "limit")
    if limit is None:
        limit = default_limit
    elif limit < 1:
        raise ValidationException("limit must be at least 1", field="limit")
    limit = min(limit, max_limit)

    sort = query.get("sort") or None
    order = str(query.get("order") or SortOrder.DESC.value).lower()
    if order not in SortOrder.values():
        raise ValidationException("order must be 'asc' or 'desc'", field="order")

    return PaginationParams(page=page, limit=limit, sort=sort, order=order)


def compute_meta(params: PaginationParams, total: int) -> PaginationMeta:
    """Build the meta block; total_pages is 0 when total is 0."""
    total_pages = math.ceil(total / params.limit) if total > 0 else 0
    return PaginationMeta(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=total_pages,
    )


def to_offset_range(params: PaginationParams | QuerySpec) -> tuple[int, int]:
    """Inclusive zero-based [from, to] row range handed to the store."""
    start = (params.page - 1) * params.limit
    return start, start + params.limit - 1
