"""Builds a QuerySpec from raw LIST query parameters and a resource descriptor."""

from collections.abc import Mapping
from typing import Any

from portfolio.application.dtos.query import FilterClause, QuerySpec
from portfolio.application.resources.descriptors import ResourceDescriptor
from portfolio.application.services.pagination import extract_params
from portfolio.core.constants import DEFAULT_LIMIT, MAX_LIMIT
from portfolio.domain.exceptions import ValidationException

MAX_SEARCH_LENGTH = 100


def build_query_spec(
    descriptor: ResourceDescriptor,
    query: Mapping[str, Any],
    *,
    max_limit: int = MAX_LIMIT,
    default_limit: int = DEFAULT_LIMIT,
) -> QuerySpec:
    """Validate allow-listed filters, search, sort and pagination.

    Parameters the descriptor does not recognize are ignored.

    Raises:
        ValidationException: Bad pagination, a sort field outside the
            descriptor's sortable set, or a filter value of the wrong type.
    """
    params = extract_params(query, max_limit=max_limit, default_limit=default_limit)

    if params.sort is None:
        sort = descriptor.default_sort
    elif params.sort in descriptor.sortable:
        sort = params.sort
    else:
        raise ValidationException(
            f"sort must be one of: {', '.join(sorted(descriptor.sortable))}", field="sort"
        )
    order = params.order if query.get("order") else descriptor.default_order

    filters: list[FilterClause] = []
    for field in descriptor.filters:
        raw = query.get(field.param)
        if raw is None or str(raw).strip() == "":
            continue
        filters.append(FilterClause(field.column, field.op, field.parse(str(raw))))

    search = None
    if descriptor.search_fields:
        search = str(query.get("search") or "").strip() or None
        if search and len(search) > MAX_SEARCH_LENGTH:
            raise ValidationException(
                f"search must be at most {MAX_SEARCH_LENGTH} characters", field="search"
            )

    return QuerySpec(
        filters=tuple(filters),
        search=search,
        search_fields=descriptor.search_fields if search else (),
        sort=sort,
        order=order,
        page=params.page,
        limit=params.limit,
    )
