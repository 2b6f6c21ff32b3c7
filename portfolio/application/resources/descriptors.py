"""Resource descriptors: static, per-resource configuration that drives the
resource access layer (ownership links, filters, sorting, soft delete).

Descriptors are built once at start-up and never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from portfolio.application.dtos.query import FilterOp
from portfolio.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from portfolio.application.resources.policies import ResourcePolicy

_TRUE = frozenset({"true", "1", "yes"})
_FALSE = frozenset({"false", "0", "no"})


@dataclass(frozen=True)
class FilterField:
    """Allow-listed query parameter mapped to a column predicate.

    Attributes:
        param: Query parameter name (e.g. "start_date").
        column: Column the predicate applies to (e.g. "expense_date").
        op: Comparison operator.
        kind: Value type: str, int, float, bool, date, datetime.
        choices: Allowed values for enum-like string filters.
    """

    param: str
    column: str
    op: FilterOp = "eq"
    kind: str = "str"
    choices: tuple[str, ...] = ()

    def parse(self, raw: str) -> Any:
        """Convert a raw query value to the column type.

        Raises:
            ValidationException: If the value does not fit the declared type.
        """
        value = raw.strip()
        try:
            if self.kind == "int":
                return int(value)
            if self.kind == "float":
                return float(value)
            if self.kind == "bool":
                lowered = value.lower()
                if lowered in _TRUE:
                    return True
                if lowered in _FALSE:
                    return False
                raise ValueError(value)
            if self.kind == "date":
                return date.fromisoformat(value)
            if self.kind == "datetime":
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
                return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
        except ValueError:
            raise ValidationException(
                f"Invalid value for {self.param}", field=self.param
            ) from None
        if self.choices and value not in self.choices:
            raise ValidationException(
                f"{self.param} must be one of: {', '.join(self.choices)}",
                field=self.param,
            )
        return value


@dataclass(frozen=True)
class ParentLink:
    """Foreign-key column pointing at a parent resource that carries ownership."""

    column: str
    resource: str


@dataclass(frozen=True)
class UniqueRule:
    """Fields that must be unique among live rows, optionally within a parent."""

    fields: tuple[str, ...]
    scope_column: str | None = None


@dataclass(frozen=True)
class OwnershipChain:
    """One path from a resource up to an owning-user column.

    hops are (column, parent resource) pairs walked in order; the last
    resource reached (root) carries owner_column. An empty hops tuple means
    the resource itself carries the owner column.
    """

    hops: tuple[ParentLink, ...]
    root: str
    owner_column: str


@dataclass(frozen=True)
class ResourceDescriptor:
    """Static configuration for one REST resource."""

    name: str
    table: str
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    owner_column: str | None = None
    parents: tuple[ParentLink, ...] = ()
    filters: tuple[FilterField, ...] = ()
    search_fields: tuple[str, ...] = ()
    sortable: frozenset[str] = frozenset({"created_at", "updated_at"})
    default_sort: str = "created_at"
    default_order: str = "desc"
    soft_delete: bool = True
    unique_rules: tuple[UniqueRule, ...] = ()
    free_text_fields: tuple[str, ...] = ()
    hidden_fields: frozenset[str] = frozenset()
    dependents: tuple[str, ...] = ()
    admin_bypass: bool = False
    invalidate_namespace: bool = False
    policy: ResourcePolicy | None = field(default=None, compare=False)

    @property
    def requires_parent(self) -> bool:
        """True when ownership can only come from a declared parent."""
        return self.owner_column is None and bool(self.parents)

    @property
    def parent_columns(self) -> tuple[str, ...]:
        return tuple(link.column for link in self.parents)

    def filter_for(self, param: str) -> FilterField | None:
        for f in self.filters:
            if f.param == param:
                return f
        return None


class ResourceRegistry:
    """Read-only lookup of descriptors with pre-expanded ownership chains.

    Raises:
        ValueError: On construction, for unknown parents, cycles, or a
            resource with neither an owner column nor parents.
    """

    def __init__(self, descriptors: Iterable[ResourceDescriptor]) -> None:
        self._descriptors: dict[str, ResourceDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._descriptors:
                raise ValueError(f"Duplicate resource descriptor: {descriptor.name}")
            self._descriptors[descriptor.name] = descriptor
        self._chains: dict[str, tuple[OwnershipChain, ...]] = {
            name: self._expand(name, ()) for name in self._descriptors
        }

    def _expand(self, name: str, seen: tuple[str, ...]) -> tuple[OwnershipChain, ...]:
        if name in seen:
            raise ValueError(f"Ownership cycle: {' -> '.join((*seen, name))}")
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise ValueError(f"Unknown parent resource: {name}")
        chains: list[OwnershipChain] = []
        if descriptor.owner_column:
            chains.append(OwnershipChain(hops=(), root=name, owner_column=descriptor.owner_column))
        for link in descriptor.parents:
            for parent_chain in self._expand(link.resource, (*seen, name)):
                chains.append(
                    OwnershipChain(
                        hops=(link, *parent_chain.hops),
                        root=parent_chain.root,
                        owner_column=parent_chain.owner_column,
                    )
                )
        if not chains:
            raise ValueError(f"Resource {name} has no ownership chain")
        return tuple(chains)

    def get(self, name: str) -> ResourceDescriptor:
        """Return the descriptor for name.

        Raises:
            KeyError: Unknown resource.
        """
        return self._descriptors[name]

    def chains(self, name: str) -> tuple[OwnershipChain, ...]:
        return self._chains[name]

    def names(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self):
        return iter(self._descriptors.values())


@dataclass(frozen=True)
class OwnershipScope:
    """Ownership predicate handed to the store for LIST queries.

    A row is in scope when at least one chain resolves, through live
    parent rows, to owner_column == principal_id.
    """

    principal_id: str
    chains: tuple[OwnershipChain, ...]
