"""Descriptor-driven resource store on SQLAlchemy async sessions.

One store serves every resource: the descriptor names the table, the
soft-delete behaviour and the ownership chains. Each call runs in its own
session; writes commit before the call returns, so callers may treat a
returned row as durable.

All SQLAlchemy errors leave this module as StoreError.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, false, func, or_, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.application.dtos.query import QuerySpec
from portfolio.application.resources.descriptors import (
    OwnershipChain,
    OwnershipScope,
    ResourceDescriptor,
    ResourceRegistry,
)
from portfolio.application.services.pagination import to_offset_range
from portfolio.core.constants import MAX_ROW_OFFSET
from portfolio.domain.exceptions import StoreError
from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models import MODELS_BY_TABLE
from portfolio.shared.utils.datetime import ensure_utc, to_json_value, utc_now

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _normalize(values: dict[str, Any]) -> dict[str, Any]:
    """Store datetimes as UTC so range filters compare like with like."""
    return {
        key: ensure_utc(value) if isinstance(value, datetime) else value
        for key, value in values.items()
    }


class SqlResourceStore:
    """IResourceStore implementation backed by the ORM models in MODELS_BY_TABLE."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        registry: ResourceRegistry,
        models: dict[str, type[Base]] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._registry = registry
        self._models = models or MODELS_BY_TABLE

    def _model(self, descriptor: ResourceDescriptor) -> Any:
        try:
            return self._models[descriptor.table]
        except KeyError:
            raise StoreError(StoreError.STORE_FAILURE, f"No model for table {descriptor.table}") from None

    @staticmethod
    def _live(model: Any, descriptor: ResourceDescriptor) -> list[ColumnElement[bool]]:
        return [model.deleted_at.is_(None)] if descriptor.soft_delete else []

    @staticmethod
    def _column(model: Any, name: str) -> Any:
        column = getattr(model, name, None)
        if column is None:
            raise StoreError(StoreError.STORE_FAILURE, f"Unknown column {name}")
        return column

    def _serialize(self, obj: Any, descriptor: ResourceDescriptor) -> dict[str, Any]:
        mapper = sa_inspect(type(obj))
        return {
            attr.key: to_json_value(getattr(obj, attr.key))
            for attr in mapper.column_attrs
            if attr.key not in descriptor.hidden_fields
        }

    @asynccontextmanager
    async def _session(self, write: bool = False) -> AsyncIterator[AsyncSession]:
        """Yield a session (in a transaction when write) and translate driver errors."""
        try:
            async with self._session_factory() as session:
                if write:
                    async with session.begin():
                        yield session
                else:
                    yield session
        except IntegrityError as e:
            raise StoreError(StoreError.CONSTRAINT_VIOLATION, str(e.orig)) from e
        except SQLAlchemyError as e:
            raise StoreError(StoreError.STORE_FAILURE, str(e)) from e

    def _chain_clause(self, model: Any, chain: OwnershipChain, principal_id: str) -> ColumnElement[bool]:
        """Predicate that walks the chain's hops with nested IN subqueries."""
        if not chain.hops:
            return self._column(model, chain.owner_column) == principal_id
        link, rest = chain.hops[0], chain.hops[1:]
        parent_descriptor = self._registry.get(link.resource)
        parent_model = self._model(parent_descriptor)
        inner = OwnershipChain(hops=rest, root=chain.root, owner_column=chain.owner_column)
        parent_ids = select(parent_model.id).where(
            *self._live(parent_model, parent_descriptor),
            self._chain_clause(parent_model, inner, principal_id),
        )
        return self._column(model, link.column).in_(parent_ids)

    def _scope_clause(self, model: Any, scope: OwnershipScope | None) -> list[ColumnElement[bool]]:
        if scope is None:
            return []
        if not scope.chains:
            return [false()]
        return [or_(*(self._chain_clause(model, chain, scope.principal_id) for chain in scope.chains))]

    def _where(
        self,
        stmt: Select[Any],
        model: Any,
        descriptor: ResourceDescriptor,
        spec: QuerySpec,
        scope: OwnershipScope | None,
    ) -> Select[Any]:
        clauses: list[ColumnElement[bool]] = [*self._live(model, descriptor)]
        clauses.extend(self._scope_clause(model, scope))
        for clause in spec.filters:
            column = self._column(model, clause.column)
            value = ensure_utc(clause.value) if isinstance(clause.value, datetime) else clause.value
            if clause.op == "eq":
                clauses.append(column == value)
            elif clause.op == "gte":
                clauses.append(column >= value)
            elif clause.op == "lte":
                clauses.append(column <= value)
            else:
                raise StoreError(StoreError.STORE_FAILURE, f"Unsupported operator {clause.op}")
        if spec.search and spec.search_fields:
            pattern = f"%{_escape_like(spec.search)}%"
            clauses.append(
                or_(*(self._column(model, name).ilike(pattern, escape="\\") for name in spec.search_fields))
            )
        return stmt.where(and_(*clauses)) if clauses else stmt

    async def fetch(self, descriptor: ResourceDescriptor, resource_id: str) -> dict[str, Any] | None:
        model = self._model(descriptor)
        async with self._session() as session:
            result = await session.execute(
                select(model).where(model.id == resource_id, *self._live(model, descriptor))
            )
            obj = result.scalar_one_or_none()
            return self._serialize(obj, descriptor) if obj is not None else None

    async def select(
        self, descriptor: ResourceDescriptor, spec: QuerySpec, scope: OwnershipScope | None
    ) -> list[dict[str, Any]]:
        model = self._model(descriptor)
        sort_column = self._column(model, spec.sort)
        if spec.order == "asc":
            ordering = (sort_column.asc(), model.id.asc())
        else:
            ordering = (sort_column.desc(), model.id.desc())
        start, end = to_offset_range(spec)
        if start > MAX_ROW_OFFSET:
            return []
        stmt = self._where(select(model), model, descriptor, spec, scope)
        stmt = stmt.order_by(*ordering).offset(start).limit(end - start + 1)
        async with self._session() as session:
            result = await session.execute(stmt)
            return [self._serialize(obj, descriptor) for obj in result.scalars().all()]

    async def count(
        self, descriptor: ResourceDescriptor, spec: QuerySpec, scope: OwnershipScope | None
    ) -> int:
        model = self._model(descriptor)
        stmt = self._where(select(func.count()).select_from(model), model, descriptor, spec, scope)
        async with self._session() as session:
            return int((await session.execute(stmt)).scalar_one())

    async def exists(
        self,
        descriptor: ResourceDescriptor,
        match: dict[str, Any],
        exclude_id: str | None = None,
    ) -> bool:
        model = self._model(descriptor)
        clauses = [*self._live(model, descriptor)]
        clauses.extend(self._column(model, name) == value for name, value in match.items())
        if exclude_id is not None:
            clauses.append(model.id != exclude_id)
        async with self._session() as session:
            result = await session.execute(select(model.id).where(*clauses).limit(1))
            return result.first() is not None

    async def insert(self, descriptor: ResourceDescriptor, values: dict[str, Any]) -> dict[str, Any]:
        model = self._model(descriptor)
        now = utc_now()
        obj = model(**_normalize(values))
        obj.created_at = now
        obj.updated_at = now
        async with self._session(write=True) as session:
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
            row = self._serialize(obj, descriptor)
        logger.debug("Inserted %s row %s", descriptor.name, row.get("id"))
        return row

    async def _load_live(self, session: AsyncSession, descriptor: ResourceDescriptor, resource_id: str) -> Any:
        model = self._model(descriptor)
        result = await session.execute(
            select(model).where(model.id == resource_id, *self._live(model, descriptor))
        )
        obj = result.scalar_one_or_none()
        if obj is None:
            raise StoreError(StoreError.ROW_NOT_FOUND, f"No live {descriptor.table} row {resource_id}")
        return obj

    async def update(
        self, descriptor: ResourceDescriptor, resource_id: str, values: dict[str, Any]
    ) -> dict[str, Any]:
        async with self._session(write=True) as session:
            obj = await self._load_live(session, descriptor, resource_id)
            for key, value in _normalize(values).items():
                setattr(obj, key, value)
            obj.updated_at = utc_now()
            await session.flush()
            await session.refresh(obj)
            return self._serialize(obj, descriptor)

    async def delete(self, descriptor: ResourceDescriptor, resource_id: str) -> None:
        async with self._session(write=True) as session:
            obj = await self._load_live(session, descriptor, resource_id)
            if descriptor.soft_delete:
                now = utc_now()
                obj.deleted_at = now
                obj.updated_at = now
            else:
                await session.delete(obj)
            await session.flush()
        logger.debug("Deleted %s row %s", descriptor.name, resource_id)
