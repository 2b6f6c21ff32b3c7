"""Resource access layer: the single orchestrator behind every REST resource.

Each operation authenticates the caller, validates input, resolves
ownership, runs the store call and returns an Envelope. Nothing raises out
of the public methods; every failure is classified into an error envelope.

Write ordering: validation, then ownership, then policy and uniqueness
checks, then the store write (committed by the store), then cache
invalidation. Invalidation failures never fail a request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from portfolio.application.dtos.access import Principal, RequestContext
from portfolio.application.dtos.envelope import Envelope
from portfolio.application.dtos.query import QuerySpec
from portfolio.application.interfaces.repositories import IResourceStore, IUserRepository
from portfolio.application.interfaces.services import IAuthProvider
from portfolio.application.resources.descriptors import ResourceDescriptor, ResourceRegistry
from portfolio.application.services import envelope as envelopes
from portfolio.application.services.ownership import OwnershipResolver
from portfolio.application.services.query_builder import build_query_spec
from portfolio.core.constants import DEFAULT_LIMIT, MAX_LIMIT
from portfolio.domain.enums import UserRole
from portfolio.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    ValidationException,
)
from portfolio.shared.telemetry.tracing import add_span_attributes, traced
from portfolio.shared.utils.sanitization import InputSanitizer

if TYPE_CHECKING:
    from portfolio.infrastructure.cache.cache_aside import CacheAside, ListHandler

logger = logging.getLogger(__name__)


def _label(descriptor: ResourceDescriptor) -> str:
    return descriptor.name.replace("-", " ")


class ResourceAccessLayer:
    """Descriptor-driven list/get/create/update/delete for every resource."""

    def __init__(
        self,
        registry: ResourceRegistry,
        store: IResourceStore,
        auth: IAuthProvider,
        users: IUserRepository,
        cache: CacheAside,
        *,
        list_ttl_seconds: int = 300,
        max_limit: int = MAX_LIMIT,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.registry = registry
        self.store = store
        self.auth = auth
        self.users = users
        self.cache = cache
        self.ownership = OwnershipResolver(store, registry)
        self.max_limit = max_limit
        self.default_limit = default_limit
        self._list_handlers: dict[str, ListHandler] = {
            descriptor.name: cache.wrap(
                self._list_handler(descriptor),
                resource_name=descriptor.name,
                ttl_seconds=list_ttl_seconds,
            )
            for descriptor in registry
        }

    # ---- Authentication ----

    async def authenticate(self, ctx: RequestContext) -> Principal:
        """Resolve the caller; role is read from the live users row.

        Raises:
            AuthenticationException: Missing/invalid credential or deleted user.
        """
        identity = await self.auth.get_current_user(ctx.credential)
        if identity is None:
            raise AuthenticationException()
        row = await self.users.get_principal_row(identity.id)
        if row is None:
            raise AuthenticationException()
        role = row.get("role")
        return Principal(
            id=row["id"],
            email=row.get("email") or identity.email,
            role=UserRole(role) if role in UserRole.values() else None,
        )

    # ---- Reads ----

    def _list_handler(self, descriptor: ResourceDescriptor) -> ListHandler:
        async def handle(principal: Principal | None, spec: QuerySpec) -> Envelope:
            if principal is None:
                raise AuthenticationException()
            scope = self.ownership.list_scope(principal, descriptor)
            rows = await self.store.select(descriptor, spec, scope)
            total = await self.store.count(descriptor, spec, scope)
            return envelopes.paginated(rows, spec.page, spec.limit, total)

        handle.__name__ = f"list_{descriptor.table}"
        return handle

    @traced("resource_access.list")
    async def list(
        self,
        resource: str,
        ctx: RequestContext,
        query: Mapping[str, Any],
        *,
        parent: tuple[str, str] | None = None,
    ) -> Envelope:
        """Paginated, filtered, ownership-scoped list.

        Args:
            resource: Resource name.
            ctx: Request context carrying the credential.
            query: Raw query parameters.
            parent: Optional (parent resource, parent id) for nested routes;
                the parent must be readable and its id becomes an eq filter.
        """
        descriptor = self.registry.get(resource)
        try:
            principal = await self.authenticate(ctx)
            if parent is not None:
                parent_resource, parent_id = parent
                await self.ownership.authorize_read(
                    principal, self.registry.get(parent_resource), parent_id
                )
                link = next(p for p in descriptor.parents if p.resource == parent_resource)
                query = {**query, link.column: parent_id}
            spec = build_query_spec(
                descriptor, query, max_limit=self.max_limit, default_limit=self.default_limit
            )
            add_span_attributes(resource=resource, page=spec.page, limit=spec.limit)
            return await self._list_handlers[resource](principal, spec)
        except Exception as exc:
            return envelopes.classify_exception(exc, f"list {resource}", resource)

    @traced("resource_access.get")
    async def get(self, resource: str, ctx: RequestContext, resource_id: str) -> Envelope:
        """Single row, or NotFound when missing, deleted or not owned."""
        descriptor = self.registry.get(resource)
        try:
            principal = await self.authenticate(ctx)
            row = await self.ownership.authorize_read(principal, descriptor, resource_id)
            return envelopes.success(row)
        except Exception as exc:
            return envelopes.classify_exception(exc, f"get {resource}", resource)

    # ---- Writes ----

    async def _check_unique(
        self,
        descriptor: ResourceDescriptor,
        values: Mapping[str, Any],
        changed: set[str] | None = None,
        exclude_id: str | None = None,
    ) -> None:
        for rule in descriptor.unique_rules:
            columns = (*rule.fields, *((rule.scope_column,) if rule.scope_column else ()))
            if changed is not None and not changed.intersection(columns):
                continue
            match = {column: values.get(column) for column in columns}
            if any(value is None for value in match.values()):
                continue
            if await self.store.exists(descriptor, match, exclude_id=exclude_id):
                fields = ", ".join(rule.fields)
                scope = f" within this {rule.scope_column.removesuffix('_id')}" if rule.scope_column else ""
                raise ConflictException(f"{fields} already exists{scope}", field=rule.fields[0])

    async def _invalidate(self, descriptor: ResourceDescriptor, principal: Principal) -> None:
        owner_scope = None if descriptor.invalidate_namespace else principal.id
        await self.cache.invalidate_resource(descriptor.name, owner_scope)
        for dependent in descriptor.dependents:
            await self.cache.invalidate_resource(dependent, principal.id)

    @traced("resource_access.create")
    async def create(self, resource: str, ctx: RequestContext, body: Any) -> Envelope:
        """Validate, authorize declared parents, write, invalidate. 201 on success."""
        descriptor = self.registry.get(resource)
        try:
            principal = await self.authenticate(ctx)
            values = descriptor.create_schema.model_validate(body).model_dump()
            await self.ownership.authorize_write(principal, descriptor, values, creating=True)
            if descriptor.policy is not None:
                values = await descriptor.policy.before_create(principal, values)
            if descriptor.owner_column and descriptor.owner_column != "id":
                values[descriptor.owner_column] = principal.id
            values = InputSanitizer.sanitize_fields(values, descriptor.free_text_fields)
            await self._check_unique(descriptor, values)
            row = await self.store.insert(descriptor, values)
        except Exception as exc:
            return envelopes.classify_exception(exc, f"create {resource}", resource)
        logger.info("Created %s %s", resource, row.get("id"))
        await self._invalidate(descriptor, principal)
        return envelopes.success(row, status_code=201)

    @traced("resource_access.update")
    async def update(
        self, resource: str, ctx: RequestContext, resource_id: str, body: Any
    ) -> Envelope:
        """Partial update of an owned row. NotFound hides other users' rows."""
        descriptor = self.registry.get(resource)
        try:
            principal = await self.authenticate(ctx)
            patch = descriptor.update_schema.model_validate(body).model_dump(exclude_unset=True)
            row = await self.ownership.authorize_read(principal, descriptor, resource_id)

            moved = {
                column: patch[column]
                for column in descriptor.parent_columns
                if column in patch and patch[column] != row.get(column)
            }
            if moved:
                await self.ownership.authorize_write(principal, descriptor, moved, creating=False)
            merged = {**row, **patch}
            if descriptor.requires_parent and not any(
                merged.get(column) for column in descriptor.parent_columns
            ):
                raise ValidationException(
                    f"One of {', '.join(descriptor.parent_columns)} is required",
                    field=descriptor.parent_columns[0],
                )

            if descriptor.policy is not None:
                patch = await descriptor.policy.before_update(principal, row, patch)
            patch = InputSanitizer.sanitize_fields(patch, descriptor.free_text_fields)
            await self._check_unique(
                descriptor, {**row, **patch}, changed=set(patch), exclude_id=resource_id
            )
            updated = await self.store.update(descriptor, resource_id, patch)
        except Exception as exc:
            return envelopes.classify_exception(exc, f"update {resource}", resource)
        logger.info("Updated %s %s", resource, resource_id)
        await self._invalidate(descriptor, principal)
        return envelopes.success(updated)

    @traced("resource_access.delete")
    async def delete(self, resource: str, ctx: RequestContext, resource_id: str) -> Envelope:
        """Soft delete (or hard delete for non-soft-delete resources) of an owned row."""
        descriptor = self.registry.get(resource)
        try:
            principal = await self.authenticate(ctx)
            row = await self.ownership.authorize_read(principal, descriptor, resource_id)
            if descriptor.policy is not None:
                await descriptor.policy.before_delete(principal, row)
            await self.store.delete(descriptor, resource_id)
        except Exception as exc:
            return envelopes.classify_exception(exc, f"delete {resource}", resource)
        logger.info("Deleted %s %s", resource, resource_id)
        await self._invalidate(descriptor, principal)
        return envelopes.success({"message": f"{_label(descriptor).capitalize()} deleted"})
