"""Generic REST router for descriptor-driven resources.

Every resource gets the same six routes; the access layer does all the
work and the route only renders the returned envelope. Write routes are
rate limited; slowapi keys limits by function name, so each generated
endpoint is renamed per resource before decoration.
"""

from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from portfolio.api.v1.dependencies import AccessLayerDep, RequestContextDep
from portfolio.core.exception_handlers import envelope_response
from portfolio.core.limiter import limit_writes

JsonBody = Annotated[Any, Body()]


def _named(func: Callable[..., Any], name: str) -> Callable[..., Any]:
    func.__name__ = name
    func.__qualname__ = name
    return func


def build_resource_router(
    resource: str,
    nested: tuple[tuple[str, str], ...] = (),
) -> APIRouter:
    """Build list/get/create/update/delete routes for one resource.

    Args:
        resource: Resource name registered in the catalog (e.g. "loans").
        nested: (path segment, child resource) pairs exposed as read-only
            GET /{id}/{segment} lists scoped to the parent row.

    Returns:
        APIRouter to include under /api/v1/{resource}.
    """
    router = APIRouter()
    slug = resource.replace("-", "_")

    async def list_items(
        request: Request, layer: AccessLayerDep, ctx: RequestContextDep
    ) -> JSONResponse:
        return envelope_response(await layer.list(resource, ctx, dict(request.query_params)))

    async def get_item(item_id: str, layer: AccessLayerDep, ctx: RequestContextDep) -> JSONResponse:
        return envelope_response(await layer.get(resource, ctx, item_id))

    async def create_item(
        request: Request, body: JsonBody, layer: AccessLayerDep, ctx: RequestContextDep
    ) -> JSONResponse:
        return envelope_response(await layer.create(resource, ctx, body))

    async def replace_item(
        request: Request,
        item_id: str,
        body: JsonBody,
        layer: AccessLayerDep,
        ctx: RequestContextDep,
    ) -> JSONResponse:
        return envelope_response(await layer.update(resource, ctx, item_id, body))

    async def patch_item(
        request: Request,
        item_id: str,
        body: JsonBody,
        layer: AccessLayerDep,
        ctx: RequestContextDep,
    ) -> JSONResponse:
        return envelope_response(await layer.update(resource, ctx, item_id, body))

    async def delete_item(
        request: Request, item_id: str, layer: AccessLayerDep, ctx: RequestContextDep
    ) -> JSONResponse:
        return envelope_response(await layer.delete(resource, ctx, item_id))

    router.add_api_route("", _named(list_items, f"list_{slug}"), methods=["GET"])
    router.add_api_route(
        "", limit_writes(_named(create_item, f"create_{slug}")), methods=["POST"], status_code=201
    )

    for segment, child in nested:
        router.add_api_route(
            f"/{{item_id}}/{segment}",
            _named(_nested_list(resource, child), f"list_{slug}_{child.replace('-', '_')}"),
            methods=["GET"],
        )

    router.add_api_route("/{item_id}", _named(get_item, f"get_{slug}"), methods=["GET"])
    router.add_api_route(
        "/{item_id}", limit_writes(_named(replace_item, f"replace_{slug}")), methods=["PUT"]
    )
    router.add_api_route(
        "/{item_id}", limit_writes(_named(patch_item, f"patch_{slug}")), methods=["PATCH"]
    )
    router.add_api_route(
        "/{item_id}", limit_writes(_named(delete_item, f"delete_{slug}")), methods=["DELETE"]
    )
    return router


def _nested_list(parent: str, child: str) -> Callable[..., Any]:
    async def list_children(
        request: Request, item_id: str, layer: AccessLayerDep, ctx: RequestContextDep
    ) -> JSONResponse:
        envelope = await layer.list(
            child, ctx, dict(request.query_params), parent=(parent, item_id)
        )
        return envelope_response(envelope)

    return list_children
