"""Health check endpoint for liveness and readiness probes. No auth."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.api.v1.dependencies import get_cache_backend, get_session_factory_dep
from portfolio.core.config import get_settings
from portfolio.infrastructure.persistence.database import check_database
from portfolio.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)],
    cache: Annotated[Any, Depends(get_cache_backend)],
) -> JSONResponse:
    """Return 200 when the database answers, 503 otherwise.

    Cache state is reported but never fails the check; the API serves from
    the database when the cache is down.
    """
    database_ok = await check_database(session_factory)
    cache_state = "ok" if await cache.ping() else "unavailable"
    body = HealthResponse(
        status="ok" if database_ok else "degraded",
        version=get_settings().app_version,
        database="ok" if database_ok else "unavailable",
        cache=cache_state,
    )
    return JSONResponse(status_code=200 if database_ok else 503, content=body.model_dump())
