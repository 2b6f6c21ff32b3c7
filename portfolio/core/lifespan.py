"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (SRP): cache backend, the
resource access layer, telemetry, and engine dispose. Used by main.py.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from portfolio.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), cache backend (Redis when
    enabled, in-process memory cache otherwise), access layer. Shutdown
    order: cache disconnect, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    telemetry = None
    if settings.telemetry_enabled:
        from portfolio.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()

    from portfolio.api.v1.dependencies import build_access_layer
    from portfolio.infrastructure.persistence import database

    if settings.redis_enabled:
        from portfolio.infrastructure.cache.redis_cache import CacheService

        if telemetry is not None:
            telemetry.instrument_redis()
        cache = CacheService()
        await cache.connect()
    else:
        from portfolio.infrastructure.cache.memory_cache import MemoryCache

        cache = MemoryCache(default_ttl=settings.cache_ttl_lists)
    app.state.cache = cache

    session_factory = database.get_session_factory()
    if telemetry is not None and database.engine is not None:
        telemetry.instrument_sqlalchemy(database.engine)
    app.state.access_layer = build_access_layer(session_factory, cache, settings)
    logger.info("Access layer ready (cache: %s)", type(cache).__name__)

    yield

    # ---- Shutdown ----
    disconnect = getattr(app.state.cache, "disconnect", None)
    if disconnect is not None:
        await disconnect()
        logger.info("Cache disconnected")
    app.state.cache = None
    app.state.access_layer = None

    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
