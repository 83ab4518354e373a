"""
Main application entry point for the Electricity Price API service.
Wires the cache, fetcher and refresh scheduler into the FastAPI app and starts the service.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.routes import router as api_router
from src.cache.ttl_cache import BoundedTTLCache
from src.config import Settings, settings as default_settings
from src.logging_config import setup_logging
from src.scheduler.refresh_scheduler import RefreshScheduler
from src.services.price_fetcher import PriceFetcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown procedures.
    """
    # Startup
    setup_logging(app.state.settings.log_level, app.state.settings.log_format)
    if app.state.settings.refresh_enabled:
        await app.state.scheduler.start()

    yield

    # Shutdown
    await app.state.scheduler.stop()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Electricity Price API",
        description="Cached ENTSO-E day-ahead electricity prices",
        version="1.0.0",
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        lifespan=lifespan,
    )

    # One cache per process, shared by the routes and the scheduler
    cache = BoundedTTLCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_size=settings.max_cache_size,
    )
    fetcher = PriceFetcher(settings)

    app.state.settings = settings
    app.state.cache = cache
    app.state.fetcher = fetcher
    app.state.scheduler = RefreshScheduler(
        fetcher,
        cache,
        interval_seconds=settings.refresh_interval_seconds,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=default_settings.api_host,
        port=default_settings.port,
        reload=default_settings.api_reload,
        log_level=default_settings.log_level.lower(),
    )
