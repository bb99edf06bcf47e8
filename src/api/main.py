"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.dependencies import get_record_store
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.record_store import SqlRecordStore
from infrastructure.settings import (
    AuthMode,
    get_auth_settings,
    get_record_store_settings,
    get_settings,
)
from infrastructure.version import __version__
from social.presentation import router as social_router


@asynccontextmanager
async def social_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Record store creation (and table creation when configured)
    - Record store shutdown
    """
    configure_logging(debug=get_settings().debug)
    probe = DefaultStartupProbe()

    store_settings = get_record_store_settings()
    store = get_record_store()
    if store_settings.create_schema and isinstance(store.inner, SqlRecordStore):
        await store.inner.create_schema()
    probe.record_store_ready(store_settings.backend, store.timeout_seconds)

    if get_auth_settings().mode == AuthMode.HEADER:
        probe.header_auth_enabled()

    yield

    await store.close()
    probe.shutdown_completed()


app = FastAPI(
    title="Workout Social API",
    description="Social graph and activity feed for shared workouts",
    version=__version__,
    lifespan=social_lifespan,
)

app.include_router(social_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "version": __version__}
