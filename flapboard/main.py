from contextlib import asynccontextmanager

from fastapi import FastAPI

from flapboard.api.routes import alerts, health
from flapboard.core.config import settings
from flapboard.core.logging import get_logger


log = get_logger("flapboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting application in {settings.ENV.upper()} mode")
    if settings.is_production:
        log.info("Production mode: Debug disabled, docs disabled, stricter logging")
    else:
        log.info("Development mode: Debug enabled, docs available")

    if not settings.MTA_API_KEY:
        log.warning("MTA_API_KEY is not set; feeds are requested without a key unless apiKey is passed")

    yield

    log.info("Application shutdown complete")


app = FastAPI(
    title="Flapboard",
    description="Real-time MTA service alerts, normalized across subway, bus, LIRR and Metro-North feeds",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


app.include_router(alerts.router)
app.include_router(health.router)
