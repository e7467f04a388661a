from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from subscriptions_preview.core.config import get_settings
from subscriptions_preview.core.logging import configure_logging, request_id_middleware
from subscriptions_preview.preview.router import get_preview_service
from subscriptions_preview.preview.router import router as preview_router

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.ENV, settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    logger.info("Starting subscription email preview service...")
    logger.info(f"Environment: {settings.ENV}")

    if settings.PREVIEW_ENABLED:
        service = get_preview_service()
        logger.info(
            f"✓ Preview service ready ({len(service.registry.recognized_kinds())} email types)"
        )
    else:
        logger.warning("⚠ Email previews disabled (PREVIEW_ENABLED=false)")

    yield

    logger.info("✓ Subscription email preview service stopped")


app = FastAPI(
    title="Subscription Email Preview", version="0.1.0", lifespan=lifespan
)
app.middleware("http")(request_id_middleware)
app.include_router(preview_router)


@app.get("/")
def health_check():
    logger.debug("Health check endpoint called")
    return {"status": "ok"}


@app.get("/healthz")
def healthz():
    logger.debug(f"Healthz endpoint called (env: {settings.ENV})")
    return {"status": "healthy", "env": settings.ENV}
