# backend/studiobook/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI

from .core.config import settings
from .core.constants import API_VERSION, BRAND_NAME
from .database import Base, engine
from .routes import availability_calendar, health

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if settings.uses_profile_api:
        logger.info("Availability writes go through the profile API")

    # Import models so Base.metadata knows every table.
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    logger.info(f"{BRAND_NAME} API shutting down...")
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{BRAND_NAME} API",
        description="Photographer availability calendar",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    app.include_router(health.router)
    app.include_router(availability_calendar.router)
    return app


app = create_app()
