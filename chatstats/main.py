"""
FastAPI application factory.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatstats.core.config import get_settings
from chatstats.core.database import init_db
from chatstats.core.logging import setup_logging, get_logger
from chatstats.api import health, reports


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = get_logger(__name__)
    logger.info("Starting report service...")

    init_db()

    yield

    logger.info("Shutting down report service...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    setup_logging()
    logger = get_logger(__name__)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Message-count statistics per chat group and per day",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(reports.router)
    app.include_router(health.router)

    logger.info(
        "Application created",
        extra={
            "extra_data": {
                "app_name": settings.app_name,
                "version": settings.app_version,
                "timezone": settings.timezone or "local",
            }
        }
    )

    return app


app = create_app()
