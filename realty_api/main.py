"""FastAPI application entry point.

This module initializes the FastAPI application with CORS,
middleware, static uploads and route registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from realty_api.api.endpoints import (
    accounts,
    agents,
    articles,
    catalog,
    favorites,
    health,
    installments,
    listings,
    messages,
    units,
)
from realty_api.core.config import settings
from realty_api.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from realty_api.services.database import create_all

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

RESOURCE_ROUTERS = (
    agents.router,
    catalog.router,
    listings.router,
    units.router,
    installments.router,
    articles.router,
    accounts.router,
    favorites.router,
    messages.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Creates missing tables when ``DB_CREATE_ALL`` is set.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    logger.info("Starting Realty Listings API...")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"Uploads directory: {settings.uploads_path}")

    if settings.DB_CREATE_ALL:
        await create_all()
        logger.info("Database tables created")

    yield

    logger.info("Shutting down Realty Listings API...")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Realty Listings API",
        description=(
            "REST API for a real-estate listings platform: properties, "
            "projects, sale and rent units, agents, articles, users and "
            "their favorites."
        ),
        version=health.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    setup_exception_handlers(app)

    app.include_router(health.router)
    for router in RESOURCE_ROUTERS:
        app.include_router(router, prefix=settings.API_PREFIX)

    settings.uploads_path.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.uploads_path), name="uploads")

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    uvicorn.run("realty_api.main:app", host="0.0.0.0", port=settings.PORT)
