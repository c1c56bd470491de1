"""Main FastAPI application for the libraryd daemon.

This module creates and configures the FastAPI application that exposes the
library folder via a small REST API plus static file serving.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from library_core.config.loader import load_config
from library_core.config.settings import LibrarySettings

from . import __version__
from .routers import admin_router
from .routers import files_router
from .routers import status_router
from .services.admin_tokens import AdminTokenStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Args:
        app: FastAPI application instance
    """
    settings: LibrarySettings = app.state.settings
    logger.info(f"Starting libraryd on {settings.host}:{settings.port}")
    logger.info(f"Library root: {settings.root_path}")
    if settings.require_admin and settings.admin_password is None:
        logger.warning("No admin password configured; edit, delete and upload are disabled")

    yield

    logger.info("Shutting down libraryd")


def create_app(settings: LibrarySettings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from config file and environment if None

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = load_config()

    # Static mount needs the directory to exist
    settings.root_path.mkdir(parents=True, exist_ok=True)

    app = FastAPI(
        title="libraryd",
        description="File manager daemon for the VIM Library",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    password = settings.admin_password.get_secret_value() if settings.admin_password else None
    app.state.token_store = AdminTokenStore(password, ttl_seconds=settings.admin_token_ttl_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    logger.info(f"CORS enabled for origins: {settings.cors_origins}")

    app.include_router(files_router)
    app.include_router(admin_router)
    app.include_router(status_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            Welcome message with API information
        """
        return {
            "name": "libraryd",
            "version": __version__,
            "library": f"/{settings.library_folder}",
            "docs": "/docs",
        }

    # Binary assets (pdf, images, media) are fetched directly from here
    app.mount(
        f"/{settings.library_folder}",
        StaticFiles(directory=settings.root_path),
        name="library",
    )

    return app
