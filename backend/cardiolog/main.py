"""
CardioLog - Main FastAPI Application
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import Settings, settings
from .api import heart_rate_router, debug_router
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .storage import LocalStorage, init_record_store

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


def create_app(config: Settings) -> FastAPI:
    """
    Build the application for the given settings.

    The debug flag is read here once and handed to the collaborators that
    need it; nothing downstream consults process state for it.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging(config)

        storage = LocalStorage(config.local_storage_path)
        init_record_store(storage, debug=config.debug)
        logger.info("Record store initialized")

        logger.info(f"Starting {config.app_name} v{config.app_version}")
        logger.info(f"Storage path: {config.local_storage_path}")
        logger.info(f"Merge policy: {config.merge_policy}")
        logger.info(f"Debug mode: {config.debug}")
        yield
        # Shutdown
        logger.info(f"Shutting down {config.app_name}")

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Personal heart-rate tracking: imports, statistics and chart aggregates",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.log_api_requests:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(heart_rate_router)
    if config.debug:
        app.include_router(debug_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "app": config.app_name,
            "version": config.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "debug": config.debug,
            "version": config.app_version
        }

    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cardiolog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
