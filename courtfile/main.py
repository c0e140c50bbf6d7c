"""
Courtfile - FastAPI Application
E-filing preparation API: validation, document type finder, filing guidance.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courtfile.core.config import get_settings
from courtfile.core.logging_config import setup_logging as configure_logging
from courtfile.routers import efiling


# =============================================================================
# Logging Setup
# =============================================================================

def setup_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    configure_logging(
        level=settings.log_level.upper(),
        json_format=settings.log_json_format,
    )


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """
    Application factory.
    Creates and configures the FastAPI application.
    """
    settings = get_settings()
    setup_logging()

    tags_metadata = [
        {
            "name": "E-Filing",
            "description": "State e-filing portals, document type finder, validation and filing guidance.",
        },
    ]

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url="/api/docs" if settings.enable_docs else None,
        redoc_url="/api/redoc" if settings.enable_docs else None,
        openapi_url="/api/openapi.json" if settings.enable_docs else None,
        openapi_tags=tags_metadata,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(efiling.router)

    logging.getLogger(__name__).info("%s %s ready", settings.app_name, settings.app_version)
    return app


# Create the app instance
app = create_app()


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "courtfile.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
