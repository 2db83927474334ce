"""
OG Image Service FastAPI application entry point.
This service renders social preview cards using Playwright for pixel-perfect rasterization.
"""
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .routes import debug_routes
from .routes.og_routes import create_og_router
from .utils.debug import print_step


def create_app(
    settings: Optional[Settings] = None,
    *,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application for the OG image service.

    Args:
        settings: Configuration; loaded from the environment when omitted
        http_transport: Optional httpx transport used for image and font fetches

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="OG Image Service",
        version="1.0.0",
        description="Social preview image generation rendered with Playwright",
        debug=settings.DEBUG,
    )
    app.state.settings = settings

    print_step("CORS Configuration", {"origins": settings.ALL_CORS_ORIGINS}, "input")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALL_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.get("/")
    def read_root():
        return {"status": "OG Image Service is online", "service": "og"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "og"}

    app.include_router(create_og_router(settings, transport=http_transport))
    if settings.DEBUG:
        app.include_router(debug_routes.router)

    print_step("FastAPI App Initialization", {
        "primary_route": settings.PRIMARY_ROUTE,
        "legacy_route": settings.SERVES_LEGACY_ROUTE,
        "signature_protection": settings.SIGNATURE_PROTECTION,
    }, "output")
    return app


# Create the app instance
app = create_app()
