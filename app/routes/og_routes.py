"""
Open Graph (OG) Image Generation Routes.
Generates dynamic social media preview images.
"""
from typing import Optional

import httpx
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from ..core.config import Settings
from ..core.logger import get_logger
from ..services.og_service import OGService, parse_render_request
from ..utils.debug import print_step
from ..utils.security import verify_request_signature

logger = get_logger(__name__)

FORBIDDEN_DETAIL = "Forbidden"
RENDER_FAILED_DETAIL = "Internal Server Error"
LEGACY_ROUTE_KEY = "og"


def create_og_router(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> APIRouter:
    """
    Build the image router for a fixed configuration.

    The primary route is ``/api/{PRIMARY_ROUTE_KEY}``; ``/api/og`` is added
    as a legacy alias when enabled and different from the primary route.
    """
    router = APIRouter(prefix="/api", tags=["og"])

    async def generate_og_image(request: Request):
        """
        Generate a dynamic Open Graph preview card.

        Returns a PNG image (1200x630) optimized for social media platforms.

        Query parameters: title, site, excerpt, author, date, reading, tag,
        theme (dark|light), image, icon, avatar and, when signature
        protection is enabled, sig.

        Returns:
            PNG image with Cache-Control headers for shared caching
        """
        if not verify_request_signature(str(request.url), settings):
            logger.warning("Rejected unsigned or mis-signed OG request for %s", request.url.path)
            raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL)

        render_request = parse_render_request(request.query_params.multi_items())
        print_step("OG Image Request", {
            "path": request.url.path,
            "theme": render_request.theme,
            "title_length": len(render_request.title),
        }, "input")

        try:
            og_service = OGService(settings, transport=transport)
            image_bytes = await og_service.generate_image(render_request)
        except Exception:
            logger.exception("OG image generation failed")
            raise HTTPException(status_code=500, detail=RENDER_FAILED_DETAIL)

        return Response(
            content=image_bytes,
            media_type="image/png",
            headers={
                "Cache-Control": settings.CACHE_CONTROL,
                "Content-Disposition": "inline; filename=og.png",
            },
        )

    router.add_api_route(
        f"/{settings.PRIMARY_ROUTE_KEY}",
        generate_og_image,
        methods=["GET"],
        name="og_image",
        response_class=Response,
    )
    if settings.SERVES_LEGACY_ROUTE:
        router.add_api_route(
            f"/{LEGACY_ROUTE_KEY}",
            generate_og_image,
            methods=["GET"],
            name="og_image_legacy",
            response_class=Response,
            include_in_schema=False,
        )
    return router
