"""
Diagnostics for image URL handling. Only mounted in debug mode.
"""
from fastapi import APIRouter, Request

from ..services.og_service import parse_render_request
from ..utils.images import is_supported_format, is_valid_url

router = APIRouter(prefix="/api", tags=["debug"])


@router.get("/debug")
async def debug_image_params(request: Request):
    """
    Show how the image parameter is reconstructed and validated.
    """
    items = request.query_params.multi_items()
    image = parse_render_request(items).image
    return {
        "rawImage": next((value for key, value in items if key == "image"), None),
        "reconstructedImage": image,
        "isValidUrl": is_valid_url(image),
        "isSupportedFormat": is_supported_format(image),
        "allParams": dict(items),
    }
