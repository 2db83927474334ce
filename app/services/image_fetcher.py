"""
Remote asset fetching for OG cards.

Images are inlined as data URIs so the rasterizer never makes a second
network hop. Every fetch is a single attempt; failures degrade to "absent".
"""
import asyncio
import base64
from typing import List, Optional, Tuple

import httpx

from ..core.config import DEFAULT_MAX_ASSET_BYTES, Settings
from ..core.logger import get_logger
from ..models import ImageSlots, ThemeFont
from ..utils.security import is_blocked_host

logger = get_logger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; OGImageBot/1.0)"
DEFAULT_IMAGE_MIME = "image/jpeg"
FONT_FAMILY = "Noto Sans SC"

_FONT_MIME_TYPES = {
    ".woff2": "font/woff2",
    ".woff": "font/woff",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
}


class BlockedHostError(httpx.RequestError):
    """Raised before an asset request to a private or local host is sent."""


async def reject_blocked_hosts(request: httpx.Request) -> None:
    # Runs for the first request and again for every redirect hop
    if is_blocked_host(request.url.host):
        raise BlockedHostError(f"Refusing to fetch from blocked host {request.url.host!r}", request=request)


def asset_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    event_hooks = {"request": [reject_blocked_hosts]} if settings.BLOCK_PRIVATE_HOSTS else {}
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.FETCH_TIMEOUT_SECONDS),
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
        follow_redirects=True,
        event_hooks=event_hooks,
        transport=transport,
    )


async def _download(client: httpx.AsyncClient, url: str, max_bytes: int) -> Optional[Tuple[bytes, Optional[str]]]:
    """
    Stream a single GET into memory, giving up once the body passes ``max_bytes``.

    Returns:
        ``(body, content_type)`` or None on any failure
    """
    try:
        async with client.stream("GET", url, headers={"User-Agent": USER_AGENT}) as response:
            if not response.is_success:
                logger.warning("Failed to fetch %s: HTTP %s", url, response.status_code)
                return None

            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > max_bytes:
                logger.warning("Skipping %s: declared size %s exceeds %s bytes", url, declared, max_bytes)
                return None

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if len(body) > max_bytes:
                    logger.warning("Skipping %s: body exceeds %s bytes", url, max_bytes)
                    return None
            return bytes(body), response.headers.get("content-type")
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        return None


async def fetch_as_data_uri(client: httpx.AsyncClient, url: str, max_bytes: int = DEFAULT_MAX_ASSET_BYTES) -> str:
    """
    Download an image and encode it as a data URI.

    Args:
        client: Shared client for the current request
        url: Validated image URL, or "" for no image
        max_bytes: Largest body accepted; bigger images count as absent

    Returns:
        ``data:<mime>;base64,<payload>`` or "" on any failure
    """
    if not url:
        return ""
    downloaded = await _download(client, url, max_bytes)
    if downloaded is None:
        return ""
    body, content_type = downloaded
    encoded = base64.b64encode(body).decode("ascii")
    return f"data:{content_type or DEFAULT_IMAGE_MIME};base64,{encoded}"


async def fetch_image_slots(
    client: httpx.AsyncClient,
    image: str,
    icon: str,
    avatar: str,
    max_bytes: int = DEFAULT_MAX_ASSET_BYTES,
) -> ImageSlots:
    background, icon_src, avatar_src = await asyncio.gather(
        fetch_as_data_uri(client, image, max_bytes),
        fetch_as_data_uri(client, icon, max_bytes),
        fetch_as_data_uri(client, avatar, max_bytes),
    )
    return ImageSlots(background=background, icon=icon_src, avatar=avatar_src)


async def fetch_font(client: httpx.AsyncClient, url: str, max_bytes: int = DEFAULT_MAX_ASSET_BYTES) -> Optional[bytes]:
    if not url:
        return None
    downloaded = await _download(client, url, max_bytes)
    if downloaded is None or not downloaded[0]:
        return None
    return downloaded[0]


def font_mime_type(url: str) -> str:
    path = url.lower().split("?", 1)[0]
    for extension, mime in _FONT_MIME_TYPES.items():
        if path.endswith(extension):
            return mime
    return "font/woff2"


async def load_fonts(client: httpx.AsyncClient, settings: Settings) -> List[ThemeFont]:
    """Fetch the regular and bold card fonts; missing weights are skipped."""
    regular, bold = await asyncio.gather(
        fetch_font(client, settings.FONT_REGULAR_URL, settings.MAX_ASSET_BYTES),
        fetch_font(client, settings.FONT_BOLD_URL, settings.MAX_ASSET_BYTES),
    )
    fonts: List[ThemeFont] = []
    if regular:
        fonts.append(
            ThemeFont(name=FONT_FAMILY, data=regular, weight=400, mime_type=font_mime_type(settings.FONT_REGULAR_URL))
        )
    if bold:
        fonts.append(
            ThemeFont(name=FONT_FAMILY, data=bold, weight=700, mime_type=font_mime_type(settings.FONT_BOLD_URL))
        )
    return fonts
