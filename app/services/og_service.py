"""
Open Graph (OG) Image Generation Service.
Turns request parameters into a PNG preview card for social sharing.
"""
import asyncio
from dataclasses import replace
from typing import Iterable, Optional, Tuple

import httpx

from ..core.config import Settings
from ..models import DEFAULT_SITE, DEFAULT_TITLE, ImageSlots, RenderProps, RenderRequest
from ..rendering.card import CANVAS_HEIGHT, CANVAS_WIDTH, render_card
from ..rendering.layout import render_document
from ..rendering.themes import resolve_theme
from ..utils.debug import print_step
from ..utils.images import reconstruct_image_url, resolve_image_ref
from ..utils.text import sanitize_text
from .compositor import PlaywrightCompositor
from .image_fetcher import asset_client, fetch_image_slots, load_fonts


def parse_render_request(params: Iterable[Tuple[str, str]]) -> RenderRequest:
    """
    Build a RenderRequest from raw query pairs.

    The first value of a repeated key wins. Unsplash URLs whose own query
    string was split into separate parameters are stitched back together.
    """
    items = list(params)
    first = {}
    for key, value in items:
        first.setdefault(key, value)
    request = RenderRequest.from_query(first)
    image = reconstruct_image_url(request.image, items)
    if image == request.image:
        return request
    return replace(request, image=image)


def build_props(request: RenderRequest, slots: ImageSlots, theme: str) -> RenderProps:
    """Sanitize display text and attach fetched images."""
    return RenderProps(
        title=sanitize_text(request.title) or DEFAULT_TITLE,
        site=sanitize_text(request.site) or DEFAULT_SITE,
        excerpt=sanitize_text(request.excerpt),
        author=request.author,
        date=request.date,
        reading=request.reading,
        tag=request.tag,
        theme=theme,
        background_src=slots.background,
        icon_src=slots.icon,
        avatar_src=slots.avatar,
    )


class OGService:
    """Service for generating Open Graph images for social media sharing."""

    def __init__(
        self,
        settings: Settings,
        compositor: Optional[PlaywrightCompositor] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Read-only process configuration
            compositor: Rasterizer; headless Chromium by default
            transport: Optional httpx transport for outbound fetches
        """
        self.settings = settings
        self.compositor = compositor or PlaywrightCompositor()
        self.transport = transport

    async def render_html(self, request: RenderRequest) -> str:
        """
        Fetch remote assets and lay out the card as an HTML document.

        Image and font failures never raise; the affected slot is left empty.
        """
        block_private = self.settings.BLOCK_PRIVATE_HOSTS
        image = resolve_image_ref(request.image, block_private)
        icon = resolve_image_ref(request.icon, block_private)
        avatar = resolve_image_ref(request.avatar, block_private)

        async with asset_client(self.settings, self.transport) as client:
            slots, fonts = await asyncio.gather(
                fetch_image_slots(client, image, icon, avatar, self.settings.MAX_ASSET_BYTES),
                load_fonts(client, self.settings),
            )

        print_step("OG Assets Fetched", {
            "background": bool(slots.background),
            "icon": bool(slots.icon),
            "avatar": bool(slots.avatar),
            "fonts": len(fonts),
        }, "output")

        theme_name, palette = resolve_theme(request.theme, self.settings.DEFAULT_THEME)
        props = build_props(request, slots, theme_name)
        return render_document(render_card(props, palette), fonts, CANVAS_WIDTH, CANVAS_HEIGHT)

    async def generate_image(self, request: RenderRequest) -> bytes:
        """
        Generate an Open Graph image for a render request.

        Returns:
            PNG image bytes (1200x630)
        """
        print_step("OG Image Generation", {
            "title_length": len(request.title),
            "theme": request.theme or self.settings.DEFAULT_THEME,
            "has_image": bool(request.image),
        }, "input")

        html = await self.render_html(request)
        image_bytes = await self.compositor.compose(html, CANVAS_WIDTH, CANVAS_HEIGHT)

        print_step("OG Image Generated", {"image_size_bytes": len(image_bytes)}, "output")
        return image_bytes
