"""
Rasterizes card HTML to PNG with headless Chromium.
"""
from playwright.async_api import async_playwright

from ..utils.debug import print_step

_CHROMIUM_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--no-first-run',
    '--no-zygote',
    '--disable-gpu',
    '--font-render-hinting=none',
]


class PlaywrightCompositor:
    """Turns a standalone HTML document into PNG bytes."""

    async def compose(self, html: str, width: int, height: int) -> bytes:
        """
        Render HTML at an exact viewport size.

        Args:
            html: Complete HTML document with fonts and images inlined
            width: Viewport width in pixels
            height: Viewport height in pixels

        Returns:
            PNG image bytes
        """
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=_CHROMIUM_ARGS)
            try:
                page = await browser.new_page()

                # Set viewport to exact OG image dimensions
                await page.set_viewport_size({"width": width, "height": height})

                await page.set_content(html, wait_until="load")

                # Embedded fonts decode asynchronously
                await page.evaluate("() => document.fonts.ready.then(() => true)")

                screenshot_bytes = await page.screenshot(type='png', full_page=False)
            finally:
                await browser.close()

        print_step("OG Image Rasterized", {"image_size_bytes": len(screenshot_bytes)}, "output")
        return screenshot_bytes
