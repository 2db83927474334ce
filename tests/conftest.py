"""
Pytest configuration and fixtures for OG Image Service tests.
Follows Single Responsibility Principle - handles only test configuration.
"""
import pytest
import httpx
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake png content"
IMAGE_BYTES = b"\xff\xd8\xff fake jpeg content"
FONT_BYTES = b"wOF2 fake font content"
SECRET = "test-signing-secret"


def _settings(**overrides) -> Settings:
    values = {
        "DEBUG": False,
        "OG_SIGNATURE_SECRET": "",
        "OG_SIGNATURE_PROTECTION": False,
        "OG_PRIMARY_ROUTE_KEY": "og",
        "OG_ALLOW_LEGACY_PATH": False,
        "OG_DEFAULT_THEME": "dark",
        "OG_BLOCK_PRIVATE_HOSTS": True,
        "OG_FONT_REGULAR_URL": "https://fonts.gstatic.com/s/test/regular.woff2",
        "OG_FONT_BOLD_URL": "https://fonts.gstatic.com/s/test/bold.woff2",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings():
    """Factory for isolated Settings instances that ignore any local .env file."""
    return _settings


@pytest.fixture
def settings():
    """Settings with signature protection disabled."""
    return _settings()


@pytest.fixture
def protected_settings():
    """Settings with signature protection enabled."""
    return _settings(OG_SIGNATURE_PROTECTION=True, OG_SIGNATURE_SECRET=SECRET)


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def asset_requests():
    """URLs requested through the mock asset transport, in order."""
    return []


@pytest.fixture
def asset_transport(asset_requests):
    """
    Mock transport serving images and fonts.

    URLs containing "missing" answer 404, URLs containing "broken" fail at
    the transport level, URLs containing "nocontenttype" omit the header.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        asset_requests.append(url)
        if "broken" in url:
            raise httpx.ConnectError("connection refused", request=request)
        if "missing" in url:
            return httpx.Response(404, content=b"not found")
        if "fonts.gstatic.com" in url:
            return httpx.Response(200, content=FONT_BYTES, headers={"content-type": "font/woff2"})
        if "nocontenttype" in url:
            return httpx.Response(200, content=IMAGE_BYTES)
        return httpx.Response(200, content=IMAGE_BYTES, headers={"content-type": "image/png"})

    return httpx.MockTransport(handler)


@pytest.fixture
def mock_playwright():
    """Mock Playwright for testing."""
    with patch('app.services.compositor.async_playwright') as mock_playwright:
        mock_browser = AsyncMock()
        mock_page = AsyncMock()

        mock_page.screenshot = AsyncMock(return_value=PNG_BYTES)
        mock_browser.new_page = AsyncMock(return_value=mock_page)
        mock_browser.close = AsyncMock()

        mock_playwright.return_value.__aenter__.return_value.chromium.launch = AsyncMock(return_value=mock_browser)

        yield {
            'playwright': mock_playwright,
            'browser': mock_browser,
            'page': mock_page,
            'png': PNG_BYTES
        }


@pytest.fixture
def client(settings, asset_transport, mock_playwright):
    """Test client for an unprotected application."""
    return TestClient(create_app(settings, http_transport=asset_transport))


@pytest.fixture
def protected_client(protected_settings, asset_transport, mock_playwright):
    """Test client for an application that enforces request signatures."""
    return TestClient(create_app(protected_settings, http_transport=asset_transport))


@pytest.fixture
def sample_params():
    """Typical query parameters for a blog post card."""
    return {
        "title": "Interstellar",
        "site": "buxx.me",
        "excerpt": "Do not go gentle into that good night.",
        "author": "bunizao",
        "date": "2026-01-05",
        "tag": "Film",
        "theme": "dark",
    }
