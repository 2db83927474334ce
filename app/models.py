"""
Per-request data passed between the route, the service and the themes.
"""
from dataclasses import dataclass
from typing import Mapping

DEFAULT_TITLE = "Untitled"
DEFAULT_SITE = "Blog"


@dataclass(frozen=True)
class RenderRequest:
    """Recognized query parameters of an image request, as received."""

    title: str = DEFAULT_TITLE
    site: str = DEFAULT_SITE
    excerpt: str = ""
    author: str = ""
    date: str = ""
    reading: str = ""
    tag: str = ""
    image: str = ""
    icon: str = ""
    avatar: str = ""
    theme: str = ""
    sig: str = ""

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "RenderRequest":
        def get(key: str, default: str = "") -> str:
            return params.get(key) or default

        return cls(
            title=get("title", DEFAULT_TITLE),
            site=get("site", DEFAULT_SITE),
            excerpt=get("excerpt"),
            author=get("author"),
            date=get("date"),
            reading=get("reading"),
            tag=get("tag"),
            image=get("image"),
            icon=get("icon"),
            avatar=get("avatar"),
            theme=get("theme"),
            sig=get("sig"),
        )


@dataclass(frozen=True)
class ImageSlots:
    """Fetched images as data URIs; an empty string means no image."""

    background: str = ""
    icon: str = ""
    avatar: str = ""


@dataclass(frozen=True)
class ThemeFont:
    name: str
    data: bytes
    weight: int = 400
    style: str = "normal"
    mime_type: str = "font/woff2"


@dataclass(frozen=True)
class RenderProps:
    """Everything a theme is allowed to see. Never raw query parameters."""

    title: str
    site: str
    theme: str
    excerpt: str = ""
    author: str = ""
    date: str = ""
    reading: str = ""
    tag: str = ""
    background_src: str = ""
    icon_src: str = ""
    avatar_src: str = ""
