"""
Declarative layout tree for OG cards and its HTML serialization.

Themes build a tree of ``Node`` objects; the compositor only ever sees the
HTML document produced here.
"""
from __future__ import annotations

import base64
import html
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from ..models import ThemeFont

_VOID_TAGS = {"img", "circle", "polyline", "path", "line", "rect", "br"}

_FONT_FORMATS = {
    "font/woff2": "woff2",
    "font/woff": "woff",
    "font/ttf": "truetype",
    "font/otf": "opentype",
}


@dataclass(frozen=True)
class Node:
    tag: str
    style: Mapping[str, str] = field(default_factory=dict)
    attrs: Mapping[str, str] = field(default_factory=dict)
    text: str = ""
    children: Sequence["Node"] = ()

    def iter(self):
        """Depth-first walk over this node and all descendants."""
        yield self
        for child in self.children:
            yield from child.iter()


def el(
    tag: str,
    *children: Optional[Node],
    style: Optional[Mapping[str, str]] = None,
    attrs: Optional[Mapping[str, str]] = None,
    text: str = "",
) -> Node:
    """Build a node; ``None`` children are dropped so optional regions read inline."""
    return Node(
        tag=tag,
        style=dict(style or {}),
        attrs=dict(attrs or {}),
        text=text,
        children=tuple(child for child in children if child is not None),
    )


def box(*children: Optional[Node], style: Optional[Mapping[str, str]] = None) -> Node:
    return el("div", *children, style=style)


def label(content: str, style: Optional[Mapping[str, str]] = None, tag: str = "span") -> Node:
    return el(tag, style=style, text=content)


def picture(src: str, style: Optional[Mapping[str, str]] = None, size: Optional[int] = None) -> Node:
    attrs = {"src": src}
    if size is not None:
        attrs["width"] = str(size)
        attrs["height"] = str(size)
    return el("img", style=style, attrs=attrs)


def _style_attr(style: Mapping[str, str]) -> str:
    return "; ".join(f"{key}: {value}" for key, value in style.items())


def _attrs_html(node: Node) -> str:
    attrs = dict(node.attrs)
    if node.style:
        attrs["style"] = _style_attr(node.style)
    return "".join(f' {name}="{html.escape(str(value), quote=True)}"' for name, value in attrs.items())


def to_html(node: Node) -> str:
    """Serialize a node tree. All text and attribute values are escaped."""
    attrs = _attrs_html(node)
    if node.tag in _VOID_TAGS and not node.children and not node.text:
        return f"<{node.tag}{attrs} />"
    inner = html.escape(node.text, quote=False) + "".join(to_html(child) for child in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def font_face_css(fonts: Sequence[ThemeFont]) -> str:
    chunks = []
    for font in fonts:
        encoded = base64.b64encode(font.data).decode("ascii")
        fmt = _FONT_FORMATS.get(font.mime_type, "woff2")
        chunks.append(
            "@font-face{"
            f"font-family:'{font.name}';"
            f"font-style:{font.style};font-weight:{font.weight};font-display:block;"
            f"src:url(data:{font.mime_type};base64,{encoded}) format('{fmt}');"
            "}"
        )
    return "\n".join(chunks)


def render_document(tree: Node, fonts: Sequence[ThemeFont], width: int, height: int) -> str:
    """Wrap a layout tree in a standalone HTML page sized to the canvas."""
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8" />'
        "<style>"
        f"{font_face_css(fonts)}\n"
        "*{box-sizing:border-box;}"
        f"html,body{{margin:0;padding:0;width:{width}px;height:{height}px;overflow:hidden;}}"
        "</style></head>"
        f"<body>{to_html(tree)}</body></html>"
    )
