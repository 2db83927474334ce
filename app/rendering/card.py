"""
Card theme: optional feature image on the left, text column on the right.
"""
from typing import Optional

from ..models import RenderProps
from ..utils.text import truncate
from .layout import Node, box, el, label, picture
from .themes import FONT_STACK, Palette

CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 630

TITLE_LIMIT = 60
EXCERPT_LIMIT = 100


def title_font_size(title: str) -> int:
    """Three size tiers; longer titles get smaller type."""
    if len(title) > 40:
        return 52
    if len(title) > 25:
        return 60
    return 72


def _initial(text: str) -> str:
    return text[:1].upper()


def _backdrop(src: str) -> Node:
    return box(
        picture(
            src,
            style={
                "width": "100%",
                "height": "100%",
                "object-fit": "cover",
                "object-position": "center",
                "opacity": "0.15",
                "filter": "blur(40px)",
            },
        ),
        style={"position": "absolute", "top": "0", "left": "0", "right": "0", "bottom": "0", "display": "flex", "overflow": "hidden"},
    )


def _feature_image(src: str, palette: Palette) -> Node:
    return box(
        picture(src, style={"width": "100%", "height": "100%", "object-fit": "cover", "object-position": "center"}),
        box(
            style={
                "position": "absolute",
                "top": "0",
                "left": "0",
                "right": "0",
                "bottom": "0",
                "background": f"linear-gradient(to right, rgba(0,0,0,0) 60%, {palette.image_fade} 100%)",
            }
        ),
        style={"display": "flex", "width": "45%", "height": "100%", "position": "relative", "overflow": "hidden", "flex-shrink": "0"},
    )


def _initial_tile(letter: str, size: int, radius: str, font_size: int, palette: Palette) -> Node:
    return label(
        letter,
        style={
            "width": f"{size}px",
            "height": f"{size}px",
            "border-radius": radius,
            "background": palette.tag_bg,
            "display": "flex",
            "align-items": "center",
            "justify-content": "center",
            "font-size": f"{font_size}px",
            "font-weight": "700",
            "color": palette.text_main,
            "flex-shrink": "0",
        },
        tag="div",
    )


def _header(props: RenderProps, palette: Palette) -> Node:
    if props.icon_src:
        icon = picture(props.icon_src, style={"border-radius": "8px", "object-fit": "cover"}, size=32)
    else:
        icon = _initial_tile(_initial(props.site), 32, "8px", 15, palette)

    tag_chip: Optional[Node] = None
    if props.tag:
        tag_chip = label(
            props.tag,
            style={
                "display": "flex",
                "padding": "6px 12px",
                "border-radius": "16px",
                "background": palette.tag_bg,
                "color": palette.tag_text,
                "font-size": "13px",
                "font-weight": "500",
                "white-space": "nowrap",
            },
            tag="div",
        )

    return box(
        box(
            icon,
            label(props.site, style={"font-size": "17px", "font-weight": "500", "color": palette.text_secondary}),
            style={"display": "flex", "align-items": "center", "gap": "10px", "min-width": "0"},
        ),
        tag_chip,
        style={"display": "flex", "justify-content": "space-between", "align-items": "center", "gap": "12px"},
    )


def _body(props: RenderProps, palette: Palette) -> Node:
    title = truncate(props.title, TITLE_LIMIT)
    excerpt = truncate(props.excerpt, EXCERPT_LIMIT)

    excerpt_node: Optional[Node] = None
    if excerpt:
        excerpt_node = label(
            excerpt,
            style={"font-size": "18px", "color": palette.text_secondary, "line-height": "1.6", "margin": "0", "font-weight": "400"},
            tag="p",
        )

    return box(
        label(
            title,
            style={
                "font-size": f"{title_font_size(title)}px",
                "font-weight": "700",
                "color": palette.text_lead,
                "line-height": "1.2",
                "margin": "0",
                "letter-spacing": "-0.02em",
            },
            tag="h1",
        ),
        excerpt_node,
        style={
            "display": "flex",
            "flex-direction": "column",
            "gap": "12px",
            "flex": "1",
            "justify-content": "center",
            "padding-top": "18px",
            "padding-bottom": "18px",
            "overflow": "hidden",
        },
    )


def _clock_icon(color: str) -> Node:
    return el(
        "svg",
        el("circle", attrs={"cx": "12", "cy": "12", "r": "10"}),
        el("polyline", attrs={"points": "12 6 12 12 16 14"}),
        attrs={
            "width": "14",
            "height": "14",
            "viewBox": "0 0 24 24",
            "fill": "none",
            "stroke": color,
            "stroke-width": "2",
            "stroke-linecap": "round",
            "stroke-linejoin": "round",
        },
    )


def _footer(props: RenderProps, palette: Palette) -> Node:
    meta_text = {"font-size": "13px", "color": palette.text_secondary, "font-weight": "400"}

    author: Node = box(style={"display": "flex"})
    if props.author:
        if props.avatar_src:
            avatar = picture(props.avatar_src, style={"border-radius": "50%", "object-fit": "cover"}, size=30)
        else:
            avatar = _initial_tile(_initial(props.author), 30, "50%", 13, palette)
        author = box(
            avatar,
            label(props.author, style={"font-size": "15px", "font-weight": "500", "color": palette.text_main}),
            style={"display": "flex", "align-items": "center", "gap": "10px"},
        )

    date = label(props.date, style=meta_text) if props.date else None
    reading = None
    if props.reading:
        reading = box(
            _clock_icon(palette.text_secondary),
            label(props.reading),
            style={**meta_text, "display": "flex", "align-items": "center", "gap": "6px"},
        )

    return box(
        author,
        box(date, reading, style={"display": "flex", "align-items": "center", "gap": "16px"}),
        style={
            "display": "flex",
            "align-items": "center",
            "justify-content": "space-between",
            "border-top": f"1px solid {palette.card_border}",
            "padding-top": "16px",
        },
    )


def render_card(props: RenderProps, palette: Palette) -> Node:
    """
    Lay out a preview card for the given props.

    Pure: the same props and palette always give the same tree.
    """
    has_image = bool(props.background_src)
    content = box(
        _header(props, palette),
        _body(props, palette),
        _footer(props, palette),
        style={
            "display": "flex",
            "flex-direction": "column",
            "justify-content": "space-between",
            "flex": "1",
            "padding": "36px 42px 36px 24px" if has_image else "36px 42px",
            "min-width": "0",
        },
    )

    card = box(
        _feature_image(props.background_src, palette) if has_image else None,
        content,
        style={
            "display": "flex",
            "flex-direction": "row",
            "width": "100%",
            "height": "100%",
            "background": palette.card_bg,
            "border-radius": "18px",
            "border": f"1px solid {palette.card_border}",
            "overflow": "hidden",
            "box-shadow": "0 25px 50px -12px rgba(0, 0, 0, 0.25)",
        },
    )

    return box(
        _backdrop(props.background_src) if has_image else None,
        box(card, style={"display": "flex", "position": "relative", "width": "100%", "height": "100%", "padding": "45px"}),
        style={
            "width": f"{CANVAS_WIDTH}px",
            "height": f"{CANVAS_HEIGHT}px",
            "display": "flex",
            "position": "relative",
            "font-family": FONT_STACK,
            "background": palette.bg_main,
        },
    )
