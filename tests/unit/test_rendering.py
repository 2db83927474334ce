"""
Unit tests for the card layout, palettes and HTML serialization.
"""
import pytest

from app.models import RenderProps, ThemeFont
from app.rendering.card import CANVAS_HEIGHT, CANVAS_WIDTH, render_card, title_font_size
from app.rendering.layout import box, el, font_face_css, label, render_document, to_html
from app.rendering.themes import DARK, LIGHT, resolve_theme


def _props(**overrides) -> RenderProps:
    values = {"title": "Hello", "site": "World", "theme": "dark"}
    values.update(overrides)
    return RenderProps(**values)


def _texts(tree):
    return [node.text for node in tree.iter() if node.text]


def _images(tree):
    return [node.attrs["src"] for node in tree.iter() if node.tag == "img"]


class TestTitleFontSize:
    """Three-way font size step function."""

    @pytest.mark.parametrize("length,expected", [(1, 72), (25, 72), (26, 60), (40, 60), (41, 52), (60, 52)])
    def test_tiers(self, length, expected):
        assert title_font_size("x" * length) == expected


class TestRenderCard:
    """Pure layout of a card."""

    def test_contains_text_fields(self):
        # Arrange
        props = _props(excerpt="An excerpt", author="Ada", date="2026-01-05", reading="5 min", tag="News")

        # Act
        tree = render_card(props, DARK)

        # Assert
        texts = _texts(tree)
        for expected in ("Hello", "World", "An excerpt", "Ada", "2026-01-05", "5 min", "News"):
            assert expected in texts

    def test_long_title_truncated_to_sixty(self):
        tree = render_card(_props(title="t" * 80), DARK)
        title = next(node for node in tree.iter() if node.tag == "h1")

        assert title.text == "t" * 57 + "..."
        assert title.style["font-size"] == "52px"

    def test_long_excerpt_truncated_to_hundred(self):
        tree = render_card(_props(excerpt="e" * 150), DARK)
        excerpt = next(node for node in tree.iter() if node.tag == "p")

        assert excerpt.text == "e" * 97 + "..."

    def test_no_excerpt_paragraph_when_empty(self):
        tree = render_card(_props(), DARK)

        assert not any(node.tag == "p" for node in tree.iter())

    def test_initial_tiles_without_images(self):
        tree = render_card(_props(site="buxx.me", author="bunizao"), DARK)

        texts = _texts(tree)
        assert "B" in texts
        assert _images(tree) == []

    def test_images_are_embedded_when_present(self):
        props = _props(
            author="Ada",
            background_src="data:image/png;base64,AAA",
            icon_src="data:image/png;base64,BBB",
            avatar_src="data:image/png;base64,CCC",
        )

        images = _images(render_card(props, DARK))

        # backdrop and feature image both use the background
        assert images.count("data:image/png;base64,AAA") == 2
        assert "data:image/png;base64,BBB" in images
        assert "data:image/png;base64,CCC" in images

    def test_avatar_hidden_without_author(self):
        props = _props(avatar_src="data:image/png;base64,CCC")

        assert "data:image/png;base64,CCC" not in _images(render_card(props, DARK))

    def test_palette_drives_colors(self):
        dark_root = render_card(_props(), DARK)
        light_root = render_card(_props(), LIGHT)

        assert dark_root.style["background"] == DARK.bg_main
        assert light_root.style["background"] == LIGHT.bg_main

    def test_canvas_size(self):
        root = render_card(_props(), DARK)

        assert root.style["width"] == f"{CANVAS_WIDTH}px"
        assert root.style["height"] == f"{CANVAS_HEIGHT}px"

    def test_is_deterministic(self):
        props = _props(excerpt="Same", tag="x")

        assert to_html(render_card(props, LIGHT)) == to_html(render_card(props, LIGHT))


class TestResolveTheme:
    """Palette selection."""

    def test_known_themes(self):
        assert resolve_theme("dark") == ("dark", DARK)
        assert resolve_theme("LIGHT") == ("light", LIGHT)

    def test_unknown_falls_back_to_default(self):
        assert resolve_theme("neon") == ("dark", DARK)
        assert resolve_theme("neon", default="light") == ("light", LIGHT)

    def test_unknown_default_falls_back_to_dark(self):
        assert resolve_theme("", default="neon") == ("dark", DARK)


class TestHtmlSerialization:
    """Layout tree to HTML."""

    def test_escapes_text(self):
        node = label("<script>alert('x')</script> & more")

        html = to_html(node)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&amp; more" in html

    def test_escapes_attributes(self):
        node = el("img", attrs={"src": 'x" onerror="alert(1)'})

        html = to_html(node)

        assert 'onerror="alert(1)"' not in html
        assert "&quot;" in html

    def test_styles_are_inlined(self):
        node = box(style={"display": "flex", "gap": "12px"})

        assert to_html(node) == '<div style="display: flex; gap: 12px"></div>'

    def test_void_elements_self_close(self):
        assert to_html(el("img", attrs={"src": "a"})) == '<img src="a" />'

    def test_none_children_are_dropped(self):
        node = box(label("a"), None, label("b"))

        assert len(node.children) == 2

    def test_font_face_css_embeds_fonts(self):
        fonts = [ThemeFont(name="Noto Sans SC", data=b"abc", weight=700)]

        css = font_face_css(fonts)

        assert "font-family:'Noto Sans SC'" in css
        assert "font-weight:700" in css
        assert "data:font/woff2;base64,YWJj" in css
        assert "format('woff2')" in css

    def test_document_has_canvas_size(self):
        html = render_document(box(), [], 1200, 630)

        assert html.startswith("<!DOCTYPE html>")
        assert "width:1200px;height:630px" in html
        assert "<body><div></div></body>" in html
