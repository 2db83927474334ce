from dataclasses import dataclass
from typing import Dict, Tuple

FONT_STACK = '"Noto Sans SC", -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif'


@dataclass(frozen=True)
class Palette:
    bg_main: str
    bg_secondary: str
    bg_contrast: str
    text_lead: str
    text_main: str
    text_secondary: str
    card_bg: str
    card_border: str
    tag_bg: str
    tag_text: str
    accent: str
    # Solid card color the feature image fades into.
    image_fade: str


DARK = Palette(
    bg_main="#1D1F21",
    bg_secondary="#25282D",
    bg_contrast="#353A40",
    text_lead="#F6F7FA",
    text_main="#E2E6EB",
    text_secondary="#B6BBC4",
    card_bg="rgba(37, 40, 45, 0.95)",
    card_border="rgba(53, 58, 64, 0.8)",
    tag_bg="rgba(255, 255, 255, 0.08)",
    tag_text="#B6BBC4",
    accent="#6366f1",
    image_fade="rgba(37, 40, 45, 1)",
)

LIGHT = Palette(
    bg_main="#FFFFFF",
    bg_secondary="#F7F8FA",
    bg_contrast="#E1E3E6",
    text_lead="#000000",
    text_main="#374151",
    text_secondary="#73777D",
    card_bg="rgba(255, 255, 255, 0.95)",
    card_border="rgba(225, 227, 230, 0.8)",
    tag_bg="rgba(0, 0, 0, 0.05)",
    tag_text="#73777D",
    accent="#6366f1",
    image_fade="rgba(255, 255, 255, 1)",
)

THEMES: Dict[str, Palette] = {
    "dark": DARK,
    "light": LIGHT,
}


def resolve_theme(name: str, default: str = "dark") -> Tuple[str, Palette]:
    """Map a requested theme name to a palette, falling back to ``default``."""
    key = (name or "").strip().lower()
    if key in THEMES:
        return key, THEMES[key]
    if default in THEMES:
        return default, THEMES[default]
    return "dark", DARK
