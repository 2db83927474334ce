"""
Text normalization for user-supplied card text.
"""
import re
from typing import Optional

# General punctuation spaces, zero-width and direction marks, line/paragraph separators.
_SEPARATORS_RE = re.compile("[\u2000-\u200F\u2028-\u202F]")
# Hyphen-minus, hyphen, figure/en/em dash, horizontal bar, two/three-em dash.
_DASH_RUN_RE = re.compile("\\s*[\\-\u2010\u2012-\u2015\u2E3A\u2E3B]+\\s*")
_DOUBLE_QUOTES_RE = re.compile("[\u201C-\u201F]")
_SINGLE_QUOTES_RE = re.compile("[\u2018-\u201B]")

EM_DASH = " \u2014 "
ELLIPSIS = "..."


def sanitize_text(raw: Optional[str]) -> str:
    """
    Collapse punctuation variants the card fonts render poorly.

    Dash runs become a spaced em dash, curly quotes become straight ones, the ellipsis
    glyph becomes three periods and exotic spaces become plain spaces.
    Applying it twice gives the same result as applying it once.
    """
    if not raw:
        return ""
    text = _SEPARATORS_RE.sub(" ", raw)
    text = _DASH_RUN_RE.sub(EM_DASH, text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = text.replace("\u2026", ELLIPSIS)
    return text.strip()


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS
