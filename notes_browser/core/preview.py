from __future__ import annotations

import re
from typing import Optional, Sequence

# character class, not a markdown parser
_MARKUP_CHARS_RE = re.compile(r"[#*`]")


def strip_preview(content: Optional[str], *, max_chars: int = 100) -> str:
    """
    Plain-text preview: remove every '#', '*' and '`', then keep the first
    max_chars UTF-16 code units. Newlines are preserved; a surrogate pair
    split by the cut is dropped.
    """
    if not content:
        return ""
    units = _MARKUP_CHARS_RE.sub("", content).encode("utf-16-le", "surrogatepass")[:2 * max_chars]
    return units.decode("utf-16-le", "ignore")


def preview_line(content: Optional[str], *, max_chars: int = 100, ellipsis: str = "...") -> Optional[str]:
    """
    Preview as shown under the title, or None when there is nothing to show.
    The ellipsis is appended whether or not the text was actually cut.
    """
    text = strip_preview(content, max_chars=max_chars)
    if not text:
        return None
    return text + ellipsis


def display_title(title: Optional[str], *, fallback: str = "Untitled") -> str:
    return title if title else fallback


def split_tags(tags: Optional[Sequence[str]], *, max_visible: int = 3) -> tuple[tuple[str, ...], int]:
    """Returns (visible tags in original order, overflow count)."""
    all_tags = tuple(tags or ())
    return all_tags[:max_visible], max(0, len(all_tags) - max_visible)


def overflow_badge(count: int) -> Optional[str]:
    return f"+{count}" if count > 0 else None
