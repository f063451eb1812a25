from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence

from notes_browser.core.models import Note
from notes_browser.core.timefmt import parse_timestamp

SORT_KEYS = ("updated", "created", "title")
SORT_ORDERS = ("asc", "desc")

_HASHTAG_RE = re.compile(r"#([A-Za-z0-9_]+)")


def search_notes(notes: Sequence[Note], query: str) -> list[Note]:
    """Case-insensitive substring match on title or content. Empty query -> all notes."""
    q = (query or "").lower()
    if not q:
        return list(notes)
    return [
        n for n in notes
        if q in (n.title or "").lower() or q in (n.content or "").lower()
    ]


def filter_notes(
    notes: Sequence[Note],
    *,
    query: str = "",
    selected_tags: Iterable[str] = (),
    favorite_ids: Iterable[str] = (),
    archived_ids: Iterable[str] = (),
    show_archived: bool = False,
    show_favorites: bool = False,
) -> list[Note]:
    """
    Visible slice of the collection:
      - matches the search query
      - has at least one selected tag (no tags selected -> any)
      - archived notes only in the archive, never outside it
      - favorites only, when show_favorites
    """
    wanted_tags = set(selected_tags)
    favorites = set(favorite_ids)
    archived = set(archived_ids)

    out: list[Note] = []
    for n in search_notes(notes, query):
        if wanted_tags and not wanted_tags.intersection(n.tags or ()):
            continue
        if (n.id in archived) != show_archived:
            continue
        if show_favorites and n.id not in favorites:
            continue
        out.append(n)
    return out


def _time_key(value) -> float:
    dt = parse_timestamp(value)
    return dt.timestamp() if dt is not None else float("-inf")


def sort_notes(notes: Sequence[Note], sort_by: str = "updated", order: str = "desc") -> list[Note]:
    if sort_by not in SORT_KEYS:
        raise ValueError(f"sort_by must be one of {SORT_KEYS} (got {sort_by!r})")
    if order not in SORT_ORDERS:
        raise ValueError(f"order must be one of {SORT_ORDERS} (got {order!r})")

    if sort_by == "title":
        key = lambda n: (n.title or "").casefold()
    elif sort_by == "created":
        key = lambda n: _time_key(n.created_at)
    else:
        key = lambda n: _time_key(n.updated_at)

    return sorted(notes, key=key, reverse=(order == "desc"))


def all_tags(notes: Iterable[Note]) -> list[str]:
    tags: set[str] = set()
    for n in notes:
        tags.update(n.tags or ())
    return sorted(tags)


def toggle_id(ids: Iterable[str], note_id: str) -> frozenset[str]:
    current = frozenset(ids)
    if note_id in current:
        return current - {note_id}
    return current | {note_id}


def extract_hashtags(content: str | None) -> list[str]:
    """'#word' tokens in order of appearance, without duplicates."""
    seen: dict[str, None] = {}
    for m in _HASHTAG_RE.finditer(content or ""):
        seen.setdefault(m.group(1), None)
    return list(seen)


def word_count(content: str | None) -> int:
    return len((content or "").split())


def reading_time(content: str | None, *, words_per_minute: int = 200) -> int:
    """Minutes, rounded up."""
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be > 0")
    return math.ceil(word_count(content) / words_per_minute)
