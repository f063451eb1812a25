from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Union

Timestamp = Union[str, datetime, int, float, None]


class ViewMode(str, Enum):
    LIST = "list"
    GRID = "grid"

    @classmethod
    def coerce(cls, value, default: "ViewMode | None" = None) -> "ViewMode":
        """Любое значение (в т.ч. строку из QSettings) -> ViewMode, иначе default/LIST."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.LIST


@dataclass(frozen=True)
class Note:
    """
    A note record owned by the caller.
    content/tags may be None; the view treats them as empty.
    """
    id: str
    title: str = ""
    content: Optional[str] = ""
    tags: Optional[Sequence[str]] = ()
    updated_at: Timestamp = None
    created_at: Timestamp = None


@dataclass(frozen=True)
class ViewState:
    selected_id: Optional[str] = None
    view_mode: ViewMode = ViewMode.LIST
    favorite_ids: frozenset[str] = field(default_factory=frozenset)
    archived_ids: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ViewConfig:
    """
    Display defaults for the notes panel.

    preview_max_chars: preview length after stripping markup characters
    max_visible_tags:  tag badges shown before the "+N" overflow badge
    untitled_label:    title shown for notes with an empty title
    ellipsis:          appended to every non-empty preview
    time_placeholder:  shown when updated_at cannot be parsed
    """
    preview_max_chars: int = 100
    max_visible_tags: int = 3
    untitled_label: str = "Untitled"
    ellipsis: str = "..."
    time_placeholder: str = "recently"
    empty_icon: str = "📝"
    empty_message: str = "No notes found"
    empty_hint: str = "Create your first note to get started"
