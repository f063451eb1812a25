from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from notes_browser.core.models import Note, ViewConfig, ViewMode, ViewState
from notes_browser.core.preview import display_title, overflow_badge as format_overflow, preview_line, split_tags
from notes_browser.core.timefmt import relative_time
from notes_browser.settings import APP_NAME

log = logging.getLogger(f"{APP_NAME}.projection")


@dataclass(frozen=True)
class NoteCard:
    """Display record for one note."""
    note: Note
    title: str
    preview: Optional[str]
    relative_time: str
    visible_tags: tuple[str, ...]
    overflow_count: int
    is_selected: bool
    is_favorite: bool
    is_archived: bool

    @property
    def note_id(self) -> str:
        return self.note.id

    @property
    def overflow_badge(self) -> Optional[str]:
        return format_overflow(self.overflow_count)


@dataclass(frozen=True)
class EmptyState:
    icon: str
    message: str
    hint: str


RenderRecord = Union[NoteCard, EmptyState]


@dataclass(frozen=True)
class RenderPlan:
    view_mode: ViewMode
    records: tuple[RenderRecord, ...]

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 1 and isinstance(self.records[0], EmptyState)

    @property
    def cards(self) -> tuple[NoteCard, ...]:
        return tuple(r for r in self.records if isinstance(r, NoteCard))


def project_note(note: Note, state: ViewState, config: ViewConfig) -> NoteCard:
    visible, overflow = split_tags(note.tags, max_visible=config.max_visible_tags)
    return NoteCard(
        note=note,
        title=display_title(note.title, fallback=config.untitled_label),
        preview=preview_line(note.content, max_chars=config.preview_max_chars, ellipsis=config.ellipsis),
        relative_time=relative_time(note.updated_at, placeholder=config.time_placeholder),
        visible_tags=visible,
        overflow_count=overflow,
        is_selected=state.selected_id is not None and note.id == state.selected_id,
        is_favorite=note.id in state.favorite_ids,
        is_archived=note.id in state.archived_ids,
    )


def _degraded_card(note: Note, state: ViewState, config: ViewConfig) -> NoteCard:
    note_id = getattr(note, "id", None)
    title = getattr(note, "title", None)
    return NoteCard(
        note=note,
        title=title if isinstance(title, str) and title else config.untitled_label,
        preview=None,
        relative_time=config.time_placeholder,
        visible_tags=(),
        overflow_count=0,
        is_selected=isinstance(note_id, str) and note_id == state.selected_id,
        is_favorite=isinstance(note_id, str) and note_id in state.favorite_ids,
        is_archived=isinstance(note_id, str) and note_id in state.archived_ids,
    )


def project_notes(
    notes: Sequence[Note],
    state: ViewState | None = None,
    config: ViewConfig | None = None,
) -> RenderPlan:
    """
    Pure projection (notes, state) -> RenderPlan.

    - input order is kept; no sorting here
    - empty input -> single EmptyState record
    - a note that fails to project becomes a degraded card, the rest render normally
    """
    state = state or ViewState()
    config = config or ViewConfig()

    if not notes:
        empty = EmptyState(
            icon=config.empty_icon,
            message=config.empty_message,
            hint=config.empty_hint,
        )
        return RenderPlan(view_mode=state.view_mode, records=(empty,))

    records: list[RenderRecord] = []
    for note in notes:
        try:
            records.append(project_note(note, state, config))
        except Exception:
            log.exception("Failed to project note id=%r", getattr(note, "id", None))
            records.append(_degraded_card(note, state, config))

    return RenderPlan(view_mode=state.view_mode, records=tuple(records))
