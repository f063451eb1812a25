from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, Sequence, TypeAlias

from notes_browser.core.models import Note, ViewConfig, ViewState
from notes_browser.core.projection import RenderPlan, project_notes
from notes_browser.settings import APP_NAME

SelectCallback: TypeAlias = Callable[[Note], object]
ToggleCallback: TypeAlias = Callable[[str], object]

log = logging.getLogger(f"{APP_NAME}.view")


@dataclass(frozen=True)
class NoteIntents:
    """
    Caller-supplied handlers. The view never interprets their return value.
    Toggles are optional: an unwired toggle is simply not offered.
    """
    on_select: SelectCallback
    on_toggle_favorite: Optional[ToggleCallback] = None
    on_toggle_archive: Optional[ToggleCallback] = None


@dataclass(frozen=True)
class NoteCollectionView:
    """
    Notes panel without state of its own.

    render() re-derives everything from its arguments, so two calls never
    share anything but the (immutable) config. User actions go out through
    NoteIntents; the caller owns the notes, the selection and the id sets
    and re-renders after applying them.
    """
    intents: NoteIntents
    config: ViewConfig = field(default_factory=ViewConfig)

    @property
    def can_toggle_favorite(self) -> bool:
        return self.intents.on_toggle_favorite is not None

    @property
    def can_toggle_archive(self) -> bool:
        return self.intents.on_toggle_archive is not None

    def render(self, notes: Sequence[Note], state: ViewState | None = None) -> RenderPlan:
        plan = project_notes(notes, state, self.config)
        log.debug(
            "Rendered notes=%d mode=%s empty=%s",
            len(notes), plan.view_mode.value, plan.is_empty,
        )
        return plan

    def select(self, note: Note) -> None:
        # fires even when the note is already selected
        self.intents.on_select(note)

    def toggle_favorite(self, note_id: str) -> bool:
        """Returns False when the caller did not wire favorites."""
        handler = self.intents.on_toggle_favorite
        if handler is None:
            return False
        handler(note_id)
        return True

    def toggle_archive(self, note_id: str) -> bool:
        """Returns False when the caller did not wire archiving."""
        handler = self.intents.on_toggle_archive
        if handler is None:
            return False
        handler(note_id)
        return True
