from .core.models import Note, ViewConfig, ViewMode, ViewState
from .core.projection import EmptyState, NoteCard, RenderPlan, project_notes
from .core.view import NoteCollectionView, NoteIntents

__all__ = ["Note",
           "ViewConfig",
           "ViewMode",
           "ViewState",
           "EmptyState",
           "NoteCard",
           "RenderPlan",
           "project_notes",
           "NoteCollectionView",
           "NoteIntents"
           ]
