from .models import Note, ViewConfig, ViewMode, ViewState
from .preview import display_title, preview_line, split_tags, strip_preview
from .timefmt import parse_timestamp, relative_time
from .projection import EmptyState, NoteCard, RenderPlan, project_notes
from .view import NoteCollectionView, NoteIntents

__all__ = ["Note",
           "ViewConfig",
           "ViewMode",
           "ViewState",
           "display_title",
           "preview_line",
           "split_tags",
           "strip_preview",
           "parse_timestamp",
           "relative_time",
           "EmptyState",
           "NoteCard",
           "RenderPlan",
           "project_notes",
           "NoteCollectionView",
           "NoteIntents"
           ]
