import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pendulum

from notes_browser.core.models import Note, ViewConfig, ViewMode, ViewState
from notes_browser.core.projection import EmptyState, NoteCard, project_notes


def _notes():
    now = pendulum.now()
    return [
        Note(id="n1", title="Plan", content="# Title\n*bold* text", tags=("a", "b", "c", "d", "e"),
             updated_at=now.subtract(hours=2)),
        Note(id="n2", title="", content="", tags=("x",), updated_at="garbage"),
        Note(id="n3", title="Ideas", content=None, tags=None, updated_at=None),
    ]


def test_one_card_per_note_in_order():
    notes = _notes()
    plan = project_notes(notes, ViewState())
    assert not plan.is_empty
    assert len(plan.records) == len(notes)
    assert [c.note_id for c in plan.records] == ["n1", "n2", "n3"]
    assert all(isinstance(r, NoteCard) for r in plan.records)


def test_empty_collection_gives_single_empty_state():
    plan = project_notes([], ViewState())
    assert plan.is_empty
    assert len(plan.records) == 1
    empty = plan.records[0]
    assert isinstance(empty, EmptyState)
    assert not isinstance(empty, NoteCard)
    assert empty.message == "No notes found"
    assert empty.hint == "Create your first note to get started"
    assert plan.cards == ()


def test_card_fields():
    n1, n2, n3 = project_notes(_notes()).records

    assert n1.title == "Plan"
    assert n1.preview == " Title\nbold text..."
    assert n1.visible_tags == ("a", "b", "c")
    assert n1.overflow_count == 2
    assert n1.overflow_badge == "+2"
    assert n1.relative_time == "2 hours ago"

    assert n2.title == "Untitled"
    assert n2.preview is None
    assert n2.overflow_badge is None
    assert n2.relative_time == "recently"

    assert n3.preview is None
    assert n3.visible_tags == ()
    assert n3.relative_time == "recently"


def test_selection_marks_exactly_one():
    plan = project_notes(_notes(), ViewState(selected_id="n2"))
    assert [c.is_selected for c in plan.records] == [False, True, False]


def test_stale_selection_highlights_nothing():
    plan = project_notes(_notes(), ViewState(selected_id="gone"))
    assert not any(c.is_selected for c in plan.records)


def test_selection_does_not_change_content():
    plain = project_notes(_notes(), ViewState())
    selected = project_notes(_notes(), ViewState(selected_id="n1"))
    for a, b in zip(plain.records, selected.records):
        assert (a.title, a.preview, a.visible_tags, a.overflow_count) == \
               (b.title, b.preview, b.visible_tags, b.overflow_count)


def test_same_inputs_same_output():
    notes = [
        Note(id="a", title="A", content="hello", tags=("t",), updated_at="garbage"),
        Note(id="b", title="B", content="`x`", tags=(), updated_at=None),
    ]
    state = ViewState(selected_id="a", favorite_ids=frozenset({"b"}))
    assert project_notes(notes, state) == project_notes(notes, state)


def test_toggles_are_isolated():
    notes = _notes()
    before = project_notes(notes, ViewState())
    after = project_notes(
        notes,
        ViewState(favorite_ids=frozenset({"n1", "missing"}), archived_ids=frozenset({"n3"})),
    )
    for a, b in zip(before.records, after.records):
        assert (a.title, a.preview, a.visible_tags, a.overflow_count) == \
               (b.title, b.preview, b.visible_tags, b.overflow_count)
    assert [c.is_favorite for c in after.records] == [True, False, False]
    assert [c.is_archived for c in after.records] == [False, False, True]


def test_view_mode_only_carried():
    notes = _notes()
    as_list = project_notes(notes, ViewState(view_mode=ViewMode.LIST))
    as_grid = project_notes(notes, ViewState(view_mode=ViewMode.GRID))
    assert as_list.view_mode is ViewMode.LIST
    assert as_grid.view_mode is ViewMode.GRID
    for a, b in zip(as_list.records, as_grid.records):
        assert (a.title, a.preview, a.visible_tags) == (b.title, b.preview, b.visible_tags)


def test_broken_note_is_contained():
    notes = [
        Note(id="ok1", title="First", content="fine"),
        Note(id="bad", title="Broken", content=12345, tags=("a",)),
        Note(id="ok2", title="Second", content="also fine"),
    ]
    plan = project_notes(notes, ViewState(selected_id="bad"))
    assert len(plan.records) == 3
    bad = plan.records[1]
    assert bad.title == "Broken"
    assert bad.preview is None
    assert bad.visible_tags == ()
    assert bad.is_selected
    assert plan.records[0].preview == "fine..."
    assert plan.records[2].preview == "also fine..."


def test_custom_config():
    config = ViewConfig(preview_max_chars=4, max_visible_tags=1, untitled_label="(no title)", ellipsis="…")
    card = project_notes([Note(id="x", content="abcdefgh", tags=("a", "b"))], config=config).records[0]
    assert card.title == "(no title)"
    assert card.preview == "abcd…"
    assert card.visible_tags == ("a",)
    assert card.overflow_badge == "+1"
