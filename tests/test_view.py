import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from notes_browser.core.models import Note, ViewMode, ViewState
from notes_browser.core.view import NoteCollectionView, NoteIntents


class Recorder:
    def __init__(self):
        self.calls = []

    def select(self, note):
        self.calls.append(("select", note.id))

    def favorite(self, note_id):
        self.calls.append(("favorite", note_id))

    def archive(self, note_id):
        self.calls.append(("archive", note_id))


def _view(rec, *, toggles=True):
    if toggles:
        intents = NoteIntents(rec.select, rec.favorite, rec.archive)
    else:
        intents = NoteIntents(rec.select)
    return NoteCollectionView(intents)


def test_select_fires_once_even_if_already_selected():
    rec = Recorder()
    view = _view(rec)
    note = Note(id="n1", title="Plan")

    view.select(note)
    view.select(note)

    assert rec.calls == [("select", "n1"), ("select", "n1")]


def test_toggles_forward_to_caller():
    rec = Recorder()
    view = _view(rec)

    assert view.toggle_favorite("n1") is True
    assert view.toggle_archive("n2") is True
    assert rec.calls == [("favorite", "n1"), ("archive", "n2")]


def test_unwired_toggles_do_nothing():
    rec = Recorder()
    view = _view(rec, toggles=False)

    assert not view.can_toggle_favorite
    assert not view.can_toggle_archive
    assert view.toggle_favorite("n1") is False
    assert view.toggle_archive("n1") is False
    assert rec.calls == []


def test_toggle_does_not_select():
    rec = Recorder()
    view = _view(rec)
    view.toggle_favorite("n1")
    assert ("select", "n1") not in rec.calls


def test_render_is_stateless():
    view = _view(Recorder())
    notes = [Note(id="a", title="A"), Note(id="b", title="B")]

    first = view.render(notes, ViewState(selected_id="a", view_mode=ViewMode.GRID))
    second = view.render(notes[1:], ViewState())

    assert [c.note_id for c in first.records] == ["a", "b"]
    assert first.view_mode is ViewMode.GRID
    assert [c.note_id for c in second.records] == ["b"]
    assert second.view_mode is ViewMode.LIST
    assert not second.records[0].is_selected


def test_render_without_state():
    plan = _view(Recorder()).render([])
    assert plan.is_empty


def test_handler_errors_propagate():
    def boom(note):
        raise RuntimeError("handler failed")

    view = NoteCollectionView(NoteIntents(boom))
    with pytest.raises(RuntimeError):
        view.select(Note(id="x"))


def test_view_mode_coerce():
    assert ViewMode.coerce("grid") is ViewMode.GRID
    assert ViewMode.coerce(" LIST ") is ViewMode.LIST
    assert ViewMode.coerce("tiles") is ViewMode.LIST
    assert ViewMode.coerce(None) is ViewMode.LIST
    assert ViewMode.coerce(ViewMode.GRID) is ViewMode.GRID
