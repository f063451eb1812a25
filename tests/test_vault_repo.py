import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from notes_browser.vault.repo import VaultRepository, parse_note_text


def test_parse_frontmatter():
    meta, body = parse_note_text("---\nnote_id: abc\ntitle: \"Plan\"\ntags: [work, 'q1']\n---\n\nBody #ignored\n")
    assert meta == {"note_id": "abc", "title": "Plan", "tags": ["work", "q1"]}
    assert body == "Body #ignored\n"


def test_parse_h1_fallback():
    meta, body = parse_note_text("# Groceries\n\nmilk")
    assert meta == {"title": "Groceries"}
    assert body == "# Groceries\n\nmilk"


def test_load_notes(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.md").write_text("---\nnote_id: id-a\ntags: x, y\n---\nhello", encoding="utf-8")
    (tmp_path / "sub" / "B.md").write_text("# Bee\ntext #tag1 #tag2", encoding="utf-8")
    (tmp_path / "plain.md").write_text("", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    notes = {n.id: n for n in VaultRepository(tmp_path).load_notes()}

    assert set(notes) == {"id-a", "sub/B.md", "plain.md"}
    assert notes["id-a"].title == "a"
    assert notes["id-a"].tags == ("x", "y")
    assert notes["id-a"].content == "hello"
    assert notes["sub/B.md"].title == "Bee"
    assert notes["sub/B.md"].tags == ("tag1", "tag2")
    assert notes["plain.md"].title == "plain"
    assert notes["plain.md"].updated_at is not None


def test_duplicate_ids_and_bad_files_skipped(tmp_path):
    (tmp_path / "one.md").write_text("---\nnote_id: same\n---\nfirst", encoding="utf-8")
    (tmp_path / "two.md").write_text("---\nnote_id: same\n---\nsecond", encoding="utf-8")
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")

    notes = VaultRepository(tmp_path).load_notes()
    assert [n.id for n in notes] == ["same"]
    assert notes[0].content == "first"


def test_missing_vault_is_empty(tmp_path):
    assert VaultRepository(tmp_path / "nope").load_notes() == []
