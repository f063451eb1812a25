from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import pendulum

from notes_browser.core.collection import extract_hashtags
from notes_browser.core.models import Note
from notes_browser.settings import APP_NAME

log = logging.getLogger(f"{APP_NAME}.vault")

_FM_RE = re.compile(r"(?s)\A---\s*\n(.*?)\n---\s*\n")
_NOTE_ID_RE = re.compile(r"(?m)^\s*note_id\s*:\s*(.+?)\s*$")
_TITLE_RE = re.compile(r"(?m)^\s*title\s*:\s*(.+?)\s*$")
_TAGS_RE = re.compile(r"(?m)^\s*tags\s*:\s*(.*?)\s*$")
_H1_RE = re.compile(r"(?m)^\s*#\s+(.+?)\s*$")


def _unquote(value: str) -> str:
    return (value or "").strip().strip('"').strip("'")


def parse_note_text(text: str) -> tuple[dict[str, object], str]:
    """
    Best-effort разбор заметки:
      - YAML frontmatter: note_id / title / tags ("[a, b]" или "a, b")
      - fallback title: первая H1 строка "# ..."
    Returns (meta, body). body is the text without frontmatter.
    """
    meta: dict[str, object] = {}
    body = text or ""

    m = _FM_RE.match(body)
    if m:
        fm = m.group(1) or ""
        body = body[m.end():]
        mid = _NOTE_ID_RE.search(fm)
        if mid and _unquote(mid.group(1)):
            meta["note_id"] = _unquote(mid.group(1))
        mt = _TITLE_RE.search(fm)
        if mt and _unquote(mt.group(1)):
            meta["title"] = _unquote(mt.group(1))
        mtags = _TAGS_RE.search(fm)
        if mtags:
            raw = mtags.group(1).strip().lstrip("[").rstrip("]")
            tags = [_unquote(t) for t in raw.split(",")]
            meta["tags"] = [t for t in tags if t]

    if "title" not in meta:
        mh1 = _H1_RE.search(body)
        if mh1 and mh1.group(1).strip():
            meta["title"] = mh1.group(1).strip()

    return meta, body


@dataclass(frozen=True)
class VaultRepository:
    """Read-only source of notes: every *.md file under vault_dir."""
    vault_dir: Path

    def list_paths(self) -> list[Path]:
        if not self.vault_dir.is_dir():
            return []
        return sorted(self.vault_dir.rglob("*.md"), key=lambda p: str(p).lower())

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def load_note(self, path: Path) -> Note:
        text = self.read(path)
        meta, body = parse_note_text(text)
        note_id = meta.get("note_id") or path.relative_to(self.vault_dir).as_posix()
        tags = meta.get("tags")
        if tags is None:
            tags = extract_hashtags(body)
        st = path.stat()
        return Note(
            id=str(note_id),
            title=str(meta.get("title") or path.stem),
            content=body,
            tags=tuple(tags),
            updated_at=pendulum.from_timestamp(st.st_mtime),
            created_at=pendulum.from_timestamp(getattr(st, "st_birthtime", st.st_ctime)),
        )

    def load_notes(self) -> list[Note]:
        notes: list[Note] = []
        seen: set[str] = set()
        for path in self.list_paths():
            try:
                note = self.load_note(path)
            except (OSError, UnicodeDecodeError):
                log.warning("Skipping unreadable note: %s", path, exc_info=True)
                continue
            if note.id in seen:
                log.warning("Duplicate note_id=%s in %s, skipped", note.id, path)
                continue
            seen.add(note.id)
            notes.append(note)
        log.info("Vault loaded: dir=%s notes=%d", self.vault_dir, len(notes))
        return notes
