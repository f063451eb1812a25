from __future__ import annotations

import time
from pathlib import Path

from PySide6.QtCore import QSettings, Qt, QTimer
from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMainWindow, QSplitter, QTextEdit, QVBoxLayout, QWidget,
)

from notes_browser.core.collection import (
    SORT_KEYS, all_tags, filter_notes, reading_time, sort_notes, toggle_id, word_count,
)
from notes_browser.core.models import Note, ViewMode, ViewState
from notes_browser.core.view import NoteCollectionView, NoteIntents
from notes_browser.logging_setup import log
from notes_browser.settings import APP_NAME
from notes_browser.ui.notes_list import NotesListWidget
from notes_browser.ui.qt_utils import blocked_signals
from notes_browser.ui.state import SettingsKeys, ViewStateStore, get_str
from notes_browser.vault.repo import VaultRepository

SORT_LABELS = {"updated": "По изменению", "created": "По созданию", "title": "По названию"}


class NotesWindow(QMainWindow):
    """
    Владелец состояния панели заметок: коллекция, выделение, избранное/архив,
    фильтры и режим отображения. После каждого изменения панель перерисовывается
    целиком из этого состояния.
    """

    def __init__(self, *, settings: QSettings, vault_dir: Path | None = None):
        super().__init__()
        self.setWindowTitle(APP_NAME)

        self._settings = settings
        self._store = ViewStateStore(settings)

        self.vault_dir: Path | None = vault_dir
        self._notes: list[Note] = []
        self._selected_id: str | None = None
        self._favorites = self._store.load_favorites()
        self._archived = self._store.load_archived()
        self._view_mode = self._store.load_view_mode()
        self._sort_by, self._sort_order = self._store.load_sort()
        if self._sort_by not in SORT_KEYS:
            self._sort_by = "updated"
        if self._sort_order not in ("asc", "desc"):
            self._sort_order = "desc"
        self._selected_tags: set[str] = set()
        self._show_archived = False
        self._show_favorites = False

        self.view = NoteCollectionView(
            NoteIntents(
                on_select=self._on_select,
                on_toggle_favorite=self._on_toggle_favorite,
                on_toggle_archive=self._on_toggle_archive,
            )
        )

        # Re-render outside of the list's own signal handlers
        self._refresh_timer = QTimer(self)
        self._refresh_timer.setSingleShot(True)
        self._refresh_timer.setInterval(0)
        self._refresh_timer.timeout.connect(self.refresh)

        # UI
        self.search = QLineEdit()
        self.search.setPlaceholderText("Поиск… (название и текст)")
        self.search.setClearButtonEnabled(True)
        self.search.textChanged.connect(lambda _: self._schedule_refresh())

        self.tags = QListWidget()
        self.tags.setMaximumHeight(140)
        self.tags.setToolTip("Фильтр по тегам")
        self.tags.itemChanged.connect(self._on_tag_toggled)

        self.notes_list = NotesListWidget(self.view)

        self.detail = QTextEdit()
        self.detail.setReadOnly(True)

        self._count_label = QLabel()
        self.statusBar().addPermanentWidget(self._count_label)

        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(8, 8, 8, 8)
        left_layout.addWidget(self.search)
        left_layout.addWidget(self.tags)
        left_layout.addWidget(self.notes_list)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(left)
        self.splitter.addWidget(self.detail)
        self.splitter.setStretchFactor(0, 2)
        self.splitter.setStretchFactor(1, 3)

        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.addWidget(self.splitter)
        self.setCentralWidget(root)

        self._build_menu()
        log.info("Окно заметок инициализировано")

        if self.vault_dir is not None:
            self.reload()
        else:
            self.refresh()

    # ───────────────────────── menu ─────────────────────────

    def _build_menu(self):
        menubar = self.menuBar()
        filem = menubar.addMenu("Файл")

        act_open_vault = QAction("Открыть папку (vault)…", self)
        act_open_vault.triggered.connect(self.choose_vault)

        act_reload = QAction("Перечитать", self)
        act_reload.setShortcut("F5")
        act_reload.triggered.connect(self.reload)

        filem.addAction(act_open_vault)
        filem.addAction(act_reload)

        viewm = menubar.addMenu("Вид")

        self._act_grid = QAction("Сетка", self, checkable=True)
        self._act_grid.setShortcut("Ctrl+G")
        self._act_grid.setChecked(self._view_mode is ViewMode.GRID)
        self._act_grid.triggered.connect(self.toggle_view_mode)

        self._act_favorites = QAction("Только избранное", self, checkable=True)
        self._act_favorites.triggered.connect(self._on_show_favorites)

        self._act_archived = QAction("Архив", self, checkable=True)
        self._act_archived.triggered.connect(self._on_show_archived)

        viewm.addAction(self._act_grid)
        viewm.addSeparator()
        viewm.addAction(self._act_favorites)
        viewm.addAction(self._act_archived)

        sortm = menubar.addMenu("Сортировка")
        group = QActionGroup(self)
        for key in SORT_KEYS:
            act = QAction(SORT_LABELS[key], self, checkable=True)
            act.setChecked(key == self._sort_by)
            act.triggered.connect(lambda _=False, k=key: self._apply_sort(k, self._sort_order))
            group.addAction(act)
            sortm.addAction(act)
        sortm.addSeparator()
        self._act_asc = QAction("По возрастанию", self, checkable=True)
        self._act_asc.setChecked(self._sort_order == "asc")
        self._act_asc.triggered.connect(
            lambda checked: self._apply_sort(self._sort_by, "asc" if checked else "desc")
        )
        sortm.addAction(self._act_asc)

    # ───────────────────────── data ─────────────────────────

    def choose_vault(self):
        path = QFileDialog.getExistingDirectory(self, "Выберите папку с заметками")
        if not path:
            log.info("Выбор хранилища отменён. Сохраняется хранилище=%s", self.vault_dir)
            return
        self.vault_dir = Path(path)
        try:
            self._settings.setValue(SettingsKeys.VAULT_DIR, str(self.vault_dir))
        except Exception:
            log.exception("Failed to save vault dir to QSettings")
        self.reload()

    def reload(self):
        if self.vault_dir is None:
            return
        t0 = time.perf_counter()
        self._notes = VaultRepository(self.vault_dir).load_notes()
        dt_ms = (time.perf_counter() - t0) * 1000.0
        log.info("Notes reloaded: notes=%d time_ms=%.1f", len(self._notes), dt_ms)
        self._rebuild_tags()
        self.refresh()

    def _rebuild_tags(self):
        known = all_tags(self._notes)
        self._selected_tags &= set(known)
        with blocked_signals(self.tags):
            self.tags.clear()
            for tag in known:
                item = QListWidgetItem(tag)
                item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
                item.setCheckState(Qt.Checked if tag in self._selected_tags else Qt.Unchecked)
                self.tags.addItem(item)

    # ───────────────────────── render ─────────────────────────

    def _schedule_refresh(self):
        self._refresh_timer.start()

    def visible_notes(self) -> list[Note]:
        visible = filter_notes(
            self._notes,
            query=self.search.text(),
            selected_tags=self._selected_tags,
            favorite_ids=self._favorites,
            archived_ids=self._archived,
            show_archived=self._show_archived,
            show_favorites=self._show_favorites,
        )
        return sort_notes(visible, self._sort_by, self._sort_order)

    def view_state(self) -> ViewState:
        return ViewState(
            selected_id=self._selected_id,
            view_mode=self._view_mode,
            favorite_ids=self._favorites,
            archived_ids=self._archived,
        )

    def refresh(self):
        visible = self.visible_notes()
        self.notes_list.show_notes(visible, self.view_state())
        self._count_label.setText(f"{len(visible)} из {len(self._notes)} заметок")

    # ───────────────────────── intents ─────────────────────────

    def _on_select(self, note: Note) -> None:
        self._selected_id = note.id
        self.detail.setPlainText(note.content or "")
        self._schedule_refresh()
        words = word_count(note.content)
        self.statusBar().showMessage(
            f"{note.title or note.id}: {words} слов, ~{reading_time(note.content)} мин", 4000
        )

    def _on_toggle_favorite(self, note_id: str) -> None:
        self._favorites = toggle_id(self._favorites, note_id)
        self._store.save_favorites(self._favorites)
        log.info("Favorite toggled: note_id=%s on=%s", note_id, note_id in self._favorites)
        self._schedule_refresh()

    def _on_toggle_archive(self, note_id: str) -> None:
        self._archived = toggle_id(self._archived, note_id)
        self._store.save_archived(self._archived)
        log.info("Archive toggled: note_id=%s on=%s", note_id, note_id in self._archived)
        self._schedule_refresh()

    # ───────────────────────── view controls ─────────────────────────

    def toggle_view_mode(self):
        self._view_mode = ViewMode.LIST if self._view_mode is ViewMode.GRID else ViewMode.GRID
        with blocked_signals(self._act_grid):
            self._act_grid.setChecked(self._view_mode is ViewMode.GRID)
        self._store.save_view_mode(self._view_mode)
        self._schedule_refresh()

    def _on_show_favorites(self, checked: bool):
        self._show_favorites = bool(checked)
        self._schedule_refresh()

    def _on_show_archived(self, checked: bool):
        self._show_archived = bool(checked)
        self._schedule_refresh()

    def _on_tag_toggled(self, item: QListWidgetItem):
        tag = item.text()
        if item.checkState() == Qt.Checked:
            self._selected_tags.add(tag)
        else:
            self._selected_tags.discard(tag)
        self._schedule_refresh()

    def _apply_sort(self, sort_by: str, order: str):
        self._sort_by, self._sort_order = sort_by, order
        self._store.save_sort(sort_by, order)
        self._schedule_refresh()


def initial_vault_dir(settings: QSettings, cli_vault: Path | None) -> Path | None:
    if cli_vault is not None:
        return cli_vault
    saved = get_str(settings, SettingsKeys.VAULT_DIR, "").strip()
    return Path(saved) if saved else None
