from __future__ import annotations

import logging
from typing import Sequence

from PySide6.QtCore import QPoint, QSize, Qt
from PySide6.QtGui import QAction, QFont
from PySide6.QtWidgets import QListView, QListWidget, QListWidgetItem, QMenu, QVBoxLayout, QWidget

from notes_browser.core.models import Note, ViewMode, ViewState
from notes_browser.core.projection import EmptyState, NoteCard, RenderPlan
from notes_browser.core.view import NoteCollectionView
from notes_browser.settings import APP_NAME
from notes_browser.ui.qt_utils import blocked_signals

log = logging.getLogger(f"{APP_NAME}.ui.notes_list")

GRID_CELL = QSize(230, 150)
FAVORITE_MARK = "★"
ARCHIVED_MARK = "🗄"


def card_text(card: NoteCard) -> str:
    """Multiline item text: header, preview, tag badges."""
    marks = ""
    if card.is_favorite:
        marks += FAVORITE_MARK + " "
    if card.is_archived:
        marks += ARCHIVED_MARK + " "

    lines = [f"{marks}{card.title}    {card.relative_time}"]
    if card.preview:
        # preview может быть многострочным; в списке показываем одной строкой
        lines.append(" ".join(card.preview.split()))
    badges = [f"[{t}]" for t in card.visible_tags]
    if card.overflow_badge:
        badges.append(card.overflow_badge)
    if badges:
        lines.append(" ".join(badges))
    return "\n".join(lines)


def empty_state_text(empty: EmptyState) -> str:
    return f"{empty.icon}\n{empty.message}\n{empty.hint}"


class NotesListWidget(QWidget):
    """
    Рисует RenderPlan в QListWidget.
    Не хранит заметки: клик -> view.select(note), контекстное меню -> view.toggle_*.
    """

    def __init__(self, view: NoteCollectionView, parent: QWidget | None = None):
        super().__init__(parent)
        self._view = view
        # note_id -> card currently on screen (rebuilt on every render)
        self._shown: dict[str, NoteCard] = {}

        self.listw = QListWidget()
        self.listw.setWordWrap(True)
        self.listw.setUniformItemSizes(False)
        self.listw.setSelectionMode(QListWidget.SingleSelection)
        self.listw.setContextMenuPolicy(Qt.CustomContextMenu)
        self.listw.itemClicked.connect(self._on_item_clicked)
        self.listw.customContextMenuRequested.connect(self._on_context_menu)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.listw)

    # ───────────────────────── public API ─────────────────────────

    def show_notes(self, notes: Sequence[Note], state: ViewState) -> RenderPlan:
        plan = self._view.render(notes, state)
        self.apply_plan(plan)
        return plan

    def apply_plan(self, plan: RenderPlan) -> None:
        self._apply_layout(plan.view_mode)
        self._shown = {}

        with blocked_signals(self.listw):
            self.listw.clear()
            for record in plan.records:
                if isinstance(record, EmptyState):
                    self.listw.addItem(self._empty_item(record))
                    continue
                item = self._card_item(record)
                self.listw.addItem(item)
                self._shown[record.note_id] = record
                if record.is_selected:
                    item.setSelected(True)
                    self.listw.scrollToItem(item)

    # ───────────────────────── internals ─────────────────────────

    def _apply_layout(self, mode: ViewMode) -> None:
        if mode is ViewMode.GRID:
            self.listw.setViewMode(QListView.IconMode)
            self.listw.setFlow(QListView.LeftToRight)
            self.listw.setWrapping(True)
            self.listw.setResizeMode(QListView.Adjust)
            self.listw.setMovement(QListView.Static)
            self.listw.setGridSize(GRID_CELL)
            self.listw.setSpacing(6)
        else:
            self.listw.setViewMode(QListView.ListMode)
            self.listw.setFlow(QListView.TopToBottom)
            self.listw.setWrapping(False)
            self.listw.setGridSize(QSize())
            self.listw.setSpacing(2)

    def _card_item(self, card: NoteCard) -> QListWidgetItem:
        item = QListWidgetItem(card_text(card))
        item.setData(Qt.UserRole, card.note_id)
        item.setToolTip(card.title)
        if self.listw.viewMode() == QListView.IconMode:
            item.setSizeHint(GRID_CELL - QSize(12, 12))
            item.setTextAlignment(Qt.AlignLeft | Qt.AlignTop)
        if card.is_selected:
            font = QFont(item.font())
            font.setBold(True)
            item.setFont(font)
        return item

    @staticmethod
    def _empty_item(empty: EmptyState) -> QListWidgetItem:
        item = QListWidgetItem(empty_state_text(empty))
        item.setFlags(Qt.NoItemFlags)
        item.setTextAlignment(Qt.AlignCenter)
        return item

    def _card_for_item(self, item: QListWidgetItem | None) -> NoteCard | None:
        if item is None:
            return None
        note_id = item.data(Qt.UserRole)
        if note_id is None:
            return None
        return self._shown.get(str(note_id))

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        card = self._card_for_item(item)
        if card is None:
            return
        self._view.select(card.note)

    def _on_context_menu(self, pos: QPoint) -> None:
        card = self._card_for_item(self.listw.itemAt(pos))
        if card is None:
            return
        if not (self._view.can_toggle_favorite or self._view.can_toggle_archive):
            return

        note_id = card.note_id
        menu = QMenu(self)
        if self._view.can_toggle_favorite:
            act_fav = QAction("Убрать из избранного" if card.is_favorite else "В избранное", menu)
            act_fav.triggered.connect(lambda: self._view.toggle_favorite(note_id))
            menu.addAction(act_fav)
        if self._view.can_toggle_archive:
            act_arch = QAction("Вернуть из архива" if card.is_archived else "В архив", menu)
            act_arch.triggered.connect(lambda: self._view.toggle_archive(note_id))
            menu.addAction(act_arch)
        log.debug("Context menu for note_id=%s", note_id)
        menu.exec(self.listw.viewport().mapToGlobal(pos))
