from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtCore import QSettings

from notes_browser.core.models import ViewMode
from notes_browser.settings import APP_NAME

log = logging.getLogger(f"{APP_NAME}.ui.state")


@dataclass(frozen=True)
class SettingsKeys:
    VAULT_DIR: str = "vault/dir"
    VIEW_MODE: str = "notes/view_mode"
    FAVORITES: str = "notes/favorites"
    ARCHIVED: str = "notes/archived"
    SORT_BY: str = "notes/sort_by"
    SORT_ORDER: str = "notes/sort_order"


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_list(settings: QSettings, key: str) -> list[str]:
    """
    QSettings отдаёт список по-разному в зависимости от backend'а:
    None, str (один элемент) или list.
    """
    try:
        value = settings.value(key)
    except Exception:
        return []
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(x) for x in value if x]
    return []


class ViewStateStore:
    """
    Сохраняет/восстанавливает состояние панели заметок в QSettings:
    режим отображения, избранное, архив.
    """
    def __init__(self, settings: QSettings):
        self._settings = settings
        self._keys = SettingsKeys()

    def load_view_mode(self) -> ViewMode:
        return ViewMode.coerce(get_str(self._settings, self._keys.VIEW_MODE, ViewMode.LIST.value))

    def load_favorites(self) -> frozenset[str]:
        return frozenset(get_list(self._settings, self._keys.FAVORITES))

    def load_archived(self) -> frozenset[str]:
        return frozenset(get_list(self._settings, self._keys.ARCHIVED))

    def load_sort(self) -> tuple[str, str]:
        return (
            get_str(self._settings, self._keys.SORT_BY, "updated"),
            get_str(self._settings, self._keys.SORT_ORDER, "desc"),
        )

    def save_view_mode(self, mode: ViewMode) -> None:
        self._set(self._keys.VIEW_MODE, mode.value)

    def save_favorites(self, ids: frozenset[str]) -> None:
        self._set(self._keys.FAVORITES, sorted(ids))

    def save_archived(self, ids: frozenset[str]) -> None:
        self._set(self._keys.ARCHIVED, sorted(ids))

    def save_sort(self, sort_by: str, order: str) -> None:
        self._set(self._keys.SORT_BY, sort_by)
        self._set(self._keys.SORT_ORDER, order)

    def _set(self, key: str, value) -> None:
        try:
            self._settings.setValue(key, value)
        except Exception:
            log.exception("Failed to save %s to QSettings", key)
