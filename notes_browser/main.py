from __future__ import annotations

import argparse
from pathlib import Path

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from notes_browser.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from notes_browser.settings import APP_NAME, DEFAULT_VAULT_DIR
from notes_browser.ui.main_window import NotesWindow, initial_vault_dir


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Notes browser")
    p.add_argument(
        "--vault",
        type=Path,
        default=None,
        help=f"Path to notes folder (default: last opened, then {DEFAULT_VAULT_DIR})",
    )
    p.add_argument("--debug", action="store_true", help="Verbose console logging")
    return p.parse_args(argv)


def ensure_vault(vault: Path) -> None:
    vault.mkdir(parents=True, exist_ok=True)
    # чтобы не стартовать с пустым экраном
    if not any(vault.glob("*.md")):
        (vault / "Welcome.md").write_text(
            "---\ntags: [welcome, help]\n---\n\n"
            "# Welcome\n\nЭто первая заметка.\n\n"
            "- Клик по заметке открывает её справа\n"
            "- Правый клик: избранное / архив\n"
            "- Ctrl+G переключает список и сетку\n",
            encoding="utf-8",
        )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug)
    install_global_exception_hooks()

    app = QApplication([])
    app.setApplicationName(APP_NAME)
    settings = QSettings(APP_NAME, APP_NAME)

    vault = initial_vault_dir(settings, args.vault)
    if vault is None:
        vault = DEFAULT_VAULT_DIR
        ensure_vault(vault)

    win = NotesWindow(settings=settings, vault_dir=vault)
    win.resize(1100, 700)
    win.show()
    log.info("Приложение запущено, SID=%s vault=%s", SESSION_ID, vault)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
