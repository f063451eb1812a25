from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "notes-browser"
DATA_DIR = Path(os.environ.get("NOTES_BROWSER_HOME") or Path.home() / f".{APP_NAME}")
LOG_DIR = DATA_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
DEFAULT_VAULT_DIR = DATA_DIR / "vault"
