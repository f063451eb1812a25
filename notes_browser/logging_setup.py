from __future__ import annotations

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler

from notes_browser.settings import APP_NAME, LOG_DIR, LOG_PATH

SESSION_ID = uuid.uuid4().hex[:8]


class EnsureSessionFilter(logging.Filter):
    """Ensure record.session exists so Formatter never crashes."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session"):
            record.session = SESSION_ID
        return True


class SessionAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("session", SESSION_ID)
        return msg, kwargs


def setup_logging(*, debug: bool = False) -> logging.Logger:
    """
    Configure application-wide logging.
    Child loggers (notes-browser.view, notes-browser.vault, ...) propagate here.
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Prevent duplicate handlers on repeated setup
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s | sid=%(session)s"
    )
    session_filter = EnsureSessionFilter()

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            LOG_PATH, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        fh.addFilter(session_filter)
        logger.addHandler(fh)
    except OSError:
        # read-only home: console only
        fh = None

    ch = logging.StreamHandler(sys.stdout or sys.stderr)
    ch.setLevel(logging.DEBUG if debug else logging.INFO)
    ch.setFormatter(fmt)
    ch.addFilter(session_filter)
    logger.addHandler(ch)

    if fh is None:
        logger.warning("File logging disabled: cannot write to %s", LOG_DIR)
    else:
        logger.info("Logging initialized. log_file=%s", LOG_PATH)
    return logger


log = SessionAdapter(logging.getLogger(APP_NAME), {})


def qt_log_level(mode) -> int:
    """QtMsgType -> logging level; unknown modes are logged as warnings."""
    from PySide6.QtCore import QtMsgType

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }
    return levels.get(mode, logging.WARNING)


def _qt_message_handler(mode, context, message) -> None:
    file = getattr(context, "file", None)
    line = getattr(context, "line", None)
    where = f"{file}:{line}" if file else "unknown"
    log.log(qt_log_level(mode), "Qt: %s | where=%s", message, where)


def install_global_exception_hooks() -> None:
    """Route uncaught Python exceptions and Qt messages into the app log."""
    def _excepthook(exc_type, exc, tb):
        log.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    try:
        from PySide6.QtCore import qInstallMessageHandler

        qInstallMessageHandler(_qt_message_handler)
        log.info("Qt message handler installed")
    except Exception:
        log.exception("Failed to install Qt message handler")
