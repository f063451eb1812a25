import sys
import os
import logging

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from notes_browser.logging_setup import SESSION_ID, EnsureSessionFilter, qt_log_level


def test_session_filter_sets_missing_session():
    record = logging.LogRecord("notes-browser", logging.INFO, __file__, 1, "msg", None, None)
    assert EnsureSessionFilter().filter(record)
    assert record.session == SESSION_ID


def test_session_filter_keeps_existing_session():
    record = logging.LogRecord("notes-browser", logging.INFO, __file__, 1, "msg", None, None)
    record.session = "abc"
    EnsureSessionFilter().filter(record)
    assert record.session == "abc"


def test_qt_levels():
    QtCore = pytest.importorskip("PySide6.QtCore")
    t = QtCore.QtMsgType
    assert qt_log_level(t.QtDebugMsg) == logging.DEBUG
    assert qt_log_level(t.QtInfoMsg) == logging.INFO
    assert qt_log_level(t.QtWarningMsg) == logging.WARNING
    assert qt_log_level(t.QtCriticalMsg) == logging.ERROR
    assert qt_log_level(t.QtFatalMsg) == logging.CRITICAL
    assert qt_log_level("bogus") == logging.WARNING
