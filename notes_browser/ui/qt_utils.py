from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def blocked_signals(obj):
    """
    Контекст-менеджер: временно выключает Qt-сигналы у объекта и гарантированно
    включает обратно.
    """
    if obj is None:
        yield
        return
    try:
        obj.blockSignals(True)
        yield
    finally:
        try:
            obj.blockSignals(False)
        except RuntimeError:
            # объект уже мог быть уничтожен Qt
            pass
