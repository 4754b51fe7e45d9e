from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, Signal

from .logging_utils import get_logger

_LOGGER = get_logger(__name__)


class AppInit(QObject):
    """One-shot "ready" signal for the host application."""

    ready = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._ready = False
        self._pending: list[Callable[[], None]] = []

    def is_ready(self) -> bool:
        return self._ready

    def html_ready(self, callback: Callable[[], None]) -> None:
        if self._ready:
            callback()
            return
        self._pending.append(callback)

    def fire_ready(self) -> None:
        """Run queued callbacks, then emit ``ready``.

        Ready is terminal even when a callback raises: the error propagates,
        later callbacks are dropped and ``ready`` is not emitted.
        """
        if self._ready:
            _LOGGER.warning("AppInit.fire_ready called after ready; ignoring")
            return
        self._ready = True
        pending, self._pending = self._pending, []
        _LOGGER.debug("AppInit ready callbacks=%d", len(pending))
        for index, callback in enumerate(pending):
            try:
                callback()
            except Exception:
                _LOGGER.exception("AppInit ready callback failed; skipped=%d", len(pending) - index - 1)
                raise
        self.ready.emit()
