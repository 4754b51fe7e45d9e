from __future__ import annotations

from typing import Any, Callable, Mapping

from PySide6.QtCore import QObject, Signal

from ..app_settings import coerce_bool
from ..logging_utils import get_logger

_LOGGER = get_logger(__name__)

CHANGE_EVENT = "change"


class PreferenceStore(QObject):
    """In-memory preference values with per-name change notification."""

    changed = Signal(str, object)

    def __init__(self, defaults: Mapping[str, Any] | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._defaults: dict[str, Any] = dict(defaults or {})
        self._values: dict[str, Any] = dict(self._defaults)

    def get(self, name: str, default: Any = None) -> Any:
        if name in self._values:
            return self._values[name]
        return default

    def set(self, name: str, value: Any) -> bool:
        value = self._coerce(name, value)
        if name in self._values and self._values[name] == value:
            return False
        self._values[name] = value
        _LOGGER.debug("PreferenceStore.set name=%s value=%r", name, value)
        self.changed.emit(name, value)
        return True

    def reload(self, values: Mapping[str, Any]) -> list[str]:
        changed_names = [name for name, value in values.items() if self.set(name, value)]
        _LOGGER.debug("PreferenceStore.reload keys=%d changed=%s", len(values), changed_names)
        return changed_names

    def on(self, event: str, name: str, handler: Callable[[str, Any], None]) -> Callable[[], None]:
        if event != CHANGE_EVENT:
            raise ValueError(f"Unsupported preference event: {event!r}")
        if not callable(handler):
            raise TypeError("Preference change handler must be callable")

        def _slot(changed_name: str, value: object) -> None:
            if changed_name == name:
                handler(changed_name, value)

        self.changed.connect(_slot)
        connected = [True]

        def _unsubscribe() -> None:
            if not connected[0]:
                return
            connected[0] = False
            self.changed.disconnect(_slot)

        return _unsubscribe

    def _coerce(self, name: str, value: Any) -> Any:
        default = self._defaults.get(name)
        if isinstance(default, bool):
            return coerce_bool(value, default=default)
        return value
