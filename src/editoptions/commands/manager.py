from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QAction

from ..errors import CommandNotFoundError, CommandRegistrationError
from ..logging_utils import get_logger

_LOGGER = get_logger(__name__)


class Command(QObject):
    checkedStateChanged = Signal(bool)
    enabledStateChanged = Signal(bool)

    def __init__(self, label: str, command_id: str, handler: Callable[[], Any], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.label = label
        self.command_id = command_id
        self._handler = handler
        self._checked: bool | None = None
        self.action = QAction(label, self)
        self.action.setObjectName(command_id)
        self.action.triggered.connect(self._on_action_triggered)

    def _on_action_triggered(self, _checked: bool = False) -> None:
        # Qt flips a checkable action before triggered fires; only set_checked owns the state.
        try:
            self.execute()
        finally:
            if self.action.isCheckable() and self._checked is not None:
                self.action.setChecked(self._checked)

    def execute(self) -> Any:
        if not self.action.isEnabled():
            _LOGGER.debug("Command.execute skipped disabled id=%s", self.command_id)
            return None
        _LOGGER.debug("Command.execute id=%s", self.command_id)
        return self._handler()

    def set_checked(self, checked: bool) -> None:
        checked = bool(checked)
        self.action.setCheckable(True)
        self.action.setChecked(checked)
        if self._checked == checked:
            return
        self._checked = checked
        self.checkedStateChanged.emit(checked)

    def is_checked(self) -> bool:
        return bool(self._checked)

    def set_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if self.action.isEnabled() == enabled:
            return
        self.action.setEnabled(enabled)
        self.enabledStateChanged.emit(enabled)

    def is_enabled(self) -> bool:
        return self.action.isEnabled()


class CommandManager(QObject):
    commandRegistered = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._commands: dict[str, Command] = {}

    def register(self, label: str, command_id: str, handler: Callable[[], Any]) -> Command:
        if not str(label or "").strip() or not str(command_id or "").strip():
            raise CommandRegistrationError(f"Command needs a label and an id (label={label!r}, id={command_id!r})")
        if not callable(handler):
            raise CommandRegistrationError(f"Command {command_id!r} handler is not callable")
        if command_id in self._commands:
            raise CommandRegistrationError(f"Command {command_id!r} is already registered")
        command = Command(label, command_id, handler, self)
        self._commands[command_id] = command
        _LOGGER.debug("CommandManager.register id=%s label=%s", command_id, label)
        self.commandRegistered.emit(command_id)
        return command

    def unregister(self, command_id: str) -> bool:
        command = self._commands.pop(command_id, None)
        if command is None:
            return False
        command.deleteLater()
        _LOGGER.debug("CommandManager.unregister id=%s", command_id)
        return True

    def get(self, command_id: str) -> Command | None:
        return self._commands.get(command_id)

    def get_all(self) -> list[str]:
        return list(self._commands)

    def execute(self, command_id: str) -> Any:
        command = self._commands.get(command_id)
        if command is None:
            raise CommandNotFoundError(f"No command registered for {command_id!r}")
        return command.execute()
