"""Keeps editor view option commands checked in step with their preferences.

Preference changes from any source refresh the matching command's checked
state. Running a toggle command flips the editor option and refreshes the
command straight away instead of waiting for a change notification.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Protocol

from .commands import ids, strings
from .errors import CollaboratorUnavailableError, CommandNotFoundError, OptionHandlersInitError
from .logging_utils import get_logger

if TYPE_CHECKING:
    from .editor import EditorOptions
    from .lifecycle import AppInit

LOGGER = get_logger(__name__)

_COMMAND_ID_RE = re.compile(r"[a-z][A-Za-z0-9_]*(?:\.[a-z][A-Za-z0-9_]*)+")


class CheckableCommand(Protocol):
    def set_checked(self, checked: bool) -> None: ...


class CommandRegistry(Protocol):
    def register(self, label: str, command_id: str, handler: Callable[[], Any]) -> Any: ...

    def get(self, command_id: str) -> CheckableCommand | None: ...

    def unregister(self, command_id: str) -> Any: ...


class ChangeNotifier(Protocol):
    def on(self, event: str, name: str, handler: Callable[[str, Any], None]) -> Callable[[], None]: ...


@dataclass(frozen=True, slots=True)
class OptionEntry:
    name: str
    command_id: str
    label: str
    getter: Callable[[], bool]
    setter: Callable[[bool], None]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Option entry needs a preference name")
        if not isinstance(self.command_id, str) or not _COMMAND_ID_RE.fullmatch(self.command_id):
            raise ValueError(f"Malformed command id {self.command_id!r} for option {self.name!r}")
        if not callable(self.getter) or not callable(self.setter):
            raise ValueError(f"Option {self.name!r} needs a callable getter and setter")


class OptionRegistry:
    """Immutable lookup from preference name to its option entry."""

    def __init__(self, entries: Iterable[OptionEntry]) -> None:
        by_name: dict[str, OptionEntry] = {}
        command_ids: set[str] = set()
        for entry in entries:
            if entry.name in by_name:
                raise ValueError(f"Duplicate option name {entry.name!r}")
            if entry.command_id in command_ids:
                raise ValueError(f"Duplicate command id {entry.command_id!r}")
            by_name[entry.name] = entry
            command_ids.add(entry.command_id)
        self._entries = by_name

    def lookup(self, name: str) -> OptionEntry | None:
        return self._entries.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[OptionEntry]:
        return iter(tuple(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries


def build_editor_option_registry(editor: EditorOptions) -> OptionRegistry:
    return OptionRegistry(
        [
            OptionEntry(
                "showLineNumbers",
                ids.TOGGLE_LINE_NUMBERS,
                strings.CMD_TOGGLE_LINE_NUMBERS,
                editor.get_show_line_numbers,
                editor.set_show_line_numbers,
            ),
            OptionEntry(
                "styleActiveLine",
                ids.TOGGLE_ACTIVE_LINE,
                strings.CMD_TOGGLE_ACTIVE_LINE,
                editor.get_show_active_line,
                editor.set_show_active_line,
            ),
            OptionEntry(
                "wordWrap",
                ids.TOGGLE_WORD_WRAP,
                strings.CMD_TOGGLE_WORD_WRAP,
                editor.get_word_wrap,
                editor.set_word_wrap,
            ),
            OptionEntry(
                "closeBrackets",
                ids.TOGGLE_CLOSE_BRACKETS,
                strings.CMD_TOGGLE_CLOSE_BRACKETS,
                editor.get_close_brackets,
                editor.set_close_brackets,
            ),
        ]
    )


class OptionStateSync:
    def __init__(self, registry: OptionRegistry, commands: CommandRegistry) -> None:
        self._registry = registry
        self._commands = commands

    def sync(self, name: str) -> None:
        """Push the editor's current value for ``name`` into its command.

        Names outside the registry are ignored: the change channel is shared
        with every other preference.
        """
        entry = self._registry.lookup(name)
        if entry is None:
            return
        command = self._commands.get(entry.command_id)
        if command is None:
            raise CommandNotFoundError(f"Command {entry.command_id!r} for option {name!r} is not registered")
        value = bool(entry.getter())
        command.set_checked(value)
        LOGGER.debug("Option sync name=%s command=%s checked=%s", name, entry.command_id, value)

    def sync_all(self) -> None:
        for entry in self._registry:
            self.sync(entry.name)


def _require(service: Any, method: str, what: str) -> None:
    if service is None or not callable(getattr(service, method, None)):
        raise CollaboratorUnavailableError(f"{what} is not available")


def subscribe_option_changes(
    registry: OptionRegistry,
    prefs: ChangeNotifier,
    synchronizer: OptionStateSync,
) -> list[Callable[[], None]]:
    _require(prefs, "on", "Preference store")
    unsubscribers: list[Callable[[], None]] = []
    try:
        for entry in registry:
            unsubscribers.append(prefs.on("change", entry.name, _change_handler(entry.name, synchronizer)))
    except Exception:
        for unsubscribe in unsubscribers:
            unsubscribe()
        raise
    return unsubscribers


def _change_handler(name: str, synchronizer: OptionStateSync) -> Callable[..., None]:
    def _on_change(*_args: Any) -> None:
        synchronizer.sync(name)

    return _on_change


def make_toggle_handler(entry: OptionEntry, synchronizer: OptionStateSync) -> Callable[[], None]:
    def _toggle() -> None:
        entry.setter(not entry.getter())
        synchronizer.sync(entry.name)

    _toggle.__name__ = f"toggle_{entry.name}"
    return _toggle


@dataclass
class OptionHandlers:
    registry: OptionRegistry
    synchronizer: OptionStateSync
    _commands: Any = field(repr=False)
    _command_ids: list[str] = field(default_factory=list)
    _unsubscribers: list[Callable[[], None]] = field(default_factory=list)
    _disposed: bool = False

    @property
    def command_ids(self) -> tuple[str, ...]:
        return tuple(self._command_ids)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        for command_id in reversed(self._command_ids):
            self._commands.unregister(command_id)
        self._command_ids.clear()
        LOGGER.debug("Option handlers disposed")


def init_option_handlers(
    commands: CommandRegistry,
    prefs: ChangeNotifier,
    editor: EditorOptions | None = None,
    *,
    registry: OptionRegistry | None = None,
) -> OptionHandlers:
    _require(commands, "register", "Command registry")
    _require(commands, "get", "Command registry")
    _require(commands, "unregister", "Command registry")
    _require(prefs, "on", "Preference store")
    if registry is None:
        if editor is None:
            raise ValueError("init_option_handlers needs an editor or a registry")
        registry = build_editor_option_registry(editor)

    synchronizer = OptionStateSync(registry, commands)
    handlers = OptionHandlers(registry, synchronizer, commands)
    try:
        for entry in registry:
            commands.register(entry.label, entry.command_id, make_toggle_handler(entry, synchronizer))
            handlers._command_ids.append(entry.command_id)
        handlers._unsubscribers.extend(subscribe_option_changes(registry, prefs, synchronizer))
        synchronizer.sync_all()
    except Exception as exc:
        LOGGER.exception("Option handlers failed to initialize; rolling back")
        handlers.dispose()
        raise OptionHandlersInitError(f"Option handlers failed to initialize: {exc}") from exc
    LOGGER.info("Option handlers ready options=%s", ", ".join(registry.names()))
    return handlers


class DeferredOptionHandlers:
    """Option handlers that initialize once the host signals it is ready."""

    def __init__(self) -> None:
        self.handlers: OptionHandlers | None = None
        self._cancelled = False

    def _start(self, commands: CommandRegistry, prefs: ChangeNotifier, editor: EditorOptions) -> None:
        if self._cancelled:
            LOGGER.debug("Option handlers disposed before ready; skipping init")
            return
        self.handlers = init_option_handlers(commands, prefs, editor)

    def dispose(self) -> None:
        self._cancelled = True
        if self.handlers is not None:
            self.handlers.dispose()


def install_option_handlers(
    app_init: AppInit,
    commands: CommandRegistry,
    prefs: ChangeNotifier,
    editor: EditorOptions,
) -> DeferredOptionHandlers:
    deferred = DeferredOptionHandlers()
    app_init.html_ready(lambda: deferred._start(commands, prefs, editor))
    return deferred
