"""Editor view option toggles kept in sync with preferences."""

from .errors import (
    CollaboratorUnavailableError,
    CommandNotFoundError,
    CommandRegistrationError,
    OptionHandlersInitError,
    OptionSyncError,
)
from .option_handlers import (
    DeferredOptionHandlers,
    OptionEntry,
    OptionHandlers,
    OptionRegistry,
    OptionStateSync,
    build_editor_option_registry,
    init_option_handlers,
    install_option_handlers,
    make_toggle_handler,
    subscribe_option_changes,
)

__all__ = [
    "CollaboratorUnavailableError",
    "CommandNotFoundError",
    "CommandRegistrationError",
    "DeferredOptionHandlers",
    "OptionEntry",
    "OptionHandlers",
    "OptionHandlersInitError",
    "OptionRegistry",
    "OptionStateSync",
    "OptionSyncError",
    "build_editor_option_registry",
    "init_option_handlers",
    "install_option_handlers",
    "make_toggle_handler",
    "subscribe_option_changes",
]
