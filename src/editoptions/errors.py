from __future__ import annotations


class OptionSyncError(RuntimeError):
    pass


class CommandRegistrationError(OptionSyncError):
    pass


class CommandNotFoundError(OptionSyncError):
    pass


class CollaboratorUnavailableError(OptionSyncError):
    """A process-lifetime service (command registry, preference store) is missing."""


class OptionHandlersInitError(OptionSyncError):
    pass
