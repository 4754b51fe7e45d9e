from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional

from PySide6.QtWidgets import QApplication

from .app_settings import build_default_settings, normalize_option_settings
from .commands import CommandManager
from .editor import EditorOptions
from .lifecycle import AppInit
from .logging_utils import configure_app_logging, get_logger
from .option_handlers import DeferredOptionHandlers, install_option_handlers
from .preferences import PreferenceStore

LOGGER = get_logger(__name__)


@dataclass
class OptionsApp:
    app: QApplication
    prefs: PreferenceStore
    editor: EditorOptions
    commands: CommandManager
    app_init: AppInit
    option_handlers: DeferredOptionHandlers
    owns_app: bool = False

    def shutdown(self) -> None:
        self.option_handlers.dispose()
        LOGGER.info("Options app shut down")


def main(existing_app: Optional[QApplication] = None, settings: Optional[dict] = None) -> OptionsApp:
    app = existing_app or QApplication.instance()
    owns_app = app is None
    if owns_app:
        app = QApplication(sys.argv)
    defaults = build_default_settings()
    merged = normalize_option_settings({**defaults, **(settings or {})})
    configure_app_logging(merged.get("log_level"))
    LOGGER.info("App main() starting (owns_app=%s)", owns_app)

    prefs = PreferenceStore(defaults)
    prefs.reload(merged)
    editor = EditorOptions(prefs)
    commands = CommandManager()
    app_init = AppInit()
    option_handlers = install_option_handlers(app_init, commands, prefs, editor)
    app_init.fire_ready()
    LOGGER.info("App ready commands=%s", ", ".join(commands.get_all()))

    return OptionsApp(app, prefs, editor, commands, app_init, option_handlers, owns_app)
