from __future__ import annotations

import sys

from PySide6.QtWidgets import QMainWindow

from .app import OptionsApp, main
from .logging_utils import get_logger

LOGGER = get_logger(__name__)


def build_window(options_app: OptionsApp) -> QMainWindow:
    window = QMainWindow()
    window.setWindowTitle("Editor Options")
    view_menu = window.menuBar().addMenu("&View")
    for command_id in options_app.commands.get_all():
        view_menu.addAction(options_app.commands.get(command_id).action)
    window.resize(480, 240)
    return window


def run() -> int:
    options_app = main()
    window = build_window(options_app)
    window.show()
    if not options_app.owns_app:
        return 0
    LOGGER.info("Entering Qt event loop")
    try:
        return options_app.app.exec()
    finally:
        options_app.shutdown()


if __name__ == "__main__":
    sys.exit(run())
