import os
import sys
import unittest
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (SRC, Path(__file__).resolve().parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from PySide6.QtWidgets import QApplication

from editoptions.errors import CollaboratorUnavailableError, OptionHandlersInitError
from editoptions.lifecycle import AppInit
from editoptions.option_handlers import init_option_handlers, install_option_handlers
from fakes import FakeCommands, FakeEditor, FakePrefs

ALL_IDS = (
    "view.toggleLineNumbers",
    "view.toggleActiveLine",
    "view.toggleWordWrap",
    "view.toggleCloseBrackets",
)


class InitOptionHandlersTests(unittest.TestCase):
    def setUp(self) -> None:
        self.commands = FakeCommands()
        self.prefs = FakePrefs()
        self.editor = FakeEditor(showLineNumbers=True, styleActiveLine=True, wordWrap=False, closeBrackets=False)

    def test_registers_commands_with_labels(self) -> None:
        handlers = init_option_handlers(self.commands, self.prefs, self.editor)
        self.assertEqual(handlers.command_ids, ALL_IDS)
        self.assertEqual(self.commands.get("view.toggleActiveLine").label, "Highlight Active Line")
        self.assertEqual(self.commands.get("view.toggleCloseBrackets").label, "Auto Close Braces")

    def test_initial_sync_matches_editor(self) -> None:
        handlers = init_option_handlers(self.commands, self.prefs, self.editor)
        for entry in handlers.registry:
            self.assertEqual(self.commands.get(entry.command_id).checked, entry.getter())
        self.assertIs(self.commands.get("view.toggleLineNumbers").checked, True)

    def test_subscribes_once_per_option(self) -> None:
        init_option_handlers(self.commands, self.prefs, self.editor)
        self.assertEqual(sorted(self.prefs.handlers), sorted(["showLineNumbers", "styleActiveLine", "wordWrap", "closeBrackets"]))
        self.assertEqual(self.prefs.subscriber_count(), 4)

    def test_external_change_propagates(self) -> None:
        init_option_handlers(self.commands, self.prefs, self.editor)
        self.editor.set_word_wrap(True)
        self.assertIs(self.commands.get("view.toggleWordWrap").checked, False)
        self.prefs.fire("wordWrap", True)
        self.assertIs(self.commands.get("view.toggleWordWrap").checked, True)

    def test_unrelated_notification_is_ignored(self) -> None:
        init_option_handlers(self.commands, self.prefs, self.editor)
        writes = {cid: cmd.writes for cid, cmd in self.commands.commands.items()}
        self.prefs.fire("tabSize", 8)
        self.assertEqual({cid: cmd.writes for cid, cmd in self.commands.commands.items()}, writes)

    def test_registered_handler_toggles_without_notification(self) -> None:
        init_option_handlers(self.commands, self.prefs, self.editor)
        self.commands.get("view.toggleCloseBrackets").handler()
        self.assertTrue(self.editor.get_close_brackets())
        self.assertIs(self.commands.get("view.toggleCloseBrackets").checked, True)
        self.assertIs(self.commands.get("view.toggleLineNumbers").checked, True)
        self.assertIs(self.commands.get("view.toggleActiveLine").checked, True)
        self.assertIs(self.commands.get("view.toggleWordWrap").checked, False)

    def test_missing_preference_store_is_fatal(self) -> None:
        with self.assertRaises(CollaboratorUnavailableError):
            init_option_handlers(self.commands, None, self.editor)
        self.assertEqual(self.commands.commands, {})

    def test_missing_command_registry_is_fatal(self) -> None:
        with self.assertRaises(CollaboratorUnavailableError):
            init_option_handlers(None, self.prefs, self.editor)

    def test_registry_without_unregister_is_rejected(self) -> None:
        class _RegisterOnly:
            def __init__(self) -> None:
                self.commands = {}

            def register(self, label, command_id, handler):
                self.commands[command_id] = handler

            def get(self, command_id):
                return None

        commands = _RegisterOnly()
        with self.assertRaises(CollaboratorUnavailableError):
            init_option_handlers(commands, self.prefs, self.editor)
        self.assertEqual(commands.commands, {})
        self.assertEqual(self.prefs.subscriber_count(), 0)

    def test_duplicate_command_rolls_back(self) -> None:
        existing = self.commands.register("Word Wrap", "view.toggleWordWrap", lambda: None)
        with self.assertRaises(OptionHandlersInitError) as ctx:
            init_option_handlers(self.commands, self.prefs, self.editor)
        self.assertIsInstance(ctx.exception.__cause__, ValueError)
        self.assertEqual(list(self.commands.commands), ["view.toggleWordWrap"])
        self.assertIs(self.commands.get("view.toggleWordWrap"), existing)
        self.assertEqual(self.commands.unregistered, ["view.toggleActiveLine", "view.toggleLineNumbers"])
        self.assertEqual(self.prefs.subscriber_count(), 0)

    def test_failing_initial_sync_rolls_back(self) -> None:
        def _broken() -> bool:
            raise RuntimeError("boom")

        self.editor.get_close_brackets = _broken  # type: ignore[method-assign]
        with self.assertRaises(OptionHandlersInitError):
            init_option_handlers(self.commands, self.prefs, self.editor)
        self.assertEqual(self.commands.commands, {})
        self.assertEqual(self.prefs.subscriber_count(), 0)

    def test_dispose_unsubscribes_and_unregisters(self) -> None:
        handlers = init_option_handlers(self.commands, self.prefs, self.editor)
        handlers.dispose()
        handlers.dispose()
        self.assertTrue(handlers.disposed)
        self.assertEqual(self.commands.commands, {})
        self.assertEqual(self.prefs.subscriber_count(), 0)
        self.assertEqual(len(self.commands.unregistered), 4)

    def test_independent_instances(self) -> None:
        other_commands = FakeCommands()
        other_editor = FakeEditor(wordWrap=True)
        init_option_handlers(self.commands, self.prefs, self.editor)
        init_option_handlers(other_commands, FakePrefs(), other_editor)
        self.assertIs(self.commands.get("view.toggleWordWrap").checked, False)
        self.assertIs(other_commands.get("view.toggleWordWrap").checked, True)


class InstallOptionHandlersTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QApplication.instance() or QApplication([])

    def test_waits_for_ready(self) -> None:
        app_init = AppInit()
        commands = FakeCommands()
        deferred = install_option_handlers(app_init, commands, FakePrefs(), FakeEditor())
        self.assertIsNone(deferred.handlers)
        self.assertEqual(commands.commands, {})
        app_init.fire_ready()
        self.assertIsNotNone(deferred.handlers)
        self.assertEqual(sorted(commands.commands), sorted(ALL_IDS))

    def test_installing_after_ready_runs_immediately(self) -> None:
        app_init = AppInit()
        app_init.fire_ready()
        commands = FakeCommands()
        deferred = install_option_handlers(app_init, commands, FakePrefs(), FakeEditor())
        self.assertIsNotNone(deferred.handlers)
        self.assertEqual(len(commands.commands), 4)

    def test_dispose_before_ready_skips_init(self) -> None:
        app_init = AppInit()
        commands = FakeCommands()
        deferred = install_option_handlers(app_init, commands, FakePrefs(), FakeEditor())
        deferred.dispose()
        app_init.fire_ready()
        self.assertIsNone(deferred.handlers)
        self.assertEqual(commands.commands, {})

    def test_init_failure_surfaces_from_ready(self) -> None:
        app_init = AppInit()
        install_option_handlers(app_init, FakeCommands(), None, FakeEditor())
        with self.assertRaises(CollaboratorUnavailableError):
            app_init.fire_ready()


if __name__ == "__main__":
    unittest.main()
