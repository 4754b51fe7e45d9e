from __future__ import annotations

from ..app_settings import OPTION_DEFAULTS, coerce_bool
from ..preferences import PreferenceStore


class EditorOptions:
    """Live editor view options, written through to the preference store."""

    def __init__(self, prefs: PreferenceStore) -> None:
        self._prefs = prefs

    def _read(self, name: str) -> bool:
        default = OPTION_DEFAULTS[name]
        return coerce_bool(self._prefs.get(name, default), default=default)

    def _write(self, name: str, value: bool) -> None:
        self._prefs.set(name, bool(value))

    def get_show_line_numbers(self) -> bool:
        return self._read("showLineNumbers")

    def set_show_line_numbers(self, value: bool) -> None:
        self._write("showLineNumbers", value)

    def get_show_active_line(self) -> bool:
        return self._read("styleActiveLine")

    def set_show_active_line(self, value: bool) -> None:
        self._write("styleActiveLine", value)

    def get_word_wrap(self) -> bool:
        return self._read("wordWrap")

    def set_word_wrap(self, value: bool) -> None:
        self._write("wordWrap", value)

    def get_close_brackets(self) -> bool:
        return self._read("closeBrackets")

    def set_close_brackets(self, value: bool) -> None:
        self._write("closeBrackets", value)
