from __future__ import annotations

from ..logging_utils import DEFAULT_LOG_LEVEL

OPTION_DEFAULTS: dict[str, bool] = {
    "showLineNumbers": True,
    "styleActiveLine": False,
    "wordWrap": True,
    "closeBrackets": False,
}


def build_default_settings() -> dict:
    settings: dict = dict(OPTION_DEFAULTS)
    settings["log_level"] = DEFAULT_LOG_LEVEL
    return settings
