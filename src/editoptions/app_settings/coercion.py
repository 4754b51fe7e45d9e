from __future__ import annotations

from .defaults import OPTION_DEFAULTS


def coerce_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    return default


def normalize_option_settings(settings: dict) -> dict:
    for key, default in OPTION_DEFAULTS.items():
        settings[key] = coerce_bool(settings.get(key, default), default=default)
    return settings
