"""Shared application settings helpers."""

from .coercion import coerce_bool, normalize_option_settings
from .defaults import OPTION_DEFAULTS, build_default_settings

__all__ = [
    "OPTION_DEFAULTS",
    "build_default_settings",
    "coerce_bool",
    "normalize_option_settings",
]
