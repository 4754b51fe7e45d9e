from .store import CHANGE_EVENT, PreferenceStore

__all__ = ["CHANGE_EVENT", "PreferenceStore"]
