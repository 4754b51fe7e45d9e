from .options import EditorOptions

__all__ = ["EditorOptions"]
