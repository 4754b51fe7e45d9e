from . import ids, strings
from .manager import Command, CommandManager

__all__ = ["Command", "CommandManager", "ids", "strings"]
