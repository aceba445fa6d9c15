"""Command execution layer for result actions."""

from .base import Command
from .close_tab import CloseTabCommand
from .executor import CommandExecutor
from .flush_cache import FlushCacheCommand
from .switch_tab import SwitchTabCommand

__all__ = [
    "Command",
    "CommandExecutor",
    "CloseTabCommand",
    "FlushCacheCommand",
    "SwitchTabCommand",
]
