"""Utility modules for the tab query engine."""

from .applescript import AppleScriptExecutor, escape_script_string
from .text import normalize

__all__ = ["AppleScriptExecutor", "escape_script_string", "normalize"]
