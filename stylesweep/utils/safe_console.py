"""Encoding-safe Console wrapper for Rich.

Wraps Rich's Console to sanitize Unicode icons on terminals that don't
support UTF-8.
"""
import sys
from typing import Any

from rich.console import Console

from .logger import sanitize_for_terminal, is_utf8_capable


class SafeConsole(Console):
    """Console that replaces Unicode icons with ASCII on non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        """Initialize SafeConsole with UTF-8 capability detection.

        All arguments are passed through to Rich's Console.
        """
        self._needs_sanitization = not is_utf8_capable()

        if self._needs_sanitization and sys.platform == 'win32':
            kwargs.setdefault('legacy_windows', True)

        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        """Print with automatic Unicode sanitization of string objects."""
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)
