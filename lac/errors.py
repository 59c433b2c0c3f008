"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LACUserError.

Programming errors and bugs should NOT inherit from LACUserError,
they propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Tuple


class LACUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    configuration issues, unsupported files, etc.
    """
    pass


class ConfigError(LACUserError):
    """Invalid configuration, with the path of the offending key."""

    def __init__(self, message: str, path: Tuple[str, ...] = ()):
        self.path = path
        prefix = f"{'.'.join(path)}: " if path else ""
        super().__init__(prefix + message)


class UnsupportedFileError(LACUserError):
    """No grammar is registered for the file extension."""
    pass


__all__ = ["LACUserError", "ConfigError", "UnsupportedFileError"]
