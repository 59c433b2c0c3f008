"""
lines-around-comment: requires blank lines around comments in JavaScript
and TypeScript sources and fixes the missing ones.
"""

from __future__ import annotations

from .engine import FileResult, check_file, check_source, fix_source
from .errors import ConfigError, LACUserError, UnsupportedFileError
from .fixes import FixResult, apply_fixes
from .rules import (
    CompiledOptions,
    Fix,
    LinesAroundCommentChecker,
    Options,
    Report,
    check_document,
)
from .syntax import create_document

__all__ = [
    "check_source",
    "fix_source",
    "check_file",
    "FileResult",
    "ConfigError",
    "LACUserError",
    "UnsupportedFileError",
    "FixResult",
    "apply_fixes",
    "CompiledOptions",
    "Fix",
    "LinesAroundCommentChecker",
    "Options",
    "Report",
    "check_document",
    "create_document",
]
