"""
The lines-around-comment rule.
"""

from __future__ import annotations

from .checker import (
    MESSAGES,
    RULE_NAME,
    Direction,
    Fix,
    LinesAroundCommentChecker,
    Report,
    check_document,
)
from .containers import Boundary, BoundaryClassifier, ContainerKind, container_kind
from .exceptions import exception_allowed
from .line_index import comment_line_numbers, empty_line_numbers, occupied_lines
from .options import DEFAULT_IGNORE_PATTERN, CompiledOptions, Options, compile_options

__all__ = [
    "MESSAGES",
    "RULE_NAME",
    "Direction",
    "Fix",
    "LinesAroundCommentChecker",
    "Report",
    "check_document",
    "Boundary",
    "BoundaryClassifier",
    "ContainerKind",
    "container_kind",
    "exception_allowed",
    "comment_line_numbers",
    "empty_line_numbers",
    "occupied_lines",
    "DEFAULT_IGNORE_PATTERN",
    "CompiledOptions",
    "Options",
    "compile_options",
]
