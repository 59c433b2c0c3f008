"""
Line classification: blank lines and lines holding comments.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Set

from ..syntax.tokens import Comment


def empty_line_numbers(lines: Iterable[str]) -> Set[int]:
    """Return the 1-based numbers of lines that are blank after stripping."""
    return {num for num, line in enumerate(lines, start=1) if not line.strip()}


def comment_line_numbers(comments: Iterable[Comment]) -> Set[int]:
    """Return the start and end line numbers of every comment."""
    result: Set[int] = set()
    for comment in comments:
        result.add(comment.start_line)
        result.add(comment.end_line)
    return result


def occupied_lines(lines: Iterable[str], comments: Iterable[Comment]) -> FrozenSet[int]:
    """Lines that need no extra blank line next to a comment."""
    return frozenset(empty_line_numbers(lines) | comment_line_numbers(comments))


__all__ = ["empty_line_numbers", "comment_line_numbers", "occupied_lines"]
