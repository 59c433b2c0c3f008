"""
Token and comment model on top of tree-sitter leaves.
Provides the ordered token stream with adjacency queries.
"""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass
from typing import List, Optional, Union


class CommentKind(str, enum.Enum):
    """Kind of comment token."""
    LINE = "Line"
    BLOCK = "Block"
    SHEBANG = "Shebang"


@dataclass(frozen=True)
class Token:
    """Non-comment lexical unit (a tree-sitter leaf)."""
    type: str
    start: int  # char offset
    end: int
    start_line: int  # 1-based
    end_line: int

    is_comment = False


@dataclass(frozen=True)
class Comment:
    """Comment token with its text stripped of delimiters."""
    kind: CommentKind
    value: str
    start: int  # char offset
    end: int
    start_line: int  # 1-based
    end_line: int
    column: int  # 0-based, in chars
    start_byte: int
    end_byte: int

    is_comment = True

    @staticmethod
    def parse_value(kind: CommentKind, text: str) -> str:
        """Strip comment delimiters from raw comment text."""
        if kind is CommentKind.LINE:
            return text[2:]
        if kind is CommentKind.BLOCK:
            return text[2:-2] if text.endswith("*/") and len(text) >= 4 else text[2:]
        return text[2:]  # shebang


AnyToken = Union[Token, Comment]


def is_comment_token(token: Optional[AnyToken]) -> bool:
    return token is not None and token.is_comment


def on_same_line(left: AnyToken, right: AnyToken) -> bool:
    """True if `left` ends on the line where `right` starts."""
    return left.end_line == right.start_line


class TokenStream:
    """
    Ordered sequence of tokens and comments of a single document.

    Comments and tokens are interleaved by start offset, so neighbours can be
    looked up with or without comments.
    """

    def __init__(self, items: List[AnyToken]):
        self._items = sorted(items, key=lambda t: (t.start, t.end))
        self._starts = [t.start for t in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @property
    def comments(self) -> List[Comment]:
        return [t for t in self._items if isinstance(t, Comment)]

    def _index_of(self, token: AnyToken) -> int:
        i = bisect.bisect_left(self._starts, token.start)
        while i < len(self._items) and self._items[i].start == token.start:
            if self._items[i] == token:
                return i
            i += 1
        raise ValueError(f"Token not in stream: {token!r}")

    def before(self, token: AnyToken, include_comments: bool = False) -> Optional[AnyToken]:
        """
        Get the token immediately before `token`.

        Args:
            token: Token or comment from this stream
            include_comments: Whether comments count as neighbours

        Returns:
            Previous token, or None at the start of the file
        """
        i = self._index_of(token) - 1
        while i >= 0:
            candidate = self._items[i]
            if include_comments or not candidate.is_comment:
                return candidate
            i -= 1
        return None

    def after(self, token: AnyToken, include_comments: bool = False) -> Optional[AnyToken]:
        """
        Get the token immediately after `token`.

        Args:
            token: Token or comment from this stream
            include_comments: Whether comments count as neighbours

        Returns:
            Next token, or None at the end of the file
        """
        i = self._index_of(token) + 1
        while i < len(self._items):
            candidate = self._items[i]
            if include_comments or not candidate.is_comment:
                return candidate
            i += 1
        return None


__all__ = [
    "CommentKind",
    "Token",
    "Comment",
    "AnyToken",
    "TokenStream",
    "is_comment_token",
    "on_same_line",
]
