"""
Placement checker: requires blank lines around comments.

Runs a program-wide pass over every comment, then the extension hooks
registered for TypeScript-only node types, and produces de-duplicated
reports that each carry a single-newline insertion fix.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from tree_sitter import Node

from .containers import Boundary, BoundaryClassifier
from .exceptions import exception_allowed
from .line_index import occupied_lines
from .options import CompiledOptions, Options, compile_options
from ..syntax.document import SourceDocument
from ..syntax.tokens import Comment, CommentKind, is_comment_token, on_same_line

logger = logging.getLogger(__name__)

RULE_NAME = "lines-around-comment"


class Direction(str, enum.Enum):
    BEFORE = "before"
    AFTER = "after"

    @property
    def boundary(self) -> Boundary:
        return Boundary.START if self is Direction.BEFORE else Boundary.END


MESSAGES: Dict[str, str] = {
    Direction.BEFORE.value: "Expected line before comment.",
    Direction.AFTER.value: "Expected line after comment.",
}


@dataclass(frozen=True)
class Fix:
    """Text insertion at a char offset."""
    offset: int
    text: str = "\n"


@dataclass(frozen=True)
class Report:
    """A single violation located at a comment."""
    comment: Comment
    message_id: str
    fix: Fix

    @property
    def message(self) -> str:
        return MESSAGES[self.message_id]

    @property
    def line(self) -> int:
        return self.comment.start_line

    @property
    def column(self) -> int:
        """1-based column of the comment start."""
        return self.comment.column + 1

    @property
    def key(self) -> Tuple[int, str]:
        return self.comment.start, self.message_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": RULE_NAME,
            "messageId": self.message_id,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "endLine": self.comment.end_line,
            "fix": {"range": [self.fix.offset, self.fix.offset], "text": self.fix.text},
        }


class LinesAroundCommentChecker:
    """
    Comment placement checker for one parsed document.

    All derived state (occupied lines, container lookups, reported keys)
    belongs to this instance and is discarded with it.
    """

    # node type -> method name of the extension hook
    EXTENSION_HOOKS: Dict[str, str] = {
        "enum_declaration": "check_lines_around_comments",
        "type_alias_declaration": "check_lines_around_comments",
        "interface_declaration": "check_lines_around_comments",
    }

    def __init__(self, doc: SourceDocument, options: Union[Options, CompiledOptions, None] = None):
        options = compile_options(options)

        self.doc = doc
        self.compiled: CompiledOptions = options
        self.options: Options = options.options
        self.occupied = occupied_lines(doc.lines, doc.comments)
        self.classifier = BoundaryClassifier(doc)

        self._reports: List[Report] = []
        self._reported: Set[Tuple[int, str]] = set()

    # --- entry points ---

    def run(self) -> List[Report]:
        """
        Check every comment of the document.

        Returns:
            Reports sorted by position, at most one per comment and direction
        """
        self.check_program()

        for node, _capture in self.doc.query_opt("comment_scopes"):
            method = self.EXTENSION_HOOKS.get(node.type)
            if method:
                getattr(self, method)(node)

        logger.debug(
            "%d comment(s) checked, %d report(s)", len(self.doc.comments), len(self._reports)
        )
        return sorted(self._reports, key=lambda r: (r.comment.start, r.message_id != Direction.BEFORE.value))

    def check_program(self) -> None:
        """Program-wide pass over every comment."""
        for comment in self.doc.comments:
            self._check_with_kind_flags(comment)

    def check_lines_around_comments(self, node: Node) -> None:
        """Extension hook: re-check all comments contained in the node."""
        for comment in self.doc.comments_inside(node):
            self._check_with_kind_flags(comment)

    def _check_with_kind_flags(self, comment: Comment) -> None:
        before, after = self.compiled.requested(comment.kind)
        if comment.kind is CommentKind.SHEBANG or not (before or after):
            return
        self.check_for_empty_line(comment, before=before, after=after)

    # --- placement logic ---

    def is_inline(self, comment: Comment) -> bool:
        """
        True if code shares a line with the comment on either side.
        Other comments in between are skipped.
        """
        tokens = self.doc.tokens
        previous = tokens.before(comment)
        if previous is not None and on_same_line(previous, comment):
            return True
        following = tokens.after(comment)
        if following is not None and on_same_line(comment, following):
            return True
        return False

    def check_for_empty_line(self, comment: Comment, before: bool, after: bool) -> None:
        """
        Check a comment for blank lines around it.

        Args:
            comment: Comment to check
            before: Whether a blank line before is required
            after: Whether a blank line after is required
        """
        if self.compiled.is_ignored(comment.value):
            return

        # top and bottom of the file need no blank line
        if comment.start_line - 1 < 1:
            before = False
        if comment.end_line + 1 > self.doc.line_count:
            after = False

        if self.is_inline(comment):
            return

        for direction, requested in ((Direction.BEFORE, before), (Direction.AFTER, after)):
            if not requested:
                continue
            report = self._check_direction(comment, direction)
            if report is not None:
                self._add(report)

    def _check_direction(self, comment: Comment, direction: Direction) -> Optional[Report]:
        if exception_allowed(self.options, self.classifier, comment, direction.boundary):
            return None

        tokens = self.doc.tokens
        if direction is Direction.BEFORE:
            line = comment.start_line - 1
            neighbour = tokens.before(comment, include_comments=True)
            touching = neighbour is not None and is_comment_token(neighbour) and on_same_line(neighbour, comment)
            fix = Fix(comment.start - comment.column)
        else:
            line = comment.end_line + 1
            neighbour = tokens.after(comment, include_comments=True)
            touching = neighbour is not None and is_comment_token(neighbour) and on_same_line(comment, neighbour)
            fix = Fix(comment.end)

        if line in self.occupied or touching:
            return None
        return Report(comment=comment, message_id=direction.value, fix=fix)

    def _add(self, report: Report) -> None:
        if report.key in self._reported:
            return
        self._reported.add(report.key)
        self._reports.append(report)


def check_document(doc: SourceDocument, options: Union[Options, CompiledOptions, None] = None) -> List[Report]:
    """Run the checker over a parsed document."""
    return LinesAroundCommentChecker(doc, options).run()


__all__ = [
    "RULE_NAME",
    "Direction",
    "MESSAGES",
    "Fix",
    "Report",
    "LinesAroundCommentChecker",
    "check_document",
]
