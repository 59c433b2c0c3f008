"""
Exception resolver: decides whether a boundary allowance waives the
blank-line requirement before or after a comment.
"""

from __future__ import annotations

from typing import Optional

from .containers import Boundary, BoundaryClassifier, GROUPS
from .options import Options
from ..syntax.tokens import Comment

# Exception groups in evaluation order; "block" is special-cased below
EXCEPTION_GROUPS = ("block", "class", "object", "array", "interface", "enum", "type", "module")


def _toggle(options: Options, group: str, boundary: Boundary) -> Optional[bool]:
    return getattr(options, f"allow_{group}_{boundary.value}")


def group_allowed(
    options: Options,
    classifier: BoundaryClassifier,
    comment: Comment,
    group: str,
    boundary: Boundary,
) -> bool:
    """
    Whether one allowance applies: its toggle is on and the comment is at the
    matching boundary.

    The block allowance yields to an explicit `allowClassStart: false`
    (`allowClassEnd: false`) when the comment is also at a class boundary.
    No such pairing exists for objects or arrays.
    """
    if not _toggle(options, group, boundary):
        return False
    if not classifier.is_at_group(comment, group, boundary):
        return False
    if group == "block" and _toggle(options, "class", boundary) is False:
        return not classifier.is_at_group(comment, "class", boundary)
    return True


def exception_allowed(
    options: Options,
    classifier: BoundaryClassifier,
    comment: Comment,
    boundary: Boundary,
) -> bool:
    """
    True if any allowance waives the check at this boundary.

    Args:
        options: Rule options
        classifier: Boundary classifier of the comment's document
        comment: Comment being checked
        boundary: START waives the "before" check, END the "after" check
    """
    return any(
        group_allowed(options, classifier, comment, group, boundary)
        for group in EXCEPTION_GROUPS
    )


__all__ = ["EXCEPTION_GROUPS", "group_allowed", "exception_allowed"]
