"""
Insertion-only text editor that applies report fixes.
Each fix is validated on its own so one bad fix never blocks the rest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .rules.checker import Fix, Report

logger = logging.getLogger(__name__)


@dataclass
class Insertion:
    """Text to insert at a character position."""
    offset: int
    text: str
    report: Optional[Report] = None


@dataclass
class FixResult:
    """Outcome of applying fixes to a text."""
    text: str
    applied: List[Report] = field(default_factory=list)
    skipped: List[Report] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


class FixEditor:
    """
    Collects insertions against an original text and applies them in one go.
    Two insertions at the same position collapse into the first one.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.insertions: List[Insertion] = []
        self.rejected: List[Insertion] = []

    def add_insertion(self, position_char: int, content: str, report: Optional[Report] = None) -> bool:
        """
        Add an insertion before the character at `position_char`.

        Returns:
            True if the insertion was accepted
        """
        insertion = Insertion(position_char, content, report)

        if not 0 <= position_char <= len(self.original_text):
            logger.warning(
                "Dropping fix at offset %d: outside text of length %d",
                position_char, len(self.original_text),
            )
            self.rejected.append(insertion)
            return False

        for existing in self.insertions:
            if existing.offset == position_char:
                self.rejected.append(insertion)
                return False

        self.insertions.append(insertion)
        return True

    def add_fix(self, fix: Fix, report: Optional[Report] = None) -> bool:
        return self.add_insertion(fix.offset, fix.text, report)

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all accepted insertions.

        Returns:
            Tuple of (modified_text, statistics)
        """
        if not self.insertions:
            return self.original_text, {"edits_applied": 0, "chars_added": 0}

        result_text = self.original_text
        chars_added = 0
        # from end to beginning so earlier offsets stay valid
        for insertion in sorted(self.insertions, key=lambda e: e.offset, reverse=True):
            result_text = result_text[:insertion.offset] + insertion.text + result_text[insertion.offset:]
            chars_added += len(insertion.text)

        return result_text, {"edits_applied": len(self.insertions), "chars_added": chars_added}


def apply_fixes(text: str, reports: Iterable[Report]) -> FixResult:
    """
    Apply the fixes of all reports to the text they were produced for.

    Args:
        text: Original source text
        reports: Reports produced for `text`

    Returns:
        FixResult with the new text and the reports that were (not) applied
    """
    editor = FixEditor(text)
    result = FixResult(text=text)
    for report in reports:
        if editor.add_fix(report.fix, report):
            result.applied.append(report)
        else:
            result.skipped.append(report)

    result.text, stats = editor.apply_edits()
    logger.debug("Applied %d fix(es), %d skipped", stats["edits_applied"], len(result.skipped))
    return result


__all__ = ["Insertion", "FixEditor", "FixResult", "apply_fixes"]
