from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .fixes import FixResult, apply_fixes
from .rules import CompiledOptions, Options, Report, check_document, compile_options
from .syntax import create_document, document_for_path

logger = logging.getLogger(__name__)

OptionsLike = Union[Options, CompiledOptions, None]


def check_source(text: str, ext: str = "js", options: OptionsLike = None) -> List[Report]:
    """
    Check comment placement in source text.

    Args:
        text: JavaScript or TypeScript source
        ext: File extension selecting the grammar ("js", "ts", "tsx", ...)
        options: Rule options (defaults when None)

    Returns:
        Reports sorted by position
    """
    compiled = compile_options(options)
    return check_document(create_document(text, ext), compiled)


def fix_source(text: str, ext: str = "js", options: OptionsLike = None) -> FixResult:
    """Check source text and apply every fix."""
    return apply_fixes(text, check_source(text, ext, options))


@dataclass
class FileResult:
    """Outcome of checking one file."""
    path: Path
    reports: List[Report] = field(default_factory=list)
    parse_error: bool = False
    fixed: bool = False


def check_file(path: Path, options: OptionsLike = None, fix: bool = False) -> FileResult:
    """
    Check one file, optionally rewriting it with the fixes applied.

    Files with syntax errors are not checked, so no fix is ever written
    into a file that did not parse.
    """
    compiled = compile_options(options)
    doc = document_for_path(path)
    if doc.has_error():
        logger.warning("Skipping %s: syntax errors", path)
        return FileResult(path=path, parse_error=True)

    reports = check_document(doc, compiled)
    logger.debug("%s: %d report(s)", path, len(reports))
    result = FileResult(path=path, reports=reports)

    if fix and reports:
        outcome = apply_fixes(doc.text, reports)
        if outcome.changed:
            path.write_text(outcome.text, encoding="utf-8")
            result.fixed = True
        result.reports = outcome.skipped
    return result


__all__ = ["check_source", "fix_source", "check_file", "FileResult"]
