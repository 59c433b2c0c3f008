"""
File discovery for the command line.

Expands the given paths into source files, filtering directories with
gitwildmatch include/exclude patterns and by extension.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Optional

import pathspec

from .config import FilesCfg
from .syntax import supported_extensions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledPatterns:
    """Compiled include/exclude patterns for fast checks."""
    include_spec: Optional[pathspec.PathSpec]
    exclude_spec: Optional[pathspec.PathSpec]

    @classmethod
    def compile(cls, include: List[str], exclude: List[str]) -> CompiledPatterns:
        """
        Compile pattern lists into PathSpec objects.
        Patterns are lowercased for case-insensitive matching.
        """
        include_lower = [pat.lower() for pat in include]
        exclude_lower = [pat.lower() for pat in exclude]
        return cls(
            include_spec=pathspec.PathSpec.from_lines("gitwildmatch", include_lower) if include_lower else None,
            exclude_spec=pathspec.PathSpec.from_lines("gitwildmatch", exclude_lower) if exclude_lower else None,
        )

    def excludes_dir(self, rel: str) -> bool:
        return self.exclude_spec is not None and self.exclude_spec.match_file(rel.lower().rstrip("/") + "/")

    def accepts_file(self, rel: str) -> bool:
        rel = rel.lower()
        if self.exclude_spec is not None and self.exclude_spec.match_file(rel):
            return False
        if self.include_spec is not None:
            return self.include_spec.match_file(rel)
        return True


class FileCollector:
    """Collects source files under a set of paths."""

    def __init__(self, cfg: FilesCfg):
        self.cfg = cfg
        self.patterns = CompiledPatterns.compile(cfg.include, cfg.exclude)
        self.extensions = set(cfg.extensions) if cfg.extensions is not None else set(supported_extensions())

    def has_supported_ext(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def collect(self, paths: Iterable[Path]) -> List[Path]:
        """
        Expand paths into a sorted, de-duplicated list of files.

        Files named explicitly are kept when their extension is supported;
        directories are walked and filtered by the patterns.
        """
        seen = set()
        result: List[Path] = []
        for path in paths:
            for file in self._expand(path):
                key = file.resolve()
                if key not in seen:
                    seen.add(key)
                    result.append(file)
        return result

    def _expand(self, path: Path) -> Iterator[Path]:
        if path.is_file():
            if self.has_supported_ext(path):
                yield path
            else:
                logger.warning("Skipping %s: unsupported file extension", path)
            return

        if not path.is_dir():
            logger.warning("Skipping %s: no such file or directory", path)
            return

        for dirpath, dirnames, filenames in os.walk(path):
            current = Path(dirpath)
            rel_dir = current.relative_to(path)
            # prune excluded directories in place
            dirnames[:] = sorted(
                d for d in dirnames
                if not self.patterns.excludes_dir(_posix(rel_dir / d))
            )
            for name in sorted(filenames):
                file = current / name
                if not self.has_supported_ext(file):
                    continue
                if self.patterns.accepts_file(_posix(rel_dir / name)):
                    yield file


def _posix(rel: Path) -> str:
    return str(PurePosixPath(*rel.parts))


__all__ = ["CompiledPatterns", "FileCollector"]
