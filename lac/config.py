"""
Configuration file loader.

Reads `lac.yaml` / `.lac.yaml` (or an explicit path) with rule options and
file selection patterns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .rules.options import Options

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

CONFIG_FILENAMES = ("lac.yaml", ".lac.yaml")

DEFAULT_EXCLUDE = ["node_modules/", ".git/"]


@dataclass
class FilesCfg:
    """Which files to check."""
    include: List[str] = field(default_factory=list)  # empty means everything
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    extensions: Optional[List[str]] = None  # None means all supported

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> FilesCfg:
        if d is None:
            return FilesCfg()
        if not isinstance(d, dict):
            raise ConfigError(f"expected mapping, got {type(d).__name__}", ("files",))

        unknown = set(d) - {"include", "exclude", "extensions"}
        if unknown:
            raise ConfigError(f"unexpected keys: {sorted(unknown)!r}", ("files",))

        cfg = FilesCfg()
        if "include" in d:
            cfg.include = _str_list(d["include"], ("files", "include"))
        if "exclude" in d:
            cfg.exclude = _str_list(d["exclude"], ("files", "exclude"))
        if d.get("extensions") is not None:
            exts = _str_list(d["extensions"], ("files", "extensions"))
            cfg.extensions = [e.lower() if e.startswith(".") else f".{e.lower()}" for e in exts]
        return cfg


@dataclass
class Config:
    """Top-level configuration."""
    options: Options = field(default_factory=Options)
    files: FilesCfg = field(default_factory=FilesCfg)
    source: Optional[Path] = None

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], source: Optional[Path] = None) -> Config:
        d = d or {}
        unknown = set(d) - {"options", "files"}
        if unknown:
            raise ConfigError(f"unexpected keys: {sorted(unknown)!r}")
        return Config(
            options=Options.from_dict(d.get("options")),
            files=FilesCfg.from_dict(d.get("files")),
            source=source,
        )


def _str_list(value: Any, path: tuple) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError("expected a string or a list of strings", path)
    return list(value)


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file that must hold a mapping (an empty file is an empty mapping)."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def find_config(root: Path) -> Optional[Path]:
    """Find the configuration file in a directory."""
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Optional[Path] = None, root: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        path: Explicit configuration file; must exist
        root: Directory searched for `lac.yaml` / `.lac.yaml` when no path is given

    Returns:
        Config; defaults when no file was found

    Raises:
        ConfigError: If the file is missing, malformed or has invalid values
    """
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = find_config(root or Path.cwd())
        if path is None:
            logger.debug("No configuration file found, using defaults")
            return Config()

    logger.debug("Loading configuration from %s", path)
    cfg = Config.from_dict(_read_yaml_map(path), source=path)
    # surface an invalid ignorePattern at load time
    cfg.options.compile()
    return cfg


__all__ = ["Config", "FilesCfg", "CONFIG_FILENAMES", "find_config", "load_config"]
