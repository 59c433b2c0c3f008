"""
Rule options: the user-facing configuration record and its compiled form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Pattern, Tuple, Union

from ..errors import ConfigError
from ..syntax.tokens import CommentKind

# Directive-like comments that are never checked while default ignores are on
DEFAULT_IGNORE_PATTERN: Pattern[str] = re.compile(
    r"^\s*(?:eslint|jshint\s+|jslint\s+|istanbul\s+|globals?\s+|exported\s+|jscs)"
)


def _camel_to_snake(key: str) -> str:
    return re.sub(r"([A-Z])", r"_\1", key).lower()


def _snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class Options:
    """
    Options of the lines-around-comment rule.

    `allow_*` toggles are tri-state: None means "not configured", which
    differs from an explicit False for the class/block precedence rule.
    """
    before_block_comment: bool = True
    after_block_comment: bool = True
    before_line_comment: bool = True
    after_line_comment: bool = True

    allow_block_start: Optional[bool] = None
    allow_block_end: Optional[bool] = None
    allow_class_start: Optional[bool] = None
    allow_class_end: Optional[bool] = None
    allow_object_start: Optional[bool] = None
    allow_object_end: Optional[bool] = None
    allow_array_start: Optional[bool] = None
    allow_array_end: Optional[bool] = None
    allow_interface_start: Optional[bool] = None
    allow_interface_end: Optional[bool] = None
    allow_enum_start: Optional[bool] = None
    allow_enum_end: Optional[bool] = None
    allow_type_start: Optional[bool] = None
    allow_type_end: Optional[bool] = None
    allow_module_start: Optional[bool] = None
    allow_module_end: Optional[bool] = None

    apply_default_ignore_patterns: bool = True
    ignore_pattern: str = ""

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Options:
        """
        Build options from a configuration mapping with camelCase keys.

        Args:
            d: Mapping such as {"allowBlockStart": True, "ignorePattern": "^ pragma"}

        Returns:
            Options with unspecified keys left at their defaults

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        if d is None:
            return Options()
        if not isinstance(d, dict):
            raise ConfigError(f"expected mapping, got {type(d).__name__}", ("options",))

        by_name = {f.name: f for f in fields(Options)}
        kwargs: Dict[str, Any] = {}
        for key, value in d.items():
            name = _camel_to_snake(str(key))
            path = ("options", str(key))
            if name not in by_name:
                raise ConfigError("unknown option", path)

            if name == "ignore_pattern":
                if value is None:
                    value = ""
                if not isinstance(value, str):
                    raise ConfigError(f"expected string, got {type(value).__name__}", path)
            elif name.startswith("allow_"):
                if value is not None and not isinstance(value, bool):
                    raise ConfigError(f"expected boolean, got {type(value).__name__}", path)
            elif not isinstance(value, bool):
                raise ConfigError(f"expected boolean, got {type(value).__name__}", path)
            kwargs[name] = value

        return Options(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Export configured values with camelCase keys (unset toggles omitted)."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            out[_snake_to_camel(f.name)] = value
        return out

    def merged(self, overrides: Optional[Dict[str, Any]]) -> Options:
        """Return a copy with camelCase overrides applied on top."""
        if not overrides:
            return self
        patch = Options.from_dict(overrides)
        changes = {_camel_to_snake(str(k)): getattr(patch, _camel_to_snake(str(k))) for k in overrides}
        return replace(self, **changes)

    def compile(self) -> CompiledOptions:
        """
        Compile regular expressions once per configuration.

        Raises:
            ConfigError: If `ignore_pattern` is not a valid regular expression
        """
        custom: Optional[Pattern[str]] = None
        if self.ignore_pattern:
            try:
                custom = re.compile(self.ignore_pattern)
            except re.error as e:
                raise ConfigError(f"invalid regular expression {self.ignore_pattern!r}: {e}", ("options", "ignorePattern")) from e
        return CompiledOptions(self, custom)


@dataclass(frozen=True)
class CompiledOptions:
    """Options plus the patterns compiled from them. Immutable."""
    options: Options
    custom_ignore: Optional[Pattern[str]] = None

    def is_ignored(self, comment_value: str) -> bool:
        """True if the comment text matches a default or custom ignore pattern."""
        if self.options.apply_default_ignore_patterns and DEFAULT_IGNORE_PATTERN.search(comment_value):
            return True
        if self.custom_ignore is not None and self.custom_ignore.search(comment_value):
            return True
        return False

    def requested(self, kind: CommentKind) -> Tuple[bool, bool]:
        """(before, after) flags configured for a comment kind."""
        o = self.options
        if kind is CommentKind.LINE:
            return o.before_line_comment, o.after_line_comment
        if kind is CommentKind.BLOCK:
            return o.before_block_comment, o.after_block_comment
        return False, False


def compile_options(options: Union[Options, CompiledOptions, None]) -> CompiledOptions:
    """Accept options in any form and return them compiled (defaults for None)."""
    if options is None:
        options = Options()
    if isinstance(options, Options):
        options = options.compile()
    return options


__all__ = ["Options", "CompiledOptions", "DEFAULT_IGNORE_PATTERN", "compile_options"]
