from __future__ import annotations

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Type

from .document import SourceDocument
from ..errors import UnsupportedFileError

__all__ = [
    "register_lazy",
    "create_document",
    "document_for_path",
    "supported_extensions",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str
    extensions: Tuple[str, ...]


# Lazy specs: ext -> where the document class lives
_LAZY_BY_EXT: Dict[str, _LazySpec] = {}

# Resolved classes by extension
_CLASS_BY_EXT: Dict[str, Type[SourceDocument]] = {}


def register_lazy(*, module: str, class_name: str, extensions: List[str] | Tuple[str, ...]) -> None:
    """
    Register a document class by name without importing its module.
    One class may be declared for several extensions.
    """
    spec = _LazySpec(module=module, class_name=class_name, extensions=tuple(e.lower() for e in extensions))
    for ext in spec.extensions:
        _LAZY_BY_EXT[ext] = spec


def _load_from_spec(spec: _LazySpec) -> Type[SourceDocument]:
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Document class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, SourceDocument):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of SourceDocument")
    for ext in spec.extensions:
        _CLASS_BY_EXT[ext] = cls
    return cls


def _normalize_ext(ext: str) -> str:
    ext = ext.lower()
    return ext if ext.startswith(".") else f".{ext}"


def _resolve_class(ext: str) -> Type[SourceDocument]:
    cls = _CLASS_BY_EXT.get(ext)
    if cls:
        return cls
    spec = _LAZY_BY_EXT.get(ext)
    if spec:
        return _load_from_spec(spec)
    raise UnsupportedFileError(f"Unsupported file extension: {ext or '<none>'}")


def create_document(text: str, ext: str = "js") -> SourceDocument:
    """
    Parse source text with the grammar registered for the extension.

    Args:
        text: Source code
        ext: File extension with or without the leading dot ("js", ".tsx")

    Returns:
        Parsed document

    Raises:
        UnsupportedFileError: If no grammar is registered for the extension
    """
    ext = _normalize_ext(ext)
    cls = _resolve_class(ext)
    return cls(text, ext.lstrip("."))


def document_for_path(path: Path) -> SourceDocument:
    """Read a file as UTF-8 and parse it."""
    return create_document(path.read_text(encoding="utf-8"), path.suffix)


def supported_extensions() -> List[str]:
    return sorted(_LAZY_BY_EXT)


register_lazy(
    module=".javascript",
    class_name="JavaScriptDocument",
    extensions=[".js", ".jsx", ".mjs", ".cjs"],
)
register_lazy(
    module=".typescript",
    class_name="TypeScriptDocument",
    extensions=[".ts", ".tsx", ".mts", ".cts"],
)
