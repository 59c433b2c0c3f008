"""
Parsed source documents for JavaScript and TypeScript.
"""

from __future__ import annotations

from .document import SourceDocument
from .registry import create_document, document_for_path, supported_extensions
from .tokens import AnyToken, Comment, CommentKind, Token, TokenStream, is_comment_token, on_same_line

__all__ = [
    "SourceDocument",
    "create_document",
    "document_for_path",
    "supported_extensions",
    "AnyToken",
    "Comment",
    "CommentKind",
    "Token",
    "TokenStream",
    "is_comment_token",
    "on_same_line",
]
