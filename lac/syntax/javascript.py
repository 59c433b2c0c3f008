"""
JavaScript document: grammar and query definitions.
"""

from __future__ import annotations

from typing import Dict

from tree_sitter import Language

from .document import SourceDocument

QUERIES: Dict[str, str] = {}


class JavaScriptDocument(SourceDocument):

    def get_language(self) -> Language:
        import tree_sitter_javascript as tsjs
        return Language(tsjs.language())

    def get_query_definitions(self) -> Dict[str, str]:
        return QUERIES
