"""
TypeScript document: grammar and query definitions.
"""

from __future__ import annotations

from typing import Dict

from tree_sitter import Language

from .document import SourceDocument

QUERIES = {
    # Nodes whose comments get an extra placement pass
    "comment_scopes": """
    (enum_declaration) @enum
    (type_alias_declaration) @type_alias
    (interface_declaration) @interface
    """,
}


class TypeScriptDocument(SourceDocument):

    def get_language(self) -> Language:
        import tree_sitter_typescript as tsts
        # TS and TSX have two different grammars in one package
        if self.ext == "tsx":
            return Language(tsts.language_tsx())
        return Language(tsts.language_typescript())

    def get_query_definitions(self) -> Dict[str, str]:
        return QUERIES
