"""
Tree-sitter infrastructure for the comment checker.
Provides grammar loading, query management, the token stream and
position lookups used by the structural analysis.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree

from .tokens import AnyToken, Comment, CommentKind, Token, TokenStream

COMMENT_NODE_TYPES = frozenset({"comment", "hash_bang_line"})

# Child slots that hold a single statement/body node
SLOT_FIELDS = ("body", "consequence")

# Nodes whose `body` field is a statement list rather than a single node
LIST_BODY_TYPES = frozenset({"switch_case", "switch_default"})


class SourceDocument(ABC):
    """
    Parsed source file: tree, lines, comments and tokens.

    All derived structures are built once in the constructor and are
    read-only afterwards.
    """

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode("utf-8")
        self._query_cache: Dict[str, Query] = {}
        self._parse()

        self.lines: List[str] = text.split("\n")
        self._line_bytes = [line.encode("utf-8") for line in self.lines]
        self._line_offsets: List[int] = []
        offset = 0
        for line in self.lines:
            self._line_offsets.append(offset)
            offset += len(line) + 1

        self.tokens = TokenStream(list(self._collect_tokens()))
        self.comments: List[Comment] = self.tokens.comments

    @abstractmethod
    def get_language(self) -> Language:
        """
        Get Language instance for parsing and queries.

        Returns:
            Language instance
        """
        pass

    @abstractmethod
    def get_query_definitions(self) -> Dict[str, str]:
        """
        Get named query definitions for this language.

        Returns:
            Dict mapping query names to query strings
        """
        pass

    def get_parser(self) -> Parser:
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    @property
    def line_count(self) -> int:
        return len(self.lines)

    # --- queries ---

    def has_query(self, query_name: str) -> bool:
        return query_name in self.get_query_definitions()

    def query(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Execute a named query on the document.

        Args:
            query_name: Name of the query to execute

        Returns:
            List of (node, capture_name) tuples in document order

        Raises:
            ValueError: If query is not defined for this language
        """
        query_definitions = self.get_query_definitions()
        if query_name not in query_definitions:
            raise ValueError(f"Unknown query: {query_name}")

        if query_name not in self._query_cache:
            self._query_cache[query_name] = Query(self.get_language(), query_definitions[query_name])

        cursor = QueryCursor(self._query_cache[query_name])
        results = []
        for _pattern_index, captures in cursor.matches(self.root_node):
            for capture_name, nodes in captures.items():
                for node in nodes:
                    results.append((node, capture_name))

        results.sort(key=lambda item: (item[0].start_byte, item[0].end_byte))
        return results

    def query_opt(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Execute a named query, or return an empty list if this language
        does not define it.
        """
        if not self.has_query(query_name):
            return []
        return self.query(query_name)

    # --- traversal ---

    def walk_tree(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """
        Walk the tree using TreeCursor.

        Yields:
            Node objects in depth-first order
        """
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def _collect_tokens(self) -> Iterator[AnyToken]:
        for node in self.walk_tree():
            if node.child_count or node.start_byte == node.end_byte:
                continue
            if node.type in COMMENT_NODE_TYPES:
                yield self._make_comment(node)
            else:
                start, end = self.get_node_range(node)
                yield Token(
                    type=node.type,
                    start=start,
                    end=end,
                    start_line=node.start_point[0] + 1,
                    end_line=node.end_point[0] + 1,
                )

    def _make_comment(self, node: Node) -> Comment:
        text = self.get_node_text(node)
        if node.type == "hash_bang_line":
            kind = CommentKind.SHEBANG
        elif text.startswith("//"):
            kind = CommentKind.LINE
        else:
            kind = CommentKind.BLOCK
        start, end = self.get_node_range(node)
        return Comment(
            kind=kind,
            value=Comment.parse_value(kind, text),
            start=start,
            end=end,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            column=start - self._line_offsets[node.start_point[0]],
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )

    # --- positions ---

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8")

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.point_to_char(*node.start_point), self.point_to_char(*node.end_point)

    def point_to_char(self, row: int, byte_column: int) -> int:
        """
        Convert a tree-sitter point (0-based row, byte column) to a char offset.
        A column in the middle of a multi-byte character maps to the position
        before that character.
        """
        if row >= len(self._line_offsets):
            return len(self.text)
        prefix = self._line_bytes[row][:byte_column]
        return self._line_offsets[row] + len(prefix.decode("utf-8", errors="ignore"))

    @staticmethod
    def get_line_range(node: Node) -> Tuple[int, int]:
        """Get line range (1-based) for a node."""
        return node.start_point[0] + 1, node.end_point[0] + 1

    def locate(self, byte_offset: int) -> Optional[Node]:
        """
        Find the smallest named, non-comment node whose range contains the offset.

        Args:
            byte_offset: Position in the UTF-8 encoded source

        Returns:
            Innermost node, or None if the offset lies outside the tree
        """
        node = self.root_node
        if not node.start_byte <= byte_offset < node.end_byte:
            return None

        while True:
            for child in node.named_children:
                if child.type in COMMENT_NODE_TYPES:
                    continue
                if child.start_byte <= byte_offset < child.end_byte:
                    node = child
                    break
            else:
                return node

    @staticmethod
    def slot_children(node: Node) -> List[Node]:
        """
        Get the single-node `body` / `consequence` children of a node.
        Statement-list bodies (switch cases) have no slot.
        """
        if node.type in LIST_BODY_TYPES:
            return []
        result = []
        for name in SLOT_FIELDS:
            child = node.child_by_field_name(name)
            if child is not None:
                result.append(child)
        return result

    # --- errors ---

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

    def get_errors(self) -> List[Node]:
        """Get all error and missing nodes in the tree."""
        return [node for node in self.walk_tree() if node.type == "ERROR" or node.is_missing]

    def comments_inside(self, node: Node) -> List[Comment]:
        """All comments lexically contained in the node."""
        return [
            c for c in self.comments
            if node.start_byte <= c.start_byte and c.end_byte <= node.end_byte
        ]


__all__ = ["SourceDocument", "COMMENT_NODE_TYPES"]
