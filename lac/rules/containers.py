"""
Structural locator and boundary classifier.

Maps tree-sitter nodes onto a closed set of container kinds and decides
whether a comment sits right after a container's opening line or right
before its closing line.
"""

from __future__ import annotations

import enum
from typing import Dict, Optional, Tuple

from tree_sitter import Node

from ..syntax.document import SourceDocument
from ..syntax.tokens import Comment


class ContainerKind(enum.Enum):
    BLOCK = "BlockStatement"
    CLASS_BODY = "ClassBody"
    STATIC_BLOCK = "StaticBlock"
    SWITCH_CASE = "SwitchCase"
    SWITCH_STATEMENT = "SwitchStatement"
    OBJECT_EXPRESSION = "ObjectExpression"
    OBJECT_PATTERN = "ObjectPattern"
    ARRAY_EXPRESSION = "ArrayExpression"
    ARRAY_PATTERN = "ArrayPattern"
    INTERFACE_BODY = "InterfaceBody"
    ENUM_BODY = "EnumBody"
    TYPE_LITERAL = "TypeLiteral"
    MODULE_BLOCK = "ModuleBlock"


class Boundary(enum.Enum):
    START = "start"
    END = "end"


_KIND_BY_NODE_TYPE: Dict[str, ContainerKind] = {
    "class_body": ContainerKind.CLASS_BODY,
    "switch_case": ContainerKind.SWITCH_CASE,
    "switch_default": ContainerKind.SWITCH_CASE,
    "switch_statement": ContainerKind.SWITCH_STATEMENT,
    "switch_body": ContainerKind.SWITCH_STATEMENT,
    "object": ContainerKind.OBJECT_EXPRESSION,
    "object_pattern": ContainerKind.OBJECT_PATTERN,
    "array": ContainerKind.ARRAY_EXPRESSION,
    "array_pattern": ContainerKind.ARRAY_PATTERN,
    "interface_body": ContainerKind.INTERFACE_BODY,
    "enum_body": ContainerKind.ENUM_BODY,
}

_MODULE_TYPES = ("internal_module", "module")

# Container kinds per exception group and boundary
GROUPS: Dict[str, Dict[Boundary, Tuple[ContainerKind, ...]]] = {
    "block": {
        Boundary.START: (
            ContainerKind.CLASS_BODY,
            ContainerKind.BLOCK,
            ContainerKind.STATIC_BLOCK,
            ContainerKind.SWITCH_CASE,
        ),
        Boundary.END: (
            ContainerKind.CLASS_BODY,
            ContainerKind.BLOCK,
            ContainerKind.STATIC_BLOCK,
            ContainerKind.SWITCH_CASE,
            ContainerKind.SWITCH_STATEMENT,
        ),
    },
    "class": {
        Boundary.START: (ContainerKind.CLASS_BODY,),
        Boundary.END: (ContainerKind.CLASS_BODY,),
    },
    "object": {
        Boundary.START: (ContainerKind.OBJECT_EXPRESSION, ContainerKind.OBJECT_PATTERN),
        Boundary.END: (ContainerKind.OBJECT_EXPRESSION, ContainerKind.OBJECT_PATTERN),
    },
    "array": {
        Boundary.START: (ContainerKind.ARRAY_EXPRESSION, ContainerKind.ARRAY_PATTERN),
        Boundary.END: (ContainerKind.ARRAY_EXPRESSION, ContainerKind.ARRAY_PATTERN),
    },
    "interface": {
        Boundary.START: (ContainerKind.INTERFACE_BODY,),
        Boundary.END: (ContainerKind.INTERFACE_BODY,),
    },
    "enum": {
        Boundary.START: (ContainerKind.ENUM_BODY,),
        Boundary.END: (ContainerKind.ENUM_BODY,),
    },
    "type": {
        Boundary.START: (ContainerKind.TYPE_LITERAL,),
        Boundary.END: (ContainerKind.TYPE_LITERAL,),
    },
    "module": {
        Boundary.START: (ContainerKind.MODULE_BLOCK,),
        Boundary.END: (ContainerKind.MODULE_BLOCK,),
    },
}


def container_kind(node: Optional[Node]) -> Optional[ContainerKind]:
    """
    Classify a node as a container.

    Args:
        node: Tree-sitter node or None

    Returns:
        Container kind, or None for nodes that are not tracked containers
    """
    if node is None:
        return None

    if node.type == "statement_block":
        parent = node.parent
        if parent is not None and parent.type == "class_static_block":
            return ContainerKind.STATIC_BLOCK
        if parent is not None and parent.type in _MODULE_TYPES:
            return ContainerKind.MODULE_BLOCK
        return ContainerKind.BLOCK

    if node.type == "object_type":
        parent = node.parent
        # older grammars expose interface bodies as plain object types
        if parent is not None and parent.type == "interface_declaration":
            return ContainerKind.INTERFACE_BODY
        return ContainerKind.TYPE_LITERAL

    return _KIND_BY_NODE_TYPE.get(node.type)


class BoundaryClassifier:
    """
    Answers "is this comment at the start/end of a container" questions
    for a single document.
    """

    def __init__(self, doc: SourceDocument):
        self.doc = doc
        self._containers: Dict[int, Optional[Node]] = {}

    def container_of(self, comment: Comment) -> Optional[Node]:
        """
        Find the innermost node that contains the comment.

        A comment between `static` and `{` of a static block is outside the
        block; inside the braces the brace block itself is returned, so its
        start line is the opening brace line.
        """
        key = comment.start_byte
        if key in self._containers:
            return self._containers[key]

        node = self.doc.locate(comment.start_byte)
        if node is not None and node.type == "class_static_block":
            brace_block = node.child_by_field_name("body")
            if brace_block is not None and comment.start_byte >= brace_block.start_byte:
                node = brace_block
            else:
                node = None

        self._containers[key] = node
        return node

    def matches(self, node: Node, kind: ContainerKind) -> bool:
        """True if the node is `kind` directly or through its body/consequence slot."""
        if container_kind(node) is kind:
            return True
        return any(container_kind(child) is kind for child in self.doc.slot_children(node))

    def is_at(self, comment: Comment, kind: ContainerKind, boundary: Boundary) -> bool:
        node = self.container_of(comment)
        if node is None or not self.matches(node, kind):
            return False

        start_line, end_line = self.doc.get_line_range(node)
        if boundary is Boundary.START:
            return comment.start_line - start_line == 1
        return end_line - comment.end_line == 1

    def is_at_start(self, comment: Comment, kind: ContainerKind) -> bool:
        return self.is_at(comment, kind, Boundary.START)

    def is_at_end(self, comment: Comment, kind: ContainerKind) -> bool:
        return self.is_at(comment, kind, Boundary.END)

    def is_at_group(self, comment: Comment, group: str, boundary: Boundary) -> bool:
        """
        True if the comment is at the given boundary of any container kind
        of an exception group ("block", "class", "object", ...).
        """
        return any(self.is_at(comment, kind, boundary) for kind in GROUPS[group][boundary])


__all__ = ["ContainerKind", "Boundary", "GROUPS", "container_kind", "BoundaryClassifier"]
