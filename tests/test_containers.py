"""
Tests for container classification and boundary detection.
"""

from lac.rules import Boundary, ContainerKind, container_kind
from tests.infrastructure.rule_utils import classify, src


def test_container_kinds():
    doc, classifier, _ = classify(src(
        "class A { static { x(); } }",
        "switch (x) { case 1: break; }",
        "const { a } = { b: [1] };",
    ))
    kinds = {container_kind(node) for node in doc.walk_tree()}
    assert {
        ContainerKind.CLASS_BODY,
        ContainerKind.STATIC_BLOCK,
        ContainerKind.SWITCH_STATEMENT,
        ContainerKind.SWITCH_CASE,
        ContainerKind.OBJECT_PATTERN,
        ContainerKind.OBJECT_EXPRESSION,
        ContainerKind.ARRAY_EXPRESSION,
    } <= kinds
    assert container_kind(None) is None


def test_typescript_container_kinds():
    doc, _, _ = classify(src(
        "interface I { a: string }",
        "enum E { A }",
        "type T = { b: number };",
        "namespace N { const c = 1; }",
    ), "ts")
    kinds = {container_kind(node) for node in doc.walk_tree()}
    assert {
        ContainerKind.INTERFACE_BODY,
        ContainerKind.ENUM_BODY,
        ContainerKind.TYPE_LITERAL,
        ContainerKind.MODULE_BLOCK,
    } <= kinds
    assert ContainerKind.BLOCK not in kinds


def test_block_start_and_end():
    _, classifier, comments = classify(src("function f() {", "  // a", "  foo();", "  // b", "}"))
    first, last = comments
    assert classifier.is_at_start(first, ContainerKind.BLOCK)
    assert not classifier.is_at_end(first, ContainerKind.BLOCK)
    assert classifier.is_at_end(last, ContainerKind.BLOCK)
    assert not classifier.is_at_start(last, ContainerKind.BLOCK)


def test_if_consequence_slot():
    _, classifier, comments = classify(src("if (x) {", "  // a", "  foo();", "}"))
    (comment,) = comments
    assert classifier.is_at_start(comment, ContainerKind.BLOCK)


def test_single_line_container_is_not_a_boundary():
    _, classifier, comments = classify(src("function f() { /* a */ }"))
    (comment,) = comments
    assert not classifier.is_at_start(comment, ContainerKind.BLOCK)
    assert not classifier.is_at_end(comment, ContainerKind.BLOCK)


def test_top_level_comment_has_no_container():
    _, classifier, comments = classify(src("foo();", "// a", "bar();"))
    (comment,) = comments
    assert classifier.container_of(comment).type == "program"
    assert not classifier.is_at_group(comment, "block", Boundary.START)


def test_class_body_counts_for_block_and_class():
    _, classifier, comments = classify(src("class A {", "  // a", "  m() {}", "}"))
    (comment,) = comments
    assert classifier.is_at_group(comment, "block", Boundary.START)
    assert classifier.is_at_group(comment, "class", Boundary.START)
    assert not classifier.is_at_group(comment, "object", Boundary.START)


def test_switch_statement_end_is_block_end_only():
    _, classifier, comments = classify(src("switch (x) {", "  case 1:", "    break;", "  // end", "}"))
    (comment,) = comments
    assert classifier.is_at_end(comment, ContainerKind.SWITCH_STATEMENT)
    assert classifier.is_at_group(comment, "block", Boundary.END)
    assert not classifier.is_at_group(comment, "block", Boundary.START)


def test_static_block_uses_brace_line():
    _, classifier, comments = classify(src("class A {", "  static {", "    // a", "    foo();", "  }", "}"))
    (comment,) = comments
    assert classifier.container_of(comment).type == "statement_block"
    assert classifier.is_at_start(comment, ContainerKind.STATIC_BLOCK)


def test_container_lookup_is_cached():
    _, classifier, comments = classify(src("function f() {", "  // a", "}"))
    (comment,) = comments
    assert classifier.container_of(comment) is classifier.container_of(comment)


def test_comment_between_static_and_brace_is_outside():
    _, classifier, comments = classify(src("class A {", "  static", "  // c", "  {", "    foo();", "  }", "}"))
    (comment,) = comments
    assert classifier.container_of(comment) is None
    assert not classifier.is_at_group(comment, "block", Boundary.START)
