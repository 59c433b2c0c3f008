"""
Tests for parsed documents: tokens, comments and position lookups.
"""

import pytest

from lac import UnsupportedFileError, create_document
from lac.syntax import CommentKind, TokenStream, supported_extensions
from tests.infrastructure.rule_utils import src


class TestComments:

    def test_kinds_and_values(self):
        doc = create_document(src("// line", "/* block */", "foo();"))
        line, block = doc.comments
        assert line.kind is CommentKind.LINE
        assert line.value == " line"
        assert block.kind is CommentKind.BLOCK
        assert block.value == " block "

    def test_positions(self):
        doc = create_document(src("foo();", "  /*", "   */", "bar();"))
        (comment,) = doc.comments
        assert comment.start == len("foo();\n  ")
        assert comment.column == 2
        assert (comment.start_line, comment.end_line) == (2, 3)
        assert doc.text[comment.start:comment.end] == "/*\n   */"

    def test_shebang(self):
        doc = create_document(src("#!/usr/bin/env node", "foo();"))
        (shebang,) = doc.comments
        assert shebang.kind is CommentKind.SHEBANG
        assert shebang.value == "/usr/bin/env node"

    def test_char_columns_after_multibyte_text(self):
        doc = create_document("const s = 'ü'; // x")
        (comment,) = doc.comments
        assert comment.column == len("const s = 'ü'; ")
        assert comment.start_byte == len("const s = 'ü'; ".encode("utf-8"))

    def test_comments_inside(self):
        doc = create_document(src("function f() {", "  // in", "}", "// out"))
        body = doc.root_node.named_children[0].child_by_field_name("body")
        assert [c.value for c in doc.comments_inside(body)] == [" in"]


class TestTokenStream:

    def test_neighbours_skip_comments(self):
        doc = create_document(src("foo(); /* a */ /* b */ bar();"))
        a, b = doc.comments
        assert doc.tokens.before(b).type == ";"
        assert doc.tokens.before(b, include_comments=True) == a
        assert doc.tokens.after(a).type == "identifier"
        assert doc.tokens.after(a, include_comments=True) == b

    def test_edges(self):
        doc = create_document("// only")
        (comment,) = doc.comments
        assert doc.tokens.before(comment) is None
        assert doc.tokens.after(comment) is None

    def test_unknown_token(self):
        doc = create_document("// a")
        other = create_document("\n// b").comments[0]
        with pytest.raises(ValueError):
            doc.tokens.before(other)

    def test_stream_is_sorted(self):
        doc = create_document(src("let x = [1, 2]; // c"))
        stream = TokenStream(list(reversed(list(doc.tokens))))
        assert [t.start for t in stream] == sorted(t.start for t in doc.tokens)


class TestLocate:

    def test_innermost_node(self):
        code = src("function f() {", "  return 1;", "}")
        doc = create_document(code)
        node = doc.locate(len("function f() {\n  ret".encode("utf-8")))
        assert node.type == "return_statement"

    def test_comment_resolves_to_enclosing_block(self):
        code = src("function f() {", "  // note", "  return 1;", "}")
        doc = create_document(code)
        assert doc.locate(doc.comments[0].start_byte).type == "statement_block"

    def test_outside_tree(self):
        doc = create_document("foo();")
        assert doc.locate(100) is None


class TestRegistry:

    @pytest.mark.parametrize("ext", ["js", ".jsx", "MJS", "cjs", "ts", ".tsx", "mts", "cts"])
    def test_supported(self, ext):
        doc = create_document("foo(); // x", ext)
        assert len(doc.comments) == 1
        assert not doc.has_error()

    def test_unsupported(self):
        with pytest.raises(UnsupportedFileError):
            create_document("x", "py")

    def test_supported_extensions(self):
        assert ".ts" in supported_extensions()
        assert ".js" in supported_extensions()

    def test_syntax_errors_are_reported(self):
        doc = create_document("function (", "js")
        assert doc.has_error()
        assert doc.get_errors()

    def test_unknown_query(self):
        doc = create_document("foo();")
        with pytest.raises(ValueError):
            doc.query("missing")

    def test_query_definitions(self):
        assert create_document("foo();", "js").get_query_definitions() == {}
        assert set(create_document("foo();", "ts").get_query_definitions()) == {"comment_scopes"}
