"""
Tests for the comment placement checker on JavaScript sources.
"""

from lac import Options, check_source, fix_source
from tests.infrastructure.rule_utils import located, message_ids, run_rule, src


class TestBaseline:
    """Comments that already have blank lines or share a line with code."""

    def test_blank_lines_around_comment(self):
        code = src("foo();", "", "// note", "", "bar();")
        assert run_rule(code) == []

    def test_trailing_inline_comment(self):
        code = src("foo(); // trailing", "bar();")
        assert run_rule(code) == []

    def test_leading_inline_comment(self):
        code = src("foo();", "/* lead */ bar();", "baz();")
        assert run_rule(code) == []

    def test_inline_ignores_other_comments_in_between(self):
        code = src("foo(); /* a */ /* b */", "bar();")
        assert run_rule(code) == []

    def test_inline_exemption_ignores_allowances(self):
        code = src("function f() {", "  return 1; // one", "}")
        assert run_rule(code, allow_block_start=False, allow_block_end=False) == []


class TestScenarios:
    """Reference scenarios."""

    def test_comment_in_function_body(self):
        code = src("function f() {", "  // note", "  return 1;", "}")
        reports = run_rule(code)

        assert located(reports) == [(2, "before"), (2, "after")]
        before, after = reports
        # start of line 2
        assert before.fix.offset == len("function f() {\n")
        assert before.fix.text == "\n"
        # right after "// note"
        assert after.fix.offset == len("function f() {\n  // note")
        assert after.fix.text == "\n"

    def test_block_start_allowance(self):
        code = src("{", "  // comment", "}")
        assert message_ids(run_rule(code, allow_block_start=True)) == ["after"]
        assert run_rule(code, allow_block_start=True, allow_block_end=True) == []

    def test_object_start_allowance(self):
        code = src("const o = {", "  // comment", "  a: 1,", "};")
        assert "before" not in message_ids(run_rule(code, allow_object_start=True))
        assert "before" in message_ids(run_rule(code))
        assert "before" in message_ids(run_rule(code, allow_object_start=False))

    def test_reports_carry_messages(self):
        code = src("foo();", "// note", "bar();")
        before, after = run_rule(code)
        assert before.message == "Expected line before comment."
        assert after.message == "Expected line after comment."
        assert before.column == 1


class TestFileBoundaries:
    """No "before" on the first line, no "after" on the last line."""

    def test_first_line(self):
        assert located(run_rule(src("// first", "foo();"))) == [(1, "after")]

    def test_last_line(self):
        assert located(run_rule(src("foo();", "// last"))) == [(2, "before")]

    def test_last_line_followed_by_newline(self):
        # the empty line after the final newline counts as blank
        assert located(run_rule("foo();\n// last\n")) == [(2, "before")]

    def test_only_comment(self):
        assert run_rule("// alone") == []


class TestAdjacentComments:

    def test_consecutive_line_comments(self):
        code = src("foo();", "// a", "// b", "bar();")
        assert located(run_rule(code)) == [(2, "before"), (3, "after")]

    def test_comments_on_same_line(self):
        code = src("foo();", "", "/* a */ /* b */", "", "bar();")
        assert run_rule(code) == []

    def test_multiline_block_comment(self):
        code = src("foo();", "/*", " * doc", " */", "bar();")
        reports = run_rule(code)
        assert message_ids(reports) == ["before", "after"]
        assert reports[1].comment.end_line == 4
        assert reports[1].fix.offset == len("foo();\n/*\n * doc\n */")

    def test_shebang_occupies_first_line(self):
        code = src("#!/usr/bin/env node", "// a", "foo();")
        assert located(run_rule(code)) == [(2, "after")]


class TestRequestedFlags:

    def test_line_comments_disabled(self):
        code = src("foo();", "// note", "bar();")
        assert run_rule(code, before_line_comment=False, after_line_comment=False) == []

    def test_only_before_for_block_comments(self):
        code = src("foo();", "/* note */", "bar();")
        assert message_ids(run_rule(code, after_block_comment=False)) == ["before"]

    def test_kinds_are_independent(self):
        code = src("foo();", "/* block */", "bar();", "", "// line", "baz();")
        reports = run_rule(code, before_line_comment=False, after_line_comment=False)
        assert located(reports) == [(2, "before"), (2, "after")]


class TestIgnorePatterns:

    def test_default_directive_ignored(self):
        code = src("foo();", "// eslint-disable-next-line no-console", "bar();")
        assert run_rule(code) == []

    def test_default_patterns_can_be_disabled(self):
        code = src("foo();", "// eslint-disable-next-line no-console", "bar();")
        assert message_ids(run_rule(code, apply_default_ignore_patterns=False)) == ["before", "after"]

    def test_other_directives(self):
        for text in ("/* global window */", "/* jshint esversion: 6 */", "/* istanbul ignore next */",
                     "/* exported foo */", "// jscs:disable"):
            code = src("foo();", text, "bar();")
            assert run_rule(code) == [], text

    def test_custom_pattern(self):
        code = src("foo();", "// pragma: keep", "bar();")
        assert run_rule(code, ignore_pattern="pragma") == []
        assert len(run_rule(code, ignore_pattern="^nomatch$")) == 2


class TestClassPrecedence:
    """allowClassStart/End: false overrides allowBlockStart/End: true."""

    CODE = src("class A {", "  // comment", "  m() {}", "", "  // last", "}")

    def test_block_start_covers_class_body(self):
        reports = run_rule(self.CODE, allow_block_start=True)
        assert (2, "before") not in located(reports)

    def test_explicit_class_start_false_wins(self):
        reports = run_rule(self.CODE, allow_block_start=True, allow_class_start=False)
        assert (2, "before") in located(reports)

    def test_class_start_alone(self):
        reports = run_rule(self.CODE, allow_class_start=True)
        assert (2, "before") not in located(reports)

    def test_explicit_class_end_false_wins(self):
        assert (5, "after") not in located(run_rule(self.CODE, allow_block_end=True))
        reports = run_rule(self.CODE, allow_block_end=True, allow_class_end=False)
        assert (5, "after") in located(reports)

    def test_object_has_no_block_pairing(self):
        code = src("{", "  // comment", "  foo();", "}")
        reports = run_rule(code, allow_block_start=True, allow_object_start=False)
        assert "before" not in message_ids(reports)


class TestContainers:

    def test_array_start_and_end(self):
        code = src("const a = [", "  // first", "  1,", "  // last", "];")
        assert located(run_rule(code)) == [(2, "before"), (2, "after"), (4, "before"), (4, "after")]
        reports = run_rule(code, allow_array_start=True, allow_array_end=True)
        assert located(reports) == [(2, "after"), (4, "before")]

    def test_switch_case_start(self):
        code = src("switch (x) {", "  case 1:", "    // comment", "    foo();", "    break;", "}")
        reports = run_rule(code, allow_block_start=True)
        assert located(reports) == [(3, "after")]

    def test_switch_statement_end(self):
        code = src("switch (x) {", "  case 1:", "    foo();", "    break;", "  // end", "}")
        reports = run_rule(code, allow_block_end=True)
        assert located(reports) == [(5, "before")]

    def test_static_block_start(self):
        code = src("class A {", "  static {", "    // comment", "    foo();", "  }", "}")
        reports = run_rule(code, allow_block_start=True)
        assert located(reports) == [(3, "after")]

    def test_comment_between_static_and_brace(self):
        code = src("class A {", "  static", "  // c", "  {", "    foo();", "  }", "}")
        reports = run_rule(code, allow_block_start=True)
        assert located(reports) == [(3, "before"), (3, "after")]

    def test_destructuring_pattern(self):
        code = src("const {", "  // comment", "  a,", "} = obj;")
        assert "before" not in message_ids(run_rule(code, allow_object_start=True))

    def test_gap_is_not_a_boundary(self):
        code = src("function f() {", "  foo();", "  // middle", "  bar();", "}")
        reports = run_rule(code, allow_block_start=True, allow_block_end=True)
        assert located(reports) == [(3, "before"), (3, "after")]


class TestFixes:

    def test_fix_inserts_blank_lines(self):
        code = src("function f() {", "  // note", "  return 1;", "}")
        result = fix_source(code)
        assert result.text == src("function f() {", "", "  // note", "", "  return 1;", "}")
        assert len(result.applied) == 2

    def test_fixes_are_idempotent(self):
        code = src(
            "const x = 1;",
            "// first",
            "function f() {",
            "  // inside",
            "  return x;",
            "}",
            "/* block */",
            "class A {",
            "  // member",
            "  m() {}",
            "}",
        )
        assert check_source(code) != []
        fixed = fix_source(code).text
        assert check_source(fixed) == []

    def test_fix_offsets_count_characters(self):
        code = src("const s = 'é';", "// note", "foo();")
        assert fix_source(code).text == src("const s = 'é';", "", "// note", "", "foo();")

    def test_compiled_options_are_reusable(self):
        compiled = Options(allow_block_start=True).compile()
        code = src("{", "  // comment", "  foo();", "}")
        assert check_source(code, "js", compiled) == check_source(code, "js", compiled)
