"""Tests for the edits that move defaults into parameters."""

from collections.abc import Callable

from react19_lint.analysis.components import FunctionWithDestructuredParam, classify
from react19_lint.analysis.defaults import DefaultEntry
from react19_lint.analysis.synthesis import merge_into_pattern, removal_edits, render_pattern, synthesize_fix
from react19_lint.core.parsing import ParsedSource
from react19_lint.models import TextEdit
from tests.conftest import find_node

Parse = Callable[..., ParsedSource]


def _entries(**values: str) -> dict[str, DefaultEntry]:
    return {name: DefaultEntry(name=name, source_text=text) for name, text in values.items()}


class TestRenderPattern:
    def test_empty(self) -> None:
        assert render_pattern([]) == "{}"

    def test_single_line(self) -> None:
        assert render_pattern([("a", False), ("b = 1", False)]) == "{ a, b = 1 }"

    def test_leading_comment_stays_before_its_property(self) -> None:
        items = [("a", False), ("/* size */", True), ("b = 1", False)]
        assert render_pattern(items) == "{ a, /* size */ b = 1 }"

    def test_trailing_comment(self) -> None:
        assert render_pattern([("a", False), ("/* end */", True)]) == "{ a /* end */ }"

    def test_multiline(self) -> None:
        items = [("a", False), ("// note", True), ("b = 1", False)]
        rendered = render_pattern(items, multiline=True, indent="    ", closing_indent="  ")
        assert rendered == "{\n    a,\n    // note\n    b = 1,\n  }"


class TestMergeIntoPattern:
    def _pattern(self, parse: Parse, code: str):
        parsed = parse(code)
        shape = classify(find_node(parsed.root, "variable_declarator"))
        assert isinstance(shape, FunctionWithDestructuredParam)
        return parsed, shape.pattern

    def test_adds_defaults_and_keeps_author_defaults(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({ a = 1, b }) => null;")
        edit = merge_into_pattern(pattern, _entries(a="2", b="3"), parsed.source)
        assert edit.replacement == "{ a = 1, b = 3 }"
        assert (edit.start_byte, edit.end_byte) == (pattern.start_byte, pattern.end_byte)

    def test_keeps_property_order_and_appends_missing(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({ c, a, b }) => null;")
        edit = merge_into_pattern(pattern, _entries(b="2", d="4", e="5"), parsed.source)
        assert edit.replacement == "{ c, a, b = 2, d = 4, e = 5 }"

    def test_renamed_property(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({ size: s }) => null;")
        edit = merge_into_pattern(pattern, _entries(size="'md'"), parsed.source)
        assert edit.replacement == "{ size: s = 'md' }"

    def test_empty_pattern(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({}) => null;")
        edit = merge_into_pattern(pattern, _entries(a="1"), parsed.source)
        assert edit.replacement == "{ a = 1 }"

    def test_multiline_pattern_keeps_layout(self, parse: Parse) -> None:
        code = "const C = ({\n  label,\n  size = 'md',\n}) => null;"
        parsed, pattern = self._pattern(parse, code)
        edit = merge_into_pattern(pattern, _entries(label="'OK'", variant="'primary'"), parsed.source)
        assert edit.replacement == "{\n  label = 'OK',\n  size = 'md',\n  variant = 'primary',\n}"

    def test_crlf_pattern_keeps_line_endings(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({\r\n  label,\r\n}) => null;\r\n")
        edit = merge_into_pattern(pattern, _entries(label="'OK'", variant="'primary'"), parsed.source)
        assert edit.replacement == "{\r\n  label = 'OK',\r\n  variant = 'primary',\r\n}"

    def test_block_comment_stays_before_its_comma(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({ a /* x */, b }) => null;")
        edit = merge_into_pattern(pattern, _entries(b="1"), parsed.source)
        assert edit.replacement == "{ a /* x */, b = 1 }"

    def test_comment_before_closing_brace_stays_with_last_property(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({ a /* x */ }) => null;")
        edit = merge_into_pattern(pattern, _entries(a="1", b="2"), parsed.source)
        assert edit.replacement == "{ a = 1 /* x */, b = 2 }"

    def test_comment_after_comma_stays_before_next_property(self, parse: Parse) -> None:
        parsed, pattern = self._pattern(parse, "const C = ({ a, /* x */ b }) => null;")
        edit = merge_into_pattern(pattern, _entries(b="1"), parsed.source)
        assert edit.replacement == "{ a, /* x */ b = 1 }"


class TestRemovalEdits:
    def test_removes_semicolon(self, parse: Parse) -> None:
        parsed = parse("Foo.defaultProps = { a: 1 };")
        assignment = find_node(parsed.root, "assignment_expression")
        edits = removal_edits(assignment)
        assert edits == [
            TextEdit(start_byte=0, end_byte=assignment.end_byte),
            TextEdit(start_byte=assignment.end_byte, end_byte=assignment.end_byte + 1),
        ]

    def test_without_semicolon(self, parse: Parse) -> None:
        parsed = parse("Foo.defaultProps = { a: 1 }\n")
        assignment = find_node(parsed.root, "assignment_expression")
        assert removal_edits(assignment) == [TextEdit(start_byte=0, end_byte=assignment.end_byte)]


class TestSynthesizeFix:
    def test_edits_are_sorted_and_disjoint(self, parse: Parse) -> None:
        parsed = parse("const C = ({ a }) => null;\nC.defaultProps = { a: 1, b: 2 };\n")
        shape = classify(find_node(parsed.root, "variable_declarator"))
        assignment = find_node(parsed.root, "assignment_expression")
        fix = synthesize_fix(shape, _entries(a="1", b="2"), assignment, parsed.source)
        assert fix is not None
        starts = [e.start_byte for e in fix.edits]
        assert starts == sorted(starts)
        for previous, current in zip(fix.edits, fix.edits[1:]):
            assert previous.end_byte <= current.start_byte
        assert fix.edits[0].replacement == "{ a = 1, b = 2 }"

    def test_assignment_inside_expression_gets_no_fix(self, parse: Parse) -> None:
        parsed = parse("const C = ({ a }) => null;\nexport default (C.defaultProps = { a: 1 });\n")
        shape = classify(find_node(parsed.root, "variable_declarator"))
        assignment = find_node(parsed.root, "assignment_expression")
        assert synthesize_fix(shape, _entries(a="1"), assignment, parsed.source) is None

    def test_new_name_clashing_with_body_declaration(self, parse: Parse) -> None:
        code = "function C({ a }) { const b = 2; return a + b; }\nC.defaultProps = { b: 1 };\n"
        parsed = parse(code)
        shape = classify(find_node(parsed.root, "function_declaration"))
        assignment = find_node(parsed.root, "assignment_expression")
        assert synthesize_fix(shape, _entries(b="1"), assignment, parsed.source) is None
