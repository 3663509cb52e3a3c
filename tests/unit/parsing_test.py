"""Tests for tree-sitter parsing of JavaScript and TypeScript sources."""

import logging
from pathlib import Path

import pytest

from react19_lint.core.parsing import parse_file, parse_source, point_of
from tests.conftest import find_node


class TestParseSource:
    def test_defaults_to_javascript(self) -> None:
        parsed = parse_source("const a = <div />;")
        assert parsed.path == "<input>"
        assert parsed.language == "javascript"
        assert parsed.root.type == "program"
        assert not parsed.has_errors

    def test_language_from_path(self) -> None:
        parsed = parse_source("const a = <T,>(x: T) => x;", path="src/id.tsx")
        assert parsed.language == "tsx"
        assert not parsed.has_errors

    def test_explicit_language_wins(self) -> None:
        assert parse_source("let a: number = 1;", path="a.js", language="ts").language == "typescript"

    def test_text_uses_byte_offsets(self) -> None:
        parsed = parse_source("const s = 'héllo'; const t = 1;")
        node = find_node(parsed.root, "number")
        assert parsed.text(node) == "1"
        assert node.start_byte == len("const s = 'héllo'; const t = ".encode())

    def test_point_of(self) -> None:
        parsed = parse_source("a;\nconst bb = 2;")
        node = find_node(parsed.root, "identifier", "bb")
        assert point_of(node).row == 1
        assert point_of(node).column == 6
        assert point_of(node, end=True).column == 8

    def test_syntax_errors_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="react19_lint.core.parsing"):
            parsed = parse_source("const = ;", path="broken.js")
        assert parsed.has_errors
        assert "broken.js: source contains syntax errors" in caplog.text


class TestParseFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Card.jsx"
        path.write_text("export const Card = () => <div />;\n")
        parsed = parse_file(str(path))
        assert parsed.path == str(path)
        assert parsed.language == "javascript"
        assert parsed.source == path.read_bytes()

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "Missing.jsx"
        with pytest.raises(FileNotFoundError, match="File not found"):
            parse_file(str(missing))

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(ValueError, match="Unsupported file extension"):
            parse_file(str(path))
