"""Shared fixtures and helpers for tests."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

from react19_lint.analysis.predicates import walk
from react19_lint.config import LintConfig
from react19_lint.core.linter import Linter
from react19_lint.core.parsing import ParsedSource, parse_source
from react19_lint.models import FixResult, LintResult
from react19_lint.rules import select_rules

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def find_nodes(root: Node, node_type: str) -> list[Node]:
    """All nodes of ``node_type`` below ``root``, in source order."""
    return [node for node in walk(root) if node.type == node_type]


def find_node(root: Node, node_type: str, text: str | None = None) -> Node:
    """The first node of ``node_type`` (optionally with exact ``text``)."""
    for node in find_nodes(root, node_type):
        if text is None or (node.text or b"").decode("utf-8") == text:
            return node
    raise AssertionError(f"No {node_type} node with text {text!r}")


def linter_for(*rule_ids: str, max_passes: int = 10) -> Linter:
    names = list(rule_ids) or None
    return Linter(rules=select_rules(names), config=LintConfig(max_passes=max_passes))


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the developer's environment from changing rule selection."""
    monkeypatch.delenv("REACT19_LINT_RULES", raising=False)
    monkeypatch.delenv("REACT19_LINT_MAX_PASSES", raising=False)
    yield


@pytest.fixture
def javascript_parser() -> Parser:
    """Return a tree-sitter parser for JavaScript (with JSX)."""
    return get_parser("javascript")


@pytest.fixture
def parse() -> Callable[..., ParsedSource]:
    """Parse a snippet as JavaScript unless another language is given."""

    def _parse(code: str, language: str = "javascript") -> ParsedSource:
        return parse_source(code, language=language)

    return _parse


@pytest.fixture
def lint_snippet() -> Callable[..., LintResult]:
    """Lint a snippet with the named rules (all rules when none are named)."""

    def _lint(code: str, *rule_ids: str, path: str = "<input>", language: str | None = None) -> LintResult:
        return linter_for(*rule_ids).lint_source(code, path=path, language=language)

    return _lint


@pytest.fixture
def fix_snippet() -> Callable[..., FixResult]:
    """Run the fixer on a snippet with the named rules (all rules when none are named)."""

    def _fix(code: str, *rule_ids: str, language: str | None = None) -> FixResult:
        return linter_for(*rule_ids).fix_source(code, language=language)

    return _fix
