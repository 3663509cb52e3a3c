"""Walk a parsed tree, dispatch nodes to rule callbacks and collect diagnostics."""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from tree_sitter import Node

from react19_lint.analysis.scope import follow_aliases, resolve_declaration
from react19_lint.config import LintConfig, load_config
from react19_lint.core.fixes import apply_fixes
from react19_lint.core.parsing import ParsedSource, node_text, parse_file, parse_source, point_of
from react19_lint.core.paths import display_name_from_path
from react19_lint.core.ports.rule import Rule
from react19_lint.errors import RuleError
from react19_lint.models import Diagnostic, Fix, FixResult, LintResult, RuleMeta
from react19_lint.rules import select_rules

logger = logging.getLogger(__name__)

_Dispatch = dict[str, list[tuple[str, Callable[[Node], None]]]]


class RuleContext:
    """Everything one rule sees while linting one file."""

    def __init__(self, rule_id: str, meta: RuleMeta, parsed: ParsedSource, sink: list[Diagnostic]) -> None:
        self.rule_id = rule_id
        self.meta = meta
        self._parsed = parsed
        self._sink = sink
        self._reported: set[tuple[int, int, str]] = set()

    @property
    def source(self) -> bytes:
        return self._parsed.source

    @property
    def path(self) -> str:
        return self._parsed.path

    @property
    def language(self) -> str:
        return self._parsed.language

    def get_text(self, node: Node) -> str:
        return node_text(self._parsed.source, node)

    def display_name(self) -> str:
        return display_name_from_path(self._parsed.path)

    def resolve_declaration(self, name: str, at_node: Node) -> Node | None:
        return resolve_declaration(name, at_node)

    def follow_aliases(self, name: str, at_node: Node) -> Node | None:
        return follow_aliases(name, at_node)

    def report(
        self,
        node: Node,
        message_id: str,
        data: dict[str, str] | None = None,
        fix: Fix | None = None,
    ) -> Diagnostic | None:
        """Record a diagnostic for ``node``. A second report for the same node is ignored."""
        key = (node.start_byte, node.end_byte, node.type)
        if key in self._reported:
            return None

        template = self.meta.messages.get(message_id)
        if template is None:
            raise RuleError(f"Rule {self.rule_id} has no message '{message_id}'")
        values = data or {}
        try:
            message = template.format_map(values)
        except KeyError as exc:
            raise RuleError(f"Message '{message_id}' of {self.rule_id} needs data {exc}") from None

        diagnostic = Diagnostic(
            rule_id=self.rule_id,
            message_id=message_id,
            message=message,
            data=values,
            node_type=node.type,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_point=point_of(node),
            end_point=point_of(node, end=True),
            fix=fix,
        )
        self._reported.add(key)
        self._sink.append(diagnostic)
        return diagnostic


def _dispatch(table: _Dispatch, node: Node) -> None:
    for rule_id, callback in table.get(node.type, ()):
        try:
            callback(node)
        except Exception:
            logger.exception("Rule %s failed on %s at byte %d", rule_id, node.type, node.start_byte)


class Linter:
    def __init__(self, rules: Mapping[str, Rule] | None = None, config: LintConfig | None = None) -> None:
        self._config = config or load_config()
        self._rules = dict(rules) if rules is not None else select_rules(self._config.rules)

    @property
    def rules(self) -> dict[str, Rule]:
        return dict(self._rules)

    def lint_parsed(self, parsed: ParsedSource) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        enter: _Dispatch = {}
        leave: _Dispatch = {}
        for rule_id, rule in self._rules.items():
            context = RuleContext(rule_id, rule.meta, parsed, diagnostics)
            for key, callback in rule.create(context).items():
                node_type, _, phase = key.partition(":")
                table = leave if phase == "exit" else enter
                table.setdefault(node_type, []).append((rule_id, callback))

        stack: list[tuple[Node, bool]] = [(parsed.root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                _dispatch(leave, node)
                continue
            _dispatch(enter, node)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
        return diagnostics

    def lint_source(self, source: bytes | str, path: str = "<input>", language: str | None = None) -> LintResult:
        parsed = parse_source(source, path, language)
        return LintResult(
            path=path,
            language=parsed.language,
            diagnostics=self.lint_parsed(parsed),
            parse_errors=parsed.has_errors,
        )

    def lint_file(self, path: str | Path, language: str | None = None) -> LintResult:
        parsed = parse_file(str(path), language)
        return LintResult(
            path=str(path),
            language=parsed.language,
            diagnostics=self.lint_parsed(parsed),
            parse_errors=parsed.has_errors,
        )

    def fix_source(self, source: bytes | str, path: str = "<input>", language: str | None = None) -> FixResult:
        """Apply fixes until none apply or the pass limit is reached, then re-lint."""
        current = source.encode("utf-8") if isinstance(source, str) else source
        parsed = parse_source(current, path, language)
        diagnostics = self.lint_parsed(parsed)
        passes = 0
        applied = 0

        while passes < self._config.max_passes:
            fixes = [d.fix for d in diagnostics if d.fix is not None]
            if not fixes:
                break
            current, count = apply_fixes(current, fixes)
            passes += 1
            applied += count
            parsed = parse_source(current, path, parsed.language)
            diagnostics = self.lint_parsed(parsed)
            if count == 0:
                break

        if passes >= self._config.max_passes and any(d.fix is not None for d in diagnostics):
            logger.warning("%s: fixes still pending after %d passes", path, passes)

        return FixResult(
            path=path,
            language=parsed.language,
            output=current.decode("utf-8"),
            passes=passes,
            applied=applied,
            remaining=diagnostics,
        )

    def fix_file(self, path: str | Path, language: str | None = None, write: bool = True) -> FixResult:
        file_path = Path(path)
        try:
            source = file_path.read_bytes()
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None

        result = self.fix_source(source, str(path), language)
        if write and result.changed:
            file_path.write_bytes(result.output.encode("utf-8"))
            logger.info("Wrote %d fix(es) to %s", result.applied, path)
        return result
