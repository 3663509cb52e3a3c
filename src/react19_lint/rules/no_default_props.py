"""Move ``Component.defaultProps = {...}`` into default parameter values.

Function components get the defaults merged into (or added as) their
destructured props parameter; class components get them in a
``const { ... } = this.props`` at the top of ``render``. The assignment is
reported even when no safe rewrite exists. A component whose
``defaultProps`` is assigned more than once gets no fix, since only the
last object takes effect.
"""

import logging
from typing import TYPE_CHECKING

from tree_sitter import Node

from react19_lint.analysis.components import Unrecognized, classify
from react19_lint.analysis.defaults import extract_defaults
from react19_lint.analysis.predicates import (
    assignment_target_name,
    is_deprecated_defaults_assignment,
    is_member_assignment,
    walk,
)
from react19_lint.analysis.synthesis import synthesize_fix
from react19_lint.core.ports.rule import Visitor
from react19_lint.errors import FixConflictError
from react19_lint.models import Fix, RuleMeta

if TYPE_CHECKING:
    from react19_lint.core.linter import RuleContext

logger = logging.getLogger(__name__)


class NoDefaultProps:
    meta = RuleMeta(
        rule_id="no-default-props",
        type="suggestion",
        description="Move defaultProps to default function parameters in destructured props",
        url="https://react.dev/blog/2024/04/25/react-19-upgrade-guide#removed-proptypes-and-defaultprops",
        fixable=True,
        messages={
            "noDefaultProps": (
                "'{name}' uses defaultProps, which React 19 no longer supports for function components. "
                "Move defaultProps to default parameters in the destructured props."
            ),
        },
    )

    def create(self, context: "RuleContext") -> Visitor:
        assignments: list[Node] = []

        def defaults_assignments(node: Node) -> list[Node]:
            if not assignments:
                root = node
                while root.parent is not None:
                    root = root.parent
                assignments.extend(n for n in walk(root) if is_member_assignment(n, "defaultProps"))
            return assignments

        def assigned_elsewhere(node: Node, declaration: Node) -> bool:
            for other in defaults_assignments(node):
                if other.start_byte == node.start_byte:
                    continue
                target = context.follow_aliases(assignment_target_name(other), other)
                if target is not None and target.start_byte == declaration.start_byte:
                    return True
            return False

        def build_fix(node: Node, name: str) -> Fix | None:
            if not is_deprecated_defaults_assignment(node):
                return None
            defaults = extract_defaults(node.child_by_field_name("right"))
            if defaults is None:
                return None
            declaration = context.follow_aliases(name, node)
            if declaration is not None and assigned_elsewhere(node, declaration):
                logger.debug("%s.defaultProps is assigned more than once, no fix", name)
                return None
            shape = classify(declaration)
            if isinstance(shape, Unrecognized):
                logger.debug("No fix for %s.defaultProps: %s", name, shape.reason)
                return None
            return synthesize_fix(shape, defaults, node, context.source)

        def assignment_expression(node: Node) -> None:
            if not is_member_assignment(node, "defaultProps"):
                return
            name = assignment_target_name(node)
            try:
                fix = build_fix(node, name)
            except FixConflictError as exc:
                logger.debug("Dropping fix for %s.defaultProps: %s", name, exc)
                fix = None
            except Exception:
                logger.exception("Could not build a fix for %s.defaultProps in %s", name, context.path)
                fix = None
            context.report(node, "noDefaultProps", data={"name": name}, fix=fix)

        return {"assignment_expression": assignment_expression}
