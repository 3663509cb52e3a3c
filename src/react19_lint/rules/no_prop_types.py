from typing import TYPE_CHECKING

from tree_sitter import Node

from react19_lint.analysis.predicates import (
    FIELD_TYPES,
    assignment_target_name,
    class_members,
    imports_module,
    is_prop_types_assignment,
    is_static_member,
    member_name,
    requires_module,
    text_of,
)
from react19_lint.core.ports.rule import Visitor
from react19_lint.models import RuleMeta

if TYPE_CHECKING:
    from react19_lint.core.linter import RuleContext

_imports_prop_types = imports_module("prop-types")
_requires_prop_types = requires_module("prop-types")


class NoPropTypes:
    meta = RuleMeta(
        rule_id="no-prop-types",
        type="problem",
        description="Disallow the use of propTypes in React components",
        url="https://react.dev/blog/2024/04/25/react-19-upgrade-guide#removed-proptypes-and-defaultprops",
        messages={
            "propTypesDisallowed": (
                "'propTypes' should not be used in '{name}' as they are no longer supported in React 19."
            ),
            "noPropTypesImport": (
                "'prop-types' is no longer checked by React 19. Use TypeScript or another type-checking solution."
            ),
        },
    )

    def create(self, context: "RuleContext") -> Visitor:
        def assignment_expression(node: Node) -> None:
            if is_prop_types_assignment(node):
                context.report(node, "propTypesDisallowed", data={"name": assignment_target_name(node)})

        def class_like(node: Node) -> None:
            name = text_of(node.child_by_field_name("name")) or context.display_name()
            for member in class_members(node):
                if member.type in FIELD_TYPES and is_static_member(member) and member_name(member) == "propTypes":
                    context.report(member, "propTypesDisallowed", data={"name": name})

        def import_statement(node: Node) -> None:
            if _imports_prop_types(node):
                context.report(node, "noPropTypesImport")

        def call_expression(node: Node) -> None:
            if _requires_prop_types(node):
                context.report(node, "noPropTypesImport")

        return {
            "assignment_expression": assignment_expression,
            "class_declaration": class_like,
            "class": class_like,
            "import_statement": import_statement,
            "call_expression": call_expression,
        }
