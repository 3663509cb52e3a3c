from typing import TYPE_CHECKING

from tree_sitter import Node

from react19_lint.analysis.predicates import (
    FIELD_TYPES,
    any_of,
    assignment_target_name,
    class_members,
    member_assignment,
    member_name,
    text_of,
)
from react19_lint.core.ports.rule import Visitor
from react19_lint.models import RuleMeta

if TYPE_CHECKING:
    from react19_lint.core.linter import RuleContext

_CONTEXT_TYPE_MEMBERS = ("contextTypes", "childContextTypes")

_is_context_types_assignment = any_of(*(member_assignment(name) for name in _CONTEXT_TYPE_MEMBERS))


class NoLegacyContext:
    meta = RuleMeta(
        rule_id="no-legacy-context",
        type="problem",
        description="Disallow the use of legacy context APIs in React components",
        url="https://react.dev/blog/2024/04/25/react-19-upgrade-guide#removed-removing-legacy-context",
        messages={
            "noLegacyContext": (
                "'{member}' in '{name}' uses a legacy context API that is no longer supported in React 19. "
                "Use 'React.createContext()' instead."
            ),
            "noLegacyContextTypes": (
                "'{member}' in '{name}' uses a legacy contextTypes API that is no longer supported in React 19. "
                "Use 'contextType' instead."
            ),
        },
    )

    def create(self, context: "RuleContext") -> Visitor:
        def class_exit(node: Node) -> None:
            name = text_of(node.child_by_field_name("name")) or context.display_name()
            for member in class_members(node):
                member_key = member_name(member)
                if member.type in FIELD_TYPES and member_key in _CONTEXT_TYPE_MEMBERS:
                    context.report(member, "noLegacyContextTypes", data={"member": member_key, "name": name})
                elif member.type == "method_definition" and member_key == "getChildContext":
                    context.report(member, "noLegacyContext", data={"member": member_key, "name": name})

        def assignment_expression(node: Node) -> None:
            if _is_context_types_assignment(node):
                left = node.child_by_field_name("left")
                member_key = text_of(left.child_by_field_name("property"))
                context.report(
                    node,
                    "noLegacyContextTypes",
                    data={"member": member_key, "name": assignment_target_name(node)},
                )

        return {
            "class_declaration:exit": class_exit,
            "class:exit": class_exit,
            "assignment_expression": assignment_expression,
        }
