from typing import TYPE_CHECKING

from tree_sitter import Node

from react19_lint.analysis.predicates import named_children, string_value, text_of, unwrap_parens
from react19_lint.core.ports.rule import Visitor
from react19_lint.models import RuleMeta

if TYPE_CHECKING:
    from react19_lint.core.linter import RuleContext


def _attribute_value(attribute: Node) -> Node | None:
    """Value of a JSX attribute; ``{ ... }`` containers are unwrapped."""
    children = named_children(attribute)
    if len(children) < 2:
        return None
    value = children[-1]
    if value.type == "jsx_expression":
        inner = named_children(value)
        return unwrap_parens(inner[0]) if inner else None
    return value


def is_string_ref(attribute: Node) -> bool:
    children = named_children(attribute)
    if not children or text_of(children[0]) != "ref":
        return False
    return string_value(_attribute_value(attribute)) is not None


class NoStringRefs:
    meta = RuleMeta(
        rule_id="no-string-refs",
        type="problem",
        description="Disallow the use of string refs in React components",
        url="https://react.dev/blog/2024/04/25/react-19-upgrade-guide#removed-string-refs",
        messages={
            "noStringRefs": (
                "String refs are deprecated and will be removed in React 19. Use callback refs instead."
            ),
        },
    )

    def create(self, context: "RuleContext") -> Visitor:
        def jsx_attribute(node: Node) -> None:
            if is_string_ref(node):
                context.report(node, "noStringRefs")

        return {"jsx_attribute": jsx_attribute}
