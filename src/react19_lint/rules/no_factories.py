from typing import TYPE_CHECKING

from tree_sitter import Node

from react19_lint.analysis.predicates import (
    all_of,
    field,
    imports_module,
    member_of,
    named_children,
    of_type,
    property_key_name,
    requires_module,
    text_is,
    text_of,
    unwrap_parens,
    unwrapped,
)
from react19_lint.core.ports.rule import Visitor
from react19_lint.models import RuleMeta

if TYPE_CHECKING:
    from react19_lint.core.linter import RuleContext

_RENDER_VALUE_TYPES = frozenset({"function_expression", "function", "arrow_function"})

_imports_react = imports_module("react")
_requires_react = all_of(of_type("variable_declarator"), field("value", unwrapped(requires_module("react"))))
_is_create_factory_call = all_of(
    of_type("call_expression"),
    field("function", member_of("createFactory", all_of(of_type("identifier"), text_is("React")))),
)


def _has_render_method(obj: Node) -> bool:
    for prop in named_children(obj):
        if prop.type == "pair" and property_key_name(prop.child_by_field_name("key")) == "render":
            value = unwrap_parens(prop.child_by_field_name("value"))
            if value is not None and value.type in _RENDER_VALUE_TYPES:
                return True
        elif prop.type == "method_definition" and property_key_name(prop.child_by_field_name("name")) == "render":
            return True
    return False


def _imported_create_factory(statement: Node) -> list[Node]:
    specifiers: list[Node] = []
    for clause in named_children(statement):
        if clause.type != "import_clause":
            continue
        for item in named_children(clause):
            if item.type != "named_imports":
                continue
            specifiers.extend(
                specifier
                for specifier in named_children(item)
                if text_of(specifier.child_by_field_name("name")) == "createFactory"
            )
    return specifiers


def _destructured_create_factory(declarator: Node) -> list[Node]:
    pattern = declarator.child_by_field_name("name")
    if pattern is None or pattern.type != "object_pattern":
        return []
    found: list[Node] = []
    for prop in named_children(pattern):
        key = prop.child_by_field_name("key") if prop.type == "pair_pattern" else prop
        if prop.type == "object_assignment_pattern":
            key = prop.child_by_field_name("left")
        if property_key_name(key) == "createFactory":
            found.append(prop)
    return found


class NoFactories:
    meta = RuleMeta(
        rule_id="no-factories",
        type="problem",
        description="Disallow module pattern factories and React.createFactory",
        url="https://react.dev/blog/2024/04/25/react-19-upgrade-guide#removed-module-pattern-factories",
        messages={
            "noModulePattern": (
                "Module pattern factories are removed in React 19. Use regular functions instead."
            ),
            "noCreateFactory": "React.createFactory is removed in React 19. Use JSX instead.",
        },
    )

    def create(self, context: "RuleContext") -> Visitor:
        def return_statement(node: Node) -> None:
            arguments = named_children(node)
            argument = unwrap_parens(arguments[0]) if arguments else None
            if argument is not None and argument.type == "object" and _has_render_method(argument):
                context.report(node, "noModulePattern")

        def import_statement(node: Node) -> None:
            if _imports_react(node):
                for specifier in _imported_create_factory(node):
                    context.report(specifier, "noCreateFactory")

        def variable_declarator(node: Node) -> None:
            if _requires_react(node):
                for prop in _destructured_create_factory(node):
                    context.report(prop, "noCreateFactory")

        def call_expression(node: Node) -> None:
            if _is_create_factory_call(node):
                context.report(node, "noCreateFactory")

        return {
            "return_statement": return_statement,
            "import_statement": import_statement,
            "variable_declarator": variable_declarator,
            "call_expression": call_expression,
        }
