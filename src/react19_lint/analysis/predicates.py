"""Predicates over tree-sitter node shapes.

Small combinators (``of_type``, ``field``, ``text_is`` ...) compose into the
shape checks the rules need, e.g. "an assignment whose left side is
``Identifier.defaultProps``". Every predicate tolerates missing children and
returns ``False`` instead of raising.
"""

import re
from collections.abc import Callable, Iterator

from tree_sitter import Node

Predicate = Callable[[Node], bool]

FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "arrow_function",
        "generator_function_declaration",
        "generator_function",
    }
)
CLASS_TYPES = frozenset({"class_declaration", "class", "abstract_class_declaration"})
FIELD_TYPES = frozenset({"field_definition", "public_field_definition"})
DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def text_of(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def is_identifier_name(value: str) -> bool:
    return bool(_IDENTIFIER_RE.match(value))


def named_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def unwrap_parens(node: Node | None) -> Node | None:
    while node is not None and node.type == "parenthesized_expression":
        inner = named_children(node)
        node = inner[0] if inner else None
    return node


def string_value(node: Node | None) -> str | None:
    """Return the contents of a plain string or substitution-free template literal."""
    if node is None:
        return None
    if node.type == "string":
        return "".join(text_of(c) for c in node.named_children if c.type in ("string_fragment", "escape_sequence"))
    if node.type == "template_string":
        if any(c.type == "template_substitution" for c in node.named_children):
            return None
        return text_of(node)[1:-1]
    return None


def property_key_name(key: Node | None) -> str | None:
    """Name of an object key written as ``name``, ``'name'`` or ``"name"``."""
    if key is None:
        return None
    if key.type in ("property_identifier", "shorthand_property_identifier", "shorthand_property_identifier_pattern"):
        return text_of(key)
    value = string_value(key) if key.type == "string" else None
    if value is not None and is_identifier_name(value):
        return value
    return None


def next_token(node: Node) -> Node | None:
    """First leaf after ``node`` in source order, skipping comments."""
    current: Node | None = node
    while current is not None:
        sibling = current.next_sibling
        while sibling is not None and sibling.type == "comment":
            sibling = sibling.next_sibling
        if sibling is not None:
            while sibling.child_count > 0:
                sibling = sibling.children[0]
            return sibling
        current = current.parent
    return None


def ancestors(node: Node) -> Iterator[Node]:
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def walk(node: Node) -> Iterator[Node]:
    """Pre-order walk of ``node`` and its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def of_type(*types: str) -> Predicate:
    wanted = frozenset(types)
    return lambda node: node is not None and node.type in wanted


def field(name: str, predicate: Predicate) -> Predicate:
    def check(node: Node) -> bool:
        if node is None:
            return False
        child = node.child_by_field_name(name)
        return child is not None and predicate(child)

    return check


def unwrapped(predicate: Predicate) -> Predicate:
    def check(node: Node) -> bool:
        inner = unwrap_parens(node)
        return inner is not None and predicate(inner)

    return check


def text_is(*values: str) -> Predicate:
    wanted = frozenset(values)
    return lambda node: node is not None and text_of(node) in wanted


def text_matches(pattern: str) -> Predicate:
    compiled = re.compile(pattern)
    return lambda node: node is not None and compiled.search(text_of(node)) is not None


def string_is(*values: str) -> Predicate:
    wanted = frozenset(values)
    return lambda node: string_value(node) in wanted


def all_of(*predicates: Predicate) -> Predicate:
    return lambda node: all(p(node) for p in predicates)


def any_of(*predicates: Predicate) -> Predicate:
    return lambda node: any(p(node) for p in predicates)


def has_ancestor(predicate: Predicate, stop: Predicate | None = None) -> Predicate:
    """True when some ancestor matches ``predicate`` before one matches ``stop``."""

    def check(node: Node) -> bool:
        if node is None:
            return False
        for ancestor in ancestors(node):
            if predicate(ancestor):
                return True
            if stop is not None and stop(ancestor):
                return False
        return False

    return check


def first_argument(predicate: Predicate) -> Predicate:
    def check(node: Node) -> bool:
        arguments = node.child_by_field_name("arguments") if node is not None else None
        if arguments is None:
            return False
        args = named_children(arguments)
        return bool(args) and predicate(args[0])

    return check


# ---------------------------------------------------------------------------
# Shape predicates
# ---------------------------------------------------------------------------


def member_of(property_name: str, object_predicate: Predicate = of_type("identifier")) -> Predicate:
    """``<object>.<property_name>`` where the object matches ``object_predicate``."""
    return all_of(
        of_type("member_expression"),
        field("object", object_predicate),
        field("property", all_of(of_type("property_identifier"), text_is(property_name))),
    )


def member_assignment(property_name: str) -> Predicate:
    return all_of(of_type("assignment_expression"), field("left", member_of(property_name)))


def is_member_assignment(node: Node, property_name: str) -> bool:
    """``Identifier.<property_name> = <anything>``."""
    return member_assignment(property_name)(node)


is_deprecated_defaults_assignment: Predicate = all_of(
    member_assignment("defaultProps"),
    field("right", unwrapped(of_type("object"))),
)

is_prop_types_assignment: Predicate = all_of(
    of_type("assignment_expression"),
    field("left", member_of("propTypes", all_of(of_type("identifier"), text_matches(r"^[A-Z]")))),
)

is_this_props: Predicate = member_of("props", of_type("this"))

is_require_call: Predicate = all_of(
    of_type("call_expression"),
    field("function", all_of(of_type("identifier"), text_is("require"))),
)


def requires_module(module: str) -> Predicate:
    """``require('<module>')``."""
    return all_of(is_require_call, first_argument(string_is(module)))


def imports_module(module: str) -> Predicate:
    """``import ... from '<module>'``."""
    return all_of(of_type("import_statement"), field("source", string_is(module)))


def assignment_target_name(node: Node) -> str:
    """Name of ``X`` in ``X.prop = value``; empty when the shape does not match."""
    left = node.child_by_field_name("left")
    return text_of(left.child_by_field_name("object")) if left is not None else ""


def member_name(member: Node) -> str | None:
    """Name of a class member (method or field)."""
    key = member.child_by_field_name("name")
    if key is None:
        key = member.child_by_field_name("property")
    return property_key_name(key)


def is_static_member(member: Node) -> bool:
    return any(child.type == "static" for child in member.children)


def class_members(cls: Node) -> list[Node]:
    body = cls.child_by_field_name("body")
    return named_children(body) if body is not None else []
