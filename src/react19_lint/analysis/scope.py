"""Lexical name resolution over a tree-sitter JavaScript tree.

``resolve_declaration`` walks outward from a node through the enclosing
scopes and returns the first declaration that binds a name. When a scope
declares the same name more than once, the earliest one in source order wins.
Aliases (``const B = A``) are not followed here; ``follow_aliases`` does that
one hop at a time.
"""

import logging
from collections.abc import Iterator

from tree_sitter import Node

from react19_lint.analysis.predicates import (
    CLASS_TYPES,
    DECLARATION_TYPES,
    FUNCTION_TYPES,
    named_children,
    text_of,
    unwrap_parens,
)

logger = logging.getLogger(__name__)

MAX_ALIAS_HOPS = 8

_BLOCK_SCOPES = frozenset({"program", "statement_block", "class_static_block"})
_NAMED_DECLARATIONS = frozenset(
    {"function_declaration", "generator_function_declaration", "class_declaration", "abstract_class_declaration"}
)
_PARAMETER_WRAPPERS = frozenset({"required_parameter", "optional_parameter"})


def bound_names(pattern: Node | None) -> Iterator[str]:
    """Names bound by a binding pattern (identifier, object or array pattern)."""
    if pattern is None:
        return
    kind = pattern.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        yield text_of(pattern)
    elif kind in ("object_pattern", "array_pattern"):
        for child in named_children(pattern):
            yield from bound_names(child)
    elif kind == "pair_pattern":
        yield from bound_names(pattern.child_by_field_name("value"))
    elif kind in ("object_assignment_pattern", "assignment_pattern"):
        yield from bound_names(pattern.child_by_field_name("left"))
    elif kind == "rest_pattern":
        for child in named_children(pattern):
            yield from bound_names(child)
    elif kind in _PARAMETER_WRAPPERS:
        yield from bound_names(pattern.child_by_field_name("pattern"))


def _import_names(statement: Node) -> Iterator[str]:
    for clause in named_children(statement):
        if clause.type != "import_clause":
            continue
        for item in named_children(clause):
            if item.type == "identifier":
                yield text_of(item)
            elif item.type == "namespace_import":
                yield from (text_of(c) for c in named_children(item) if c.type == "identifier")
            elif item.type == "named_imports":
                for specifier in named_children(item):
                    alias = specifier.child_by_field_name("alias")
                    yield text_of(alias if alias is not None else specifier.child_by_field_name("name"))


def _statement_bindings(statement: Node, name: str) -> Iterator[Node]:
    kind = statement.type
    if kind == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        if declaration is not None:
            yield from _statement_bindings(declaration, name)
    elif kind in DECLARATION_TYPES:
        for declarator in named_children(statement):
            if declarator.type == "variable_declarator" and name in bound_names(declarator.child_by_field_name("name")):
                yield declarator
    elif kind in _NAMED_DECLARATIONS:
        if text_of(statement.child_by_field_name("name")) == name:
            yield statement
    elif kind == "import_statement":
        if name in _import_names(statement):
            yield statement


def _hoisted_vars(block: Node, name: str) -> Iterator[Node]:
    """``var`` declarators nested in blocks below ``block``, not crossing function boundaries."""
    stack = list(reversed(named_children(block)))
    while stack:
        current = stack.pop()
        if current.type in FUNCTION_TYPES or current.type in CLASS_TYPES or current.type == "method_definition":
            continue
        if current.type == "variable_declaration" and current.parent is not block:
            yield from _statement_bindings(current, name)
            continue
        stack.extend(reversed(named_children(current)))


def _is_function_body(block: Node) -> bool:
    parent = block.parent
    return block.type == "program" or (
        parent is not None and (parent.type in FUNCTION_TYPES or parent.type == "method_definition")
    )


def _parameter_bindings(function: Node, name: str) -> Iterator[Node]:
    parameters = function.child_by_field_name("parameters")
    if parameters is not None:
        for parameter in named_children(parameters):
            if name in bound_names(parameter):
                yield parameter
    single = function.child_by_field_name("parameter")
    if single is not None and text_of(single) == name:
        yield single
    if function.type in ("function_expression", "function", "generator_function"):
        if text_of(function.child_by_field_name("name")) == name:
            yield function


def _scope_bindings(scope: Node, name: str) -> Iterator[Node]:
    kind = scope.type
    if kind in _BLOCK_SCOPES:
        for statement in named_children(scope):
            yield from _statement_bindings(statement, name)
        if _is_function_body(scope):
            yield from _hoisted_vars(scope, name)
    elif kind in FUNCTION_TYPES or kind == "method_definition":
        yield from _parameter_bindings(scope, name)
    elif kind == "for_statement":
        initializer = scope.child_by_field_name("initializer")
        if initializer is not None:
            yield from _statement_bindings(initializer, name)
    elif kind == "for_in_statement":
        if scope.child_by_field_name("kind") is not None and name in bound_names(scope.child_by_field_name("left")):
            yield scope
    elif kind == "catch_clause":
        if name in bound_names(scope.child_by_field_name("parameter")):
            yield scope
    elif kind == "class":
        if text_of(scope.child_by_field_name("name")) == name:
            yield scope


def resolve_declaration(name: str, at_node: Node) -> Node | None:
    """Return the first declaration of ``name`` visible from ``at_node``, or ``None``."""
    scope: Node | None = at_node
    while scope is not None:
        candidates = list(_scope_bindings(scope, name))
        if candidates:
            return min(candidates, key=lambda node: node.start_byte)
        scope = scope.parent
    return None


def alias_target(declaration: Node) -> Node | None:
    """The identifier ``A`` when ``declaration`` is ``B = A``, else ``None``."""
    if declaration.type != "variable_declarator":
        return None
    binding = declaration.child_by_field_name("name")
    if binding is None or binding.type != "identifier":
        return None
    value = unwrap_parens(declaration.child_by_field_name("value"))
    if value is None or value.type != "identifier":
        return None
    return value


def follow_aliases(name: str, at_node: Node, max_hops: int = MAX_ALIAS_HOPS) -> Node | None:
    """Resolve ``name``, then chase ``const B = A`` re-assignments one hop at a time.

    Returns ``None`` when a hop does not resolve, a cycle is found, or more
    than ``max_hops`` aliases are chained.
    """
    declaration = resolve_declaration(name, at_node)
    seen: set[tuple[int, int]] = set()
    hops = 0
    while declaration is not None:
        target = alias_target(declaration)
        if target is None:
            return declaration
        key = (declaration.start_byte, declaration.end_byte)
        if key in seen or hops >= max_hops:
            logger.debug("Giving up on alias chain for %s at %s", name, text_of(target))
            return None
        seen.add(key)
        hops += 1
        declaration = resolve_declaration(text_of(target), declaration)
    return None


def declared_names(block: Node) -> set[str]:
    """Names declared directly in ``block`` (not in nested blocks or functions)."""
    names: set[str] = set()
    for statement in named_children(block):
        if statement.type in DECLARATION_TYPES:
            for declarator in named_children(statement):
                if declarator.type == "variable_declarator":
                    names.update(bound_names(declarator.child_by_field_name("name")))
        elif statement.type in _NAMED_DECLARATIONS:
            names.add(text_of(statement.child_by_field_name("name")))
    return names
