"""Classify a resolved declaration into the component shape that drives the rewrite."""

from dataclasses import dataclass

from tree_sitter import Node

from react19_lint.analysis.predicates import (
    CLASS_TYPES,
    DECLARATION_TYPES,
    FUNCTION_TYPES,
    class_members,
    is_static_member,
    is_this_props,
    member_name,
    named_children,
    property_key_name,
    text_of,
    unwrap_parens,
)


@dataclass(frozen=True)
class FunctionWithDestructuredParam:
    function: Node
    pattern: Node


@dataclass(frozen=True)
class FunctionWithPlainOrNoParam:
    function: Node
    parameters: Node | None
    parameter: Node | None
    needs_parens: bool = False


@dataclass(frozen=True)
class ClassComponent:
    cls: Node
    render_body: Node
    existing_destructuring: Node | None = None


@dataclass(frozen=True)
class Unrecognized:
    reason: str


ComponentShape = FunctionWithDestructuredParam | FunctionWithPlainOrNoParam | ClassComponent | Unrecognized


@dataclass(frozen=True)
class PatternProperty:
    """One entry of an object pattern; comments are kept so they survive a rewrite."""

    name: str
    node: Node
    has_default: bool = False

    @property
    def is_comment(self) -> bool:
        return self.node.type == "comment"


def pattern_properties(pattern: Node) -> list[PatternProperty]:
    properties: list[PatternProperty] = []
    for child in pattern.named_children:
        if child.type == "comment":
            properties.append(PatternProperty(name="", node=child))
        elif child.type == "shorthand_property_identifier_pattern":
            properties.append(PatternProperty(name=text_of(child), node=child))
        elif child.type == "object_assignment_pattern":
            name = text_of(child.child_by_field_name("left"))
            properties.append(PatternProperty(name=name, node=child, has_default=True))
        elif child.type == "pair_pattern":
            name = property_key_name(child.child_by_field_name("key")) or ""
            value = child.child_by_field_name("value")
            has_default = value is not None and value.type == "assignment_pattern"
            properties.append(PatternProperty(name=name, node=child, has_default=has_default))
    return properties


def unsupported_pattern_reason(pattern: Node) -> str | None:
    """Why ``pattern`` cannot take merged defaults, or ``None`` when it can."""
    for child in named_children(pattern):
        kind = child.type
        if kind == "shorthand_property_identifier_pattern":
            continue
        if kind == "object_assignment_pattern":
            left = child.child_by_field_name("left")
            if left is None or left.type != "shorthand_property_identifier_pattern":
                return "nested destructuring pattern"
            continue
        if kind == "pair_pattern":
            if property_key_name(child.child_by_field_name("key")) is None:
                return "computed or non-identifier key in pattern"
            value = child.child_by_field_name("value")
            if value is not None and value.type == "assignment_pattern":
                value = value.child_by_field_name("left")
            if value is None or value.type != "identifier":
                return "nested destructuring pattern"
            continue
        if kind == "rest_pattern":
            return "rest element in pattern"
        return f"unsupported pattern element {kind}"
    return None


def _parameter_binding(parameter: Node) -> Node:
    if parameter.type in ("required_parameter", "optional_parameter"):
        pattern = parameter.child_by_field_name("pattern")
        if pattern is not None:
            parameter = pattern
    if parameter.type == "assignment_pattern":
        left = parameter.child_by_field_name("left")
        if left is not None:
            parameter = left
    return parameter


def _classify_function(function: Node) -> ComponentShape:
    single = function.child_by_field_name("parameter")
    if single is not None:
        return FunctionWithPlainOrNoParam(function=function, parameters=None, parameter=single, needs_parens=True)

    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return Unrecognized(f"{function.type} has no parameter list")

    params = named_children(parameters)
    if not params:
        return FunctionWithPlainOrNoParam(function=function, parameters=parameters, parameter=None)

    binding = _parameter_binding(params[0])
    if binding.type == "object_pattern":
        reason = unsupported_pattern_reason(binding)
        if reason:
            return Unrecognized(reason)
        return FunctionWithDestructuredParam(function=function, pattern=binding)
    if binding.type == "identifier":
        return FunctionWithPlainOrNoParam(function=function, parameters=parameters, parameter=binding)
    return Unrecognized(f"first parameter is a {binding.type}")


def _props_destructuring(render_body: Node) -> Node | None:
    """The ``{ ... }`` pattern of a leading ``const { ... } = this.props``, if any."""
    for statement in named_children(render_body):
        if statement.type not in DECLARATION_TYPES:
            break
        for declarator in named_children(statement):
            if declarator.type != "variable_declarator":
                continue
            binding = declarator.child_by_field_name("name")
            value = unwrap_parens(declarator.child_by_field_name("value"))
            if binding is not None and binding.type == "object_pattern" and value is not None and is_this_props(value):
                return binding
    return None


def _classify_class(cls: Node) -> ComponentShape:
    render = next(
        (
            member
            for member in class_members(cls)
            if member.type == "method_definition" and member_name(member) == "render" and not is_static_member(member)
        ),
        None,
    )
    if render is None:
        return Unrecognized("class has no render method")
    body = render.child_by_field_name("body")
    if body is None:
        return Unrecognized("render method has no body")

    existing = _props_destructuring(body)
    if existing is not None:
        reason = unsupported_pattern_reason(existing)
        if reason:
            return Unrecognized(reason)
    return ClassComponent(cls=cls, render_body=body, existing_destructuring=existing)


def component_node(declaration: Node) -> Node | None:
    """The function or class a declaration introduces, unwrapping ``const X = (...)``."""
    if declaration.type == "variable_declarator":
        binding = declaration.child_by_field_name("name")
        if binding is None or binding.type != "identifier":
            return None
        return unwrap_parens(declaration.child_by_field_name("value"))
    return declaration


def classify(declaration: Node | None) -> ComponentShape:
    if declaration is None:
        return Unrecognized("declaration not found")
    node = component_node(declaration)
    if node is None:
        return Unrecognized(f"{declaration.type} has no initializer")
    if node.type in FUNCTION_TYPES:
        return _classify_function(node)
    if node.type in CLASS_TYPES:
        return _classify_class(node)
    return Unrecognized(f"{node.type} is not a component declaration")
