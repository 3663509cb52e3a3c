"""Build the text edits that move ``defaultProps`` into parameter defaults.

Every edit is expressed against the original source bytes. The edits of one
fix never overlap, so the host can apply them in a single pass.
"""

import logging

from tree_sitter import Node

from react19_lint.analysis.components import (
    ClassComponent,
    ComponentShape,
    FunctionWithDestructuredParam,
    FunctionWithPlainOrNoParam,
    PatternProperty,
    pattern_properties,
)
from react19_lint.analysis.defaults import DefaultEntry
from react19_lint.analysis.predicates import next_token, text_of, walk
from react19_lint.analysis.scope import declared_names
from react19_lint.core.parsing import node_text
from react19_lint.models import Fix, TextEdit

logger = logging.getLogger(__name__)

_REFERENCE_TYPES = frozenset({"identifier", "shorthand_property_identifier"})

# (text, is_comment)
_Item = tuple[str, bool]


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _line_start(source: bytes, offset: int) -> int:
    return source.rfind(b"\n", 0, offset) + 1


def _line_indent(source: bytes, offset: int) -> str:
    start = _line_start(source, offset)
    end = start
    while end < len(source) and source[end : end + 1] in (b" ", b"\t"):
        end += 1
    return source[start:end].decode("utf-8")


def _starts_line(source: bytes, offset: int) -> bool:
    """True when only whitespace precedes ``offset`` on its line."""
    return source[_line_start(source, offset) : offset].strip() == b""


def _newline(source: bytes, offset: int) -> str:
    """The line ending (CRLF or LF) of the line holding ``offset``."""
    end = source.find(b"\n", offset)
    if end == -1:
        end = source.rfind(b"\n", 0, offset)
    return "\r\n" if end > 0 and source[end - 1 : end] == b"\r" else "\n"


def render_pattern(
    items: list[_Item],
    multiline: bool = False,
    indent: str = "  ",
    closing_indent: str = "",
    newline: str = "\n",
) -> str:
    """Render object-pattern entries as ``{ a, b = 1 }`` or one entry per line."""
    if multiline:
        lines = [f"{indent}{text}{'' if is_comment else ','}{newline}" for text, is_comment in items]
        return "{" + newline + "".join(lines) + closing_indent + "}"

    out = ""
    pending: list[str] = []
    emitted = False
    for text, is_comment in items:
        if is_comment:
            pending.append(text)
            continue
        if emitted:
            out += ", "
        out += "".join(f"{comment} " for comment in pending) + text
        pending = []
        emitted = True
    if pending:
        out += (" " if out else "") + " ".join(pending)
    return f"{{ {out} }}" if out else "{}"


def _is_multiline(pattern: Node, properties: list[PatternProperty]) -> bool:
    if not properties:
        return pattern.start_point[0] != pattern.end_point[0]
    if any(p.is_comment and text_of(p.node).startswith("//") for p in properties):
        return True
    first, last = properties[0].node, properties[-1].node
    return first.start_point[0] != last.start_point[0] or first.start_point[0] != pattern.start_point[0]


def _trails(comment: Node, previous: Node) -> bool:
    """A block comment between a property and its ``,`` or the closing ``}``."""
    if comment.type != "comment" or not text_of(comment).startswith("/*"):
        return False
    following = comment.next_sibling
    return (
        comment.start_point[0] == previous.end_point[0]
        and following is not None
        and following.type in (",", "}")
    )


def _default_items(defaults: dict[str, DefaultEntry], skip: set[str] | None = None) -> list[_Item]:
    skip = skip or set()
    return [(f"{name} = {entry.source_text}", False) for name, entry in defaults.items() if name not in skip]


# ---------------------------------------------------------------------------
# Per-shape edits
# ---------------------------------------------------------------------------


def merge_into_pattern(pattern: Node, defaults: dict[str, DefaultEntry], source: bytes) -> TextEdit:
    """Rewrite ``pattern`` with ``defaults`` merged in.

    Author-written defaults are kept as they are; properties without one get
    the matching entry; entries with no property are appended in order.
    """
    properties = pattern_properties(pattern)
    present = {p.name for p in properties if not p.is_comment}

    items: list[_Item] = []
    previous: Node | None = None
    for prop in properties:
        text = node_text(source, prop.node)
        if previous is not None and _trails(prop.node, previous):
            items[-1] = (f"{items[-1][0]} {text}", False)
            previous = None
            continue
        previous = None if prop.is_comment else prop.node
        if not prop.is_comment and not prop.has_default and prop.name in defaults:
            text = f"{text} = {defaults[prop.name].source_text}"
        items.append((text, prop.is_comment))
    items.extend(_default_items(defaults, skip=present))

    if _is_multiline(pattern, properties):
        closing = pattern.end_byte - 1
        closing_indent = _line_indent(source, closing if _starts_line(source, closing) else pattern.start_byte)
        if properties and _starts_line(source, properties[0].node.start_byte):
            indent = _line_indent(source, properties[0].node.start_byte)
        else:
            indent = closing_indent + "  "
        replacement = render_pattern(
            items,
            multiline=True,
            indent=indent,
            closing_indent=closing_indent,
            newline=_newline(source, pattern.start_byte),
        )
    else:
        replacement = render_pattern(items)

    return TextEdit(start_byte=pattern.start_byte, end_byte=pattern.end_byte, replacement=replacement)


def _is_referenced(function: Node, parameter: Node) -> bool:
    name = text_of(parameter)
    body = function.child_by_field_name("body")
    if body is None:
        return False
    return any(node.type in _REFERENCE_TYPES and text_of(node) == name for node in walk(body))


def _plain_parameter_edit(shape: FunctionWithPlainOrNoParam, defaults: dict[str, DefaultEntry]) -> TextEdit | None:
    pattern_text = render_pattern(_default_items(defaults))
    parameter = shape.parameter
    if parameter is not None:
        if _is_referenced(shape.function, parameter):
            logger.debug("Parameter %s is used in the function body, not replacing it", text_of(parameter))
            return None
        replacement = f"({pattern_text})" if shape.needs_parens else pattern_text
        return TextEdit(start_byte=parameter.start_byte, end_byte=parameter.end_byte, replacement=replacement)
    if shape.parameters is not None:
        # Insert right after "(" so comments inside the list survive.
        offset = shape.parameters.start_byte + 1
        return TextEdit(start_byte=offset, end_byte=offset, replacement=pattern_text)
    return None


def _render_statement_edit(shape: ClassComponent, defaults: dict[str, DefaultEntry], source: bytes) -> TextEdit:
    statement = f"const {render_pattern(_default_items(defaults))} = this.props;"
    body = shape.render_body
    offset = body.start_byte + 1
    statements = body.named_children
    if statements and statements[0].start_point[0] > body.start_point[0]:
        newline = _newline(source, offset)
        replacement = f"{newline}{_line_indent(source, statements[0].start_byte)}{statement}"
    elif statements:
        replacement = f" {statement}"
    else:
        replacement = f" {statement} "
    return TextEdit(start_byte=offset, end_byte=offset, replacement=replacement)


def _body_of(shape: ComponentShape) -> Node | None:
    if isinstance(shape, ClassComponent):
        return shape.render_body
    if isinstance(shape, (FunctionWithDestructuredParam, FunctionWithPlainOrNoParam)):
        body = shape.function.child_by_field_name("body")
        if body is not None and body.type == "statement_block":
            return body
    return None


def _new_names(shape: ComponentShape, defaults: dict[str, DefaultEntry]) -> set[str]:
    pattern: Node | None = None
    if isinstance(shape, FunctionWithDestructuredParam):
        pattern = shape.pattern
    elif isinstance(shape, ClassComponent):
        pattern = shape.existing_destructuring
    existing = {p.name for p in pattern_properties(pattern)} if pattern is not None else set()
    return set(defaults) - existing


def shape_edit(shape: ComponentShape, defaults: dict[str, DefaultEntry], source: bytes) -> TextEdit | None:
    """The parameter or destructuring edit for ``shape``; ``None`` when no safe edit exists."""
    body = _body_of(shape)
    if body is not None:
        clashes = _new_names(shape, defaults) & declared_names(body)
        if clashes:
            logger.debug("Defaults %s would clash with declarations in the body", sorted(clashes))
            return None

    if isinstance(shape, FunctionWithDestructuredParam):
        return merge_into_pattern(shape.pattern, defaults, source)
    if isinstance(shape, FunctionWithPlainOrNoParam):
        return _plain_parameter_edit(shape, defaults)
    if isinstance(shape, ClassComponent):
        if shape.existing_destructuring is not None:
            return merge_into_pattern(shape.existing_destructuring, defaults, source)
        return _render_statement_edit(shape, defaults, source)
    return None


def removal_edits(assignment: Node) -> list[TextEdit]:
    """Delete the assignment and, when one follows it, its ``;``."""
    edits = [TextEdit(start_byte=assignment.start_byte, end_byte=assignment.end_byte)]
    token = next_token(assignment)
    if token is not None and token.type == ";" and token.end_byte > token.start_byte:
        edits.append(TextEdit(start_byte=token.start_byte, end_byte=token.end_byte))
    return edits


def synthesize_fix(
    shape: ComponentShape,
    defaults: dict[str, DefaultEntry],
    assignment: Node,
    source: bytes,
) -> Fix | None:
    """Combine the shape edit with the removal of the assignment into one fix.

    Raises ``FixConflictError`` when the edits overlap, e.g. when the
    assignment sits inside the component it targets.
    """
    statement = assignment.parent
    if statement is None or statement.type != "expression_statement":
        logger.debug("defaultProps assignment is not a standalone statement, no fix")
        return None

    edit = shape_edit(shape, defaults, source)
    if edit is None:
        return None
    return Fix.from_edits([edit, *removal_edits(assignment)], len(source))
