import logging
from dataclasses import dataclass

from tree_sitter import Node

from react19_lint.analysis.predicates import named_children, property_key_name, text_of, unwrap_parens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultEntry:
    name: str
    source_text: str


def extract_defaults(object_node: Node | None) -> dict[str, DefaultEntry] | None:
    """Map each property of a ``defaultProps`` literal to its value's source text.

    Values are kept exactly as written. For duplicate keys the last value wins
    while the key keeps the position of its first occurrence. Returns ``None``
    when the literal holds anything that cannot become a parameter default
    (spreads, methods, computed or numeric keys) or a value that names its own
    key, which a parameter default would shadow (``{ size }``, ``{ size: size }``).
    """
    node = unwrap_parens(object_node)
    if node is None or node.type != "object":
        return None

    defaults: dict[str, DefaultEntry] = {}
    for prop in named_children(node):
        if prop.type == "pair":
            name = property_key_name(prop.child_by_field_name("key"))
            value = prop.child_by_field_name("value")
            if name is None or value is None:
                logger.debug("Unsupported key %r in defaultProps", text_of(prop.child_by_field_name("key")))
                return None
            if value.type == "identifier" and text_of(value) == name:
                logger.debug("Default for %s refers to its own name", name)
                return None
            defaults[name] = DefaultEntry(name=name, source_text=text_of(value))
        else:
            logger.debug("Unsupported %s in defaultProps", prop.type)
            return None
    return defaults
