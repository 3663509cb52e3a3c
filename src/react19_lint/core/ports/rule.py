from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from tree_sitter import Node

from react19_lint.models import RuleMeta

if TYPE_CHECKING:
    from react19_lint.core.linter import RuleContext

# Node type (optionally suffixed with ":exit") -> callback
Visitor = dict[str, Callable[[Node], None]]


class Rule(Protocol):
    meta: RuleMeta

    def create(self, context: "RuleContext") -> Visitor: ...
