import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from react19_lint.core.languages import normalize_language, resolve_language
from react19_lint.models import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedSource:
    """A parsed file: the tree plus the exact bytes its offsets refer to."""

    path: str
    language: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        return self.tree.root_node.has_error

    def text(self, node: Node) -> str:
        return node_text(self.source, node)


def node_text(source: bytes, node: Node) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def point_of(node: Node, end: bool = False) -> Position:
    point = node.end_point if end else node.start_point
    return Position(row=point[0], column=point[1])


def parse_source(source: bytes | str, path: str = "<input>", language: str | None = None) -> ParsedSource:
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    file_path = Path(path) if path != "<input>" else None
    resolved_language = normalize_language(language) if language else resolve_language(None, file_path)

    tree = get_parser(cast(SupportedLanguage, resolved_language)).parse(source_bytes)
    if tree.root_node.has_error:
        logger.warning("%s: source contains syntax errors, results may be incomplete", path)

    return ParsedSource(path=path, language=resolved_language, source=source_bytes, tree=tree)


def parse_file(path: str, language: str | None = None) -> ParsedSource:
    file_path = Path(path)
    resolved_language = normalize_language(language) if language else resolve_language(None, file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(source_bytes, path, resolved_language)
