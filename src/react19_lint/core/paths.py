import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from react19_lint.core.languages import is_supported_file

_SKIPPED_DIRECTORIES = frozenset({"node_modules", "dist", "build", "coverage"})
_WORD_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")


def display_name_from_path(path: str | Path) -> str:
    """Derive a component-style name from a file path.

    ``src/user-card.jsx`` gives ``UserCard``; ``src/Profile/index.js`` gives
    ``Profile``. Falls back to ``Component`` when nothing usable is left.
    """
    file_path = Path(path)
    stem = file_path.stem
    if stem == "index" and file_path.parent.name:
        stem = file_path.parent.name
    words = [w for w in _WORD_SPLIT_RE.split(stem) if w]
    name = "".join(w[0].upper() + w[1:] for w in words)
    if not name or name[0].isdigit():
        return "Component"
    return name


def _is_skipped(path: Path) -> bool:
    return path.name in _SKIPPED_DIRECTORIES or path.name.startswith(".")


def iter_source_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Expand files and directories into the supported source files they contain.

    Files named explicitly are yielded as given; directories are searched
    recursively in sorted order, skipping hidden and build directories.
    """
    for raw in paths:
        path = Path(raw)
        if not path.is_dir():
            yield path
            continue
        for candidate in sorted(path.rglob("*")):
            relative = candidate.relative_to(path)
            if any(_is_skipped(Path(part)) for part in relative.parts[:-1]):
                continue
            if candidate.is_file() and is_supported_file(candidate):
                yield candidate
