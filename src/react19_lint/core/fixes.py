import logging
from collections.abc import Iterable

from react19_lint.models import Fix

logger = logging.getLogger(__name__)


def apply_fixes(source: bytes, fixes: Iterable[Fix]) -> tuple[bytes, int]:
    """Apply as many fixes as possible in one pass.

    Fixes are taken in source order. A fix whose span (first edit start to
    last edit end) overlaps a fix already taken is skipped; a later pass over
    the re-linted output picks it up. Returns the new source and the number of
    fixes applied.
    """
    ordered = sorted(fixes, key=lambda f: (f.start_byte, f.end_byte))
    accepted: list[Fix] = []
    last_end = -1
    for fix in ordered:
        if fix.start_byte < last_end:
            logger.debug("Skipping fix at %d..%d, overlaps a previous fix", fix.start_byte, fix.end_byte)
            continue
        accepted.append(fix)
        last_end = fix.end_byte

    parts: list[bytes] = []
    cursor = 0
    for fix in accepted:
        for edit in fix.edits:
            parts.append(source[cursor : edit.start_byte])
            parts.append(edit.replacement.encode("utf-8"))
            cursor = edit.end_byte
    parts.append(source[cursor:])
    return b"".join(parts), len(accepted)
