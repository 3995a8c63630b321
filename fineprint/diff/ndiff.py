"""Computing edits between two strings or byte strings."""

from __future__ import annotations

from fineprint.diff.core import Edit
from fineprint.diff.lcs.old import diff_bytes, diff_runes


def strings(before: str, after: str) -> list[Edit]:
    """Edits that turn before into after, with character offsets."""
    if before == after:
        return []
    return [
        Edit(d.start, d.end, after[d.repl_start:d.repl_end])
        for d in diff_runes(before, after)
    ]


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def bytes_edits(before: bytes, after: bytes) -> list[Edit]:
    """Edits that turn before into after, with byte offsets.

    The edits respect character boundaries of the UTF-8 text.
    """
    if before == after:
        return []
    if before.isascii() and after.isascii():
        return [
            Edit(d.start, d.end, after[d.repl_start:d.repl_end].decode("ascii"))
            for d in diff_bytes(before, after)
        ]

    before_text = before.decode("utf-8", errors="replace")
    after_text = after.decode("utf-8", errors="replace")
    edits: list[Edit] = []
    last_end = 0
    position = 0
    for d in diff_runes(before_text, after_text):
        position += _utf8_len(before_text[last_end:d.start])
        start = position
        position += _utf8_len(before_text[d.start:d.end])
        edits.append(Edit(start, position, after_text[d.repl_start:d.repl_end]))
        last_end = d.end
    return edits