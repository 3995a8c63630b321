"""Text edits: applying, ordering, aligning to whole lines and merging them.

Offsets in an :class:`Edit` index into whatever the edit is applied to:
characters for ``str`` sources and bytes for ``bytes`` sources.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Iterable, Optional


@dataclass(frozen=True)
class Edit:
    """Replacement of the region [start, end) of a text by ``new``."""

    start: int
    end: int
    new: str = ""

    def __str__(self) -> str:
        quoted = json.dumps(self.new, ensure_ascii=False)
        return f"{{Start:{self.start},End:{self.end},New:{quoted}}}"


def _edit_key(edit: Edit) -> tuple[int, int]:
    return edit.start, edit.end


def sort_edits(edits: list[Edit]) -> None:
    """Order edits in place by (start, end).

    Insertions come before deletions at the same point; the sort is stable,
    so several insertions at one point keep their order.
    """
    edits.sort(key=_edit_key)


def _validate(size: int, edits: Iterable[Edit]) -> list[Edit]:
    """Return the edits in order, checking they fit a text of this size."""
    ordered = sorted(edits, key=_edit_key)
    last_end = 0
    for edit in ordered:
        if not 0 <= edit.start <= edit.end <= size:
            raise ValueError("diff has out-of-bounds edits")
        if edit.start < last_end:
            raise ValueError("diff has overlapping edits")
        last_end = edit.end
    return ordered


def apply(src: str, edits: Iterable[Edit]) -> str:
    """Apply edits to src and return the result.

    Edits are applied in order of start offset; edits with the same start
    keep the order they were given in. Raises ValueError if an edit is out
    of bounds or two edits overlap.
    """
    parts: list[str] = []
    last_end = 0
    for edit in _validate(len(src), edits):
        parts.append(src[last_end:edit.start])
        parts.append(edit.new)
        last_end = edit.end
    parts.append(src[last_end:])
    return "".join(parts)


def apply_bytes(src: bytes, edits: Iterable[Edit]) -> bytes:
    """Like :func:`apply`, with byte offsets into src; returns new bytes."""
    parts: list[bytes] = []
    last_end = 0
    for edit in _validate(len(src), edits):
        parts.append(src[last_end:edit.start])
        parts.append(edit.new.encode("utf-8"))
        last_end = edit.end
    parts.append(src[last_end:])
    return b"".join(parts)


def _is_line_aligned(src: str, edit: Edit) -> bool:
    if edit.start >= len(src):
        return False  # insertion at end of file
    if edit.start > 0 and src[edit.start - 1] != "\n":
        return False
    if edit.end > 0 and src[edit.end - 1] != "\n":
        return False
    return not edit.new or edit.new.endswith("\n")


def line_edits(src: str, edits: Iterable[Edit]) -> list[Edit]:
    """Expand and merge edits so that each replaces one or more whole lines."""
    ordered = _validate(len(src), edits)
    if all(_is_line_aligned(src, edit) for edit in ordered):
        return ordered

    expanded: list[Edit] = []
    prev = ordered[0]
    for edit in ordered[1:]:
        between = src[prev.end:edit.start]
        if "\n" not in between:
            # the edits touch the same lines: combine them
            prev = Edit(prev.start, edit.end, prev.new + between + edit.new)
        else:
            expanded.append(_expand_edit(prev, src))
            prev = edit
    expanded.append(_expand_edit(prev, src))
    return expanded


def _expand_edit(edit: Edit, src: str) -> Edit:
    """Widen edit to cover complete lines of src."""
    start, end, new = edit.start, edit.end, edit.new

    new_start = start
    column = start - 1 - src.rfind("\n", 0, start)
    if column > 0:
        new_start = start - column
        new = src[new_start:start] + new

    new_end = end
    if (end > 0 and src[end - 1] != "\n") or (new and not new.endswith("\n")):
        newline = src.find("\n", end)
        new_end = len(src) if newline < 0 else newline + 1
    new += src[end:new_end]

    return Edit(new_start, new_end, new)


def merge(x: Iterable[Edit], y: Iterable[Edit]) -> Optional[list[Edit]]:
    """Merge two valid, ordered lists of edits, or return None on conflict.

    Identical edits in x and y are coalesced. Where both insert different
    text at the same point, the insertion from x comes first.
    """
    xs, ys = list(x), list(y)
    merged: list[Edit] = []
    xi = yi = 0
    while xi < len(xs) and yi < len(ys):
        px, py = xs[xi], ys[yi]
        if px == py:
            merged.append(px)
            xi += 1
            yi += 1
        elif px.end <= py.start:
            merged.append(px)
            xi += 1
        elif py.end <= px.start:
            merged.append(py)
            yi += 1
        elif px.start < py.start:
            # x starts first: split it into a deletion and the rest
            merged.append(Edit(px.start, py.start, ""))
            xs[xi] = replace(px, start=py.start)
        elif py.start < px.start:
            merged.append(Edit(py.start, px.start, ""))
            ys[yi] = replace(py, start=px.start)
        else:
            # unequal non-insertions at the same point
            return None
    merged.extend(xs[xi:])
    merged.extend(ys[yi:])
    return merged