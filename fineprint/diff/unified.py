"""Rendering edits as unified diffs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional

from fineprint.diff.core import Edit, line_edits
from fineprint.diff.ndiff import strings

DEFAULT_CONTEXT_LINES = 3


class _OpKind(enum.Enum):
    DELETE = "delete"
    INSERT = "insert"
    EQUAL = "equal"


@dataclass
class _Hunk:
    from_line: int
    to_line: int
    lines: list[tuple[_OpKind, str]] = field(default_factory=list)


def unified(old_label: str, new_label: str, old: str, new: str) -> str:
    """Unified diff of old and new, or the empty string if they are equal."""
    return to_unified(old_label, new_label, old, strings(old, new), DEFAULT_CONTEXT_LINES)


def to_unified(
    old_label: str,
    new_label: str,
    content: str,
    edits: Iterable[Edit],
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> str:
    """Unified diff of applying edits to content.

    Each hunk carries context_lines unchanged lines around it. Raises
    ValueError if the edits are inconsistent with content.
    """
    return _render(old_label, new_label, _build_hunks(content, list(edits), context_lines))


def _split_lines(text: str) -> list[str]:
    """Split text after each newline, dropping an empty final piece."""
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def _add_equal_lines(hunk: _Hunk, lines: list[str], start: int, end: int) -> int:
    added = 0
    for text in lines[max(start, 0):max(end, 0)]:
        hunk.lines.append((_OpKind.EQUAL, text))
        added += 1
    return added


def _build_hunks(content: str, edits: list[Edit], context_lines: int) -> list[_Hunk]:
    if not edits:
        return []
    gap = context_lines * 2
    aligned = line_edits(content, edits)
    lines = _split_lines(content)
    hunks: list[_Hunk] = []
    hunk: Optional[_Hunk] = None
    last = 0
    to_line = 0
    for edit in aligned:
        start = content.count("\n", 0, edit.start)
        end = content.count("\n", 0, edit.end)
        if edit.end == len(content) and content and not content.endswith("\n"):
            end += 1  # end of file counts as an implicit newline

        if hunk is not None and start == last:
            pass
        elif hunk is not None and start <= last + gap:
            _add_equal_lines(hunk, lines, last, start)
        else:
            if hunk is not None:
                _add_equal_lines(hunk, lines, last, last + context_lines)
                hunks.append(hunk)
            to_line += start - last
            hunk = _Hunk(from_line=start + 1, to_line=to_line + 1)
            delta = _add_equal_lines(hunk, lines, start - context_lines, start)
            hunk.from_line -= delta
            hunk.to_line -= delta

        hunk.lines.extend((_OpKind.DELETE, text) for text in lines[start:end])
        last = max(start, end)
        if edit.new:
            for text in _split_lines(edit.new):
                hunk.lines.append((_OpKind.INSERT, text))
                to_line += 1

    if hunk is not None:
        _add_equal_lines(hunk, lines, last, last + context_lines)
        hunks.append(hunk)
    return hunks


def _range(label: str, line: int, count: int) -> str:
    if count > 1:
        return f" {label}{line},{count}"
    if line == 1 and count == 0:
        # GNU diff -u writes an empty side this way
        return f" {label}0,0"
    return f" {label}{line}"


_PREFIXES = {_OpKind.DELETE: "-", _OpKind.INSERT: "+", _OpKind.EQUAL: " "}


def _render(from_name: str, to_name: str, hunks: list[_Hunk]) -> str:
    if not hunks:
        return ""
    out = [f"--- {from_name}\n", f"+++ {to_name}\n"]
    for hunk in hunks:
        from_count = sum(1 for kind, _ in hunk.lines if kind is not _OpKind.INSERT)
        to_count = sum(1 for kind, _ in hunk.lines if kind is not _OpKind.DELETE)
        out.append(
            "@@"
            + _range("-", hunk.from_line, from_count)
            + _range("+", hunk.to_line, to_count)
            + " @@\n"
        )
        for kind, text in hunk.lines:
            out.append(_PREFIXES[kind] + text)
            if not text.endswith("\n"):
                out.append("\n\\ No newline at end of file\n")
    return "".join(out)