"""Line-based diffs using the classic Myers algorithm."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Optional, Sequence

from fineprint.diff.core import Edit


class _OpKind(enum.Enum):
    DELETE = "delete"  # line deleted from the input
    INSERT = "insert"  # line inserted into the output
    EQUAL = "equal"  # line present in both


@dataclass
class _Operation:
    kind: _OpKind
    i1: int  # start line in a
    j1: int  # start line in b
    i2: int = 0  # end line in a
    content: list[str] = field(default_factory=list)  # inserted lines of b


def _split_lines(text: str) -> list[str]:
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def compute_edits(before: str, after: str) -> list[Edit]:
    """Edits that turn before into after, each replacing whole lines."""
    before_lines = _split_lines(before)
    ops = _operations(before_lines, _split_lines(after))

    # offset of each line start, plus the end of the text
    line_offsets = [0, *accumulate(len(line) for line in before_lines)]

    edits: list[Edit] = []
    for op in ops:
        start, end = line_offsets[op.i1], line_offsets[op.i2]
        if op.kind is _OpKind.DELETE:
            edits.append(Edit(start, end))
        elif op.kind is _OpKind.INSERT:
            content = "".join(op.content)
            if content:
                edits.append(Edit(start, end, content))
    return edits


def _operations(a: Sequence[str], b: Sequence[str]) -> list[_Operation]:
    """Operations converting a into b, one per run of changed lines."""
    if not a and not b:
        return []

    trace, offset = _shortest_edit_sequence(a, b)
    snakes = _backtrack(trace, len(a), len(b), offset)
    m, n = len(a), len(b)
    solution: list[_Operation] = []

    def add(op: Optional[_Operation], i2: int, j2: int) -> None:
        if op is None:
            return
        op.i2 = i2
        if op.kind is _OpKind.INSERT:
            op.content = list(b[op.j1:j2])
        solution.append(op)

    x = y = 0
    for snake in snakes:
        if snake is None or len(snake) < 2:
            continue
        sx, sy = snake
        op: Optional[_Operation] = None
        # deletions run horizontally
        while sx - sy > x - y:
            if op is None:
                op = _Operation(_OpKind.DELETE, i1=x, j1=y)
            x += 1
            if x == m:
                break
        add(op, x, y)
        op = None
        # insertions run vertically
        while sx - sy < x - y:
            if op is None:
                op = _Operation(_OpKind.INSERT, i1=x, j1=y)
            y += 1
        add(op, x, y)
        # equal lines run diagonally
        while x < sx:
            x += 1
            y += 1
        if x >= m and y >= n:
            break
    return solution


def _backtrack(
    trace: list[Optional[list[int]]], x: int, y: int, offset: int
) -> list[Optional[tuple[int, int]]]:
    """Recover the snakes of the solution from the trace, one per D."""
    snakes: list[Optional[tuple[int, int]]] = [None] * len(trace)
    d = len(trace) - 1
    while x > 0 and y > 0 and d > 0:
        v = trace[d]
        if v:
            snakes[d] = (x, y)
            k = x - y
            if k == -d or (k != d and v[k - 1 + offset] < v[k + 1 + offset]):
                k_prev = k + 1
            else:
                k_prev = k - 1
            x = v[k_prev + offset]
            y = x - k_prev
        d -= 1
    if x < 0 or y < 0:
        return snakes
    snakes[d] = (x, y)
    return snakes


def _shortest_edit_sequence(
    a: Sequence[str], b: Sequence[str]
) -> tuple[list[Optional[list[int]]], int]:
    """Trace of the furthest-reaching D-paths, and the diagonal offset."""
    m, n = len(a), len(b)
    offset = n + m
    v = [0] * (2 * (n + m) + 1)
    trace: list[Optional[list[int]]] = [None] * (n + m + 1)

    for d in range(n + m + 1):
        for k in range(-d, d + 1, 2):
            # go down at k == -d, right at k == d, else whichever reaches
            # further, preferring deletions to insertions
            if k == -d or (k != d and v[k - 1 + offset] < v[k + 1 + offset]):
                x = v[k + 1 + offset]
            else:
                x = v[k - 1 + offset] + 1
            y = x - k
            while x < m and y < n and a[x] == b[y]:
                x += 1
                y += 1
            v[k + offset] = x
            if x == m and y == n:
                trace[d] = list(v)
                return trace, offset
        trace[d] = list(v)
    return [], 0