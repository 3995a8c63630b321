"""Building blocks for computing longest common subsequences.

A longest common subsequence (LCS) of two sequences A and B is a maximal
set of increasing index pairs (x, y) with A[x] == B[y]. It is represented
here as a list of :class:`Diag` runs in the edit graph of A and B: each run
is a stretch where A[x+i] == B[y+i] for 0 <= i < length.

The algorithms follow Myers' "An O(ND) Difference Algorithm and Its
Variations": forward, backward and two-sided searches label the end points
of D-paths on each diagonal k = x - y, and the LCS is recovered by
backtracking through those labels. When a search is cut short, the partial
forward and backward results may overlap; :func:`fix_lcs` repairs them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Diag:
    """A diagonal run in the edit graph where A[x+i] == B[y+i] for i < length."""

    x: int
    y: int
    length: int


class Direction(enum.Enum):
    """Where a proposed diagonal lies relative to an existing one."""

    EMPTY = 0  # the proposed diagonal was trimmed away entirely
    LEFTDOWN = 1  # it lies wholly to the left of and below the existing one
    RIGHTUP = 2  # it lies wholly to the right of and above the existing one
    BAD = 3  # it cannot share an LCS with the existing one


def sort_lcs(lcs: list[Diag]) -> list[Diag]:
    """Sort in place by lowest x, longest first on ties, and return the list."""
    lcs.sort(key=lambda d: (d.x, -d.length))
    return lcs


def is_valid(lcs: Sequence[Diag]) -> bool:
    """Report whether the diagonals of a sorted LCS do not overlap."""
    for prev, cur in zip(lcs, lcs[1:]):
        if prev.x + prev.length > cur.x:
            return False
        if prev.y + prev.length > cur.y:
            return False
    return True


def fix_lcs(lcs: Sequence[Diag]) -> list[Diag]:
    """Return a maximal non-conflicting set of diagonals taken from lcs.

    A greedy heuristic: longer diagonals are kept first, and each later one
    is trimmed against those already kept or dropped if it conflicts.
    """
    if not lcs:
        return []
    by_length = sorted(lcs, key=lambda d: d.length, reverse=True)
    kept = [by_length[0]]
    for candidate in by_length[1:]:
        direction: Optional[Direction] = None
        for existing in kept:
            direction, candidate = overlap(existing, candidate)
            if direction in (Direction.EMPTY, Direction.BAD):
                break
        if candidate.length > 0 and direction is not Direction.BAD:
            kept.append(candidate)
    return sort_lcs(kept)


def overlap(exist: Diag, prop: Diag) -> tuple[Direction, Diag]:
    """Trim prop so it does not overlap exist, and say where it ended up."""
    x, y, length = prop.x, prop.y, prop.length

    if x <= exist.x < x + length:
        # drop the end of prop that overlaps exist in x
        length -= x + length - exist.x
        if length <= 0:
            return Direction.EMPTY, Diag(x, y, length)
    if exist.x <= x < exist.x + exist.length:
        # drop the start of prop that overlaps exist in x
        delta = exist.x + exist.length - x
        length -= delta
        if length <= 0:
            return Direction.EMPTY, Diag(x, y, length)
        x += delta
        y += delta
    if y <= exist.y < y + length:
        # drop the end of prop that overlaps exist in y
        length -= y + length - exist.y
        if length <= 0:
            return Direction.EMPTY, Diag(x, y, length)
    if exist.y <= y < exist.y + exist.length:
        # drop the start of prop that overlaps exist in y
        delta = exist.y + exist.length - y
        length -= delta
        if length <= 0:
            return Direction.EMPTY, Diag(x, y, length)
        x += delta
        y += delta

    trimmed = Diag(x, y, length)
    if x + length <= exist.x and y + length <= exist.y:
        return Direction.LEFTDOWN, trimmed
    if exist.x + exist.length <= x and exist.y + exist.length <= y:
        return Direction.RIGHTUP, trimmed
    return Direction.BAD, trimmed


def prepend_diag(lcs: list[Diag], x: int, y: int) -> list[Diag]:
    """Add the edge (x,y)-(x+1,y+1) at the front of lcs, in place.

    The first diagonal is extended when it starts at (x+1, y+1). Returns lcs.
    """
    if lcs:
        first = lcs[0]
        if first.x == x + 1 and first.y == y + 1:
            lcs[0] = Diag(x, y, first.length + 1)
            return lcs
    lcs.insert(0, Diag(x, y, 1))
    return lcs


def append_diag(lcs: list[Diag], x: int, y: int) -> list[Diag]:
    """Add the edge (x,y)-(x+1,y+1) at the end of lcs, in place.

    The last diagonal is extended when it ends at (x, y). Returns lcs.
    """
    if lcs:
        last = lcs[-1]
        if last.x + last.length == x and last.y + last.length == y:
            lcs[-1] = Diag(last.x, last.y, last.length + 1)
            return lcs
    lcs.append(Diag(x, y, 1))
    return lcs


def in_range(d: int, k: int) -> bool:
    """Report whether diagonal k is reachable by a path of length d."""
    return d >= 0 and -d <= k <= d


@dataclass
class Label:
    """Labels for (D, k) pairs; row D holds D+1 slots, indexed by (D+k)//2."""

    vec: list[Optional[list[int]]] = field(default_factory=list)

    def set(self, d: int, k: int, x: int) -> None:
        """Record x as the label for (d, k)."""
        if not in_range(d, k):
            raise IndexError(f"out of range, d={d},k={k}")
        while len(self.vec) <= d:
            self.vec.append(None)
        row = self.vec[d]
        if row is None:
            row = [0] * (d + 1)
            self.vec[d] = row
        row[(d + k) // 2] = x

    def get(self, d: int, k: int) -> int:
        """Return the label recorded for (d, k)."""
        if not in_range(d, k) or d >= len(self.vec):
            raise IndexError(f"out of range, d={d},k={k}")
        row = self.vec[d]
        if row is None:
            raise IndexError(f"no labels for d={d}")
        return row[(d + k) // 2]


def _common_prefix_len(a: Sequence, b: Sequence) -> int:
    count = 0
    for left, right in zip(a, b):
        if left != right:
            break
        count += 1
    return count


@dataclass(frozen=True)
class SequencePair(Generic[T]):
    """A pair of sequences A and B (strings, bytes or lists) to compare."""

    a: Sequence[T]
    b: Sequence[T]

    def lengths(self) -> tuple[int, int]:
        """Return len(A) and len(B)."""
        return len(self.a), len(self.b)

    def common_prefix_len(self, ai: int, aj: int, bi: int, bj: int) -> int:
        """Length of the common prefix of A[ai:aj] and B[bi:bj]."""
        return _common_prefix_len(self.a[ai:aj], self.b[bi:bj])

    def common_suffix_len(self, ai: int, aj: int, bi: int, bj: int) -> int:
        """Length of the common suffix of A[ai:aj] and B[bi:bj]."""
        return _common_prefix_len(
            list(reversed(self.a[ai:aj])), list(reversed(self.b[bi:bj]))
        )