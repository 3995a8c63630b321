"""Myers' forward, backward and two-sided LCS searches, and diffs built on them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from fineprint.diff.lcs.common import (
    Diag,
    Label,
    SequencePair,
    append_diag,
    fix_lcs,
    in_range,
    prepend_diag,
    sort_lcs,
)

_INFINITY = 1 << 25

# A limit on how deeply the LCS search goes; the value is a guess.
_MAX_DIFFS = 100


@dataclass(frozen=True)
class Diff:
    """A replacement of a[start:end] by b[repl_start:repl_end]."""

    start: int
    end: int
    repl_start: int
    repl_end: int


def diff_strings(a: str, b: str) -> list[Diff]:
    """Differences between two strings, as offsets into their UTF-8 encodings.

    Rune boundaries are not respected.
    """
    return _diff(SequencePair(a.encode("utf-8"), b.encode("utf-8")))


def diff_bytes(a: bytes, b: bytes) -> list[Diff]:
    """Differences between two byte sequences."""
    return _diff(SequencePair(bytes(a), bytes(b)))


def diff_runes(a: Sequence[str], b: Sequence[str]) -> list[Diff]:
    """Differences between two character sequences, as character offsets."""
    return _diff(SequencePair(a, b))


def _diff(seqs: SequencePair) -> list[Diff]:
    diffs, _ = compute(seqs, twosided, _MAX_DIFFS // 2)
    return diffs


Algorithm = Callable[["EditGraph"], list[Diag]]


def compute(
    seqs: SequencePair, algo: Algorithm, limit: int
) -> tuple[list[Diff], list[Diag]]:
    """Compute the diffs between two sequences along with the LCS found.

    ``algo`` is one of :func:`forward`, :func:`backward` or :func:`twosided`;
    a ``limit`` of zero or less means no limit on the search depth.
    """
    if limit <= 0:
        limit = _INFINITY
    alen, blen = seqs.lengths()
    graph = EditGraph(seqs=seqs, limit=limit, ux=alen, uy=blen, delta=alen - blen)
    lcs = algo(graph)
    return to_diffs(lcs, alen, blen), lcs


def to_diffs(lcs: Sequence[Diag], alen: int, blen: int) -> list[Diff]:
    """Convert an LCS into the list of replacements it implies."""
    diffs: list[Diff] = []
    pa = pb = 0
    for d in lcs:
        if pa < d.x or pb < d.y:
            diffs.append(Diff(pa, d.x, pb, d.y))
        pa = d.x + d.length
        pb = d.y + d.length
    if pa < alen or pb < blen:
        diffs.append(Diff(pa, alen, pb, blen))
    return diffs


@dataclass
class EditGraph:
    """State of an LCS search over the edit graph of two sequences."""

    seqs: SequencePair
    limit: int
    ux: int
    uy: int
    delta: int
    lx: int = 0
    ly: int = 0
    vf: Label = field(default_factory=Label)
    vb: Label = field(default_factory=Label)

    # --- forward ---

    def _fdone(self, d: int, k: int) -> Optional[list[Diag]]:
        x = self.vf.get(d, k)
        y = x - k
        if x == self.ux and y == self.uy:
            return self._forwardlcs(d, k)
        return None

    def _forwardlcs(self, d: int, k: int) -> list[Diag]:
        ans: list[Diag] = []
        x = self._get_forward(d, k)
        while x != 0 or x - k != 0:
            if in_range(d - 1, k - 1) and x - 1 == self._get_forward(d - 1, k - 1):
                d, k, x = d - 1, k - 1, x - 1
                continue
            if in_range(d - 1, k + 1) and x == self._get_forward(d - 1, k + 1):
                d, k = d - 1, k + 1
                continue
            y = x - k
            prepend_diag(ans, x + self.lx - 1, y + self.ly - 1)
            x -= 1
        return ans

    def _look_forward(self, k: int, relx: int) -> int:
        rely = relx - k
        x, y = relx + self.lx, rely + self.ly
        if x < self.ux and y < self.uy:
            x += self.seqs.common_prefix_len(x, self.ux, y, self.uy)
        return x

    def _set_forward(self, d: int, k: int, relx: int) -> None:
        x = self._look_forward(k, relx)
        self.vf.set(d, k, x - self.lx)

    def _get_forward(self, d: int, k: int) -> int:
        return self.vf.get(d, k)

    def _forward_step(self, d: int) -> None:
        self._set_forward(d + 1, -(d + 1), self._get_forward(d, -d))
        self._set_forward(d + 1, d + 1, self._get_forward(d, d) + 1)
        for k in range(-d + 1, d, 2):
            self._forward_inner(d, k)

    def _forward_inner(self, d: int, k: int) -> None:
        lookv = self._look_forward(k, self._get_forward(d, k - 1) + 1)
        lookh = self._look_forward(k, self._get_forward(d, k + 1))
        self._set_forward(d + 1, k, lookv if lookv > lookh else lookh)

    def _best_forward_k(self) -> int:
        kmax = -self.limit - 1
        diagmax = -1
        for k in range(-self.limit, self.limit + 1, 2):
            x = self._get_forward(self.limit, k)
            y = x - k
            if x + y > diagmax and x <= self.ux and y <= self.uy:
                diagmax, kmax = x + y, k
        return kmax

    # --- backward ---

    def _bdone(self, d: int, k: int) -> Optional[list[Diag]]:
        x = self.vb.get(d, k)
        y = x - (k + self.delta)
        if x == 0 and y == 0:
            return self._backwardlcs(d, k)
        return None

    def _backwardlcs(self, d: int, k: int) -> list[Diag]:
        ans: list[Diag] = []
        x = self._get_backward(d, k)
        while x != self.ux or x - (k + self.delta) != self.uy:
            if in_range(d - 1, k - 1) and x == self._get_backward(d - 1, k - 1):
                d, k = d - 1, k - 1
                continue
            if in_range(d - 1, k + 1) and x + 1 == self._get_backward(d - 1, k + 1):
                d, k, x = d - 1, k + 1, x + 1
                continue
            y = x - (k + self.delta)
            append_diag(ans, x + self.lx, y + self.ly)
            x += 1
        return ans

    def _look_backward(self, k: int, relx: int) -> int:
        rely = relx - (k + self.delta)
        x, y = relx + self.lx, rely + self.ly
        if x > 0 and y > 0:
            x -= self.seqs.common_suffix_len(0, x, 0, y)
        return x

    def _set_backward(self, d: int, k: int, relx: int) -> None:
        x = self._look_backward(k, relx)
        self.vb.set(d, k, x - self.lx)

    def _get_backward(self, d: int, k: int) -> int:
        return self.vb.get(d, k)

    def _backward_inner(self, d: int, k: int) -> None:
        lookv = self._look_backward(k, self._get_backward(d, k - 1))
        lookh = self._look_backward(k, self._get_backward(d, k + 1) - 1)
        self._set_backward(d + 1, k, lookv if lookv < lookh else lookh)

    def _best_backward_k(self, kmax: int) -> int:
        diagmin = _INFINITY
        for k in range(-self.limit, self.limit + 1, 2):
            x = self._get_backward(self.limit, k)
            y = x - (k + self.delta)
            if x + y < diagmin and x >= 0 and y >= 0:
                diagmin, kmax = x + y, k
        return kmax

    # --- two-sided ---

    def _two_done(self, df: int, db: int) -> Optional[int]:
        """Return the diagonal where Myers' lemma applies, if it does."""
        if (df + db + self.delta) % 2 != 0:
            return None
        kmin = max(-df, -db + self.delta)
        kmax = min(db + self.delta, df)
        for k in range(kmin, kmax + 1, 2):
            x = self.vf.get(df, k)
            u = self.vb.get(db, k - self.delta)
            if u <= x:
                for l in range(k, kmax + 1, 2):
                    x = self.vf.get(df, l)
                    y = x - l
                    u = self.vb.get(db, l - self.delta)
                    v = u - l
                    if x == u or u == 0 or v == 0 or y == self.uy or x == self.ux:
                        return l
                return k
        return None

    def _twolcs(self, df: int, db: int, kf: int) -> list[Diag]:
        x = self.vf.get(df, kf)
        y = x - kf
        kb = kf - self.delta
        u = self.vb.get(db, kb)
        v = u - kf

        if x == u:
            return sort_lcs(self._forwardlcs(df, kf) + self._backwardlcs(db, kb))

        # a forward (df-1)-path plus one edge reaches (u, v)
        if u > 0 and in_range(df - 1, u - 1 - v) and self.vf.get(df - 1, u - 1 - v) == u - 1:
            return sort_lcs(self._forwardlcs(df - 1, u - 1 - v) + self._backwardlcs(db, kb))
        if v > 0 and in_range(df - 1, u - (v - 1)) and self.vf.get(df - 1, u - (v - 1)) == u:
            return sort_lcs(self._forwardlcs(df - 1, u - (v - 1)) + self._backwardlcs(db, kb))

        # the remaining path is all horizontal or vertical edges
        if u == 0 or v == 0 or x == self.ux or y == self.uy:
            if u == 0 or v == 0:
                return self._backwardlcs(db, kb)
            return self._forwardlcs(df, kf)

        # a backward (db-1)-path plus one edge reaches (x, y)
        kx = x + 1 - y - self.delta
        if x + 1 <= self.ux and in_range(db - 1, kx) and self.vb.get(db - 1, kx) == x + 1:
            return sort_lcs(self._backwardlcs(db - 1, kb + 1) + self._forwardlcs(df, kf))
        ky = x - (y + 1) - self.delta
        if y + 1 <= self.uy and in_range(db - 1, ky) and self.vb.get(db - 1, ky) == x:
            return sort_lcs(self._backwardlcs(db - 1, kb - 1) + self._forwardlcs(df, kf))

        # another forward path to (u, v) is needed
        lcs = self._backwardlcs(db, kb)
        old_ux, old_uy = self.ux, self.uy
        self.ux, self.uy = u, v
        try:
            lcs += forward(self)
        finally:
            self.ux, self.uy = old_ux, old_uy
        return sort_lcs(lcs)


def forward(graph: EditGraph) -> list[Diag]:
    """Run the forward search until it succeeds or reaches the depth limit."""
    graph._set_forward(0, 0, graph.lx)
    done = graph._fdone(0, 0)
    if done is not None:
        return done
    for d in range(graph.limit):
        graph._set_forward(d + 1, -(d + 1), graph._get_forward(d, -d))
        done = graph._fdone(d + 1, -(d + 1))
        if done is not None:
            return done
        graph._set_forward(d + 1, d + 1, graph._get_forward(d, d) + 1)
        done = graph._fdone(d + 1, d + 1)
        if done is not None:
            return done
        for k in range(-d + 1, d, 2):
            graph._forward_inner(d, k)
            done = graph._fdone(d + 1, k)
            if done is not None:
                return done
    # too deep: use the path reaching farthest inside the rectangle
    return graph._forwardlcs(graph.limit, graph._best_forward_k())


def backward(graph: EditGraph) -> list[Diag]:
    """Run the backward search until it succeeds or reaches the depth limit."""
    graph._set_backward(0, 0, graph.ux)
    done = graph._bdone(0, 0)
    if done is not None:
        return done
    for d in range(graph.limit):
        graph._set_backward(d + 1, -(d + 1), graph._get_backward(d, -d) - 1)
        done = graph._bdone(d + 1, -(d + 1))
        if done is not None:
            return done
        graph._set_backward(d + 1, d + 1, graph._get_backward(d, d))
        done = graph._bdone(d + 1, d + 1)
        if done is not None:
            return done
        for k in range(-d + 1, d, 2):
            graph._backward_inner(d, k)
            done = graph._bdone(d + 1, k)
            if done is not None:
                return done
    kmax = graph._best_backward_k(-graph.limit - 1)
    if kmax < -graph.limit:
        raise RuntimeError(f"no paths when limit={graph.limit}?")
    return graph._backwardlcs(graph.limit, kmax)


def twosided(graph: EditGraph) -> list[Diag]:
    """Run forward and backward searches alternately until they meet."""
    graph._set_forward(0, 0, graph.lx)
    graph._set_backward(0, 0, graph.ux)
    for d in range(graph.limit):
        got = graph._two_done(d, d)
        if got is not None:
            return graph._twolcs(d, d, got)
        graph._forward_step(d)
        got = graph._two_done(d + 1, d)
        if got is not None:
            return graph._twolcs(d + 1, d, got)
        graph._set_backward(d + 1, -(d + 1), graph._get_backward(d, -d) - 1)
        graph._set_backward(d + 1, d + 1, graph._get_backward(d, d))
        for k in range(-d + 1, d, 2):
            graph._backward_inner(d, k)

    # too deep: combine a partial forward and a partial backward LCS
    kmax = graph._best_forward_k()
    if kmax < -graph.limit:
        raise RuntimeError(f"no forward paths when limit={graph.limit}?")
    lcs = graph._forwardlcs(graph.limit, kmax)
    kmax = graph._best_backward_k(kmax)
    if kmax < -graph.limit:
        raise RuntimeError(f"no backward paths when limit={graph.limit}?")
    lcs += graph._backwardlcs(graph.limit, kmax)
    return fix_lcs(lcs)