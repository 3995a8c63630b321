"""Shared test cases for diff algorithms, and a runner that checks them.

There are two kinds of checks. Semantic ones confirm that computed edits
turn the input into the output. Golden ones confirm that the unified diff
rendered from those edits has not changed unexpectedly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from fineprint.diff.core import Edit, apply
from fineprint.diff.unified import DEFAULT_CONTEXT_LINES, to_unified

FILE_A = "from"
FILE_B = "to"
UNIFIED_PREFIX = f"--- {FILE_A}\n+++ {FILE_B}\n"


@dataclass(frozen=True)
class DiffCase:
    """One before/after pair with its expected edits and unified diff.

    ``line_edits`` of None means ``edits`` are already line-aligned.
    ``no_diff`` marks cases whose unified diff may validly differ.
    """

    name: str
    before: str
    after: str
    unified: str = ""
    edits: tuple[Edit, ...] = ()
    line_edits: Optional[tuple[Edit, ...]] = None
    no_diff: bool = False


TEST_CASES: tuple[DiffCase, ...] = (
    DiffCase(name="empty", before="", after=""),
    DiffCase(name="no_diff", before="gargantuan\n", after="gargantuan\n"),
    DiffCase(
        name="replace_all",
        before="fruit\n",
        after="cheese\n",
        unified=UNIFIED_PREFIX + "@@ -1 +1 @@\n-fruit\n+cheese\n",
        edits=(Edit(0, 5, "cheese"),),
        line_edits=(Edit(0, 6, "cheese\n"),),
    ),
    DiffCase(
        name="insert_rune",
        before="gord\n",
        after="gourd\n",
        unified=UNIFIED_PREFIX + "@@ -1 +1 @@\n-gord\n+gourd\n",
        edits=(Edit(2, 2, "u"),),
        line_edits=(Edit(0, 5, "gourd\n"),),
    ),
    DiffCase(
        name="delete_rune",
        before="groat\n",
        after="goat\n",
        unified=UNIFIED_PREFIX + "@@ -1 +1 @@\n-groat\n+goat\n",
        edits=(Edit(1, 2, ""),),
        line_edits=(Edit(0, 6, "goat\n"),),
    ),
    DiffCase(
        name="replace_rune",
        before="loud\n",
        after="lord\n",
        unified=UNIFIED_PREFIX + "@@ -1 +1 @@\n-loud\n+lord\n",
        edits=(Edit(2, 3, "r"),),
        line_edits=(Edit(0, 5, "lord\n"),),
    ),
    DiffCase(
        name="replace_partials",
        before="blanket\n",
        after="bunker\n",
        unified=UNIFIED_PREFIX + "@@ -1 +1 @@\n-blanket\n+bunker\n",
        edits=(Edit(1, 3, "u"), Edit(6, 7, "r")),
        line_edits=(Edit(0, 8, "bunker\n"),),
    ),
    DiffCase(
        name="insert_line",
        before="1: one\n3: three\n",
        after="1: one\n2: two\n3: three\n",
        unified=UNIFIED_PREFIX + "@@ -1,2 +1,3 @@\n 1: one\n+2: two\n 3: three\n",
        edits=(Edit(7, 7, "2: two\n"),),
    ),
    DiffCase(
        name="replace_no_newline",
        before="A",
        after="B",
        unified=UNIFIED_PREFIX
        + "@@ -1 +1 @@\n-A\n\\ No newline at end of file\n+B\n\\ No newline at end of file\n",
        edits=(Edit(0, 1, "B"),),
    ),
    DiffCase(
        name="delete_empty",
        before="meow",
        after="",
        unified=UNIFIED_PREFIX + "@@ -1 +0,0 @@\n-meow\n\\ No newline at end of file\n",
        edits=(Edit(0, 4, ""),),
        line_edits=(Edit(0, 4, ""),),
    ),
    DiffCase(
        name="append_empty",
        before="",
        after="AB\nC",
        unified=UNIFIED_PREFIX + "@@ -0,0 +1,2 @@\n+AB\n+C\n\\ No newline at end of file\n",
        edits=(Edit(0, 0, "AB\nC"),),
        line_edits=(Edit(0, 0, "AB\nC"),),
    ),
    DiffCase(
        name="add_end",
        before="A",
        after="AB",
        unified=UNIFIED_PREFIX
        + "@@ -1 +1 @@\n-A\n\\ No newline at end of file\n+AB\n\\ No newline at end of file\n",
        edits=(Edit(1, 1, "B"),),
        line_edits=(Edit(0, 1, "AB"),),
    ),
    DiffCase(
        name="add_empty",
        before="",
        after="AB\nC",
        unified=UNIFIED_PREFIX + "@@ -0,0 +1,2 @@\n+AB\n+C\n\\ No newline at end of file\n",
        edits=(Edit(0, 0, "AB\nC"),),
        line_edits=(Edit(0, 0, "AB\nC"),),
    ),
    DiffCase(
        name="add_newline",
        before="A",
        after="A\n",
        unified=UNIFIED_PREFIX + "@@ -1 +1 @@\n-A\n\\ No newline at end of file\n+A\n",
        edits=(Edit(1, 1, "\n"),),
        line_edits=(Edit(0, 1, "A\n"),),
    ),
    DiffCase(
        name="delete_front",
        before="A\nB\nC\nA\nB\nB\nA\n",
        after="C\nB\nA\nB\nA\nC\n",
        unified=UNIFIED_PREFIX
        + "@@ -1,7 +1,6 @@\n-A\n-B\n C\n+B\n A\n B\n-B\n A\n+C\n",
        no_diff=True,
        edits=(Edit(0, 4, ""), Edit(6, 6, "B\n"), Edit(10, 12, ""), Edit(14, 14, "C\n")),
        line_edits=(Edit(0, 4, ""), Edit(6, 6, "B\n"), Edit(10, 12, ""), Edit(14, 14, "C\n")),
    ),
    DiffCase(
        name="replace_last_line",
        before="A\nB\n",
        after="A\nC\n\n",
        unified=UNIFIED_PREFIX + "@@ -1,2 +1,3 @@\n A\n-B\n+C\n+\n",
        edits=(Edit(2, 3, "C\n"),),
        line_edits=(Edit(2, 4, "C\n\n"),),
    ),
    DiffCase(
        name="multiple_replace",
        before="A\nB\nC\nD\nE\nF\nG\n",
        after="A\nH\nI\nJ\nE\nF\nK\n",
        unified=UNIFIED_PREFIX
        + "@@ -1,7 +1,7 @@\n A\n-B\n-C\n-D\n+H\n+I\n+J\n E\n F\n-G\n+K\n",
        edits=(Edit(2, 8, "H\nI\nJ\n"), Edit(12, 14, "K\n")),
        no_diff=True,
    ),
    DiffCase(
        name="extra_newline",
        before="\nA\n",
        after="A\n",
        edits=(Edit(0, 1, ""),),
        unified=UNIFIED_PREFIX + "@@ -1,2 +1 @@\n-\n A\n",
    ),
    DiffCase(
        name="unified_lines",
        before="aaa\nccc\n",
        after="aaa\nbbb\nccc\n",
        edits=(Edit(3, 3, "\nbbb"),),
        line_edits=(Edit(0, 4, "aaa\nbbb\n"),),
        unified=UNIFIED_PREFIX + "@@ -1,2 +1,3 @@\n aaa\n+bbb\n ccc\n",
    ),
    DiffCase(
        name="60379",
        before="package a\n\ntype S struct {\ns fmt.Stringer\n}\n",
        after="package a\n\ntype S struct {\n\ts fmt.Stringer\n}\n",
        edits=(Edit(27, 27, "\t"),),
        line_edits=(Edit(27, 42, "\ts fmt.Stringer\n"),),
        unified=UNIFIED_PREFIX
        + "@@ -1,5 +1,5 @@\n package a\n \n type S struct {\n-s fmt.Stringer\n+\ts fmt.Stringer\n }\n",
    ),
)


ComputeEdits = Callable[[str, str], list[Edit]]


def run_diff_tests(compute: ComputeEdits) -> list[str]:
    """Check a diff algorithm against every case in TEST_CASES.

    Returns one message per failed check, each prefixed with the case name;
    an empty list means the algorithm passed every case.
    """
    failures: list[str] = []
    for case in TEST_CASES:
        edits = compute(case.before, case.after)
        try:
            got = apply(case.before, edits)
            diff = to_unified(FILE_A, FILE_B, case.before, edits, DEFAULT_CONTEXT_LINES)
        except ValueError as exc:
            failures.append(f"{case.name}: {exc}")
            continue
        if got != case.after:
            failures.append(
                f"{case.name}: applied edits gave {got!r}, expected {case.after!r}"
            )
        if not case.no_diff and diff != case.unified:
            failures.append(
                f"{case.name}: unified diff {diff!r}, expected {case.unified!r}"
            )
    return failures