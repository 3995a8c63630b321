from typing import NamedTuple

import pytest

from fineprint.diff.core import Edit
from fineprint.diff.unified import DEFAULT_CONTEXT_LINES, to_unified, unified

FILE_A = "from"
FILE_B = "to"
PREFIX = "--- " + FILE_A + "\n+++ " + FILE_B + "\n"
NO_NEWLINE = "\\ No newline at end of file\n"


class Case(NamedTuple):
    name: str
    before: str
    after: str
    unified: str
    edits: list
    no_diff: bool = False


CASES = [
    Case("empty", "", "", "", []),
    Case("no_diff", "gargantuan\n", "gargantuan\n", "", []),
    Case("replace_all", "fruit\n", "cheese\n", PREFIX + "@@ -1 +1 @@\n-fruit\n+cheese\n", [Edit(0, 5, "cheese")]),
    Case("insert_rune", "gord\n", "gourd\n", PREFIX + "@@ -1 +1 @@\n-gord\n+gourd\n", [Edit(2, 2, "u")]),
    Case("delete_rune", "groat\n", "goat\n", PREFIX + "@@ -1 +1 @@\n-groat\n+goat\n", [Edit(1, 2, "")]),
    Case("replace_rune", "loud\n", "lord\n", PREFIX + "@@ -1 +1 @@\n-loud\n+lord\n", [Edit(2, 3, "r")]),
    Case(
        "replace_partials",
        "blanket\n",
        "bunker\n",
        PREFIX + "@@ -1 +1 @@\n-blanket\n+bunker\n",
        [Edit(1, 3, "u"), Edit(6, 7, "r")],
    ),
    Case(
        "insert_line",
        "1: one\n3: three\n",
        "1: one\n2: two\n3: three\n",
        PREFIX + "@@ -1,2 +1,3 @@\n 1: one\n+2: two\n 3: three\n",
        [Edit(7, 7, "2: two\n")],
    ),
    Case(
        "replace_no_newline",
        "A",
        "B",
        PREFIX + "@@ -1 +1 @@\n-A\n" + NO_NEWLINE + "+B\n" + NO_NEWLINE,
        [Edit(0, 1, "B")],
    ),
    Case("delete_empty", "meow", "", PREFIX + "@@ -1 +0,0 @@\n-meow\n" + NO_NEWLINE, [Edit(0, 4, "")]),
    Case(
        "append_empty",
        "",
        "AB\nC",
        PREFIX + "@@ -0,0 +1,2 @@\n+AB\n+C\n" + NO_NEWLINE,
        [Edit(0, 0, "AB\nC")],
    ),
    Case(
        "add_end",
        "A",
        "AB",
        PREFIX + "@@ -1 +1 @@\n-A\n" + NO_NEWLINE + "+AB\n" + NO_NEWLINE,
        [Edit(1, 1, "B")],
    ),
    Case(
        "add_empty",
        "",
        "AB\nC",
        PREFIX + "@@ -0,0 +1,2 @@\n+AB\n+C\n" + NO_NEWLINE,
        [Edit(0, 0, "AB\nC")],
    ),
    Case(
        "add_newline",
        "A",
        "A\n",
        PREFIX + "@@ -1 +1 @@\n-A\n" + NO_NEWLINE + "+A\n",
        [Edit(1, 1, "\n")],
    ),
    Case(
        "delete_front",
        "A\nB\nC\nA\nB\nB\nA\n",
        "C\nB\nA\nB\nA\nC\n",
        PREFIX + "@@ -1,7 +1,6 @@\n-A\n-B\n C\n+B\n A\n B\n-B\n A\n+C\n",
        [Edit(0, 4, ""), Edit(6, 6, "B\n"), Edit(10, 12, ""), Edit(14, 14, "C\n")],
        True,
    ),
    Case(
        "replace_last_line",
        "A\nB\n",
        "A\nC\n\n",
        PREFIX + "@@ -1,2 +1,3 @@\n A\n-B\n+C\n+\n",
        [Edit(2, 3, "C\n")],
    ),
    Case(
        "multiple_replace",
        "A\nB\nC\nD\nE\nF\nG\n",
        "A\nH\nI\nJ\nE\nF\nK\n",
        PREFIX + "@@ -1,7 +1,7 @@\n A\n-B\n-C\n-D\n+H\n+I\n+J\n E\n F\n-G\n+K\n",
        [Edit(2, 8, "H\nI\nJ\n"), Edit(12, 14, "K\n")],
        True,
    ),
    Case("extra_newline", "\nA\n", "A\n", PREFIX + "@@ -1,2 +1 @@\n-\n A\n", [Edit(0, 1, "")]),
    Case(
        "unified_lines",
        "aaa\nccc\n",
        "aaa\nbbb\nccc\n",
        PREFIX + "@@ -1,2 +1,3 @@\n aaa\n+bbb\n ccc\n",
        [Edit(3, 3, "\nbbb")],
    ),
    Case(
        "60379",
        "package a\n\ntype S struct {\ns fmt.Stringer\n}\n",
        "package a\n\ntype S struct {\n\ts fmt.Stringer\n}\n",
        PREFIX
        + "@@ -1,5 +1,5 @@\n package a\n \n type S struct {\n-s fmt.Stringer\n+\ts fmt.Stringer\n }\n",
        [Edit(27, 27, "\t")],
    ),
]


@pytest.mark.parametrize("case", CASES, ids=[c.name for c in CASES])
def test_to_unified_from_table_edits(case):
    got = to_unified(FILE_A, FILE_B, case.before, case.edits, DEFAULT_CONTEXT_LINES)
    assert got == case.unified


@pytest.mark.parametrize(
    "case", [c for c in CASES if not c.no_diff], ids=lambda c: c.name
)
def test_unified_from_computed_edits(case):
    assert unified(FILE_A, FILE_B, case.before, case.after) == case.unified


def test_unified_equal_strings_is_empty():
    assert unified("a", "b", "same\n", "same\n") == ""


def test_to_unified_without_context():
    got = to_unified("a", "b", "A\nB\nC\n", [Edit(2, 4, "X\n")], 0)
    assert got == "--- a\n+++ b\n@@ -2 +2 @@\n-B\n+X\n"


def test_to_unified_separate_hunks():
    content = "".join(f"{i}\n" for i in range(1, 11))
    edits = [Edit(0, 2, "x\n"), Edit(18, 21, "y\n")]
    got = to_unified("a", "b", content, edits, 1)
    assert got == (
        "--- a\n+++ b\n"
        "@@ -1,2 +1,2 @@\n-1\n+x\n 2\n"
        "@@ -9,2 +9,2 @@\n 9\n-10\n+y\n"
    )


def test_to_unified_rejects_out_of_bounds_edits():
    with pytest.raises(ValueError, match="out-of-bounds"):
        to_unified("a", "b", "abc\n", [Edit(1, 20, "")], 3)


def test_to_unified_rejects_overlapping_edits():
    with pytest.raises(ValueError, match="overlapping"):
        to_unified("a", "b", "abcdef\n", [Edit(0, 3, ""), Edit(2, 4, "")], 3)