import pytest

from fineprint.diff.core import Edit, apply
from fineprint.diff.difftest import run_diff_tests
from fineprint.diff.myers import compute_edits


def test_passes_shared_diff_cases():
    assert run_diff_tests(compute_edits) == []


def test_identical_inputs_need_no_edits():
    assert compute_edits("", "") == []
    assert compute_edits("same\ntext\n", "same\ntext\n") == []


def test_insert_single_line():
    assert compute_edits("1: one\n3: three\n", "1: one\n2: two\n3: three\n") == [
        Edit(7, 7, "2: two\n")
    ]


def test_delete_everything():
    assert compute_edits("meow", "") == [Edit(0, 4, "")]


def test_insert_into_empty():
    assert compute_edits("", "AB\nC") == [Edit(0, 0, "AB\nC")]


@pytest.mark.parametrize(
    "before, after",
    [
        ("a\nb\nc\n", "a\nc\n"),
        ("a\nb\nc\n", "x\ny\nz\n"),
        ("A\nB\nC\nA\nB\nB\nA\n", "C\nB\nA\nB\nA\nC\n"),
        ("one\ntwo", "one\ntwo\nthree"),
        ("x\n", "x\nx\nx\n"),
        ("ω\nb\n", "b\nω\n"),
    ],
)
def test_edits_round_trip_and_are_line_aligned(before, after):
    edits = compute_edits(before, after)
    assert apply(before, edits) == after
    line_starts = {0, len(before)} | {
        i + 1 for i, ch in enumerate(before) if ch == "\n"
    }
    for edit in edits:
        assert edit.start in line_starts
        assert edit.end in line_starts