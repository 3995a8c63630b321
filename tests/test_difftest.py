import pytest

from fineprint.diff.core import Edit, apply, line_edits
from fineprint.diff.difftest import TEST_CASES, DiffCase, run_diff_tests

CASE_IDS = [case.name for case in TEST_CASES]


def _golden_compute(before, after):
    for case in TEST_CASES:
        if case.before == before and case.after == after:
            return list(case.edits)
    raise KeyError((before, after))


@pytest.mark.parametrize("case", TEST_CASES, ids=CASE_IDS)
def test_recorded_edits_transform_input(case: DiffCase):
    assert apply(case.before, case.edits) == case.after
    if case.line_edits is not None:
        assert apply(case.before, case.line_edits) == case.after


@pytest.mark.parametrize("case", TEST_CASES, ids=CASE_IDS)
def test_line_edits_of_recorded_edits(case: DiffCase):
    want = list(case.line_edits if case.line_edits is not None else case.edits)
    got = line_edits(case.before, case.edits)
    assert got == want
    assert apply(case.before, got) == case.after


def test_golden_edits_pass_every_case():
    assert run_diff_tests(_golden_compute) == []


def test_empty_edits_fail_every_changing_case():
    failures = run_diff_tests(lambda before, after: [])
    failed_names = {message.split(":", 1)[0] for message in failures}
    changing = {case.name for case in TEST_CASES if case.before != case.after}
    assert failed_names == changing


def test_out_of_bounds_edits_are_reported():
    failures = run_diff_tests(lambda before, after: [Edit(0, len(before) + 5, after)])
    assert len(failures) == len(TEST_CASES)
    assert all("out-of-bounds" in message for message in failures)