"""Tests for outcome.py — clean/failed classification."""

from nrbt.outcome import Outcome, classify
from nrbt.process import Result


def _result(returncode=0, stdout=b"", stderr=b"", capture_errors=None):
    return Result(returncode, stdout, stderr, capture_errors or [])


def test_clean():
    assert classify(_result(stdout=b"lots of output\n")) is Outcome.CLEAN


def test_nonzero_exit_fails():
    assert classify(_result(returncode=3)) is Outcome.FAILED


def test_stderr_fails_even_with_zero_exit():
    assert classify(_result(stderr=b"warn\n")) is Outcome.FAILED


def test_single_byte_stderr_fails():
    assert classify(_result(stderr=b"\n")) is Outcome.FAILED


def test_signal_fails():
    assert classify(_result(returncode=-15)) is Outcome.FAILED


def test_incomplete_capture_fails():
    assert classify(_result(capture_errors=["stdout: boom"])) is Outcome.FAILED


def test_ignored_code_is_clean():
    assert classify(_result(returncode=1), frozenset({1})) is Outcome.CLEAN


def test_ignored_code_with_stderr_still_fails():
    assert classify(_result(returncode=1, stderr=b"x"), frozenset({1})) is Outcome.FAILED


def test_ignored_codes_do_not_cover_signals():
    assert classify(_result(returncode=-9), frozenset({-9, 9, 137})) is Outcome.FAILED


def test_classification_is_deterministic():
    r = _result(returncode=2, stderr=b"oops")
    assert {classify(r) for _ in range(5)} == {Outcome.FAILED}
    assert r.stderr == b"oops"
