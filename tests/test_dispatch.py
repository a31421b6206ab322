"""Tests for dispatch.py — report sinks."""

from nrbt.dispatch import dispatch, write_report_file
from nrbt.outcome import Outcome

REPORT = "── nrbt: report ──\nExit code: 3\n"


def test_failed_goes_to_stdout(capsys):
    assert dispatch(Outcome.FAILED, REPORT) is True
    assert capsys.readouterr().out == REPORT


def test_clean_is_silent(capsys):
    assert dispatch(Outcome.CLEAN, REPORT) is True
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_clean_with_file(tmp_path, capsys):
    path = tmp_path / "r.log"
    assert dispatch(Outcome.CLEAN, REPORT, output_file=str(path)) is True
    assert capsys.readouterr().out == ""
    assert path.read_text() == REPORT


def test_failed_with_file(tmp_path, capsys):
    path = tmp_path / "r.log"
    assert dispatch(Outcome.FAILED, REPORT, output_file=str(path)) is True
    assert capsys.readouterr().out == REPORT
    assert path.read_text() == REPORT


def test_file_appends_by_default(tmp_path):
    path = tmp_path / "r.log"
    dispatch(Outcome.CLEAN, "first\n", output_file=str(path))
    dispatch(Outcome.FAILED, "second\n", output_file=str(path))
    assert path.read_text() == "first\nsecond\n"


def test_file_truncate(tmp_path):
    path = tmp_path / "r.log"
    path.write_text("old\n")
    dispatch(Outcome.CLEAN, "new\n", output_file=str(path), append=False)
    assert path.read_text() == "new\n"


def test_file_error_keeps_stdout_report(tmp_path, capsys):
    path = tmp_path / "missing-dir" / "r.log"
    assert dispatch(Outcome.FAILED, REPORT, output_file=str(path)) is False
    captured = capsys.readouterr()
    assert captured.out == REPORT
    assert "ERROR: Cannot write report to" in captured.err


def test_file_error_on_clean_run(tmp_path, capsys):
    assert dispatch(Outcome.CLEAN, REPORT, output_file=str(tmp_path)) is False
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ERROR" in captured.err


def test_write_report_file(tmp_path):
    path = tmp_path / "r.log"
    write_report_file(str(path), "abc\n")
    write_report_file(str(path), "def\n")
    assert path.read_text() == "abc\ndef\n"
