"""Capture, classify, render and dispatch a single run."""

from datetime import datetime

from nrbt import log, process
from nrbt.config import Config
from nrbt.dispatch import dispatch
from nrbt.outcome import classify
from nrbt.report import render


def run(config: Config) -> int:
    """Supervise one command. Returns the wrapper's exit code."""
    invocation = config.invocation
    log.debug(f"running: {invocation.command_line}")

    started = datetime.now().astimezone()
    try:
        result = process.run(invocation.argv)
    except process.LaunchError as e:
        log.error(str(e))
        result = e.as_result()
    except process.Interrupted as e:
        log.error(f"Received signal {e.signum}, command terminated; no report written")
        return 128 + e.signum
    ended = datetime.now().astimezone()

    outcome = classify(result, config.ignore_codes)
    log.debug(f"outcome: {outcome.value}")

    report = render(invocation, result, outcome, started, ended)
    file_ok = dispatch(outcome, report, output_file=config.output_file, append=config.append)
    return exit_code(result, file_ok)


def exit_code(result: process.Result, file_ok: bool = True) -> int:
    """Wrapper exit code: the child's own status unless it was clean.

    A signal death maps to 128 + signum, as a shell reports it.
    """
    if result.signal is not None:
        return 128 + result.signal
    if result.returncode != 0:
        return result.returncode
    if result.capture_errors or not file_ok:
        return 1
    return 0
