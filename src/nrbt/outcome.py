"""Clean/failed classification of a captured run."""

from enum import Enum

from nrbt.process import Result


class Outcome(Enum):
    CLEAN = "clean"
    FAILED = "failed"


def classify(result: Result, ignore_codes: frozenset[int] = frozenset()) -> Outcome:
    """Classify a run. Pure and deterministic.

    Failed when anything reached stderr, the process died from a signal,
    capture was incomplete, or the exit status is non-zero and not listed
    in *ignore_codes*.
    """
    if result.stderr or result.signal is not None or result.capture_errors:
        return Outcome.FAILED
    if result.returncode != 0 and result.returncode not in ignore_codes:
        return Outcome.FAILED
    return Outcome.CLEAN
