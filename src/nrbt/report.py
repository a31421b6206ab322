"""Plain-text report for one run."""

from datetime import datetime
from email.utils import format_datetime

from nrbt.config import Invocation
from nrbt.outcome import Outcome
from nrbt.process import Result

RULE_WIDTH = 45


def _rule(title: str) -> str:
    return f"── {title} " + "─" * max(0, RULE_WIDTH - len(title))


def _text(data: bytes) -> str:
    text = data.decode("utf-8", errors="replace")
    if text and not text.endswith("\n"):
        text += "\n"
    return text


def _section(title: str, data: bytes) -> list[str]:
    return [title, "-" * len(title), _text(data)]


def render(
    invocation: Invocation,
    result: Result,
    outcome: Outcome,
    started: datetime,
    ended: datetime,
) -> str:
    """Render the report. Timestamps must be timezone-aware."""
    lines = [
        _rule(f"nrbt: {outcome.value}"),
        f'Run of command: "{invocation.command_line}"',
        "",
    ]

    if result.signal is not None:
        lines.append(f"Terminated by signal: {result.signal}")
    else:
        lines.append(f"Exit code: {result.returncode}")
    if result.capture_errors:
        lines.append(f"Capture incomplete: {'; '.join(result.capture_errors)}")

    duration = (ended - started).total_seconds()
    lines += [
        "",
        f"Duration: {duration:.1f} seconds",
        f"Started at: {format_datetime(started)}",
        f"Ended at: {format_datetime(ended)}",
        "",
    ]
    lines += _section("Stdout", result.stdout)
    lines += _section("Stderr", result.stderr)
    return "\n".join(lines) + "\n"
