"""Route a rendered report to stdout and/or the report file."""

import click

from nrbt import log
from nrbt.outcome import Outcome


def write_report_file(path: str, report: str, append: bool = True) -> None:
    """Write the report to *path*. Raises OSError on failure."""
    with open(path, "a" if append else "w", encoding="utf-8") as f:
        f.write(report)


def dispatch(
    outcome: Outcome,
    report: str,
    output_file: str | None = None,
    append: bool = True,
) -> bool:
    """Emit the report. Returns False if the report file could not be written.

    stdout only ever sees the report on failure; the file (when configured)
    gets it on every run. A file error is logged and never blocks stdout.
    """
    if outcome is Outcome.FAILED:
        click.echo(report, nl=False)

    if output_file is None:
        return True

    try:
        write_report_file(output_file, report, append=append)
    except OSError as e:
        log.error(f"Cannot write report to {output_file}: {e}")
        return False
    log.debug(f"report written to {output_file}")
    return True
