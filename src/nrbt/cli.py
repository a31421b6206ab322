"""Click entry point."""

import sys

import click

from nrbt import __version__, log, runner
from nrbt.config import Config, Invocation

OUTPUT_FLAGS = ("-o", "--output-file")


def split_output_flag(command: list[str]) -> tuple[list[str], str | None]:
    """Pull a trailing ``-o PATH`` off the command words.

    Only exact tokens at the very end count, so child flags such as
    ``ps -eo pid,comm`` or ``sort -o out.txt in.txt`` are left alone.
    """
    if len(command) >= 3 and command[-2] in OUTPUT_FLAGS:
        return command[:-2], command[-1]
    if len(command) >= 2 and command[-1].startswith("--output-file="):
        return command[:-1], command[-1].partition("=")[2]
    return command, None


class WrapperCommand(click.Command):
    """Wrapper options go before COMMAND; only a trailing -o PATH may follow it."""

    def parse_args(self, ctx, args):
        original = list(args)
        rest = super().parse_args(ctx, args)
        command = list(ctx.params.get("command") or ())
        leading = original[: len(original) - len(command)]
        # after the wrapper's own "--" every word belongs to the child
        if "--" not in leading:
            command, output_file = split_output_flag(command)
            if output_file is not None:
                ctx.params["command"] = tuple(command)
                ctx.params["output_file"] = output_file
        return rest


@click.command(
    cls=WrapperCommand,
    context_settings={"allow_interspersed_args": False, "help_option_names": ["--help"]},
)
@click.version_option(version=__version__, prog_name="nrbt")
@click.option(
    "-o",
    "--output-file",
    default=None,
    envvar="NRBT_OUTPUT_FILE",
    type=click.Path(dir_okay=False),
    help="Write the report to this file on every run (may also follow COMMAND)",
)
@click.option("--truncate", is_flag=True, help="Overwrite the report file instead of appending")
@click.option(
    "--ignore-code",
    "ignore_codes",
    multiple=True,
    type=int,
    help="Exit code that is not a failure by itself (repeatable)",
)
@click.option("--shell", is_flag=True, help="Run the command line through /bin/sh -c")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def main(output_file, truncate, ignore_codes, shell, command):
    """Run COMMAND and print a report only if it fails.

    Failure means a non-zero exit status or anything written to stderr.
    Options go before COMMAND, except -o PATH which may also end the line.
    Everything else after COMMAND is passed to it untouched; put -- before
    COMMAND to pass a trailing -o through as well.
    """
    if not command:
        click.echo("Error: No command specified", err=True)
        sys.exit(2)
    if truncate and output_file is None:
        log.warning("--truncate has no effect without --output-file")

    config = Config(
        invocation=Invocation(args=tuple(command), shell=shell),
        output_file=output_file,
        append=not truncate,
        ignore_codes=frozenset(ignore_codes),
    )
    sys.exit(runner.run(config))


if __name__ == "__main__":
    main()
