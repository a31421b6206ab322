"""Invocation and run configuration."""

import shlex
from dataclasses import dataclass, field

SHELL = "/bin/sh"


@dataclass(frozen=True)
class Invocation:
    args: tuple[str, ...]
    shell: bool = False

    @property
    def argv(self) -> list[str]:
        """The argument vector actually executed."""
        if self.shell:
            return [SHELL, "-c", " ".join(self.args)]
        return list(self.args)

    @property
    def command_line(self) -> str:
        if self.shell:
            return " ".join(self.args)
        return shlex.join(self.args)


@dataclass(frozen=True)
class Config:
    invocation: Invocation
    output_file: str | None = None
    append: bool = True
    ignore_codes: frozenset[int] = field(default_factory=frozenset)
