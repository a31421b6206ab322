"""Subprocess capture — the single mock seam for all tests."""

import signal
import subprocess
import threading
from dataclasses import dataclass, field

from nrbt import log

CHUNK_SIZE = 65536
FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


@dataclass
class Result:
    returncode: int
    stdout: bytes
    stderr: bytes
    capture_errors: list[str] = field(default_factory=list)

    @property
    def signal(self) -> int | None:
        """Signal that terminated the process, or None if it exited normally."""
        return -self.returncode if self.returncode < 0 else None


class LaunchError(Exception):
    """The command could not be started."""

    def __init__(self, program: str, returncode: int, message: str):
        super().__init__(message)
        self.program = program
        self.returncode = returncode

    def as_result(self) -> Result:
        """Stand-in result so a launch failure still gets a report."""
        return Result(returncode=self.returncode, stdout=b"", stderr=f"{self}\n".encode())


class Interrupted(Exception):
    """The wrapper was signalled while the command was running."""

    def __init__(self, signum: int):
        super().__init__(f"interrupted by signal {signum}")
        self.signum = signum


def _launch_error(program: str, exc: OSError) -> LaunchError:
    # Same codes a shell uses for these cases
    if isinstance(exc, FileNotFoundError):
        return LaunchError(program, 127, f"nrbt: command not found: {program}")
    if isinstance(exc, PermissionError):
        return LaunchError(program, 126, f"nrbt: permission denied: {program}")
    return LaunchError(program, 126, f"nrbt: cannot execute {program}: {exc.strerror or exc}")


def _drain(name: str, stream, chunks: list[bytes], errors: list[str]) -> None:
    """Read a pipe to EOF, keeping whatever arrived before a read failure."""
    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
    except (OSError, ValueError) as e:
        errors.append(f"{name}: {e}")
    finally:
        stream.close()


class _SignalForwarder:
    """Pass termination signals on to the child. A second signal kills it.

    Installed before the child is spawned. A signal that arrives before
    attach() is held and sent once the child exists; one that arrives after
    the child has exited is ignored.
    """

    def __init__(self):
        self.proc: subprocess.Popen | None = None
        self.received: int | None = None
        self._previous = {}

    def handle(self, signum, _frame) -> None:
        if self.proc is None:
            self.received = self.received or signum
            return
        if self.proc.returncode is not None:
            log.debug(f"received signal {signum} after pid {self.proc.pid} exited, ignoring")
            return
        if self.received is None:
            self.received = signum
            log.debug(f"received signal {signum}, passing to pid {self.proc.pid}")
            self.proc.send_signal(signum)
        else:
            log.debug(f"received signal {signum} again, killing pid {self.proc.pid}")
            self.proc.kill()

    def attach(self, proc: subprocess.Popen) -> None:
        self.proc = proc
        if self.received is not None:
            log.debug(f"passing pending signal {self.received} to pid {proc.pid}")
            proc.send_signal(self.received)

    def install(self) -> None:
        # signal.signal() only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in FORWARDED_SIGNALS:
            self._previous[signum] = signal.signal(signum, self.handle)

    def restore(self) -> None:
        for signum, handler in self._previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous.clear()


def run(args: list[str]) -> Result:
    """Run a command and capture stdout and stderr independently.

    Each pipe is drained by its own reader thread, so a child filling one
    pipe while the other is unread cannot stall. Raises LaunchError if the
    command cannot be started, and Interrupted (after the child has been
    reaped) if the wrapper received a termination signal meanwhile.
    """
    forwarder = _SignalForwarder()
    forwarder.install()

    stdout: list[bytes] = []
    stderr: list[bytes] = []
    errors: list[str] = []
    try:
        try:
            proc = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except OSError as e:
            if forwarder.received is not None:
                raise Interrupted(forwarder.received) from e
            raise _launch_error(args[0], e) from e

        log.debug(f"started {args[0]} (pid {proc.pid})")
        forwarder.attach(proc)

        readers = [
            threading.Thread(target=_drain, args=("stdout", proc.stdout, stdout, errors), daemon=True),
            threading.Thread(target=_drain, args=("stderr", proc.stderr, stderr, errors), daemon=True),
        ]
        for reader in readers:
            reader.start()
        returncode = proc.wait()
        for reader in readers:
            reader.join()
    finally:
        forwarder.restore()

    if forwarder.received is not None:
        raise Interrupted(forwarder.received)

    log.debug(f"pid {proc.pid} finished with status {returncode}")
    return Result(
        returncode=returncode,
        stdout=b"".join(stdout),
        stderr=b"".join(stderr),
        capture_errors=errors,
    )
