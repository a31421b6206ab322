"""Timestamped diagnostics on stderr — stdout is reserved for reports."""

import os
import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_debug() -> bool:
    return os.environ.get("NRBT_DEBUG") == "1"


def _emit(level: str, msg: str) -> None:
    print(f"[{_timestamp()}] {level}: {msg}", file=sys.stderr, flush=True)


def debug(msg: str) -> None:
    if _is_debug():
        _emit("DEBUG", msg)


def warning(msg: str) -> None:
    _emit("WARNING", msg)


def error(msg: str) -> None:
    _emit("ERROR", msg)
