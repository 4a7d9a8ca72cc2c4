"""Timestamped output + GitHub Actions formatting.

Everything goes to stderr: stdout belongs to the script being run.
"""

import os
import sys
from datetime import datetime

_TRUTHY = {"1", "true", "yes", "on"}


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _is_debug() -> bool:
    return os.environ.get("SHELL_EXEC_DEBUG", "").strip().lower() in _TRUTHY


def _emit(line: str) -> None:
    print(line, file=sys.stderr, flush=True)


def info(msg: str) -> None:
    _emit(f"[{_timestamp()}] {msg}")


def step(msg: str) -> None:
    info(f"  {msg}")


def success(msg: str) -> None:
    info(f"  ✓ {msg}")


def failure(msg: str) -> None:
    if _is_github_actions():
        _emit(f"::error::{msg}")
    info(f"  ✗ {msg}")


def error(msg: str) -> None:
    if _is_github_actions():
        _emit(f"::error::{msg}")
    _emit(f"[{_timestamp()}] ERROR: {msg}")


class Diagnostics:
    """Diagnostic sink handed to a ShellSession.

    ``debug`` lines are printed only when verbose, which defaults to
    SHELL_EXEC_DEBUG being set.
    """

    def __init__(self, verbose: bool | None = None):
        self.verbose = _is_debug() if verbose is None else verbose

    def debug(self, msg: str) -> None:
        if self.verbose:
            _emit(f"[{_timestamp()}] DEBUG: {msg}")
