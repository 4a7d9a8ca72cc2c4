"""Subprocess wrapper — the single mock seam for all tests."""

import subprocess
from typing import IO


def spawn(
    args: list[str],
    stdin: IO[bytes],
    stdout: IO[bytes],
    stderr: IO[bytes],
    env: dict[str, str] | None = None,
    cwd: str | None = None,
) -> subprocess.Popen:
    """Start a command without waiting for it. Raises OSError if it cannot launch."""
    return subprocess.Popen(
        args,
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
        env=env,
        cwd=cwd,
    )
