"""Run a block of shell commands as a child process.

The script text is piped to the shell on stdin, so no script file is
needed on disk. Output is buffered in full and handed back once the shell
exits. A non-zero exit code is an ordinary result, not an error.
"""

import subprocess
import tempfile
from dataclasses import dataclass
from enum import Enum
from typing import IO, Protocol

from shell_exec import process
from shell_exec.environ import resolve, to_mapping
from shell_exec.errors import AbnormalTerminationError, InvalidStateError, NoProcessStartedError
from shell_exec.log import Diagnostics
from shell_exec.shells import PlatformShell, select_shell


@dataclass(frozen=True)
class RunParams:
    commands: str
    working_dir: str = ""
    environment: list[str] | None = None


@dataclass(frozen=True)
class ExecResponse:
    code: int
    stdout: bytes
    stderr: bytes


class SessionState(Enum):
    UNSTARTED = "unstarted"
    RUNNING = "running"
    FINISHED = "finished"
    START_FAILED = "start-failed"


class DiagnosticLog(Protocol):
    def debug(self, msg: str) -> None: ...


def _snapshot(buf: IO[bytes]) -> bytes:
    buf.seek(0)
    data = buf.read()
    buf.close()
    return data


class ShellSession:
    """One shell process, driven through start() then wait().

    Between the two calls ``process`` exposes the live Popen handle so the
    caller can kill a runaway script. There is no built-in timeout.
    """

    def __init__(
        self,
        params: RunParams,
        shell: PlatformShell | None = None,
        log: DiagnosticLog | None = None,
    ):
        self.params = params
        self.shell = shell or select_shell()
        self.state = SessionState.UNSTARTED
        self._log = log if log is not None else Diagnostics()
        self._proc: subprocess.Popen | None = None
        self._stdout: IO[bytes] | None = None
        self._stderr: IO[bytes] | None = None

    @property
    def process(self) -> subprocess.Popen | None:
        if self.state in (SessionState.RUNNING, SessionState.FINISHED):
            return self._proc
        return None

    def start(self) -> None:
        """Launch the shell without waiting for it.

        Launch failures (missing shell, bad working directory, NUL bytes in
        the environment, ...) are raised as the original OSError or
        ValueError and leave the session START_FAILED.
        """
        if self.state is not SessionState.UNSTARTED:
            raise InvalidStateError(self.state, "start")

        environment = resolve(self.params.environment, merge=self.shell.merge_env)
        env = to_mapping(environment) if environment is not None else None

        # Anonymous files: the OS writes the child's output straight into
        # them, so nothing has to drain pipes while the caller is busy.
        stdin = None
        try:
            stdin = tempfile.TemporaryFile()
            stdin.write(self.params.commands.encode("utf-8"))
            stdin.seek(0)
            self._stdout = tempfile.TemporaryFile()
            self._stderr = tempfile.TemporaryFile()
            self._proc = process.spawn(
                self.shell.command,
                stdin=stdin,
                stdout=self._stdout,
                stderr=self._stderr,
                env=env,
                cwd=self.params.working_dir or None,
            )
        except (OSError, ValueError):
            self.state = SessionState.START_FAILED
            self._close_buffers()
            raise
        finally:
            if stdin is not None:
                stdin.close()

        self.state = SessionState.RUNNING
        self._log.debug(f"started {self.shell.executable} (pid {self._proc.pid})")

    def _close_buffers(self) -> None:
        for buf in (self._stdout, self._stderr):
            if buf is not None:
                buf.close()
        self._stdout = self._stderr = None

    def wait(self) -> ExecResponse:
        """Block until the shell exits and return its code and output.

        Raises AbnormalTerminationError, carrying the partial response, if
        the shell was killed by a signal or the wait itself failed.
        """
        if self.state in (SessionState.UNSTARTED, SessionState.START_FAILED):
            raise NoProcessStartedError(self.state)
        if self.state is not SessionState.RUNNING:
            raise InvalidStateError(self.state, "wait")

        wait_error = None
        try:
            returncode = self._proc.wait()
        except OSError as e:
            returncode, wait_error = None, e
        self.state = SessionState.FINISHED
        self._log.debug(f"run result: returncode={returncode} error={wait_error!r}")

        response = ExecResponse(
            code=-1 if returncode is None else returncode,
            stdout=_snapshot(self._stdout),
            stderr=_snapshot(self._stderr),
        )

        if wait_error is not None:
            raise AbnormalTerminationError(
                f"waiting for shell failed: {wait_error}", response
            ) from wait_error
        if returncode < 0:
            raise AbnormalTerminationError(
                f"shell terminated by signal {-returncode}", response, signal=-returncode
            )
        return response


def run_commands(
    params: RunParams,
    shell: PlatformShell | None = None,
    log: DiagnosticLog | None = None,
) -> ExecResponse:
    """Run ``params.commands`` to completion and return code, stdout and stderr."""
    session = ShellSession(params, shell=shell, log=log)
    session.start()
    return session.wait()
