"""Shared test fixtures."""

import pytest


class FakePopen:
    def __init__(self, pid=4242, returncode=0, wait_error=None):
        self.pid = pid
        self.returncode = None
        self._final = returncode
        self._wait_error = wait_error
        self.wait_calls = 0
        self.killed = False

    def wait(self):
        self.wait_calls += 1
        if self._wait_error is not None:
            raise self._wait_error
        self.returncode = self._final
        return self._final

    def poll(self):
        return self.returncode

    def kill(self):
        self.killed = True


class RecordingLog:
    def __init__(self):
        self.lines = []

    def debug(self, msg):
        self.lines.append(msg)


@pytest.fixture
def recording_log():
    return RecordingLog()


@pytest.fixture
def mock_process(monkeypatch):
    """Mock process.spawn for tests.

    Queue a response as (FakePopen, stdout_bytes, stderr_bytes), or an
    exception to raise from spawn.
    """
    from shell_exec import process

    calls = []
    responses = []

    def fake_spawn(args, stdin, stdout, stderr, env=None, cwd=None):
        calls.append(("spawn", args, stdin.read().decode("utf-8"), env, cwd))
        item = responses.pop(0) if responses else (FakePopen(), b"", b"")
        if isinstance(item, BaseException):
            raise item
        proc, out, err = item
        stdout.write(out)
        stderr.write(err)
        return proc

    monkeypatch.setattr(process, "spawn", fake_spawn)

    return type("MockProcess", (), {"calls": calls, "responses": responses, "FakePopen": FakePopen})()
