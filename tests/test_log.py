"""Tests for log.py — timestamped output + GA formatting."""

import re


def test_info(capsys):
    from shell_exec.log import info

    info("test message")
    captured = capsys.readouterr()
    assert re.match(r"\[\d{2}:\d{2}:\d{2}\] test message\n", captured.err)
    assert captured.out == ""


def test_step(capsys):
    from shell_exec.log import step

    step("running /bin/bash -s")
    err = capsys.readouterr().err
    assert "  running /bin/bash -s" in err


def test_success(capsys):
    from shell_exec.log import success

    success("exit code 0")
    err = capsys.readouterr().err
    assert "✓ exit code 0" in err


def test_failure(capsys, monkeypatch):
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    from shell_exec.log import failure

    failure("timed out after 5s")
    err = capsys.readouterr().err
    assert "✗ timed out after 5s" in err
    assert "::error::" not in err


def test_github_actions_failure(capsys, monkeypatch):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    from shell_exec.log import failure

    failure("script failed")
    err = capsys.readouterr().err
    assert "::error::script failed" in err


def test_error(capsys):
    from shell_exec.log import error

    error("something broke")
    err = capsys.readouterr().err
    assert "ERROR: something broke" in err


def test_github_actions_error(capsys, monkeypatch):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    from shell_exec.log import error

    error("could not start")
    err = capsys.readouterr().err
    assert "::error::could not start" in err


def test_diagnostics_quiet_by_default(capsys, monkeypatch):
    monkeypatch.delenv("SHELL_EXEC_DEBUG", raising=False)
    from shell_exec.log import Diagnostics

    Diagnostics().debug("run result: returncode=0")
    assert capsys.readouterr().err == ""


def test_diagnostics_verbose(capsys):
    from shell_exec.log import Diagnostics

    Diagnostics(verbose=True).debug("run result: returncode=0")
    err = capsys.readouterr().err
    assert re.match(r"\[\d{2}:\d{2}:\d{2}\] DEBUG: run result: returncode=0\n", err)


def test_diagnostics_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("SHELL_EXEC_DEBUG", "true")
    from shell_exec.log import Diagnostics

    Diagnostics().debug("started")
    assert "DEBUG: started" in capsys.readouterr().err


def test_diagnostics_explicit_quiet_overrides_environment(capsys, monkeypatch):
    monkeypatch.setenv("SHELL_EXEC_DEBUG", "1")
    from shell_exec.log import Diagnostics

    Diagnostics(verbose=False).debug("started")
    assert capsys.readouterr().err == ""
