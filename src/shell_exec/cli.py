"""Click entry point — all commands."""

import dataclasses
import shlex
import sys
import threading

import click

from shell_exec import __version__, config, log, shells
from shell_exec.errors import AbnormalTerminationError
from shell_exec.session import ExecResponse, RunParams, ShellSession

EXIT_CONFIG_ERROR = 2
EXIT_TIMEOUT = 124
EXIT_LAUNCH_FAILED = 127


@click.group()
@click.version_option(version=__version__, prog_name="shell-exec")
def main():
    """Run multi-line shell scripts and collect their exit code and output."""


def _write_output(response: ExecResponse) -> None:
    for name, data in (("stdout", response.stdout), ("stderr", response.stderr)):
        stream = click.get_binary_stream(name)
        stream.write(data)
        stream.flush()


def _build_params(script, request_file, cwd, env) -> RunParams:
    if request_file:
        params = config.load_request(request_file)
    else:
        params = RunParams(commands="")

    if script is not None:
        params = dataclasses.replace(params, commands=script.read())
    elif not request_file:
        params = dataclasses.replace(params, commands=click.get_text_stream("stdin").read())

    if cwd:
        params = dataclasses.replace(params, working_dir=cwd)
    if env:
        params = dataclasses.replace(params, environment=(params.environment or []) + list(env))
    return params


@main.command()
@click.argument("script", required=False, type=click.File("r"))
@click.option("--file", "-f", "request_file", default=None, help="YAML run request")
@click.option("--cwd", default=None, help="Working directory for the script")
@click.option("--env", "-e", multiple=True, help="KEY=VALUE for the script's environment")
@click.option("--timeout", default=None, type=float, help="Kill the script after N seconds")
@click.option("--verbose", "-v", is_flag=True, help="Print diagnostics to stderr")
def run(script, request_file, cwd, env, timeout, verbose):
    """Run SCRIPT (or stdin) through the platform shell."""
    try:
        params = _build_params(script, request_file, cwd, env)
    except (config.ConfigError, OSError) as e:
        log.error(str(e))
        sys.exit(EXIT_CONFIG_ERROR)

    session = ShellSession(params, log=log.Diagnostics(verbose=verbose or None))
    if verbose:
        log.step(f"running {shlex.join(session.shell.command)}")

    try:
        session.start()
    except (OSError, ValueError) as e:
        log.error(f"could not start {session.shell.executable}: {e}")
        sys.exit(EXIT_LAUNCH_FAILED)

    timed_out = threading.Event()
    timer = None
    if timeout is not None:

        def _expire():
            proc = session.process
            if proc is not None and proc.poll() is None:
                timed_out.set()
                proc.kill()

        timer = threading.Timer(timeout, _expire)
        timer.daemon = True
        timer.start()

    try:
        response = session.wait()
    except AbnormalTerminationError as e:
        _write_output(e.response)
        if timed_out.is_set():
            log.failure(f"timed out after {timeout:g}s")
            sys.exit(EXIT_TIMEOUT)
        log.error(str(e))
        sys.exit(128 + e.signal if e.signal else 1)
    finally:
        if timer is not None:
            timer.cancel()

    _write_output(response)
    if timed_out.is_set():
        log.failure(f"timed out after {timeout:g}s")
        sys.exit(EXIT_TIMEOUT)
    if verbose:
        if response.code == 0:
            log.success("exit code 0")
        else:
            log.failure(f"exit code {response.code}")
    sys.exit(response.code)


@main.command()
@click.option("--platform", default=None, help="Platform name, as in sys.platform")
def shell(platform):
    """Show the shell used to run scripts."""
    selected = shells.select_shell(platform)
    click.echo(shlex.join(selected.command))
    click.echo(f"merge environment: {'yes' if selected.merge_env else 'no'}")


if __name__ == "__main__":
    main()
