"""Load a run request from a YAML file."""

import yaml

from shell_exec.session import RunParams


class ConfigError(ValueError):
    """The request file is not a valid run request."""


def _scalar(value) -> str:
    """Render a YAML scalar the way a shell script would spell it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_environment(value) -> list[str] | None:
    """Accept a list of KEY=VALUE strings or a mapping of scalars."""
    if value is None:
        return None
    if isinstance(value, dict):
        entries = []
        for key, val in value.items():
            if isinstance(val, (dict, list)):
                raise ConfigError(f"environment value for {key!r} must be a scalar")
            entries.append(f"{key}={_scalar(val)}")
        return entries
    if isinstance(value, list):
        if not all(isinstance(item, str) for item in value):
            raise ConfigError("environment entries must be KEY=VALUE strings")
        return list(value)
    raise ConfigError("environment must be a list of KEY=VALUE strings or a mapping")


def parse_request(data) -> RunParams:
    """Build RunParams from a parsed request document.

    Only ``commands`` is required. ``working_dir`` defaults to the caller's
    cwd and ``environment`` to the caller's environment.
    """
    if not isinstance(data, dict):
        raise ConfigError("request must be a mapping")

    commands = data.get("commands")
    if not isinstance(commands, str):
        raise ConfigError("commands is required and must be a string")

    working_dir = data.get("working_dir")
    if working_dir is None:
        working_dir = ""
    elif not isinstance(working_dir, str):
        raise ConfigError("working_dir must be a string")

    return RunParams(
        commands=commands,
        working_dir=working_dir,
        environment=_parse_environment(data.get("environment")),
    )


def load_request(path: str) -> RunParams:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    return parse_request(data)
