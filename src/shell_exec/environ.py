"""Resolve the environment handed to the shell."""

import os


def split_entry(entry: str) -> tuple[str, str]:
    """Split ``KEY=VALUE``. An entry without ``=`` is a key with an empty value."""
    key, _, value = entry.partition("=")
    return key, value


def to_mapping(entries: list[str]) -> dict[str, str]:
    """Convert ``KEY=VALUE`` strings to a dict. Later duplicates win."""
    return dict(split_entry(entry) for entry in entries)


def merge_environment(overrides: list[str]) -> list[str]:
    """Overlay ``overrides`` on the current process environment.

    The order of the returned entries is not significant.
    """
    merged = dict(os.environ)
    merged.update(to_mapping(overrides))
    return [f"{key}={value}" for key, value in merged.items()]


def resolve(overrides: list[str] | None, merge: bool = False) -> list[str] | None:
    """Return the environment for the child, or None to inherit ours.

    With ``merge`` the overrides are layered on top of os.environ;
    otherwise they replace it entirely.
    """
    if not overrides:
        return None
    if merge:
        return merge_environment(overrides)
    return list(overrides)
