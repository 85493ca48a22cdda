"""Lookups against the process environment (or an injected mapping)."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}


def candidate_env_names(pattern: str, service_name: str) -> list[str]:
    """Return the pattern formatted with the name as given, then upper-cased."""
    name = pattern.format(service_name)
    names = [name]
    if name.upper() != name:
        names.append(name.upper())
    return names


def lookup_env(
    names: Iterable[str],
    environ: Mapping[str, str] | None = None,
) -> tuple[str, str] | None:
    """Return ``(name, value)`` for the first name set to a non-empty value."""
    env = os.environ if environ is None else environ
    for name in names:
        value = env.get(name)
        if value:
            return name, value
    return None


def multi_env_default(
    names: Iterable[str],
    default: str = "",
    environ: Mapping[str, str] | None = None,
) -> str:
    found = lookup_env(names, environ)
    return default if found is None else found[1]


def env_bool(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Parse a boolean variable; unset or unrecognised values are False."""
    env = os.environ if environ is None else environ
    return env.get(name, "") in _TRUE_VALUES
