"""Environment block normalization before exec.

Environments are handled as ordered lists of ``KEY=VALUE`` strings, the
shape the OS hands to a new process image.
"""

import os
from typing import Iterable, Mapping, Optional

# Windows keeps environment keys case-insensitively
CASE_INSENSITIVE_ENV = os.name == "nt"

CRITICAL_KEY = "SYSTEMROOT"


def environ_list(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Return *environ* (default ``os.environ``) as ``KEY=VALUE`` strings."""
    if environ is None:
        environ = os.environ
    return [f"{k}={v}" for k, v in environ.items()]


def dedup_env(env: Iterable[str], case_insensitive: Optional[bool] = None) -> list[str]:
    """Return a copy of *env* with one entry per key.

    A repeated key keeps its last value, at the position of its last
    occurrence: ``["PATH=/a", "X=1", "PATH=/b"]`` becomes
    ``["X=1", "PATH=/b"]``.  Entries without ``=`` are kept unchanged
    where they are.

    Args:
        env: ``KEY=VALUE`` strings in definition order
        case_insensitive: Compare keys ignoring case.  Defaults to the
            platform rule (True on Windows).
    """
    if case_insensitive is None:
        case_insensitive = CASE_INSENSITIVE_ENV
    out: list[Optional[str]] = []
    saw: dict[str, int] = {}  # key => index into out
    for kv in env:
        key, sep, _ = kv.partition("=")
        if not sep:
            out.append(kv)
            continue
        if case_insensitive:
            key = key.lower()
        if key in saw:
            out[saw[key]] = None
        saw[key] = len(out)
        out.append(kv)
    return [kv for kv in out if kv is not None]


def add_critical_env(env: list[str], windows: Optional[bool] = None,
                     environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Append SYSTEMROOT from our own environment if *env* lacks it.

    Only applies on Windows, where child processes misbehave without it.
    """
    if windows is None:
        windows = os.name == "nt"
    if not windows:
        return env
    for kv in env:
        key, sep, _ = kv.partition("=")
        if sep and key.upper() == CRITICAL_KEY:
            return env
    if environ is None:
        environ = os.environ
    return env + [f"{CRITICAL_KEY}={environ.get(CRITICAL_KEY, '')}"]


def env_to_mapping(env: Iterable[str]) -> dict[str, str]:
    """Convert a ``KEY=VALUE`` list into the mapping ``os.execve`` takes.

    Malformed entries and empty keys cannot be expressed as a mapping
    and are dropped.
    """
    mapping = {}
    for kv in env:
        key, sep, value = kv.partition("=")
        if sep and key:
            mapping[key] = value
    return mapping
