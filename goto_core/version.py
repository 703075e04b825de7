"""Version information for goto."""

# Overwritten by release builds.
VERSION = "0.0.1"


def get_version(raw: str | None = None) -> str:
    """Return the version with spaces escaped as dashes."""
    return (VERSION if raw is None else raw).replace(" ", "-")
