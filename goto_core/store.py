"""YAML read/write for the goto command configuration (~/.goto/.goto.yaml)."""

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from goto_core import paths

_log = paths.configure_logger("goto.store")

DOCS_URL = "https://github.com/LucienZhang/goto"

HELP_ENTRY_NAME = "Help"
HELP_ENTRY_COLOR = "255;255;51"


class ConfigLoadError(Exception):
    """Raised when the config file cannot be read, parsed, or created."""


@dataclass(frozen=True)
class CommandEntry:
    """One launchable item in the menu."""

    name: str
    desc: str = ""
    color: str = ""
    cmd: str = ""
    shell: str = ""
    exec_mode: bool = False
    env: tuple[str, ...] = ()


@dataclass(frozen=True)
class GlobalConfig:
    """Process-wide settings, read once at startup."""

    commands: tuple[CommandEntry, ...]
    start_in_search_mode: bool = False
    default_shell: str = ""
    path: Optional[Path] = field(default=None, compare=False)


def help_entry(config_path: Path) -> CommandEntry:
    """The built-in entry written into a fresh config file."""
    return CommandEntry(
        name=HELP_ENTRY_NAME,
        desc="Show help information",
        color=HELP_ENTRY_COLOR,
        cmd="echo " + shlex.quote(
            f"Please config your commands in file {config_path}.\n"
            f"Complete documentation is available at {DOCS_URL}"),
    )


def default_document(config_path: Path) -> dict:
    """Return the document written when no config file exists yet."""
    entry = help_entry(config_path)
    return {
        "startInSearchMode": False,
        "commands": [
            {
                "name": entry.name,
                "desc": entry.desc,
                "color": entry.color,
                "cmd": entry.cmd,
                "shell": entry.shell,
                "execMode": entry.exec_mode,
            },
        ],
    }


def _lower_keys(data: dict) -> dict:
    """Key lookup is case-insensitive; older files were written lowercased."""
    return {str(k).lower(): v for k, v in data.items()}


def _string(value, what: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigLoadError(f"{what} must be a string")
    return str(value)


def _bool(value, what: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigLoadError(f"{what} must be true or false, got {value!r}")
    return value


def _parse_entry(raw, index: int) -> CommandEntry:
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"commands[{index}] must be a mapping")
    d = _lower_keys(raw)
    where = f"commands[{index}]"
    env = d.get("env") or []
    if not isinstance(env, list):
        raise ConfigLoadError(f"{where}.env must be a list of KEY=VALUE strings")
    return CommandEntry(
        name=_string(d.get("name"), f"{where}.name"),
        desc=_string(d.get("desc"), f"{where}.desc"),
        color=_string(d.get("color"), f"{where}.color"),
        cmd=_string(d.get("cmd"), f"{where}.cmd"),
        shell=_string(d.get("shell"), f"{where}.shell"),
        exec_mode=_bool(d.get("execmode"), f"{where}.execMode"),
        env=tuple(_string(kv, f"{where}.env") for kv in env),
    )


def parse(data, config_path: Path) -> GlobalConfig:
    """Materialize a loaded YAML document into a GlobalConfig.

    Missing fields get their defaults; a missing (or null) ``commands``
    key gets the built-in Help entry.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{config_path}: top level must be a mapping")
    d = _lower_keys(data)

    raw_commands = d.get("commands")
    if raw_commands is None:
        commands = (help_entry(config_path),)
    elif not isinstance(raw_commands, list):
        raise ConfigLoadError(f"{config_path}: commands must be a list")
    elif not raw_commands:
        raise ConfigLoadError(f"{config_path}: commands is empty, add at least one entry")
    else:
        commands = tuple(_parse_entry(raw, i) for i, raw in enumerate(raw_commands))

    return GlobalConfig(
        commands=commands,
        start_in_search_mode=_bool(d.get("startinsearchmode"), "startInSearchMode"),
        default_shell=_string(d.get("shell"), "shell"),
        path=config_path,
    )


def save_default(config_path: Path) -> dict:
    """Create parent directories and write the default document.

    Never overwrites: an existing file is left alone.
    """
    data = default_document(config_path)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "x", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise ConfigLoadError(f"cannot create {config_path}: {e.strerror or e}") from e
    _log.info("Created default config at %s", config_path)
    return data


def load(config_path: Optional[Path] = None) -> GlobalConfig:
    """Load the config file, creating it with defaults if it does not exist.

    Args:
        config_path: File to read (default ~/.goto/.goto.yaml)

    Raises:
        ConfigLoadError: the file exists but cannot be read or parsed, or
            it is missing and cannot be created.
    """
    if config_path is None:
        config_path = paths.config_file()
    try:
        with open(config_path, "rb") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        _log.info("No config at %s, writing defaults", config_path)
        data = save_default(config_path)
    except OSError as e:
        raise ConfigLoadError(f"cannot read {config_path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"cannot parse {config_path}: {e}") from e

    conf = parse(data, config_path)
    _log.debug("Loaded %d command(s) from %s", len(conf.commands), config_path)
    return conf
