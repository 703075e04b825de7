"""Turn a selected entry into a running command.

``build_launch_plan`` decides *what* to run (a pure function of the entry,
the config and the environment); ``run_plan`` replaces the current
process with it, or spawns it where exec is not available.
"""

import os
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from goto_core import paths
from goto_core.environ import add_critical_env, dedup_env, env_to_mapping, environ_list
from goto_core.store import CommandEntry, GlobalConfig

_log = paths.configure_logger("goto.launcher")


class ConfigurationError(Exception):
    """Raised when the selected entry cannot be turned into a command line."""


class ShellResolutionError(Exception):
    """Raised when a shell is needed but none is configured or discoverable."""


class LaunchError(Exception):
    """Raised when the OS refuses to start the command."""


@dataclass(frozen=True)
class LaunchPlan:
    """A fully resolved command: executable path, argv and environment."""

    path: str
    argv: tuple[str, ...]
    env: tuple[str, ...]


def exec_supported() -> bool:
    """True where the process image can be replaced in place."""
    return os.name == "posix" and hasattr(os, "execve")


def login_shell() -> str:
    """Return the user's login shell.

    Reads the user database first, then ``$SHELL``.
    """
    if os.name == "posix":
        import pwd
        try:
            shell = pwd.getpwuid(os.getuid()).pw_shell
        except KeyError:
            shell = ""
        if shell:
            return shell
    shell = os.environ.get("SHELL", "")
    if shell:
        return shell
    raise ShellResolutionError(
        "Cannot determine your login shell. Set 'shell' in the config file."
    )


def resolve_shell(entry: CommandEntry, conf: GlobalConfig) -> str:
    """Pick the wrapper shell: entry override, then config default, then login shell."""
    if entry.shell:
        return entry.shell
    if conf.default_shell:
        return conf.default_shell
    return login_shell()


def find_executable(name: str) -> str:
    """Resolve *name* against $PATH unless it already names a path."""
    if os.sep in name or (os.altsep and os.altsep in name):
        return name
    found = shutil.which(name)
    if not found:
        raise LaunchError(f"{name}: executable file not found in $PATH")
    return found


def build_argv(entry: CommandEntry, conf: GlobalConfig) -> list[str]:
    """Build the argument vector for *entry*.

    exec mode splits the command with shell quoting rules and runs it
    directly; otherwise the command text goes verbatim to ``<shell> -c``.
    """
    if not entry.cmd.strip():
        raise ConfigurationError(f"command {entry.name} is empty")
    if entry.exec_mode:
        try:
            argv = shlex.split(entry.cmd)
        except ValueError as e:
            raise ConfigurationError(f"command {entry.name}: {e}") from e
        if not argv:
            raise ConfigurationError(f"command {entry.name} is empty")
        return argv
    return [resolve_shell(entry, conf), "-c", entry.cmd]


def build_launch_plan(entry: CommandEntry, conf: GlobalConfig,
                      environ: Optional[Mapping[str, str]] = None) -> LaunchPlan:
    """Resolve *entry* into a LaunchPlan without touching any process.

    The environment is our own (or *environ*) followed by the entry's
    ``env`` overrides, deduplicated so later definitions win.
    """
    argv = build_argv(entry, conf)
    path = find_executable(argv[0])
    env = dedup_env(environ_list(environ) + list(entry.env))
    env = add_critical_env(env, environ=environ)
    return LaunchPlan(path=path, argv=tuple(argv), env=tuple(env))


def run_plan(plan: LaunchPlan, use_exec: Optional[bool] = None) -> int:
    """Run *plan* with our terminal attached.

    With exec this never returns.  Without it, the command runs as a child
    sharing our stdin/stdout/stderr and its exit code is returned.
    """
    if use_exec is None:
        use_exec = exec_supported()
    env = env_to_mapping(plan.env)

    if use_exec:
        _log.info("exec: %s", shlex.join(plan.argv))
        sys.stdout.flush()
        sys.stderr.flush()
        paths.flush_loggers()
        try:
            os.execve(plan.path, list(plan.argv), env)
        except OSError as e:
            _log.warning("exec failed: %s: %s", plan.path, e)
            raise LaunchError(f"{plan.argv[0]}: {e.strerror or e}") from e

    _log.info("spawn: %s", shlex.join(plan.argv))
    try:
        result = subprocess.run(list(plan.argv), executable=plan.path, env=env)
    except OSError as e:
        _log.warning("spawn failed: %s: %s", plan.path, e)
        raise LaunchError(f"{plan.argv[0]}: {e.strerror or e}") from e
    _log.info("spawn done (rc=%d): %s", result.returncode, plan.argv[0])
    return result.returncode


def launch(entry: CommandEntry, conf: GlobalConfig, use_exec: Optional[bool] = None) -> int:
    """Launch *entry*.  See ``run_plan`` for the return value."""
    plan = build_launch_plan(entry, conf)
    _log.debug("Launching %r via %s", entry.name, plan.path)
    return run_plan(plan, use_exec=use_exec)
