"""Centralized path management for goto.

All goto files live under ~/.goto/ (or $GOTO_HOME when set):
- ~/.goto/.goto.yaml  - The command configuration file
- ~/.goto/debug/      - Rotating debug log
"""

import logging
import os
from pathlib import Path

CONFIG_FILE_NAME = ".goto.yaml"
LOG_FILE_NAME = "goto.log"

_TRUTHY = ("1", "true", "yes", "on")

# Set by the CLI when --debug is passed
_debug_override = False


def goto_home() -> Path:
    """Return the goto home directory (~/.goto/).

    Not created here: the config store creates it on first run.
    """
    override = os.environ.get("GOTO_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".goto"


def config_file() -> Path:
    """Return the default config file path (~/.goto/.goto.yaml)."""
    return goto_home() / CONFIG_FILE_NAME


def debug_dir() -> Path:
    """Return the debug/logs directory (~/.goto/debug/)."""
    d = goto_home() / "debug"
    d.mkdir(parents=True, exist_ok=True)
    return d


def debug_enabled() -> bool:
    """Check if debug logging is on (--debug or GOTO_DEBUG=1)."""
    if _debug_override:
        return True
    return os.environ.get("GOTO_DEBUG", "").strip().lower() in _TRUTHY


def set_debug(enabled: bool = True) -> None:
    """Turn debug logging on for every goto logger already configured."""
    global _debug_override
    _debug_override = enabled
    level = logging.DEBUG if debug_enabled() else logging.INFO
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("goto.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def configure_logger(name: str, max_bytes: int = 10_000_000) -> logging.Logger:
    """Configure a logger that writes to ~/.goto/debug/goto.log with rotation.

    The terminal belongs to the menu and then to the launched command, so
    nothing is ever logged to stdout/stderr.  The file is opened lazily on
    the first record.

    Args:
        name: Logger name (e.g., "goto.launcher")
        max_bytes: Maximum log file size before rotation (default 10MB)

    Returns:
        Configured logger instance
    """
    from logging.handlers import RotatingFileHandler

    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    handler = RotatingFileHandler(
        debug_dir() / LOG_FILE_NAME,
        maxBytes=max_bytes,
        backupCount=1,
        delay=True,
    )
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    return logger


def flush_loggers() -> None:
    """Flush every goto log handler (called before exec replaces us)."""
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not name.startswith("goto.") or not isinstance(logger, logging.Logger):
            continue
        for handler in logger.handlers:
            handler.flush()
