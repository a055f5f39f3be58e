"""Package-wide logging setup for sccdag.

All modules obtain their logger through :func:`get_logger`; records flow to a
single handler owned by the ``sccdag`` logger (stdout unless a handler is
supplied). The initial level can be overridden with the ``SCCDAG_LOG_LEVEL``
environment variable (a level name such as ``DEBUG`` or ``WARNING``).
"""

import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "sccdag"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LEVEL_ENV_VAR = "SCCDAG_LOG_LEVEL"

# Handler installed by setup_root_logger; None until the package is set up
_package_handler: Optional[logging.Handler] = None


def _package_logger() -> logging.Logger:
    return logging.getLogger(PACKAGE_LOGGER_NAME)


def _level_from_env(default: int) -> int:
    """Return the level named by ``SCCDAG_LOG_LEVEL`` or ``default``."""
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else default


def _apply_level(level: int) -> None:
    """Set ``level`` on the package logger and every handler attached to it."""
    package_logger = _package_logger()
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the package handler unless one is already installed.

    Args:
        level: Base level used when ``SCCDAG_LOG_LEVEL`` is not set.
        format_string: Optional record format; defaults to ``DEFAULT_FORMAT``.
        handler: Optional handler; defaults to a stdout ``StreamHandler``.
    """
    global _package_handler

    if _package_handler is not None:
        return

    _package_handler = handler or logging.StreamHandler(sys.stdout)
    _package_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.addHandler(_package_handler)
    # Records still reach the root logger, where pytest's caplog listens
    package_logger.propagate = True
    package_logger.setLevel(_level_from_env(level))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` with its level left to the package logger.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers."""
    setup_root_logger()
    _apply_level(level)


def configure_verbosity(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a level, apply it and return it.

    ``verbose`` wins over ``quiet`` when both are set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    set_global_log_level(level)
    return level


def enable_debug_logging() -> None:
    """Switch the package to DEBUG."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return the package to INFO."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Detach package handlers and return the logger to ``NOTSET``.

    The next :func:`setup_root_logger` call installs a fresh handler.
    """
    global _package_handler
    _package_handler = None

    package_logger = _package_logger()
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
