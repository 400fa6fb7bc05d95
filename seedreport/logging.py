"""Logging for seedreport.

Every logger in the package sits under the ``seedreport`` logger, which owns
the only handler. The handler writes to stderr so that log lines never mix
with a report printed on stdout.

A report run logs through its own child, ``seedreport.run.<command>``.
`run_logger()` returns it, and commands pass it to their aggregators unless
the caller supplied a logger of its own.
"""

import logging
import sys
from typing import IO, Optional

ROOT_LOGGER_NAME = "seedreport"
RUN_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.run"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler installed on the root logger, or None before setup
_handler: Optional[logging.Handler] = None


def setup_root_logger(
    level: int = logging.INFO,
    stream: Optional[IO[str]] = None,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Install the package handler on the ``seedreport`` logger.

    Only the first call has an effect; later calls return the logger as it is
    until `reset_logging()` removes the handler.

    Args:
        level: Initial level of the package logger.
        stream: Where log lines go; stderr when omitted.
        format_string: Format for the handler.

    Returns:
        The ``seedreport`` logger.
    """
    global _handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        return root_logger

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(_handler)
    root_logger.setLevel(level)
    # pytest's caplog listens on the Python root logger
    root_logger.propagate = True
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger called `name`, setting up the package handler first."""
    setup_root_logger()
    return logging.getLogger(name)


def run_logger(command_name: str) -> logging.Logger:
    """Return the logger for one run of a report command.

    The logger is named ``seedreport.run.<command_name>``. It has no handler
    or level of its own, so ``--verbose`` and ``--quiet`` apply to it.
    """
    if not command_name:
        raise ValueError("command_name must be a non-empty string")
    return get_logger(f"{RUN_LOGGER_NAME}.{command_name}")


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handler."""
    root_logger = setup_root_logger()
    root_logger.setLevel(level)
    if _handler is not None:
        _handler.setLevel(level)


def reset_logging() -> None:
    """Remove the package handler and level so the next setup starts clean."""
    global _handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root_logger.removeHandler(_handler)
        _handler = None
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
