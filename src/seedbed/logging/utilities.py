"""
=================
Logging Utilities
=================

This module contains utilities for configuring logging.

``seedbed`` logs through loguru. Library code never adds sinks on import;
applications call :func:`configure_logging_to_terminal` or
:func:`configure_logging_to_file` to see session output.

"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import loguru
from loguru import logger


def configure_logging_to_terminal(verbosity: int, long_format: bool = True) -> None:
    """Configure logging to print to the sys.stdout.

    Parameters
    ----------
    verbosity
        The verbosity level of the logging. 0 logs at the WARNING level, 1 logs
        at the INFO level, and 2 logs at the DEBUG level.
    long_format
        Whether to use the long format for logging messages, which includes
        the name of the generation session in the log messages.
    """
    _clear_default_configuration()
    _add_logging_sink(
        sink=sys.stdout,
        verbosity=verbosity,
        long_format=long_format,
        colorize=True,
        serialize=False,
    )


def configure_logging_to_file(output_directory: Path) -> None:
    """Configure logging to write to a file in the provided output directory.

    Parameters
    ----------
    output_directory
        The directory to write the log file to.
    """
    log_file = output_directory / "seedbed.log"
    _add_logging_sink(
        log_file,
        verbosity=2,
        long_format=True,
        colorize=False,
        serialize=False,
    )


def configure_logging(verbosity: int = 0, long_format: bool = True) -> None:
    """Configure terminal logging unless a terminal sink has already been added."""
    if _terminal_logging_not_configured():
        configure_logging_to_terminal(verbosity=verbosity, long_format=long_format)


def _terminal_logging_not_configured() -> bool:
    # Loguru numbers handlers globally starting from the default handler 0. Every
    # code path here removes handler 0 before adding the terminal sink, which then
    # gets id 1. Depends on loguru internals.
    return 1 not in logger._core.handlers  # type: ignore[attr-defined]


def get_logger(session_name: str | None = None) -> loguru.Logger:
    """Returns the package logger, bound to a generation session if one is named."""
    if session_name:
        return logger.bind(session=session_name)
    return logger.bind()


def _clear_default_configuration() -> None:
    try:
        logger.remove(0)  # Clear default configuration
    except ValueError:
        pass


def _add_logging_sink(
    sink: Path | TextIO,
    verbosity: int,
    long_format: bool,
    colorize: bool,
    serialize: bool,
) -> int:
    """Add a logging sink to the logger.

    Parameters
    ----------
    sink
        The sink to add.  Can be a file path or a file object.
    verbosity
        The verbosity level.  0 is the default and will only log warnings and errors.
        1 will log info messages.  2 will log debug messages.
    long_format
        Whether to use the long format for logging messages.  The long format includes
        the level and the session name.  The short format only includes the
        module name and line number.
    colorize
        Whether to colorize the log messages.
    serialize
        Whether to serialize log messages.
    """
    log_formatter = _LogFormatter(long_format)
    logging_level = _get_log_level(verbosity)
    return logger.add(
        sink,
        colorize=colorize,
        level=logging_level,
        format=log_formatter.format,
        serialize=serialize,
    )


class _LogFormatter:
    time = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>"
    level = "<level>{level: <8}</level>"
    session = "<cyan>{extra[session]}</cyan> - <cyan>{name}</cyan>:<cyan>{line}</cyan>"
    short_name_and_line = "<cyan>{name}</cyan>:<cyan>{line}</cyan>"
    message = "<level>{message}</level>"

    def __init__(self, long_format: bool = False):
        self.long_format = long_format

    if TYPE_CHECKING:
        from loguru import Record

    def format(self, record: Record) -> str:
        fmt = self.time + " | "

        if self.long_format:
            fmt += self.level + " | "

        if self.long_format and "session" in record["extra"]:
            fmt += self.session + " - "
        else:
            fmt += self.short_name_and_line + " - "

        fmt += self.message + "\n{exception}"
        return fmt


def _get_log_level(verbosity: int) -> str:
    if verbosity == 0:
        return "WARNING"
    elif verbosity == 1:
        return "INFO"
    elif verbosity >= 2:
        return "DEBUG"
    else:
        raise ValueError(f"Invalid verbosity level: {verbosity}")
