"""Logging setup utilities for synutil.

Configures the ``synutil`` logger hierarchy from the logging settings.
In verbose mode every record is prefixed with the seconds elapsed since
the first traced record, giving a timed trace of the terminal dialogue.
"""

from __future__ import annotations

import logging
import sys

from synutil.config.settings import LoggingConfig

TRACE_FORMAT = "%(elapsed)06.3f - %(message)s"


class TimedFormatter(logging.Formatter):
    """Formatter that stamps records with time elapsed since the first one."""

    def __init__(self, fmt: str = TRACE_FORMAT) -> None:
        super().__init__(fmt)
        self._started: float | None = None

    def format(self, record: logging.LogRecord) -> str:
        if self._started is None:
            self._started = record.created
        record.elapsed = record.created - self._started
        return super().format(record)


def setup_logging(config: LoggingConfig | None = None, verbose: bool = False) -> None:
    """Configure logging for the synutil application.

    Sets up the 'synutil' logger with the configured level, format, and
    optional file handler. ``verbose`` forces DEBUG and the timed trace
    format on the console handler.

    Args:
        config: Logging configuration. If None, uses defaults
                (WARNING level, stderr output).
        verbose: Enable the timed trace stream.
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("synutil")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.WARNING)
    root_logger.setLevel(level)
    root_logger.propagate = False

    formatter = logging.Formatter(config.format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(TimedFormatter() if verbose else formatter)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", logging.getLevelName(level))
