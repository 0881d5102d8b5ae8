"""Custom logging utilities for the PipeGrep command-line tool."""
# src/pipegrep/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path

from . import paths


class ConsoleFormatter(logging.Formatter):
    """A compact formatter for diagnostics written next to command output."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The PipeGrep version.

        """
        super().__init__(
            fmt=f"%(asctime)s | PipeGrep - {version} | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt, ct) if datefmt else time.strftime(self.default_time_format, ct)
        microseconds = int((record.created - int(record.created)) * 1_000_000)
        return f"{s}.{microseconds:06d}Z"


class FileFormatter(ConsoleFormatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        logging.Formatter.__init__(
            self,
            fmt="%(asctime)s | %(name)-20s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime


def setup_logging(version: str, *, debug: bool = False, log_file: Path | None = None) -> None:
    """
    Configure the root logger for PipeGrep.

    Console messages go to stderr so that results on stdout stay clean. The
    console level is WARNING by default and DEBUG when `debug` is set. When
    `log_file` is given, every DEBUG record is also written there.

    Args:
        version: The application version, included in console logs.
        debug: If True, lowers the console level to DEBUG.
        log_file: Optional path of a detailed log file.

    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_level = logging.DEBUG if debug else logging.WARNING
    root_logger.setLevel(logging.DEBUG if debug or log_file else logging.WARNING)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if log_file is None:
        return

    try:
        paths.ensure_dir_exists(log_file.parent)
        file_handler = FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        root_logger.addHandler(file_handler)
        root_logger.debug("Detailed logs will be written to %s", log_file)
    except OSError:
        # Console logging keeps working without the file.
        root_logger.exception("Failed to create log file. Continuing with console logging only.")
