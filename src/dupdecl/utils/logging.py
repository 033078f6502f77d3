"""
Logging configuration for dupdecl.

This module provides utilities for setting up logging with consistent
formatting and levels across the scanner, engine and CLI.
"""

import logging
import sys
import time
from typing import Any, Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output.

    Adds color codes to log levels for better visibility in terminals.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        result = super().format(record)

        # Reset levelname for other formatters
        record.levelname = levelname

        return result


def verbosity_to_level(verbose: int = 0, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        quiet: If True, only errors are logged

    Returns:
        Numeric logging level
    """
    if quiet:
        return logging.ERROR
    if verbose == 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    colored: bool = True,
) -> logging.Logger:
    """Configure the root logger.

    Log records go to stderr so that report output on stdout (for example
    JSON piped into another tool) is never interleaved with log lines.

    Args:
        level: Logging level, numeric or name (DEBUG, INFO, ...)
        format_string: Custom format string (uses DEFAULT_FORMAT if None)
        colored: Use colored level names when stderr is a terminal

    Returns:
        Configured root logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt = format_string or DEFAULT_FORMAT
    formatter: Union[ColoredFormatter, logging.Formatter]
    if colored and sys.stderr.isatty():
        formatter = ColoredFormatter(fmt, datefmt=DEFAULT_DATEFMT)
    else:
        formatter = logging.Formatter(fmt, datefmt=DEFAULT_DATEFMT)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Optional logging level override

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Scan started")
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    return logger


class PerformanceLogger:
    """Context manager for logging operation performance.

    Example:
        >>> with PerformanceLogger("Scanning 120 files"):
        ...     occurrences = scanner.scan_files(paths)
        # Output: "Scanning 120 files completed in 0.34s"
    """

    def __init__(
        self, operation: str, logger: Optional[logging.Logger] = None, level: str = "INFO"
    ):
        """Initialize the performance logger.

        Args:
            operation: Description of the operation
            logger: Logger instance (uses root logger if None)
            level: Log level for the message
        """
        self.operation = operation
        self.logger = logger or logging.getLogger()
        self.level = getattr(logging, level.upper(), logging.INFO)
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        self.logger.log(self.level, f"{self.operation} started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.start_time is None:
            return
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} completed in {self.elapsed:.2f}s")
        else:
            self.logger.log(
                logging.ERROR, f"{self.operation} failed after {self.elapsed:.2f}s: {exc_val}"
            )
