"""
Utility modules for dupdecl.

This package contains:
- Exception hierarchy
- Logging configuration
"""

from .exceptions import ConfigurationError, DupDeclException, OutputError, ScanError
from .logging import (
    ColoredFormatter,
    PerformanceLogger,
    get_logger,
    setup_logging,
    verbosity_to_level,
)

__all__ = [
    # Exceptions
    "DupDeclException",
    "ConfigurationError",
    "ScanError",
    "OutputError",
    # Logging
    "setup_logging",
    "get_logger",
    "verbosity_to_level",
    "PerformanceLogger",
    "ColoredFormatter",
]
