"""
Exception hierarchy for dupdecl.

The detection engine itself never raises; these exceptions belong to the
surrounding layers (configuration loading, source scanning, report output).
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union


class DupDeclException(Exception):
    """Base exception for all dupdecl errors.

    Carries an optional dictionary of details and the time the error was
    raised, so callers can log or serialize it uniformly.
    """

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(DupDeclException):
    """Configuration error.

    Raised when a configuration file is missing, unparsable, or fails
    validation.
    """

    def __init__(
        self,
        message: str = "Configuration error",
        config_path: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error message
            config_path: Optional path of the offending configuration file
            **kwargs: Additional details
        """
        details = kwargs
        if config_path:
            details["config_path"] = str(config_path)
        super().__init__(message, details)
        self.config_path = config_path


class ScanError(DupDeclException):
    """A source file or directory could not be scanned."""

    def __init__(
        self,
        message: str = "Scan failed",
        path: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs
        if path:
            details["path"] = str(path)
        super().__init__(message, details)
        self.path = path


class OutputError(DupDeclException):
    """Writing a rendered report failed."""

    def __init__(
        self,
        message: str = "Output failed",
        path: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs
        if path:
            details["path"] = str(path)
        super().__init__(message, details)
        self.path = path
