"""
Programmatic interface for dupdecl.

Example:
    >>> from dupdecl import api
    >>> report = api.detect("src", include_internal=True)
    >>> print(api.format_report(report, "markdown"))
"""

from pathlib import Path
from typing import Any, Optional, Union

from dupdecl.core.config import DetectorConfig, load_config, merge_configs
from dupdecl.core.models import DuplicateReport
from dupdecl.detector import DuplicateDetector
from dupdecl.formatters import ReportFormat
from dupdecl.formatters import format_report as _format_report


def detect(
    root: Union[str, Path] = ".",
    config: Optional[DetectorConfig] = None,
    **overrides: Any,
) -> DuplicateReport:
    """Detect duplicate declarations under ``root``.

    Args:
        root: Project root to scan
        config: Base configuration (defaults when None)
        **overrides: Configuration values merged over ``config``, e.g.
            ``include_internal=True`` or ``rules={"max_duplicates_per_name": 5}``

    Returns:
        Detection report
    """
    config = config or DetectorConfig()
    if overrides:
        config = merge_configs(config, overrides)
    return DuplicateDetector(config).detect(root)


def detect_with_config(
    config_path: Optional[Union[str, Path]] = None, root: Union[str, Path] = "."
) -> DuplicateReport:
    """Load a configuration file (falling back to defaults) and detect."""
    return DuplicateDetector(load_config(config_path)).detect(root)


def format_report(report: DuplicateReport, fmt: Union[ReportFormat, str] = "console") -> str:
    """Render a report as console text, JSON or Markdown."""
    return _format_report(report, fmt)
