"""
dupdecl - find declarations defined more than once across a Python project.

Functions, classes, protocols, type aliases, enums and module variables are
grouped by (name, kind); a small rule set decides which groups are real
cross-module duplicates, and the result is a deterministic report.
"""

__version__ = "0.3.0"

from dupdecl.api import detect, detect_with_config, format_report
from dupdecl.core.config import DetectorConfig, RulesConfig, load_config
from dupdecl.core.models import (
    DeclarationKind,
    DeclarationLocation,
    DuplicateGroup,
    DuplicateReport,
    Occurrence,
    ReportSummary,
)
from dupdecl.detector import DuplicateDetector

__all__ = [
    "__version__",
    "detect",
    "detect_with_config",
    "format_report",
    "DuplicateDetector",
    "DetectorConfig",
    "RulesConfig",
    "load_config",
    "DeclarationKind",
    "Occurrence",
    "DeclarationLocation",
    "DuplicateGroup",
    "ReportSummary",
    "DuplicateReport",
]
