"""
Core functionality for dupdecl.

This package contains the data models and configuration shared by the
scanner, the detection engine and the CLI.
"""

from .config import (
    DEFAULT_CONFIG_FILE,
    DetectorConfig,
    RulesConfig,
    create_default_config,
    load_config,
    load_config_file,
    load_config_from_dict,
    merge_configs,
    save_config,
)
from .models import (
    DeclarationKind,
    DeclarationLocation,
    DuplicateGroup,
    DuplicateReport,
    IdentityKey,
    Occurrence,
    ReportSummary,
    make_snippet,
)

__all__ = [
    # Models
    "DeclarationKind",
    "IdentityKey",
    "Occurrence",
    "DeclarationLocation",
    "DuplicateGroup",
    "ReportSummary",
    "DuplicateReport",
    "make_snippet",
    # Configuration
    "DEFAULT_CONFIG_FILE",
    "DetectorConfig",
    "RulesConfig",
    # Config utilities
    "load_config",
    "load_config_file",
    "load_config_from_dict",
    "create_default_config",
    "save_config",
    "merge_configs",
]
