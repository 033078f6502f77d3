"""
Duplicate detection engine.

Pure, synchronous transformations from an occurrence list to a report:

    occurrences -> group_occurrences -> apply_rules (per group) -> build_report
"""

from dupdecl.engine.grouper import group_occurrences, is_admitted
from dupdecl.engine.report import build_report
from dupdecl.engine.rules import (
    RULES,
    apply_rules,
    cap_per_name,
    collapse_same_file_overloads,
    is_reportable,
    require_cross_module,
)

__all__ = [
    "group_occurrences",
    "is_admitted",
    "apply_rules",
    "is_reportable",
    "collapse_same_file_overloads",
    "require_cross_module",
    "cap_per_name",
    "RULES",
    "build_report",
]
