"""
Report assembly.

Runs every identity group through the rule engine and aggregates the
survivors into a summary plus a duplicate list ordered by count.
"""

from typing import Dict, List

from dupdecl.core.config import RulesConfig
from dupdecl.core.models import (
    DuplicateGroup,
    DuplicateReport,
    IdentityKey,
    Occurrence,
    ReportSummary,
)
from dupdecl.engine.rules import apply_rules, is_reportable


def build_report(
    groups: Dict[IdentityKey, List[Occurrence]],
    total_files: int,
    rules: RulesConfig,
) -> DuplicateReport:
    """Build the final report from grouped occurrences.

    Args:
        groups: Identity key to occurrences, as produced by the grouper
        total_files: Number of files in the scanned set
        rules: Rule settings

    Returns:
        Report whose duplicates are sorted by count, highest first. Groups
        with equal counts keep the iteration order of ``groups``.
    """
    total_declarations = 0
    duplicates: List[DuplicateGroup] = []

    for key, occurrences in groups.items():
        total_declarations += len(occurrences)

        if not is_reportable(occurrences):
            continue

        survivors = apply_rules(occurrences, key.kind, rules)
        if not is_reportable(survivors):
            continue

        duplicates.append(
            DuplicateGroup(
                name=key.name,
                kind=key.kind,
                count=len(survivors),
                locations=[occurrence.to_location() for occurrence in survivors],
            )
        )

    # sorted() is stable, so ties stay in key order
    duplicates = sorted(duplicates, key=lambda group: group.count, reverse=True)

    summary = ReportSummary(
        total_files=total_files,
        total_declarations=total_declarations,
        duplicate_group_count=len(duplicates),
        duplicate_declaration_count=sum(group.count for group in duplicates),
    )
    return DuplicateReport(summary=summary, duplicates=duplicates)
