"""
Rule engine deciding which identity groups are reportable duplicates.

Each rule is a pure filter over one group's occurrence list. They run in a
fixed order: overload collapsing changes how many entries there are before
the cross-module check counts files, and the cap only trims what survives.
"""

from typing import Callable, List, Sequence, Tuple

from dupdecl.core.config import RulesConfig
from dupdecl.core.models import DeclarationKind, Occurrence

Rule = Callable[[List[Occurrence], DeclarationKind, RulesConfig], List[Occurrence]]


def collapse_same_file_overloads(
    occurrences: List[Occurrence], kind: DeclarationKind, rules: RulesConfig
) -> List[Occurrence]:
    """Keep only the first function occurrence per file.

    Same-named functions in one file are overload signatures of a single
    declaration (``typing.overload`` stubs followed by the implementation).
    """
    if not rules.allow_same_file_overloads or kind != DeclarationKind.FUNCTION:
        return list(occurrences)

    seen_files = set()
    collapsed = []
    for occurrence in occurrences:
        if occurrence.file in seen_files:
            continue
        seen_files.add(occurrence.file)
        collapsed.append(occurrence)
    return collapsed


def require_cross_module(
    occurrences: List[Occurrence], kind: DeclarationKind, rules: RulesConfig
) -> List[Occurrence]:
    """Discard groups confined to a single file unless that is allowed."""
    if rules.allow_cross_module_duplicates:
        return list(occurrences)

    if len({occurrence.file for occurrence in occurrences}) <= 1:
        return []
    return list(occurrences)


def cap_per_name(
    occurrences: List[Occurrence], kind: DeclarationKind, rules: RulesConfig
) -> List[Occurrence]:
    """Truncate to the first ``max_duplicates_per_name`` entries when set."""
    cap = rules.max_duplicates_per_name
    if cap > 0 and len(occurrences) > cap:
        return list(occurrences[:cap])
    return list(occurrences)


RULES: Tuple[Rule, ...] = (
    collapse_same_file_overloads,
    require_cross_module,
    cap_per_name,
)


def apply_rules(
    occurrences: Sequence[Occurrence],
    kind: DeclarationKind,
    rules: RulesConfig,
    pipeline: Sequence[Rule] = RULES,
) -> List[Occurrence]:
    """Run a group through the rule pipeline.

    Args:
        occurrences: One group's occurrences in scan order
        kind: The group's declaration kind
        rules: Rule settings
        pipeline: Rules to apply, in order

    Returns:
        Surviving occurrences; fewer than two means "not a duplicate"
    """
    filtered = list(occurrences)
    for rule in pipeline:
        filtered = rule(filtered, kind, rules)
        if not filtered:
            break
    return filtered


def is_reportable(occurrences: Sequence[Occurrence]) -> bool:
    return len(occurrences) > 1
