"""
Identity grouping of declaration occurrences.

Occurrences are bucketed by (name, kind). Ignored kinds, ignored names and,
unless internals are included, non-exported declarations are dropped before
they reach a bucket, so they are never counted.
"""

from typing import Collection, Dict, Iterable, List

from dupdecl.core.models import DeclarationKind, IdentityKey, Occurrence


def is_admitted(
    occurrence: Occurrence,
    ignore_types: Collection[DeclarationKind] = (),
    ignore_names: Collection[str] = (),
    include_internal: bool = False,
) -> bool:
    """Check whether an occurrence takes part in grouping at all."""
    if occurrence.kind in ignore_types:
        return False
    if occurrence.name in ignore_names:
        return False
    if not include_internal and not occurrence.is_exported:
        return False
    return True


def group_occurrences(
    occurrences: Iterable[Occurrence],
    ignore_types: Collection[DeclarationKind] = (),
    ignore_names: Collection[str] = (),
    include_internal: bool = False,
) -> Dict[IdentityKey, List[Occurrence]]:
    """Group occurrences by identity key.

    Key order and the order of occurrences within each key follow the input,
    first seen first.

    Args:
        occurrences: Occurrences in scan order
        ignore_types: Kinds to drop
        ignore_names: Names to drop
        include_internal: Admit non-exported declarations too

    Returns:
        Mapping of identity key to its occurrences
    """
    ignore_types = frozenset(DeclarationKind(k) for k in ignore_types)
    ignore_names = frozenset(ignore_names)

    groups: Dict[IdentityKey, List[Occurrence]] = {}
    for occurrence in occurrences:
        if not is_admitted(occurrence, ignore_types, ignore_names, include_internal):
            continue
        groups.setdefault(occurrence.key, []).append(occurrence)

    return groups
