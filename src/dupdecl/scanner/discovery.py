"""
Source file discovery with include/exclude glob filtering.

Patterns are matched against the root-relative POSIX path of each file:

- ``**`` matches any number of directories, including none
- ``*`` matches within a single path segment
- ``?`` matches one character other than ``/``
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Pattern, Sequence, Union

from dupdecl.utils.exceptions import ScanError
from dupdecl.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> Pattern[str]:
    """Translate a glob pattern into an anchored regular expression."""
    parts = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif char == "*":
            parts.append("[^/]*")
            i += 1
        elif char == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(char))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    return any(compile_glob(pattern).match(relative_path) for pattern in patterns)


def is_selected(
    relative_path: str, include_patterns: Sequence[str], exclude_patterns: Sequence[str]
) -> bool:
    """Check a root-relative POSIX path against include and exclude patterns."""
    if not matches_any(relative_path, include_patterns):
        return False
    return not matches_any(relative_path, exclude_patterns)


def discover_files(
    root: Union[str, Path],
    include_patterns: Sequence[str],
    exclude_patterns: Sequence[str] = (),
) -> List[Path]:
    """Find the files to scan under a root directory.

    Args:
        root: Directory to walk
        include_patterns: A file must match at least one of these
        exclude_patterns: A file matching any of these is skipped

    Returns:
        Absolute file paths, sorted by their root-relative path

    Raises:
        ScanError: If root does not exist or is not a directory
    """
    root = Path(root).resolve()

    if not root.exists():
        raise ScanError("Root directory not found", path=root)
    if not root.is_dir():
        raise ScanError("Root is not a directory", path=root)

    selected = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        relative_path = path.relative_to(root).as_posix()
        if is_selected(relative_path, include_patterns, exclude_patterns):
            selected.append((relative_path, path))

    selected.sort(key=lambda item: item[0])
    logger.debug("Discovered %d files under %s", len(selected), root)
    return [path for _, path in selected]
