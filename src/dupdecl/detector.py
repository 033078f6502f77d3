"""
Main detector class for dupdecl.

This module provides the DuplicateDetector class that coordinates file
discovery, declaration scanning and the detection engine.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from dupdecl.core.config import DetectorConfig
from dupdecl.core.models import DuplicateReport, Occurrence
from dupdecl.engine import build_report, group_occurrences
from dupdecl.scanner import PythonDeclarationScanner, discover_files
from dupdecl.utils.logging import PerformanceLogger, get_logger

logger = get_logger(__name__)


class DuplicateDetector:
    """Finds declarations that are defined more than once across a project.

    Example:
        >>> detector = DuplicateDetector(DetectorConfig(include_internal=True))
        >>> report = detector.detect(Path("src"))
        >>> for group in report.duplicates:
        ...     print(group.kind.value, group.name, group.count)
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        """Initialize detector with configuration.

        Args:
            config: Detector configuration (defaults when None)
        """
        self.config = config or DetectorConfig()

    def discover(self, root: Union[str, Path]) -> List[Path]:
        """List the files a scan of ``root`` would cover, in scan order."""
        return discover_files(
            root,
            include_patterns=self.config.include_patterns,
            exclude_patterns=self.config.exclude_patterns,
        )

    def detect(self, root: Union[str, Path] = ".") -> DuplicateReport:
        """Scan a directory tree and report duplicate declarations.

        Args:
            root: Project root; reported paths are relative to it

        Returns:
            Detection report

        Raises:
            ScanError: If root is missing or not a directory
        """
        files = self.discover(root)
        logger.info("Scanning %d files under %s", len(files), root)

        scanner = PythonDeclarationScanner(root)
        with PerformanceLogger(f"Scanning {len(files)} files", logger, level="DEBUG"):
            occurrences = scanner.scan_files(files)

        return self.detect_occurrences(occurrences, total_files=len(files))

    def detect_occurrences(
        self, occurrences: Iterable[Occurrence], total_files: int = 0
    ) -> DuplicateReport:
        """Run the detection engine on occurrences that were already collected.

        Args:
            occurrences: Occurrences in deterministic scan order
            total_files: Number of files the occurrences were taken from

        Returns:
            Detection report
        """
        groups = group_occurrences(
            occurrences,
            ignore_types=self.config.ignore_types,
            ignore_names=self.config.ignore_names,
            include_internal=self.config.include_internal,
        )
        report = build_report(groups, total_files, self.config.rules)

        logger.info(
            "Found %d duplicate groups among %d declarations",
            report.summary.duplicate_group_count,
            report.summary.total_declarations,
        )
        return report
