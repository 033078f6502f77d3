"""
Tests for the detector and the programmatic API.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from dupdecl import api
from dupdecl.core.config import DetectorConfig
from dupdecl.core.models import DeclarationKind
from dupdecl.detector import DuplicateDetector
from dupdecl.utils.exceptions import ScanError


class ProjectTestCase(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.root = Path(self.test_dir)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def write(self, relative, content):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


class TestDuplicateDetector(ProjectTestCase):
    def setUp(self):
        super().setUp()
        self.write("billing/cart.py", "def calculate_total(items):\n    return sum(items)\n\ndef _helper():\n    pass\n")
        self.write("billing/invoice.py", "def calculate_total(lines):\n    return 0\n\ndef _helper():\n    pass\n")
        self.write("billing/test_cart.py", "def calculate_total():\n    pass\n")

    def test_cross_file_function(self):
        report = DuplicateDetector().detect(self.root)

        self.assertEqual(report.summary.total_files, 2)
        self.assertEqual(report.summary.duplicate_group_count, 1)
        group = report.duplicates[0]
        self.assertEqual((group.name, group.kind), ("calculate_total", DeclarationKind.FUNCTION))
        self.assertEqual([loc.file for loc in group.locations], ["billing/cart.py", "billing/invoice.py"])
        self.assertEqual(group.locations[0].context_snippet, "def calculate_total(items):")

    def test_total_declarations_counts_scanned_exported(self):
        report = DuplicateDetector().detect(self.root)
        self.assertEqual(report.summary.total_declarations, 2)

    def test_internal_declarations(self):
        report = DuplicateDetector(DetectorConfig(include_internal=True)).detect(self.root)
        names = [group.name for group in report.duplicates]
        self.assertEqual(sorted(names), ["_helper", "calculate_total"])

    def test_discover_respects_exclusions(self):
        files = DuplicateDetector().discover(self.root)
        self.assertEqual([p.name for p in files], ["cart.py", "invoice.py"])

    def test_missing_root(self):
        with self.assertRaises(ScanError):
            DuplicateDetector().detect(self.root / "missing")

    def test_unparsable_file_is_skipped(self):
        self.write("billing/broken.py", "def calculate_total(:\n")
        with self.assertLogs("dupdecl.scanner.python_source", level="WARNING"):
            report = DuplicateDetector().detect(self.root)

        self.assertEqual(report.summary.total_files, 3)
        self.assertEqual(report.duplicates[0].count, 2)


class TestApi(ProjectTestCase):
    def setUp(self):
        super().setUp()
        self.write("a.py", "class Registry:\n    pass\n\nRegistry = None\n")
        self.write("b.py", "class Registry:\n    pass\n")
        self.write("c.py", "class Registry:\n    pass\n")

    def test_detect_with_overrides(self):
        capped = api.detect(self.root)
        self.assertEqual(capped.duplicates[0].count, 2)

        uncapped = api.detect(self.root, rules={"max_duplicates_per_name": 0})
        self.assertEqual(uncapped.duplicates[0].count, 3)
        self.assertEqual(uncapped.duplicates[0].kind, DeclarationKind.CLASS)

    def test_ignore_types(self):
        report = api.detect(self.root, ignore_types=["class"])
        self.assertFalse(report.has_duplicates)

    def test_detect_with_config(self):
        config_path = self.write("dupdecl.yml", "ignore_names: [Registry]\n")
        report = api.detect_with_config(config_path, root=self.root)

        self.assertFalse(report.has_duplicates)
        self.assertEqual(report.summary.total_files, 3)

    def test_detect_with_missing_config_uses_defaults(self):
        with self.assertLogs("dupdecl.core.config", level="WARNING"):
            report = api.detect_with_config(self.root / "absent.yml", root=self.root)
        self.assertTrue(report.has_duplicates)

    def test_format_report(self):
        report = api.detect(self.root)
        self.assertIn('"Registry"', api.format_report(report, "json"))
        self.assertIn("Registry", api.format_report(report))


if __name__ == "__main__":
    unittest.main()
