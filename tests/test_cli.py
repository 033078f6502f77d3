"""
Tests for the dupdecl command-line interface.
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from dupdecl.cli.check import build_overrides
from dupdecl.cli.main import cli
from dupdecl.core.config import DetectorConfig


class CLITestCase(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.root = Path(self.test_dir) / "project"
        self.root.mkdir()
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def write(self, relative, content):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


class TestCheckCommand(CLITestCase):
    def setUp(self):
        super().setUp()
        self.write("cart.py", "def calculate_total(items):\n    return sum(items)\n")
        self.write("invoice.py", "def calculate_total(lines):\n    return 0\n\nclass Invoice:\n    pass\n")

    def test_duplicates_exit_with_status_one(self):
        result = self.runner.invoke(cli, ["check", str(self.root)])

        self.assertEqual(result.exit_code, 1, result.output)
        self.assertIn('function "calculate_total" (2 occurrences)', result.output)
        self.assertIn("cart.py:1:1", result.output)

    def test_clean_project_exits_zero(self):
        result = self.runner.invoke(cli, ["check", str(self.root), "--ignore-name", "calculate_total"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No duplicate declarations found!", result.output)

    def test_ignore_type(self):
        result = self.runner.invoke(cli, ["check", str(self.root), "--ignore-type", "function"])
        self.assertEqual(result.exit_code, 0, result.output)

    def test_json_output_is_pure_json(self):
        result = self.runner.invoke(cli, ["check", str(self.root), "--format", "json"])

        self.assertEqual(result.exit_code, 1)
        data = json.loads(result.stdout)
        self.assertEqual(data["summary"]["totalFiles"], 2)
        self.assertEqual(data["summary"]["duplicateGroupCount"], 1)
        self.assertEqual(data["duplicates"][0]["name"], "calculate_total")

    def test_output_file(self):
        output = Path(self.test_dir) / "reports" / "dupes.md"
        result = self.runner.invoke(
            cli, ["check", str(self.root), "--format", "markdown", "--output", str(output)]
        )

        self.assertEqual(result.exit_code, 1, result.output)
        self.assertIn("Report saved to", result.output)
        self.assertIn("# Duplicate Declaration Report", output.read_text(encoding="utf-8"))

    def test_config_file(self):
        config_path = Path(self.test_dir) / "dupdecl.yml"
        config_path.write_text("ignore_names:\n  - calculate_total\n", encoding="utf-8")

        result = self.runner.invoke(cli, ["--config", str(config_path), "check", str(self.root)])
        self.assertEqual(result.exit_code, 0, result.output)

    def test_include_internal(self):
        self.write("a.py", "def _helper():\n    pass\n")
        self.write("b.py", "def _helper():\n    pass\n")

        default = self.runner.invoke(cli, ["check", str(self.root), "--format", "json"])
        names = [g["name"] for g in json.loads(default.stdout)["duplicates"]]
        self.assertNotIn("_helper", names)

        internal = self.runner.invoke(
            cli, ["check", str(self.root), "--format", "json", "--include-internal"]
        )
        names = [g["name"] for g in json.loads(internal.stdout)["duplicates"]]
        self.assertIn("_helper", names)

    def test_cap_of_one_warns_and_reports_nothing(self):
        result = self.runner.invoke(cli, ["check", str(self.root), "--max-duplicates", "1"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("no group can be reported", result.output)
        self.assertIn("No duplicate declarations found!", result.output)

    def test_missing_root(self):
        result = self.runner.invoke(cli, ["check", str(self.root / "nope")])
        self.assertEqual(result.exit_code, 2)


class TestInitCommand(CLITestCase):
    def test_creates_config(self):
        result = self.runner.invoke(cli, ["init", str(self.root)])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.root / "dupdecl.yml").exists())

    def test_refuses_to_overwrite(self):
        self.write("dupdecl.yml", "include_internal: true\n")

        result = self.runner.invoke(cli, ["init", str(self.root)])
        self.assertNotEqual(result.exit_code, 0)
        self.assertEqual((self.root / "dupdecl.yml").read_text(encoding="utf-8"), "include_internal: true\n")

        result = self.runner.invoke(cli, ["init", str(self.root), "--force"])
        self.assertEqual(result.exit_code, 0, result.output)

    def test_template_is_valid_config(self):
        self.runner.invoke(cli, ["init", str(self.root)])
        result = self.runner.invoke(
            cli, ["--config", str(self.root / "dupdecl.yml"), "check", str(self.root), "-f", "json"]
        )
        self.assertEqual(result.exit_code, 0, result.output)


class TestBuildOverrides(unittest.TestCase):
    def test_no_flags(self):
        self.assertEqual(build_overrides(None, (), (), None, None, DetectorConfig()), {})

    def test_lists_extend_configured_values(self):
        base = DetectorConfig(ignore_names=["main"], ignore_types=["enum"])
        overrides = build_overrides(None, ("variable", "enum"), ("setup", "main"), None, None, base)

        self.assertEqual(overrides["ignore_names"], ["main", "setup"])
        self.assertEqual(overrides["ignore_types"], ["enum", "variable"])

    def test_rules(self):
        overrides = build_overrides(False, (), (), True, 0, DetectorConfig())
        self.assertEqual(
            overrides,
            {
                "include_internal": False,
                "rules": {"allow_cross_module_duplicates": True, "max_duplicates_per_name": 0},
            },
        )


if __name__ == "__main__":
    unittest.main()
