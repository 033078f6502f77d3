"""
Tests for the Python declaration scanner.
"""

import shutil
import tempfile
import textwrap
import unittest
from pathlib import Path

from dupdecl.core.models import DeclarationKind
from dupdecl.scanner.python_source import PythonDeclarationScanner, find_public_names
from dupdecl.utils.exceptions import ScanError

SAMPLE_MODULE = textwrap.dedent(
    '''\
    import enum
    from typing import NewType, Protocol, TypeAlias, TypedDict, overload

    MAX_ITEMS = 10
    _cache = {}
    UserId = NewType("UserId", int)
    Payload: TypeAlias = dict
    first, (second, *rest) = 1, (2, 3, 4)
    __version__ = "1.0"


    class Color(enum.Enum):
        RED = 1


    class Greeter(Protocol):
        def greet(self) -> str: ...


    class Options(TypedDict):
        verbose: bool


    class Service:
        def run(self):
            pass


    @overload
    def parse(value: int) -> int: ...
    @overload
    def parse(value: str) -> str: ...
    def parse(value):
        return value


    async def fetch():
        pass


    def _helper():
        pass


    try:
        from fastjson import loads
    except ImportError:
        def loads(text):
            return text
    '''
)


class TestPythonDeclarationScanner(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.root = Path(self.test_dir)
        self.scanner = PythonDeclarationScanner(self.root)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def write(self, relative, content):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def test_declaration_kinds(self):
        path = self.write("sample.py", SAMPLE_MODULE)
        found = [(o.name, o.kind.value) for o in self.scanner.scan_file(path)]

        self.assertEqual(
            found,
            [
                ("MAX_ITEMS", "variable"),
                ("_cache", "variable"),
                ("UserId", "type"),
                ("Payload", "type"),
                ("first", "variable"),
                ("second", "variable"),
                ("rest", "variable"),
                ("Color", "enum"),
                ("Greeter", "interface"),
                ("Options", "interface"),
                ("Service", "class"),
                ("parse", "function"),
                ("parse", "function"),
                ("parse", "function"),
                ("fetch", "function"),
                ("_helper", "function"),
                ("loads", "function"),
            ],
        )

    def test_visibility_follows_underscore_convention(self):
        path = self.write("sample.py", SAMPLE_MODULE)
        exported = {o.name: o.is_exported for o in self.scanner.scan_file(path)}

        self.assertTrue(exported["MAX_ITEMS"])
        self.assertTrue(exported["Service"])
        self.assertFalse(exported["_cache"])
        self.assertFalse(exported["_helper"])

    def test_visibility_follows_dunder_all(self):
        path = self.write(
            "api.py",
            '__all__ = ["public_func"]\n__all__ += ["Extra"]\n\n'
            "def public_func():\n    pass\n\n"
            "def other():\n    pass\n\n"
            "class Extra:\n    pass\n",
        )
        exported = {o.name: o.is_exported for o in self.scanner.scan_file(path)}
        self.assertEqual(exported, {"public_func": True, "other": False, "Extra": True})

    def test_positions_are_one_based(self):
        path = self.write("pos.py", "\n\ndef top():\n    pass\n\n@decorator\ndef decorated():\n    pass\n\nclass  Spaced:\n    x = 1\n")
        found = {o.name: (o.line, o.column) for o in self.scanner.scan_file(path)}

        self.assertEqual(found["top"], (3, 1))
        self.assertEqual(found["decorated"], (7, 1))
        self.assertEqual(found["Spaced"], (10, 1))
        self.assertNotIn("x", found)

    def test_nested_definition_column(self):
        path = self.write("cond.py", "import sys\nif sys.version_info >= (3, 8):\n    def compat():\n        pass\n")
        (occurrence,) = self.scanner.scan_file(path)
        self.assertEqual((occurrence.line, occurrence.column), (3, 5))
        self.assertEqual(occurrence.context_snippet, "def compat():")

    def test_context_snippet_is_first_line_truncated(self):
        long_name = "f" * 120
        path = self.write("long.py", f"def {long_name}():\n    pass\n\nclass Short:\n    pass\n")
        snippets = {o.name: o.context_snippet for o in self.scanner.scan_file(path)}

        self.assertEqual(snippets["Short"], "class Short:")
        self.assertEqual(len(snippets[long_name]), 103)
        self.assertTrue(snippets[long_name].endswith("..."))

    def test_form_feed_does_not_shift_snippets(self):
        source = 'x = 1\n\x0c\nNOTE = "a b"\n\ndef helper():\n    pass\n'
        found = {o.name: o for o in self.scanner.scan_source(source, "ff.py")}

        self.assertEqual(found["helper"].line, 5)
        self.assertEqual(found["helper"].context_snippet, "def helper():")
        self.assertEqual(found["NOTE"].line, 3)

    def test_columns_count_characters_not_bytes(self):
        found = {o.name: o for o in self.scanner.scan_source("été, b = 1, 2\n", "accents.py")}

        self.assertEqual(found["été"].column, 1)
        self.assertEqual(found["b"].column, 5)
        self.assertEqual(found["b"].context_snippet, "été, b = 1, 2")

    def test_paths_are_relative_to_root(self):
        path = self.write("pkg/sub/mod.py", "def handler():\n    pass\n")
        (occurrence,) = self.scanner.scan_file(path)
        self.assertEqual(occurrence.file, "pkg/sub/mod.py")

    def test_syntax_error_raises_scan_error(self):
        path = self.write("broken.py", "def oops(:\n")
        with self.assertRaises(ScanError):
            self.scanner.scan_file(path)

    def test_scan_files_skips_unparsable_files(self):
        good = self.write("a.py", "def one():\n    pass\n")
        bad = self.write("b.py", "class (:\n")
        other = self.write("c.py", "def two():\n    pass\n")

        with self.assertLogs("dupdecl.scanner.python_source", level="WARNING"):
            found = self.scanner.scan_files([good, bad, other])

        self.assertEqual([(o.file, o.name) for o in found], [("a.py", "one"), ("c.py", "two")])

    def test_missing_file_raises_scan_error(self):
        with self.assertRaises(ScanError):
            self.scanner.scan_file(self.root / "missing.py")


class TestFindPublicNames(unittest.TestCase):
    def test_no_dunder_all(self):
        import ast

        self.assertIsNone(find_public_names(ast.parse("x = 1\n")))

    def test_non_literal_dunder_all_is_ignored(self):
        import ast

        tree = ast.parse("__all__ = ['a'] + helpers.names\n")
        self.assertEqual(find_public_names(tree), set())


if __name__ == "__main__":
    unittest.main()
