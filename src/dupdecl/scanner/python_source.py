"""
Declaration scanner for Python source files.

Walks the module-level statements of each file with the standard ``ast``
module and yields one Occurrence per named declaration. Statements nested in
module-level ``if``, ``try`` and ``with`` blocks count as module level, which
is where conditional re-definitions (import fallbacks, version checks) live.
"""

import ast
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple, Union

from dupdecl.core.models import DeclarationKind, Occurrence, make_snippet
from dupdecl.utils.exceptions import ScanError
from dupdecl.utils.logging import get_logger

logger = get_logger(__name__)

ENUM_BASES = {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"}
INTERFACE_BASES = {"Protocol", "TypedDict"}
TYPE_ALIAS_ANNOTATIONS = {"TypeAlias"}
TYPE_FACTORIES = {"NewType"}

_TRY_NODES = tuple(
    node for node in (getattr(ast, "Try", None), getattr(ast, "TryStar", None)) if node
)
_TYPE_ALIAS_NODE = getattr(ast, "TypeAlias", None)

# Line breaks as the tokenizer counts them
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _dotted_tail(expr: ast.AST) -> Optional[str]:
    """Last component of a (possibly qualified or subscripted) name.

    ``Enum`` -> ``Enum``, ``enum.IntEnum`` -> ``IntEnum``,
    ``Protocol[T]`` -> ``Protocol``.
    """
    if isinstance(expr, ast.Name):
        return expr.id
    if isinstance(expr, ast.Attribute):
        return expr.attr
    if isinstance(expr, ast.Subscript):
        return _dotted_tail(expr.value)
    return None


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _target_names(target: ast.AST) -> Iterator[ast.Name]:
    """Names bound by an assignment target, unpacking tuples and lists."""
    if isinstance(target, ast.Name):
        yield target
    elif isinstance(target, (ast.Tuple, ast.List)):
        for element in target.elts:
            yield from _target_names(element)
    elif isinstance(target, ast.Starred):
        yield from _target_names(target.value)


def iter_module_statements(body: Sequence[ast.stmt]) -> Iterator[ast.stmt]:
    """Flatten module-level control blocks into a statement stream."""
    for stmt in body:
        if isinstance(stmt, ast.If):
            yield from iter_module_statements(stmt.body)
            yield from iter_module_statements(stmt.orelse)
        elif _TRY_NODES and isinstance(stmt, _TRY_NODES):
            yield from iter_module_statements(stmt.body)
            for handler in stmt.handlers:
                yield from iter_module_statements(handler.body)
            yield from iter_module_statements(stmt.orelse)
            yield from iter_module_statements(stmt.finalbody)
        elif isinstance(stmt, (ast.With, ast.AsyncWith)):
            yield from iter_module_statements(stmt.body)
        else:
            yield stmt


def find_public_names(tree: ast.Module) -> Optional[Set[str]]:
    """Collect the literal ``__all__`` of a module.

    Returns:
        The declared public names, or None when the module has no literal
        ``__all__`` (visibility then falls back to the underscore convention)
    """
    public: Optional[Set[str]] = None

    for stmt in iter_module_statements(tree.body):
        value = None
        if isinstance(stmt, ast.Assign):
            if any(isinstance(t, ast.Name) and t.id == "__all__" for t in stmt.targets):
                value, public = stmt.value, set()
        elif isinstance(stmt, ast.AnnAssign):
            if isinstance(stmt.target, ast.Name) and stmt.target.id == "__all__" and stmt.value:
                value, public = stmt.value, set()
        elif isinstance(stmt, ast.AugAssign):
            if isinstance(stmt.target, ast.Name) and stmt.target.id == "__all__":
                value = stmt.value
                public = public if public is not None else set()

        if value is None:
            continue
        try:
            names = ast.literal_eval(value)
        except (ValueError, TypeError):
            continue
        if isinstance(names, (list, tuple)):
            public.update(name for name in names if isinstance(name, str))

    return public


class _ModuleCollector:
    """Turns one parsed module into occurrences."""

    def __init__(self, tree: ast.Module, source: str, relative_path: str):
        self.tree = tree
        self.lines = _LINE_BREAK.split(source)
        self.relative_path = relative_path
        self.public_names = find_public_names(tree)

    def collect(self) -> List[Occurrence]:
        occurrences = []
        for stmt in iter_module_statements(self.tree.body):
            for name, kind, node in self._declarations(stmt):
                occurrences.append(self._make_occurrence(name, kind, node, stmt))
        return occurrences

    def _declarations(self, stmt: ast.stmt) -> Iterator[Tuple[str, DeclarationKind, ast.AST]]:
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
            yield stmt.name, DeclarationKind.FUNCTION, stmt

        elif isinstance(stmt, ast.ClassDef):
            yield stmt.name, self._class_kind(stmt), stmt

        elif _TYPE_ALIAS_NODE is not None and isinstance(stmt, _TYPE_ALIAS_NODE):
            yield stmt.name.id, DeclarationKind.TYPE, stmt

        elif isinstance(stmt, ast.AnnAssign):
            if stmt.value is None or not isinstance(stmt.target, ast.Name):
                return
            if _is_dunder(stmt.target.id):
                return
            if _dotted_tail(stmt.annotation) in TYPE_ALIAS_ANNOTATIONS:
                yield stmt.target.id, DeclarationKind.TYPE, stmt.target
            else:
                yield stmt.target.id, self._value_kind(stmt.value), stmt.target

        elif isinstance(stmt, ast.Assign):
            kind = self._value_kind(stmt.value)
            for target in stmt.targets:
                for name_node in _target_names(target):
                    if not _is_dunder(name_node.id):
                        yield name_node.id, kind, name_node

    @staticmethod
    def _class_kind(node: ast.ClassDef) -> DeclarationKind:
        bases = {_dotted_tail(base) for base in node.bases}
        if bases & ENUM_BASES:
            return DeclarationKind.ENUM
        if bases & INTERFACE_BASES:
            return DeclarationKind.INTERFACE
        return DeclarationKind.CLASS

    @staticmethod
    def _value_kind(value: ast.AST) -> DeclarationKind:
        if isinstance(value, ast.Call) and _dotted_tail(value.func) in TYPE_FACTORIES:
            return DeclarationKind.TYPE
        return DeclarationKind.VARIABLE

    def _is_exported(self, name: str) -> bool:
        if self.public_names is not None:
            return name in self.public_names
        return not name.startswith("_")

    def _char_offset(self, node: ast.AST) -> int:
        """Convert the UTF-8 byte offset ast reports into a character offset."""
        index = node.lineno - 1
        if index >= len(self.lines):
            return node.col_offset
        prefix = self.lines[index].encode("utf-8")[: node.col_offset]
        return len(prefix.decode("utf-8", errors="replace"))

    def _snippet(self, stmt: ast.stmt) -> Optional[str]:
        index = stmt.lineno - 1
        if index >= len(self.lines):
            return None
        return make_snippet(self.lines[index][self._char_offset(stmt):])

    def _make_occurrence(
        self, name: str, kind: DeclarationKind, node: ast.AST, stmt: ast.stmt
    ) -> Occurrence:
        return Occurrence(
            name=name,
            kind=kind,
            file=self.relative_path,
            line=node.lineno,
            column=self._char_offset(node) + 1,
            context_snippet=self._snippet(stmt),
            is_exported=self._is_exported(name),
        )


class PythonDeclarationScanner:
    """Scans Python files for module-level declarations.

    File paths in the produced occurrences are relative to ``root`` so that
    reports are stable regardless of where the scan was started from.
    """

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root).resolve()

    def relative_path(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def scan_source(self, source: str, relative_path: str) -> List[Occurrence]:
        """Scan source text that is already in memory.

        Raises:
            ScanError: If the source is not valid Python
        """
        try:
            tree = ast.parse(source, filename=relative_path)
        except SyntaxError as e:
            raise ScanError(f"Syntax error: {e.msg}", path=relative_path, line=e.lineno) from e

        return _ModuleCollector(tree, source, relative_path).collect()

    def scan_file(self, path: Union[str, Path]) -> List[Occurrence]:
        """Scan one file.

        Raises:
            ScanError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ScanError(f"Could not read file: {e}", path=path) from e

        return self.scan_source(source, self.relative_path(path))

    def scan_files(self, paths: Iterable[Union[str, Path]]) -> List[Occurrence]:
        """Scan files in the given order, skipping the ones that fail.

        Returns:
            Occurrences in file order, then in-file order
        """
        occurrences: List[Occurrence] = []
        for path in paths:
            try:
                found = self.scan_file(path)
            except ScanError as e:
                logger.warning("Skipping %s", e)
                continue
            logger.debug("%s: %d declarations", path, len(found))
            occurrences.extend(found)
        return occurrences
