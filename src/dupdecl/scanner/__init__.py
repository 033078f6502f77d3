"""
Source scanning for dupdecl.

Discovers the files to analyse and turns each one into declaration
occurrences for the detection engine.
"""

from dupdecl.scanner.discovery import compile_glob, discover_files, is_selected
from dupdecl.scanner.python_source import PythonDeclarationScanner

__all__ = [
    "discover_files",
    "is_selected",
    "compile_glob",
    "PythonDeclarationScanner",
]
