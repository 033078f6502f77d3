"""
dupdecl CLI module.

This module provides the command-line interface for dupdecl.
"""

from dupdecl.cli.main import cli, main

__all__ = ["cli", "main"]
