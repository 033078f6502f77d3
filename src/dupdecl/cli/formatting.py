"""
CLI output formatting utilities.

This module provides helpers for consistent terminal output using the Rich
library. Report rendering itself lives in ``dupdecl.formatters``.
"""

from typing import Any, Dict, Optional

from rich.console import Console

# Global console instance
console = Console()


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header."""
    console.print()
    console.rule(f"[bold blue]{title}[/bold blue]")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]")
    console.print()


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_config(config_dict: Dict[str, Any], title: str = "Configuration") -> None:
    """Print a configuration dictionary in a nice format."""
    console.print(f"\n[bold]{title}[/bold]")
    for key, value in config_dict.items():
        if isinstance(value, (list, tuple)):
            value_str = ", ".join(str(v) for v in value) or "-"
        elif isinstance(value, dict):
            value_str = f"{len(value)} items"
        else:
            value_str = str(value)
        console.print(f"  [cyan]{key}:[/cyan] {value_str}")
    console.print()
