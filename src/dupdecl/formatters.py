"""
Report formatters for dupdecl.

Every formatter is a pure function from a DuplicateReport to a string. The
console formatter renders through Rich into an in-memory buffer, so callers
decide where the text goes (stdout, a file, a test assertion).
"""

import io
import json
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Union

from rich.console import Console
from rich.markup import escape

from dupdecl.core.models import DeclarationKind, DuplicateGroup, DuplicateReport
from dupdecl.utils.exceptions import OutputError


class ReportFormat(str, Enum):
    """Supported output formats."""

    CONSOLE = "console"
    JSON = "json"
    MARKDOWN = "markdown"


KIND_STYLES = {
    DeclarationKind.FUNCTION: "blue",
    DeclarationKind.CLASS: "green",
    DeclarationKind.INTERFACE: "cyan",
    DeclarationKind.TYPE: "magenta",
    DeclarationKind.VARIABLE: "white",
    DeclarationKind.ENUM: "yellow",
    DeclarationKind.NAMESPACE: "red",
}

SUMMARY_LABELS = (
    ("Files scanned", "total_files"),
    ("Declarations", "total_declarations"),
    ("Duplicate groups", "duplicate_group_count"),
    ("Duplicate declarations", "duplicate_declaration_count"),
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _group_title(group: DuplicateGroup) -> str:
    return f'"{group.name}" ({_plural(group.count, "occurrence")})'


def format_console(report: DuplicateReport, color: bool = False, width: int = 100) -> str:
    """Render a report for a terminal.

    Args:
        report: Report to render
        color: Emit ANSI styles
        width: Console width used for wrapping

    Returns:
        Rendered text
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )

    console.print("[bold]Duplicate Declaration Report[/bold]")
    console.print()
    console.print("[cyan]Summary:[/cyan]")
    label_width = max(len(label) for label, _ in SUMMARY_LABELS) + 1
    for label, field in SUMMARY_LABELS:
        value = getattr(report.summary, field)
        console.print(f"  {label + ':':<{label_width}} {value:,}")
    console.print()

    if not report.duplicates:
        console.print("[green]✓[/green] No duplicate declarations found!")
        return buffer.getvalue().rstrip("\n")

    console.print(
        f"[red]✗[/red] Found {_plural(len(report.duplicates), 'duplicate group')}:"
    )
    console.print()

    for index, group in enumerate(report.duplicates, 1):
        style = KIND_STYLES.get(group.kind, "white")
        console.print(
            f"[yellow]{index}.[/yellow] [{style}]{group.kind.value}[/{style}] "
            f"[yellow]{escape(_group_title(group))}[/yellow]"
        )

        last = len(group.locations) - 1
        for loc_index, location in enumerate(group.locations):
            branch = "└─" if loc_index == last else "├─"
            stem = "  " if loc_index == last else "│ "
            console.print(
                f"   {branch} {escape(location.file)}:{location.line}:{location.column}",
                style="dim",
            )
            if location.context_snippet:
                console.print(f"   {stem}    {escape(location.context_snippet)}", style="dim")
        console.print()

    return buffer.getvalue().rstrip("\n")


def format_json(report: DuplicateReport) -> str:
    """Render a report as indented JSON with camelCase keys."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def format_markdown(report: DuplicateReport) -> str:
    """Render a report as a Markdown document."""
    lines: List[str] = ["# Duplicate Declaration Report", "", "## Summary", ""]
    for label, field in SUMMARY_LABELS:
        lines.append(f"- {label}: {getattr(report.summary, field)}")
    lines.append("")

    if not report.duplicates:
        lines.append("✅ **No duplicate declarations found!**")
        return "\n".join(lines)

    lines.extend(["## Duplicates", ""])
    for index, group in enumerate(report.duplicates, 1):
        lines.append(f"### {index}. `{group.kind.value}` {_group_title(group)}")
        lines.append("")
        for location in group.locations:
            lines.append(f"- `{location.file}:{location.line}:{location.column}`")
            if location.context_snippet:
                lines.extend(["  ```python", f"  {location.context_snippet}", "  ```"])
        lines.append("")

    return "\n".join(lines).rstrip("\n")


FORMATTERS: Dict[ReportFormat, Callable[[DuplicateReport], str]] = {
    ReportFormat.CONSOLE: format_console,
    ReportFormat.JSON: format_json,
    ReportFormat.MARKDOWN: format_markdown,
}


def format_report(report: DuplicateReport, fmt: Union[ReportFormat, str] = ReportFormat.CONSOLE) -> str:
    """Render a report in the requested format.

    Raises:
        ValueError: If the format is not supported
    """
    return FORMATTERS[ReportFormat(fmt)](report)


def write_report(text: str, output_path: Union[str, Path]) -> Path:
    """Write rendered report text to a file, creating parent directories.

    Raises:
        OutputError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Could not write report: {e}", path=output_path) from e
    return output_path
