"""
Check command.

This command scans a project and reports duplicate declarations. The exit
status is 1 when duplicates are found, which makes it usable as a CI gate.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from dupdecl.cli.formatting import (
    console,
    print_config,
    print_header,
    print_success,
    print_warning,
)
from dupdecl.cli.main import pass_context
from dupdecl.core.config import DetectorConfig, load_config, merge_configs
from dupdecl.core.models import DeclarationKind
from dupdecl.detector import DuplicateDetector
from dupdecl.formatters import ReportFormat, format_console, format_report, write_report
from dupdecl.utils.exceptions import DupDeclException


def build_overrides(
    include_internal: Optional[bool],
    ignore_types: Tuple[str, ...],
    ignore_names: Tuple[str, ...],
    allow_cross_module: Optional[bool],
    max_duplicates: Optional[int],
    base: DetectorConfig,
) -> Dict[str, Any]:
    """Translate CLI flags into a config override mapping.

    Flags that were not given leave the loaded configuration untouched.
    Ignore lists extend the configured ones.
    """
    overrides: Dict[str, Any] = {}
    rules: Dict[str, Any] = {}

    if include_internal is not None:
        overrides["include_internal"] = include_internal
    if ignore_types:
        current = [kind.value for kind in base.ignore_types]
        overrides["ignore_types"] = current + [t for t in ignore_types if t not in current]
    if ignore_names:
        current = list(base.ignore_names)
        overrides["ignore_names"] = current + [n for n in ignore_names if n not in current]
    if allow_cross_module is not None:
        rules["allow_cross_module_duplicates"] = allow_cross_module
    if max_duplicates is not None:
        rules["max_duplicates_per_name"] = max_duplicates

    if rules:
        overrides["rules"] = rules
    return overrides


@click.command()
@click.argument(
    "root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
)
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice([f.value for f in ReportFormat], case_sensitive=False),
    default=ReportFormat.CONSOLE.value,
    help="Output format",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report to a file instead of stdout",
)
@click.option(
    "--include-internal/--exported-only",
    default=None,
    help="Also check declarations that are not exported",
)
@click.option(
    "--ignore-type",
    "ignore_types",
    multiple=True,
    type=click.Choice([k.value for k in DeclarationKind], case_sensitive=False),
    help="Declaration kind to ignore (repeatable)",
)
@click.option(
    "--ignore-name",
    "ignore_names",
    multiple=True,
    help="Declaration name to ignore (repeatable)",
)
@click.option(
    "--allow-cross-module/--require-cross-module",
    "allow_cross_module",
    default=None,
    help="Report names repeated within a single file too",
)
@click.option(
    "--max-duplicates",
    type=int,
    help="Maximum locations listed per name (0 disables the cap)",
)
@pass_context
def check(
    ctx,
    root: Path,
    output_format: str,
    output_path: Optional[Path],
    include_internal: Optional[bool],
    ignore_types: Tuple[str, ...],
    ignore_names: Tuple[str, ...],
    allow_cross_module: Optional[bool],
    max_duplicates: Optional[int],
):
    """Report declarations defined in more than one file.

    \b
    Examples:
      # Check the current directory with dupdecl.yml or defaults
      dupdecl check

      # JSON report for tooling
      dupdecl check src/ --format json --output dupes.json

      # Include private helpers, ignore module variables
      dupdecl check src/ --include-internal --ignore-type variable
    """
    output_format = output_format.lower()
    is_json = output_format == ReportFormat.JSON.value

    if not is_json and not ctx.quiet:
        print_header("dupdecl", f"Scanning {root}")

    config = load_config(ctx.config_path)
    overrides = build_overrides(
        include_internal, ignore_types, ignore_names, allow_cross_module, max_duplicates, config
    )
    if overrides:
        config = merge_configs(config, overrides)

    if ctx.verbose and not is_json:
        print_config({
            "Root": root,
            "Include internal": config.include_internal,
            "Ignore types": [kind.value for kind in config.ignore_types],
            "Ignore names": config.ignore_names,
            "Same-file overloads": config.rules.allow_same_file_overloads,
            "Cross-module duplicates": config.rules.allow_cross_module_duplicates,
            "Max per name": config.rules.max_duplicates_per_name,
        })

    if config.rules.max_duplicates_per_name == 1 and not is_json and not ctx.quiet:
        print_warning("max_duplicates_per_name is 1, so no group can be reported")

    try:
        report = DuplicateDetector(config).detect(root)
        colored = output_path is None and console.is_terminal
        if output_format == ReportFormat.CONSOLE.value and colored:
            text = format_console(report, color=True, width=console.width)
        else:
            text = format_report(report, output_format)

        if output_path:
            write_report(text, output_path)
            if not is_json and not ctx.quiet:
                print_success(f"Report saved to: {output_path}")
        else:
            click.echo(text)
    except DupDeclException as e:
        raise click.ClickException(str(e))

    if report.has_duplicates:
        sys.exit(1)
