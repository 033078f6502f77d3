"""
Main CLI entry point for dupdecl.

This module provides the main CLI group and global options.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from dupdecl import __version__
from dupdecl.cli.formatting import console, print_error
from dupdecl.utils.logging import setup_logging, verbosity_to_level


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.quiet: bool = False


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to config file (default: dupdecl.yml)",
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Enable verbose logging (can be repeated: -vv)",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Only log errors",
)
@click.version_option(version=__version__, prog_name="dupdecl")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: int, quiet: bool):
    """
    dupdecl - duplicate declaration detector

    Finds functions, classes, protocols, type aliases, enums and module
    variables that are declared under the same name in more than one file.

    \b
    Typical workflow:
      1. dupdecl init            # Write a starter dupdecl.yml
      2. dupdecl check src/      # Report duplicates (exit code 1 if any)

    \b
    For help on a specific command:
      dupdecl <command> --help
    """
    cli_ctx = ctx.ensure_object(CLIContext)
    cli_ctx.config_path = config
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    setup_logging(verbosity_to_level(verbose, quiet))


# Commands import pass_context from this module, so they are registered last
from dupdecl.cli.check import check
from dupdecl.cli.init import init

cli.add_command(check)
cli.add_command(init)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
