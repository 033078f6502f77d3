"""
Project initialization command.

This command writes a starter dupdecl.yml with every option documented.
"""

from pathlib import Path

import click

from dupdecl.cli.formatting import print_error, print_success
from dupdecl.cli.main import pass_context
from dupdecl.core.config import DEFAULT_CONFIG_FILE

CONFIG_TEMPLATE = """# dupdecl configuration
# Keys may be written in snake_case or camelCase.

# Also check declarations that are not exported
# (not listed in __all__, or starting with "_" when there is no __all__)
include_internal: false

# Files to scan, as globs relative to the project root
include_patterns:
  - "**/*.py"

exclude_patterns:
  - "**/test_*.py"
  - "**/*_test.py"
  - "**/conftest.py"
  - "**/*.pyi"
  - "**/__pycache__/**"
  - "**/.venv/**"
  - "**/venv/**"
  - "**/build/**"
  - "**/dist/**"
  - "**/.git/**"

# Kinds to skip: function, class, interface, type, variable, enum, namespace
ignore_types: []

# Names to skip
ignore_names: []

rules:
  # Same-named functions in one file are overloads of a single declaration
  allow_same_file_overloads: true
  # Report names that repeat only inside a single file
  allow_cross_module_duplicates: false
  # Locations listed per name (0 disables the cap)
  max_duplicates_per_name: 2
"""


@click.command()
@click.argument(
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite an existing configuration file",
)
@pass_context
def init(ctx, directory: Path, force: bool):
    """Write a default dupdecl.yml.

    \b
    Examples:
      dupdecl init
      dupdecl init path/to/project --force
    """
    config_path = directory / DEFAULT_CONFIG_FILE

    if config_path.exists() and not force:
        print_error(f"{config_path} already exists (use --force to overwrite)")
        raise click.Abort()

    directory.mkdir(parents=True, exist_ok=True)
    config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    print_success(f"Created {config_path}")
