"""Vista init command - write a default .vistarc.toml."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vista.cli import VistaContext


@click.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite existing .vistarc.toml")
@click.pass_obj
def init(ctx: VistaContext, force: bool) -> None:
    """Create a .vistarc.toml with default settings in the current directory."""
    from vista.config import get_default_config_toml
    from vista.errors import ExitCode
    from vista.logging import print_error, print_info, print_success, print_warning
    from vista.paths import CONFIG_FILE

    config_path = Path.cwd() / CONFIG_FILE

    if config_path.exists() and not force:
        print_warning(f"Configuration file already exists: {config_path}")
        print_info("Use --force to overwrite")
        sys.exit(ExitCode.CONFIG_ERROR)

    try:
        config_path.write_text(get_default_config_toml(), encoding="utf-8")
    except PermissionError:
        print_error(f"Permission denied: {config_path}")
        sys.exit(ExitCode.CONFIG_ERROR)

    print_success(f"Created {config_path}")
    print_info("Run 'vista scan app' to classify your components")


__all__ = ["init"]
