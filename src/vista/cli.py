"""Vista CLI - React Server Components build analysis."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from dotenv import load_dotenv

# Load .env file before any other imports that might use env vars
load_dotenv()

import click  # noqa: E402

from vista import __version__  # noqa: E402
from vista.commands.lazy import CommandTable, LazyGroup  # noqa: E402

if TYPE_CHECKING:
    from vista.config import VistaConfig

VerbosityLevel = Literal["quiet", "normal", "verbose"]


class VistaContext:
    """Shared context for CLI commands."""

    def __init__(self) -> None:
        self.config: VistaConfig | None = None
        self.verbosity: VerbosityLevel = "normal"
        self.debug: bool = False

    def get_config(self) -> VistaConfig:
        """Loaded configuration, or defaults."""
        from vista.config import VistaConfig

        if self.config is None:
            self.config = VistaConfig()
        return self.config


pass_context = click.make_pass_decorator(VistaContext, ensure=True)


# Define lazy subcommands: name -> (module_path, attribute_name)
LAZY_COMMANDS: CommandTable = {
    "scan": ("vista.commands.scan", "scan"),
    "routes": ("vista.commands.routes", "routes"),
    "build": ("vista.commands.build", "build"),
    "prerender": ("vista.commands.prerender", "prerender"),
    "init": ("vista.commands.init_cmd", "init"),
}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output")
@click.option("--debug", is_flag=True, help="Show full tracebacks on errors")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(version=__version__, prog_name="vista")
@pass_context
def cli(
    ctx: VistaContext,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config: Path | None,
) -> None:
    """Vista - React Server Components build analysis.

    \b
    Commands:
      scan         Classify client and server components
      routes       Show the route tree or route table
      build        Write client and server manifests to .vista/
      prerender    Generate CLS-safe placeholders for client components
      init         Create a default .vistarc.toml

    Use 'vista <command> --help' for details.
    """
    from vista.config import VistaConfig
    from vista.logging import print_error, setup_logging

    ctx.debug = debug

    if quiet:
        ctx.verbosity = "quiet"
    elif verbose:
        ctx.verbosity = "verbose"
    else:
        ctx.verbosity = "normal"

    setup_logging(ctx.verbosity)

    try:
        ctx.config = VistaConfig.load(config)
    except Exception as e:
        if not quiet:
            print_error(f"Failed to load configuration: {e}")
        # Commands fall back to defaults


def main() -> None:
    """Entry point for the CLI."""
    import sys

    debug_mode = "--debug" in sys.argv

    try:
        cli()
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        from vista.errors import ExitCode, VistaError
        from vista.logging import print_error, print_info

        print_error(str(e))

        if debug_mode:
            import traceback

            print_info("")
            print_info("Full traceback (--debug mode):")
            traceback.print_exc()
        else:
            print_info("")
            print_info("Run with --debug for full traceback.")

        sys.exit(e.exit_code if isinstance(e, VistaError) else ExitCode.FATAL_ERROR)


if __name__ == "__main__":
    main()
