"""Console output and the ``vista`` logger.

Command results (scan summaries, route tables, JSON) go to ``console`` on
stdout so they can be piped. Diagnostics, violations and log records go to
``err_console`` on stderr.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Literal

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

if TYPE_CHECKING:
    from vista.rsc.scanner import ServerComponentError

LOGGER_NAME = "vista"

console = Console()
err_console = Console(stderr=True)

# quiet: failures only. normal: build progress. verbose: per-file scan and
# manifest detail, including skipped files.
VERBOSITY_LEVELS: dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


def setup_logging(
    verbosity: Literal["quiet", "normal", "verbose"] = "normal",
) -> logging.Logger:
    """Route ``vista`` log records to stderr at the given verbosity.

    Calling it again replaces the previous handler, so each CLI invocation
    starts from a clean logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(VERBOSITY_LEVELS[verbosity])

    detailed = verbosity == "verbose"
    handler = RichHandler(
        console=err_console,
        show_time=detailed,
        show_path=detailed,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {message}")


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    console.print(message)


def print_violations(violations: Sequence[ServerComponentError], directive: str) -> None:
    """Report server components that use client-only APIs, with the fix."""
    print_error("Server Component violations")
    for violation in violations:
        err_console.print(f"  [red]x[/red] {escape(violation.file)}")
        err_console.print(
            f"    Using [yellow]{escape(', '.join(violation.hooks[:3]))}[/yellow] "
            "in a Server Component"
        )
    err_console.print(
        f"  [cyan]To fix:[/cyan] add [yellow]{escape(repr(directive))}[/yellow] "
        "at the top of the file"
    )


__all__ = [
    "LOGGER_NAME",
    "VERBOSITY_LEVELS",
    "console",
    "err_console",
    "get_logger",
    "print_error",
    "print_info",
    "print_success",
    "print_violations",
    "print_warning",
    "setup_logging",
]
