"""Vista scan command - classify client and server components."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vista.cli import VistaContext
    from vista.rsc.scanner import ScanResult


@click.command()
@click.argument(
    "app_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default="app",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file for the scan result (default: stdout)",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format",
)
@click.option("--strict", is_flag=True, help="Exit non-zero on server component violations")
@click.pass_obj
def scan(ctx: VistaContext, app_dir: Path, output: Path | None, format: str, strict: bool) -> None:
    """Classify every component under APP_DIR as client or server.

    Reports server components that use client-only hooks or event
    handlers without the 'client load' directive.
    """
    from vista.errors import ExitCode
    from vista.logging import console, print_success
    from vista.rsc.scanner import scan as scan_app

    result = scan_app(app_dir, ctx.get_config())

    if format == "json":
        import json

        output_str = json.dumps(result.to_dict(), indent=2)
    else:
        output_str = _format_scan_result(result)

    if output:
        output.write_text(output_str)
        print_success(f"Scan result written to {output}")
    else:
        console.print(output_str, markup=False, highlight=False, soft_wrap=True)

    if strict and result.errors:
        sys.exit(ExitCode.BOUNDARY_VIOLATION)


def _format_scan_result(result: ScanResult) -> str:
    """Format scan result as human-readable text."""
    lines = [
        f"Scanned: {result.root}",
        f"Files found: {result.total_files} ({result.scan_time_ms}ms)",
        f"Server components: {len(result.server_components)}",
        f"Client components: {len(result.client_components)}",
        f"Pages: {len(result.pages)}  Layouts: {len(result.layouts)}  "
        f"API routes: {len(result.api_routes)}",
    ]

    if result.client_components:
        lines.append("")
        lines.append("Client components (hydrated in the browser):")
        for c in result.client_components:
            lines.append(f"  + {c.relative_path}")

    if result.errors:
        lines.append("")
        lines.append(f"Server component violations: {len(result.errors)}")
        for error in result.errors:
            lines.append(f"  x {error.file}")
            lines.append(f"    {error.message}")

    return "\n".join(lines)


__all__ = ["scan"]
