"""Vista build command - write client and server manifests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vista.cli import VistaContext


@click.command()
@click.argument(
    "project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option("--dev", is_flag=True, help="Development mode: report violations without failing")
@click.option(
    "--new-build-id/--reuse-build-id",
    default=None,
    help="Force or suppress a fresh BUILD_ID (default: fresh in production)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the build report as JSON")
@click.pass_obj
def build(
    ctx: VistaContext,
    project: Path,
    dev: bool,
    new_build_id: bool | None,
    as_json: bool,
) -> None:
    """Scan PROJECT's app directory and write manifests to .vista/."""
    from rich.markup import escape

    from vista.build import run_build
    from vista.errors import BoundaryViolationError
    from vista.logging import console, print_success, print_violations, print_warning

    config = ctx.get_config()
    try:
        report = run_build(project, config, dev=dev, new_build_id=new_build_id)
    except BoundaryViolationError as e:
        print_violations(e.violations, config.directive.directive)
        sys.exit(e.exit_code)

    if as_json:
        import json

        output_str = json.dumps(report.to_dict(), indent=2)
        console.print(output_str, markup=False, highlight=False, soft_wrap=True)
        return

    for warning in report.warnings:
        print_warning(escape(warning))

    print_success(f"Build {report.build_id} complete")
    console.print(f"  client-manifest.json ({report.client_modules} modules)", markup=False)
    console.print(
        f"  server-manifest.json ({report.server_modules} modules, {report.routes} routes)",
        markup=False,
    )


__all__ = ["build"]
