"""Vista prerender command - CLS-safe placeholders for client components."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vista.cli import VistaContext


@click.command()
@click.argument("target", type=click.Path(exists=True, path_type=Path), default="app")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "html"]),
    default="json",
    help="Full structure as JSON, or placeholder markup only",
)
@click.pass_obj
def prerender(ctx: VistaContext, target: Path, output_format: str) -> None:
    """Pre-render TARGET (a client component file or an app directory)."""
    from rich.markup import escape

    from vista.logging import console, print_warning
    from vista.rsc.prerender import prerender_all, prerender_component

    config = ctx.get_config()

    if target.is_file():
        component = prerender_component(target, config.directive.directive)
        components = {component.component_id: component} if component else {}
    else:
        components = prerender_all(target, config)

    if not components:
        print_warning(f"No client components found in {escape(str(target))}")
        return

    if output_format == "html":
        for component_id, component in components.items():
            console.print(f"<!-- {component_id} -->", markup=False, highlight=False)
            console.print(component.placeholder_html, markup=False, highlight=False, soft_wrap=True)
        return

    import json

    data = {cid: c.to_dict() for cid, c in components.items()}
    console.print(json.dumps(data, indent=2), markup=False, highlight=False, soft_wrap=True)


__all__ = ["prerender"]
