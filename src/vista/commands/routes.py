"""Vista routes command - show the route tree or the flat route table."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from rich.tree import Tree

    from vista.cli import VistaContext
    from vista.rsc.route_tree import RouteNode


@click.command()
@click.argument(
    "app_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default="app",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["tree", "table", "json"]),
    default="tree",
    help="Nested tree, sorted route table, or the tree as JSON",
)
@click.pass_obj
def routes(ctx: VistaContext, app_dir: Path, output_format: str) -> None:
    """Show the routes defined under APP_DIR."""
    from vista.logging import console

    config = ctx.get_config()

    if output_format == "table":
        from rich.markup import escape
        from rich.table import Table

        from vista.rsc.manifest import build_routes
        from vista.rsc.scanner import scan

        table = Table(title="Routes", show_header=True)
        table.add_column("Pattern", style="cyan")
        table.add_column("Type")
        table.add_column("Layouts", justify="right")
        table.add_column("Page")

        root = app_dir.resolve()
        for route in build_routes(scan(root, config)):
            table.add_row(
                route.pattern,
                route.route_type.value,
                str(len(route.layout_paths)),
                escape(Path(route.page_path).relative_to(root).as_posix()),
            )
        console.print(table)
        return

    from vista.rsc.route_tree import build_route_tree

    tree = build_route_tree(app_dir, config)
    if output_format == "json":
        import json

        output_str = json.dumps(tree.to_dict(), indent=2)
        console.print(output_str, markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(_render_tree(tree))


def _node_label(node: RouteNode) -> str:
    from rich.markup import escape

    if node.kind.value == "group":
        label = "[dim](group)[/dim]"
    elif node.kind.value == "dynamic":
        label = f"[yellow]:{escape(node.segment)}[/yellow]"
    elif node.kind.value == "catch-all":
        label = f"[magenta]:{escape(node.segment)}*[/magenta]"
    else:
        label = escape(node.segment) or "/"

    markers = []
    if node.index_path:
        markers.append("page")
    if node.layout_path:
        markers.append("layout")
    if node.loading_path:
        markers.append("loading")
    if node.error_path:
        markers.append("error")
    if node.not_found_path:
        markers.append("not-found")
    if markers:
        label += f" [dim]({', '.join(markers)})[/dim]"
    return label


def _render_tree(node: RouteNode, parent: Tree | None = None) -> Tree:
    from rich.tree import Tree

    branch = Tree(_node_label(node)) if parent is None else parent.add(_node_label(node))
    for child in node.children:
        _render_tree(child, branch)
    return branch


__all__ = ["routes"]
