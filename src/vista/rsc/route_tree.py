"""Hierarchical route tree for visualization and debugging.

Unlike the flat route table in the server manifest, this walks the app
directory directly and keeps the nesting. Segment rules come from
``classify_segment`` so both views agree.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from vista.config import ScannerConfig, VistaConfig
from vista.logging import get_logger
from vista.rsc.segments import SegmentKind, classify_segment

# File base name -> RouteNode attribute
SPECIAL_FILES: dict[str, str] = {
    "page": "index_path",
    "index": "index_path",
    "layout": "layout_path",
    "root": "layout_path",
    "loading": "loading_path",
    "error": "error_path",
    "not-found": "not_found_path",
}

_KIND_ORDER = {SegmentKind.STATIC: 0, SegmentKind.DYNAMIC: 1}


@dataclass
class RouteNode:
    """A directory in the route tree."""

    segment: str
    kind: SegmentKind = SegmentKind.STATIC
    index_path: str | None = None
    layout_path: str | None = None
    loading_path: str | None = None
    error_path: str | None = None
    not_found_path: str | None = None
    children: list[RouteNode] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True if the node would be pruned from its parent."""
        return self.index_path is None and self.layout_path is None and not self.children

    def to_dict(self) -> dict[str, Any]:
        return {
            "segment": self.segment,
            "kind": self.kind.value,
            "index_path": self.index_path,
            "layout_path": self.layout_path,
            "loading_path": self.loading_path,
            "error_path": self.error_path,
            "not_found_path": self.not_found_path,
            "children": [c.to_dict() for c in self.children],
        }


def _sort_key(node: RouteNode) -> tuple[int, str]:
    return (_KIND_ORDER.get(node.kind, 2), node.segment)


def _build_node(directory: Path, is_root: bool, scanner: ScannerConfig) -> RouteNode:
    if is_root:
        node = RouteNode(segment="", kind=SegmentKind.STATIC)
    else:
        label, kind = classify_segment(directory.name)
        node = RouteNode(segment=label, kind=kind)

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        get_logger().debug(f"Skipping unreadable directory {directory}: {e}")
        return node

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue

        if is_dir:
            if scanner.is_excluded_dir(entry.name):
                continue
            child = _build_node(Path(entry.path), False, scanner)
            if not child.is_empty:
                node.children.append(child)
        elif scanner.is_source_file(entry.name):
            attr = SPECIAL_FILES.get(Path(entry.name).stem)
            if attr is not None:
                setattr(node, attr, entry.path)

    node.children.sort(key=_sort_key)
    return node


def build_route_tree(app_dir: Path | str, config: VistaConfig | None = None) -> RouteNode:
    """Build the nested route tree rooted at ``app_dir``."""
    config = config or VistaConfig()
    return _build_node(Path(app_dir).resolve(), True, config.scanner)


__all__ = ["RouteNode", "SPECIAL_FILES", "build_route_tree"]
