"""Tests for the hierarchical route tree."""

from __future__ import annotations

from pathlib import Path

from vista.rsc.route_tree import RouteNode, build_route_tree
from vista.rsc.segments import SegmentKind


def _write_tree(root: Path, files: list[str]) -> Path:
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export default function C() {}")
    return root


def _child(node: RouteNode, segment: str) -> RouteNode:
    return next(c for c in node.children if c.segment == segment)


class TestBuildRouteTree:
    """Test route tree construction from the app directory."""

    def test_root_node(self, tmp_path):
        """Test that the root is an unnamed static segment."""
        app = _write_tree(tmp_path / "app", ["page.tsx", "layout.tsx"])
        tree = build_route_tree(app)

        assert tree.segment == ""
        assert tree.kind == SegmentKind.STATIC
        assert tree.index_path == str(app.resolve() / "page.tsx")
        assert tree.layout_path == str(app.resolve() / "layout.tsx")

    def test_special_files(self, tmp_path):
        """Test loading, error and not-found files are attached."""
        app = _write_tree(
            tmp_path / "app",
            ["page.tsx", "loading.tsx", "error.tsx", "not-found.tsx", "Button.tsx"],
        )
        tree = build_route_tree(app)
        root = app.resolve()

        assert tree.loading_path == str(root / "loading.tsx")
        assert tree.error_path == str(root / "error.tsx")
        assert tree.not_found_path == str(root / "not-found.tsx")

    def test_child_order(self, tmp_path):
        """Test static children first, then dynamic, then the rest."""
        app = _write_tree(
            tmp_path / "app",
            [
                "[id]/page.tsx",
                "zeta/page.tsx",
                "[...rest]/page.tsx",
                "alpha/page.tsx",
                "(group)/page.tsx",
            ],
        )
        tree = build_route_tree(app)
        kinds = [(c.segment, c.kind) for c in tree.children]

        assert kinds[:3] == [
            ("alpha", SegmentKind.STATIC),
            ("zeta", SegmentKind.STATIC),
            ("id", SegmentKind.DYNAMIC),
        ]
        assert {k for _, k in kinds[3:]} == {SegmentKind.CATCH_ALL, SegmentKind.GROUP}

    def test_segment_labels(self, tmp_path):
        """Test labels for dynamic, catch-all and group segments."""
        app = _write_tree(
            tmp_path / "app",
            ["blog/[slug]/page.tsx", "docs/[...path]/page.tsx", "(shop)/cart/page.tsx"],
        )
        tree = build_route_tree(app)

        slug = _child(_child(tree, "blog"), "slug")
        assert slug.kind == SegmentKind.DYNAMIC
        path = _child(_child(tree, "docs"), "path")
        assert path.kind == SegmentKind.CATCH_ALL
        group = _child(tree, "")
        assert group.kind == SegmentKind.GROUP
        assert _child(group, "cart").index_path is not None

    def test_empty_directories_pruned(self, tmp_path):
        """Test that directories without pages or layouts are dropped."""
        app = _write_tree(
            tmp_path / "app",
            ["page.tsx", "components/Button.tsx", "lib/utils/format.ts"],
        )
        (app / "empty").mkdir()
        tree = build_route_tree(app)
        assert tree.children == []

    def test_layout_only_directory_kept(self, tmp_path):
        """Test that a directory with only a layout survives pruning."""
        app = _write_tree(tmp_path / "app", ["dashboard/layout.tsx"])
        tree = build_route_tree(app)
        dashboard = _child(tree, "dashboard")
        assert dashboard.layout_path is not None
        assert dashboard.index_path is None

    def test_nested_pages_keep_parent(self, tmp_path):
        """Test that a parent without its own page is kept for its children."""
        app = _write_tree(tmp_path / "app", ["a/b/c/page.tsx"])
        tree = build_route_tree(app)
        c = _child(_child(_child(tree, "a"), "b"), "c")
        assert c.index_path is not None

    def test_excluded_directories(self, tmp_path):
        """Test that node_modules and hidden directories are not part of the tree."""
        app = _write_tree(
            tmp_path / "app",
            ["node_modules/pkg/page.tsx", ".private/page.tsx", "about/page.tsx"],
        )
        tree = build_route_tree(app)
        assert [c.segment for c in tree.children] == ["about"]

    def test_missing_directory(self, tmp_path):
        """Test that a missing app directory yields an empty root."""
        tree = build_route_tree(tmp_path / "missing")
        assert tree.segment == ""
        assert tree.is_empty

    def test_to_dict(self, tmp_path):
        """Test nested serialization."""
        app = _write_tree(tmp_path / "app", ["blog/[slug]/page.tsx"])
        data = build_route_tree(app).to_dict()

        assert data["segment"] == ""
        assert data["kind"] == "static"
        blog = data["children"][0]
        assert blog["segment"] == "blog"
        assert blog["children"][0]["kind"] == "dynamic"
        assert blog["children"][0]["index_path"].endswith("page.tsx")
