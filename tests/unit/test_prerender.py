"""Tests for the client component pre-renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from vista.config import DirectiveConfig, VistaConfig
from vista.rsc.prerender import (
    BUTTON_COLORS,
    HEADING_SHIMMER,
    PARAGRAPH_SHIMMER,
    SHIMMER_KEYFRAMES,
    ElementCounts,
    ExtractedStyles,
    estimate_height,
    extract_style_block,
    generate_placeholder_html,
    parse_style_object,
    prerender_all,
    prerender_component,
    prerender_source,
)

COUNTER = """'client load';
export default function Counter() {
  return (
    <div style={{ padding: '24px', backgroundColor: "#222", borderRadius: '8px' }}>
      <h2>Title</h2>
      <p className="count">Count</p>
      <div>
        <button onClick={dec}>-</button>
        <button onClick={inc}>+</button>
      </div>
    </div>
  );
}
"""


class TestStyleExtraction:
    """Test inline style object extraction and parsing."""

    def test_first_block(self):
        """Test the first style object body is returned without braces."""
        block = extract_style_block(COUNTER)
        assert block is not None
        assert block.strip().startswith("padding")
        assert "}" not in block

    def test_nested_braces(self):
        """Test brace depth tracking."""
        source = "<div style={{ a: { b: 1 }, c: 2 }}>"
        assert extract_style_block(source) == " a: { b: 1 }, c: 2 "

    def test_no_block(self):
        """Test sources without inline styles."""
        assert extract_style_block("<div className='x'>") is None

    def test_unterminated_block(self):
        """Test an unbalanced style object."""
        assert extract_style_block("<div style={{ padding: 1") is None

    def test_parse_quoted_values(self):
        """Test quotes are stripped from keys and values."""
        styles = parse_style_object(" padding: '24px', backgroundColor: \"#222\", 'gap': 8 ")
        assert styles.padding == "24px"
        assert styles.background_color == "#222"
        assert styles.gap == "8"

    def test_parse_unknown_keys_ignored(self):
        """Test unrecognized keys and malformed pairs are skipped."""
        styles = parse_style_object("boxShadow: 'none', bogus, color: 'red'")
        assert styles.to_dict() == {"color": "red"}

    def test_parse_all_keys(self):
        """Test every recognized camelCase key maps to its field."""
        content = (
            "padding: 1, margin: 2, backgroundColor: 3, borderRadius: 4, textAlign: 5, "
            "display: 6, flexDirection: 7, gap: 8, justifyContent: 9, alignItems: 10, "
            "width: 11, height: 12, minHeight: 13, minWidth: 14, color: 15, "
            "fontSize: 16, fontWeight: 17"
        )
        styles = parse_style_object(content)
        assert len(styles.to_dict()) == 17
        assert styles.font_weight == "17"
        assert styles.min_height == "13"

    def test_value_with_colon(self):
        """Test that only the first colon separates key and value."""
        styles = parse_style_object("backgroundColor: 'url(http://x/y.png)'")
        assert styles.background_color == "url(http://x/y.png)"


class TestHeightEstimate:
    """Test the height heuristic."""

    def test_counts(self):
        """Test opening tag counts."""
        counts = ElementCounts.from_source(COUNTER)
        assert (counts.headings, counts.paragraphs, counts.buttons, counts.divs) == (1, 1, 2, 2)

    @pytest.mark.parametrize(
        "counts,expected",
        [
            (ElementCounts(), 40),
            (ElementCounts(divs=1), 40),
            (ElementCounts(headings=1, paragraphs=1, buttons=2, divs=2), 210),
            (ElementCounts(buttons=1), 65),
            (ElementCounts(buttons=3, divs=4), 40 + 75 + 60),
        ],
    )
    def test_estimate(self, counts, expected):
        """Test the height formula."""
        assert estimate_height(counts) == expected

    def test_paragraph_needs_space(self):
        """Test that <p> without attributes is not counted."""
        assert ElementCounts.from_source("<p>text</p>").paragraphs == 0


class TestPlaceholder:
    """Test placeholder markup generation."""

    def test_defaults(self):
        """Test default container styles when none were extracted."""
        html = generate_placeholder_html(ExtractedStyles(), ElementCounts())
        assert html.startswith(
            '<div style="padding:20px;background-color:#1a1a2e;border-radius:12px;'
            'text-align:center;margin:20px 0;">'
        )
        assert html.endswith("</div>" + SHIMMER_KEYFRAMES)
        assert "display:flex" not in html

    def test_structure(self):
        """Test one shimmer per heading and paragraph, alternating button colors."""
        counts = ElementCounts(headings=2, paragraphs=1, buttons=3)
        html = generate_placeholder_html(ExtractedStyles(padding="8px"), counts)

        assert "padding:8px;" in html
        assert html.count(HEADING_SHIMMER) == 2
        assert html.count(PARAGRAPH_SHIMMER) == 1
        assert '<div style="display:flex;gap:10px;justify-content:center;">' in html
        assert html.count("width:72px;height:44px;") == 3
        assert html.count(BUTTON_COLORS[0]) == 2 * 2
        assert html.count(BUTTON_COLORS[1]) == 2


class TestPrerender:
    """Test pre-rendering sources and files."""

    def test_prerender_source(self):
        """Test a full client component."""
        component = prerender_source(COUNTER, "client:Counter")

        assert component is not None
        assert component.component_id == "client:Counter"
        assert component.root_tag == "div"
        assert component.estimated_height == 210
        assert component.estimated_width is None
        assert component.root_styles.padding == "24px"
        assert "background-color:#222;" in component.placeholder_html

    def test_requires_literal_directive(self):
        """Test sources not starting with the directive are rejected."""
        assert prerender_source("export default function C() {}", "client:C") is None
        assert prerender_source("// note\n" + COUNTER, "client:C") is None

    def test_prerender_component(self, tmp_path):
        """Test component IDs come from the file stem."""
        path = tmp_path / "Counter.tsx"
        path.write_text(COUNTER)
        component = prerender_component(path)
        assert component is not None
        assert component.component_id == "client:Counter"

    def test_missing_file(self, tmp_path):
        """Test an unreadable file."""
        assert prerender_component(tmp_path / "nope.tsx") is None

    def test_to_dict(self):
        """Test serialization drops unset style fields."""
        data = prerender_source(COUNTER, "client:Counter").to_dict()
        assert data["root_styles"] == {
            "padding": "24px",
            "background_color": "#222",
            "border_radius": "8px",
        }
        assert data["estimated_height"] == 210

    def test_prerender_all(self, tmp_path):
        """Test walking an app directory."""
        app = tmp_path / "app"
        (app / "components").mkdir(parents=True)
        (app / "components" / "Counter.tsx").write_text(COUNTER)
        (app / "components" / "Toggle.jsx").write_text("'client load';\n<button>x</button>")
        (app / "components" / "hooks.ts").write_text("'client load';\nexport const x = 1;")
        (app / "page.tsx").write_text("export default function Page() {}")
        (app / "node_modules").mkdir()
        (app / "node_modules" / "Lib.tsx").write_text(COUNTER)

        components = prerender_all(app)
        assert sorted(components) == ["client:Counter", "client:Toggle"]
        assert components["client:Toggle"].estimated_height == 65

    def test_custom_directive(self, tmp_path):
        """Test the configured directive string is honored."""
        app = tmp_path / "app"
        app.mkdir()
        (app / "Widget.tsx").write_text("'use client';\n<div></div>")
        config = VistaConfig(directive=DirectiveConfig(directive="use client"))

        assert list(prerender_all(app, config)) == ["client:Widget"]
        assert prerender_all(app) == {}


def test_missing_app_dir(tmp_path: Path) -> None:
    """Test pre-rendering a missing directory."""
    assert prerender_all(tmp_path / "missing") == {}
