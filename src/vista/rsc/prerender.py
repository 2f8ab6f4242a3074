"""Client component pre-renderer.

Reads a client component's source and guesses its static shape: the
first inline style object and counts of headings, paragraphs, buttons
and divs. From that it builds shimmer placeholder markup of roughly the
right size, so server-rendered pages do not shift when the component
hydrates.

Element counts are raw substring counts of opening tags. Conditionally
rendered and nested elements count the same as always-rendered ones.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from vista.config import VistaConfig
from vista.logging import get_logger
from vista.rsc.directive import CLIENT_DIRECTIVE, opens_with_directive
from vista.rsc.scanner import iter_source_files, read_source

STYLE_OPENER = "style={{"
MARKUP_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx")

# Height model (px)
BASE_HEIGHT = 40
HEADING_HEIGHT = 40
PARAGRAPH_HEIGHT = 60
BUTTON_HEIGHT = 50  # halved: buttons usually sit side by side
CONTAINER_HEIGHT = 20

DEFAULT_PADDING = "20px"
DEFAULT_BACKGROUND = "#1a1a2e"
DEFAULT_BORDER_RADIUS = "12px"
DEFAULT_TEXT_ALIGN = "center"
DEFAULT_MARGIN = "20px 0"

BUTTON_COLORS = ("rgba(255,71,87,0.3)", "rgba(46,213,115,0.3)")

SHIMMER_KEYFRAMES = (
    "<style>@keyframes shimmer{0%{background-position:200% 0}"
    "100%{background-position:-200% 0}}</style>"
)

HEADING_SHIMMER = (
    '<div style="height:24px;background:linear-gradient(90deg,#333 25%,#444 50%,#333 75%);'
    "background-size:200% 100%;animation:shimmer 1.5s infinite;border-radius:4px;"
    'margin-bottom:16px;width:80%;margin-left:auto;margin-right:auto;"></div>'
)

PARAGRAPH_SHIMMER = (
    '<div style="height:48px;width:60px;background:linear-gradient(90deg,'
    "rgba(0,217,255,0.2) 25%,rgba(0,217,255,0.3) 50%,rgba(0,217,255,0.2) 75%);"
    "background-size:200% 100%;animation:shimmer 1.5s infinite;border-radius:8px;"
    'margin:20px auto;"></div>'
)


@dataclass
class ExtractedStyles:
    """Recognized properties of an inline style object, raw string values."""

    padding: str | None = None
    margin: str | None = None
    background_color: str | None = None
    border_radius: str | None = None
    text_align: str | None = None
    display: str | None = None
    flex_direction: str | None = None
    gap: str | None = None
    justify_content: str | None = None
    align_items: str | None = None
    width: str | None = None
    height: str | None = None
    min_height: str | None = None
    min_width: str | None = None
    color: str | None = None
    font_size: str | None = None
    font_weight: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


# camelCase style key -> ExtractedStyles field
STYLE_KEYS: dict[str, str] = {
    "padding": "padding",
    "margin": "margin",
    "backgroundColor": "background_color",
    "borderRadius": "border_radius",
    "textAlign": "text_align",
    "display": "display",
    "flexDirection": "flex_direction",
    "gap": "gap",
    "justifyContent": "justify_content",
    "alignItems": "align_items",
    "width": "width",
    "height": "height",
    "minHeight": "min_height",
    "minWidth": "min_width",
    "color": "color",
    "fontSize": "font_size",
    "fontWeight": "font_weight",
}


@dataclass
class ElementCounts:
    """Opening-tag occurrence counts."""

    headings: int = 0
    paragraphs: int = 0
    buttons: int = 0
    divs: int = 0

    @classmethod
    def from_source(cls, source: str) -> ElementCounts:
        return cls(
            headings=source.count("<h2"),
            paragraphs=source.count("<p "),
            buttons=source.count("<button"),
            divs=source.count("<div"),
        )


@dataclass
class PrerenderedComponent:
    """Static structure and placeholder of a client component."""

    component_id: str
    root_tag: str = "div"
    root_styles: ExtractedStyles = field(default_factory=ExtractedStyles)
    placeholder_html: str = ""
    estimated_height: int = 0
    estimated_width: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "component_id": self.component_id,
            "root_tag": self.root_tag,
            "root_styles": self.root_styles.to_dict(),
            "placeholder_html": self.placeholder_html,
            "estimated_height": self.estimated_height,
            "estimated_width": self.estimated_width,
        }


def _strip_quotes(text: str) -> str:
    return text.strip().strip("'").strip('"')


def extract_style_block(source: str) -> str | None:
    """Body of the first ``style={{ ... }}`` object, without the braces."""
    start = source.find(STYLE_OPENER)
    if start == -1:
        return None
    body = source[start + len(STYLE_OPENER) :]

    depth = 1
    for i, c in enumerate(body):
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return body[:i]
    return None


def parse_style_object(content: str) -> ExtractedStyles:
    """Parse a flat ``key: value, ...`` style object body."""
    styles = ExtractedStyles()
    for pair in content.split(","):
        key, sep, value = pair.partition(":")
        if not sep:
            continue
        attr = STYLE_KEYS.get(_strip_quotes(key))
        if attr is not None:
            setattr(styles, attr, _strip_quotes(value))
    return styles


def estimate_height(counts: ElementCounts) -> int:
    """Estimated pixel height; the outermost div is not counted."""
    return (
        BASE_HEIGHT
        + counts.headings * HEADING_HEIGHT
        + counts.paragraphs * PARAGRAPH_HEIGHT
        + (counts.buttons * BUTTON_HEIGHT) // 2
        + max(counts.divs - 1, 0) * CONTAINER_HEIGHT
    )


def generate_placeholder_html(styles: ExtractedStyles, counts: ElementCounts) -> str:
    """Shimmer placeholder matching the detected structure."""
    padding = styles.padding or DEFAULT_PADDING
    background = styles.background_color or DEFAULT_BACKGROUND
    border_radius = styles.border_radius or DEFAULT_BORDER_RADIUS
    text_align = styles.text_align or DEFAULT_TEXT_ALIGN
    margin = styles.margin or DEFAULT_MARGIN

    parts = [
        f'<div style="padding:{padding};background-color:{background};'
        f'border-radius:{border_radius};text-align:{text_align};margin:{margin};">'
    ]
    parts.extend(HEADING_SHIMMER for _ in range(counts.headings))
    parts.extend(PARAGRAPH_SHIMMER for _ in range(counts.paragraphs))

    if counts.buttons:
        parts.append('<div style="display:flex;gap:10px;justify-content:center;">')
        for i in range(counts.buttons):
            color = BUTTON_COLORS[i % 2]
            parts.append(
                f'<div style="width:72px;height:44px;background:linear-gradient(90deg,'
                f"{color} 25%,rgba(255,255,255,0.1) 50%,{color} 75%);"
                "background-size:200% 100%;animation:shimmer 1.5s infinite;"
                'border-radius:8px;"></div>'
            )
        parts.append("</div>")

    parts.append("</div>")
    parts.append(SHIMMER_KEYFRAMES)
    return "".join(parts)


def prerender_source(
    source: str, component_id: str, directive: str = CLIENT_DIRECTIVE
) -> PrerenderedComponent | None:
    """Pre-render already-read source text.

    Only text that literally begins with the directive qualifies.
    """
    if not opens_with_directive(source, directive):
        return None

    block = extract_style_block(source)
    styles = parse_style_object(block) if block is not None else ExtractedStyles()
    counts = ElementCounts.from_source(source)

    return PrerenderedComponent(
        component_id=component_id,
        root_styles=styles,
        placeholder_html=generate_placeholder_html(styles, counts),
        estimated_height=estimate_height(counts),
    )


def prerender_component(
    file_path: Path | str, directive: str = CLIENT_DIRECTIVE
) -> PrerenderedComponent | None:
    """Pre-render a client component file, or None if it isn't one."""
    path = Path(file_path)
    source = read_source(path)
    if source is None:
        return None
    return prerender_source(source, f"client:{path.stem}", directive)


def prerender_all(
    app_dir: Path | str, config: VistaConfig | None = None
) -> dict[str, PrerenderedComponent]:
    """Pre-render every client component under ``app_dir``, keyed by component ID.

    IDs come from file stems, so two files with the same stem collide; the
    one visited last wins.
    """
    config = config or VistaConfig()
    directive = config.directive.directive
    components: dict[str, PrerenderedComponent] = {}

    for path in iter_source_files(Path(app_dir).resolve(), config.scanner):
        if path.suffix not in MARKUP_EXTENSIONS:
            continue
        prerendered = prerender_component(path, directive)
        if prerendered is not None:
            components[prerendered.component_id] = prerendered

    get_logger().debug(f"Pre-rendered {len(components)} client components")
    return components


__all__ = [
    "ElementCounts",
    "ExtractedStyles",
    "PrerenderedComponent",
    "estimate_height",
    "extract_style_block",
    "generate_placeholder_html",
    "parse_style_object",
    "prerender_all",
    "prerender_component",
    "prerender_source",
]
