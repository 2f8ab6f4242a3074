"""Client directive detection.

A file opts into client-component treatment by opening with the
``'client load'`` string literal. Two policies exist:

- ``has_client_directive``: the first *significant* line (blank lines and
  full-line ``//`` comments are skipped) must start with the literal.
- ``opens_with_directive``: the raw text must start with the literal.
  The prerenderer uses this stricter check.

Metadata helpers live here too since they are the same kind of
substring check over raw source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

CLIENT_DIRECTIVE = "client load"


def directive_literals(directive: str = CLIENT_DIRECTIVE) -> tuple[str, str]:
    """Single- and double-quoted forms of the directive."""
    return (f"'{directive}'", f'"{directive}"')


@dataclass(frozen=True)
class DirectiveInfo:
    """Result of directive analysis."""

    is_client: bool
    directive_line: int = 0  # 1-indexed, 0 when absent

    def to_dict(self) -> dict[str, Any]:
        return {"is_client": self.is_client, "directive_line": self.directive_line}


@dataclass(frozen=True)
class MetadataInfo:
    """Metadata declarations found in a source file."""

    has_static_metadata: bool
    has_generate_metadata: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_static_metadata": self.has_static_metadata,
            "has_generate_metadata": self.has_generate_metadata,
        }


def analyze_directive(source: str, directive: str = CLIENT_DIRECTIVE) -> DirectiveInfo:
    """Find the directive on the first significant line.

    Returns the 1-indexed line number of the match, or 0 if the first
    significant line is anything else.
    """
    literals = directive_literals(directive)
    for index, line in enumerate(source.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("//"):
            continue
        if stripped.startswith(literals):
            return DirectiveInfo(is_client=True, directive_line=index)
        break
    return DirectiveInfo(is_client=False)


def has_client_directive(source: str, directive: str = CLIENT_DIRECTIVE) -> bool:
    """Check if the first significant line is the client directive."""
    return analyze_directive(source, directive).is_client


def opens_with_directive(source: str, directive: str = CLIENT_DIRECTIVE) -> bool:
    """Check if the text literally begins with the client directive."""
    return source.startswith(directive_literals(directive))


def has_metadata_export(source: str) -> bool:
    """Check for a static ``metadata`` export."""
    return "export const metadata" in source or "export let metadata" in source


def has_generate_metadata(source: str) -> bool:
    """Check for a ``generateMetadata`` function or const export."""
    return (
        "export function generateMetadata" in source
        or "export async function generateMetadata" in source
        or "export const generateMetadata" in source
    )


def analyze_metadata(source: str) -> MetadataInfo:
    """Analyze source for metadata exports."""
    return MetadataInfo(
        has_static_metadata=has_metadata_export(source),
        has_generate_metadata=has_generate_metadata(source),
    )


__all__ = [
    "CLIENT_DIRECTIVE",
    "DirectiveInfo",
    "MetadataInfo",
    "analyze_directive",
    "analyze_metadata",
    "directive_literals",
    "has_client_directive",
    "has_generate_metadata",
    "has_metadata_export",
    "opens_with_directive",
]
