"""RSC scanner - classify app directory files as client or server components.

Each source file is read once and analyzed with line and substring
matching only. No tokenizer or AST is involved, so detection is
best-effort by construction.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from vista.config import ScannerConfig, VistaConfig
from vista.logging import get_logger
from vista.rsc.directive import (
    CLIENT_DIRECTIVE,
    analyze_directive,
    has_generate_metadata,
    has_metadata_export,
)

# Client-only hooks that require the client directive
CLIENT_HOOKS: tuple[str, ...] = (
    "useState",
    "useEffect",
    "useLayoutEffect",
    "useReducer",
    "useRef",
    "useImperativeHandle",
    "useCallback",
    "useMemo",
    "useContext",
    "useDebugValue",
    "useDeferredValue",
    "useTransition",
    "useId",
    "useSyncExternalStore",
    "useInsertionEffect",
)

# Client-only APIs
CLIENT_APIS: tuple[str, ...] = (
    "createContext",
    "forwardRef",
    "memo",
    "lazy",
    "startTransition",
    "useFormStatus",
    "useFormState",
    "useOptimistic",
)

EVENT_HANDLER_ATTRIBUTES: tuple[str, ...] = ("onClick=", "onChange=", "onSubmit=", "onFocus=")
EVENT_HANDLERS = "event handlers"

# Export forms recognized at the start of a line: (prefix, keyword before the name)
EXPORT_FORMS: tuple[tuple[str, str], ...] = (
    ("export function ", "function "),
    ("export async function ", "function "),
    ("export const ", "const "),
    ("export class ", "class "),
)


class ComponentKind(str, Enum):
    """Component classification by file base name."""

    PAGE = "page"
    LAYOUT = "layout"
    LOADING = "loading"
    ERROR = "error"
    NOT_FOUND = "not-found"
    COMPONENT = "component"
    ROUTE = "route"

    @classmethod
    def from_stem(cls, stem: str) -> ComponentKind:
        """Classify a file by its extension-less base name."""
        return _STEM_KINDS.get(stem, cls.COMPONENT)


_STEM_KINDS: dict[str, ComponentKind] = {
    "page": ComponentKind.PAGE,
    "index": ComponentKind.PAGE,
    "layout": ComponentKind.LAYOUT,
    "root": ComponentKind.LAYOUT,
    "loading": ComponentKind.LOADING,
    "error": ComponentKind.ERROR,
    "not-found": ComponentKind.NOT_FOUND,
    "route": ComponentKind.ROUTE,
}


@dataclass(frozen=True)
class ScannedComponent:
    """A single analyzed source file."""

    absolute_path: str
    relative_path: str  # forward slashes, relative to the app directory
    is_client: bool
    directive_line: int
    kind: ComponentKind
    exports: tuple[str, ...] = ()
    client_hooks_used: tuple[str, ...] = ()
    has_metadata: bool = False
    has_generate_metadata: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "absolute_path": self.absolute_path,
            "relative_path": self.relative_path,
            "is_client": self.is_client,
            "directive_line": self.directive_line,
            "component_type": self.kind.value,
            "exports": list(self.exports),
            "client_hooks_used": list(self.client_hooks_used),
            "has_metadata": self.has_metadata,
            "has_generate_metadata": self.has_generate_metadata,
        }


@dataclass
class ServerComponentError:
    """A server component that references client-only APIs."""

    file: str
    message: str
    hooks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "message": self.message, "hooks": self.hooks}


@dataclass
class ScanResult:
    """Result of scanning an app directory.

    The classification views are filters over ``components``.
    """

    root: str = ""
    components: list[ScannedComponent] = field(default_factory=list)
    errors: list[ServerComponentError] = field(default_factory=list)
    scan_time_ms: int = 0

    @property
    def total_files(self) -> int:
        return len(self.components)

    @property
    def client_components(self) -> list[ScannedComponent]:
        return [c for c in self.components if c.is_client and c.kind != ComponentKind.ROUTE]

    @property
    def server_components(self) -> list[ScannedComponent]:
        return [
            c for c in self.components if not c.is_client and c.kind != ComponentKind.ROUTE
        ]

    @property
    def pages(self) -> list[ScannedComponent]:
        return self.of_kind(ComponentKind.PAGE)

    @property
    def layouts(self) -> list[ScannedComponent]:
        return self.of_kind(ComponentKind.LAYOUT)

    @property
    def api_routes(self) -> list[ScannedComponent]:
        return self.of_kind(ComponentKind.ROUTE)

    def of_kind(self, kind: ComponentKind) -> list[ScannedComponent]:
        """Components of a given kind, in scan order."""
        return [c for c in self.components if c.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "client_components": [c.to_dict() for c in self.client_components],
            "server_components": [c.to_dict() for c in self.server_components],
            "pages": [c.to_dict() for c in self.pages],
            "layouts": [c.to_dict() for c in self.layouts],
            "api_routes": [c.to_dict() for c in self.api_routes],
            "errors": [e.to_dict() for e in self.errors],
            "total_files": self.total_files,
            "scan_time_ms": self.scan_time_ms,
        }


def detect_client_hooks(source: str) -> list[str]:
    """Detect client-only hooks, APIs and event handler attributes."""
    used = [
        name
        for name in CLIENT_HOOKS + CLIENT_APIS
        if f"{name}(" in source or f"{name}<" in source
    ]
    if any(attr in source for attr in EVENT_HANDLER_ATTRIBUTES):
        used.append(EVENT_HANDLERS)
    return used


def _identifier_after(line: str, keyword: str) -> str | None:
    """Longest run of alphanumerics/underscore right after ``keyword``."""
    pos = line.find(keyword)
    if pos == -1:
        return None
    rest = line[pos + len(keyword) :]
    end = 0
    while end < len(rest) and (rest[end].isalnum() or rest[end] == "_"):
        end += 1
    return rest[:end] or None


def extract_exports(source: str) -> list[str]:
    """Extract exported names, ``default`` first when present."""
    exports: list[str] = []
    if "export default" in source:
        exports.append("default")

    for line in source.splitlines():
        trimmed = line.strip()
        for prefix, keyword in EXPORT_FORMS:
            if trimmed.startswith(prefix):
                name = _identifier_after(trimmed, keyword)
                if name and name not in exports:
                    exports.append(name)
                break

    return exports


def violation_message(hooks: list[str], directive: str = CLIENT_DIRECTIVE) -> str:
    """Human-readable message for a server/client boundary violation."""
    return (
        f"Using {', '.join(hooks)} in a Server Component. "
        f"Add '{directive}' to make it a Client Component."
    )


def scan_source(
    source: str,
    path: Path,
    app_dir: Path,
    directive: str = CLIENT_DIRECTIVE,
) -> ScannedComponent:
    """Analyze already-read source text of a file under ``app_dir``."""
    info = analyze_directive(source, directive)
    return ScannedComponent(
        absolute_path=str(path),
        relative_path=path.relative_to(app_dir).as_posix(),
        is_client=info.is_client,
        directive_line=info.directive_line,
        kind=ComponentKind.from_stem(path.stem),
        exports=tuple(extract_exports(source)),
        client_hooks_used=tuple(detect_client_hooks(source)),
        has_metadata=has_metadata_export(source),
        has_generate_metadata=has_generate_metadata(source),
    )


def read_source(path: Path) -> str | None:
    """Read a source file, or None if it cannot be read as UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        get_logger().debug(f"Skipping unreadable file {path}: {e}")
        return None


def iter_source_files(directory: Path, scanner: ScannerConfig) -> Iterator[Path]:
    """Yield recognized source files depth-first, entries in name order.

    Unreadable directories are skipped. Symlinked directories are not
    followed.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        get_logger().debug(f"Skipping unreadable directory {directory}: {e}")
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file()
        except OSError:
            continue
        if is_dir:
            if not scanner.is_excluded_dir(entry.name):
                yield from iter_source_files(Path(entry.path), scanner)
        elif is_file and scanner.is_source_file(entry.name):
            yield Path(entry.path)


def scan(app_dir: Path | str, config: VistaConfig | None = None) -> ScanResult:
    """Scan an app directory and classify all components.

    Args:
        app_dir: Route tree root
        config: Vista configuration (defaults when omitted)

    Returns:
        ScanResult with every recognized file and all boundary violations
    """
    logger = get_logger()
    config = config or VistaConfig()
    directive = config.directive.directive
    root = Path(app_dir).resolve()
    start = time.perf_counter()

    result = ScanResult(root=str(root))
    logger.debug(f"Scanning {root}")

    for path in iter_source_files(root, config.scanner):
        source = read_source(path)
        if source is None:
            continue

        component = scan_source(source, path, root, directive)
        if not component.is_client and component.client_hooks_used:
            hooks = list(component.client_hooks_used)
            result.errors.append(
                ServerComponentError(
                    file=component.relative_path,
                    message=violation_message(hooks, directive),
                    hooks=hooks,
                )
            )
        result.components.append(component)

    result.scan_time_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        f"Scanned {result.total_files} files "
        f"({len(result.client_components)} client, {len(result.server_components)} server) "
        f"in {result.scan_time_ms}ms"
    )
    return result


__all__ = [
    "CLIENT_APIS",
    "CLIENT_HOOKS",
    "EVENT_HANDLERS",
    "ComponentKind",
    "ScanResult",
    "ScannedComponent",
    "ServerComponentError",
    "detect_client_hooks",
    "extract_exports",
    "iter_source_files",
    "read_source",
    "scan",
    "scan_source",
    "violation_message",
]
