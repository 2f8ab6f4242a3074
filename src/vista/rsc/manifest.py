"""RSC manifest generation.

Turns one scan of the app directory into:

- a client manifest (module IDs, chunk names and chunk URLs for every
  client component, used for hydration and code splitting)
- a server manifest (module IDs for server components plus the flat,
  sorted route table used for matching)

Client dependencies of server modules are left empty: no import graph
is built.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from vista.config import VistaConfig
from vista.logging import get_logger
from vista.paths import chunk_url
from vista.rsc.scanner import ComponentKind, ScannedComponent, ScanResult, scan
from vista.rsc.segments import SegmentKind, classify_segment

SOURCE_EXTENSIONS: tuple[str, ...] = (".tsx", ".ts", ".jsx", ".js")


class RouteKind(str, Enum):
    """Route classification, in matching priority order."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch-all"

    @property
    def rank(self) -> int:
        return _ROUTE_RANKS[self]


_ROUTE_RANKS = {RouteKind.STATIC: 0, RouteKind.DYNAMIC: 1, RouteKind.CATCH_ALL: 2}


@dataclass
class ClientModuleEntry:
    """Client manifest record for one client component."""

    id: str
    path: str
    absolute_path: str
    chunk_name: str
    exports: list[str] = field(default_factory=list)
    async_load: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "absolute_path": self.absolute_path,
            "chunk_name": self.chunk_name,
            "exports": self.exports,
            "async_load": self.async_load,
        }


@dataclass
class ClientManifest:
    """Client components manifest."""

    build_id: str
    client_modules: dict[str, ClientModuleEntry] = field(default_factory=dict)
    path_to_id: dict[str, str] = field(default_factory=dict)
    # Absolute server-side path -> client chunk URL
    ssr_module_mapping: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "build_id": self.build_id,
            "client_modules": {k: v.to_dict() for k, v in self.client_modules.items()},
            "path_to_id": self.path_to_id,
            "ssr_module_mapping": self.ssr_module_mapping,
        }


@dataclass
class ServerModuleEntry:
    """Server manifest record for one server component."""

    id: str
    path: str
    absolute_path: str
    component_type: str
    has_metadata: bool = False
    has_generate_metadata: bool = False
    client_dependencies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "absolute_path": self.absolute_path,
            "component_type": self.component_type,
            "has_metadata": self.has_metadata,
            "has_generate_metadata": self.has_generate_metadata,
            "client_dependencies": self.client_dependencies,
        }


@dataclass(frozen=True)
class RouteEntry:
    """One page route."""

    pattern: str
    page_path: str
    layout_paths: tuple[str, ...] = ()  # root to leaf
    loading_path: str | None = None
    error_path: str | None = None
    route_type: RouteKind = RouteKind.STATIC

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "page_path": self.page_path,
            "layout_paths": list(self.layout_paths),
            "loading_path": self.loading_path,
            "error_path": self.error_path,
            "route_type": self.route_type.value,
        }


@dataclass
class ServerManifest:
    """Server components manifest with the route table."""

    build_id: str
    server_modules: dict[str, ServerModuleEntry] = field(default_factory=dict)
    path_to_id: dict[str, str] = field(default_factory=dict)
    routes: list[RouteEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "build_id": self.build_id,
            "server_modules": {k: v.to_dict() for k, v in self.server_modules.items()},
            "path_to_id": self.path_to_id,
            "routes": [r.to_dict() for r in self.routes],
        }


def _strip_extension(relative_path: str, extensions: Sequence[str] = SOURCE_EXTENSIONS) -> str:
    normalized = relative_path.replace("\\", "/")
    suffix = PurePosixPath(normalized).suffix
    if suffix and suffix in extensions:
        return normalized[: -len(suffix)]
    return normalized


def module_id(
    relative_path: str, is_client: bool, extensions: Sequence[str] = SOURCE_EXTENSIONS
) -> str:
    """Deterministic module ID, e.g. ``client:components/Button``.

    The suffix is dropped when it is one of ``extensions``.
    """
    prefix = "client" if is_client else "server"
    return f"{prefix}:{_strip_extension(relative_path, extensions)}"


def chunk_name(relative_path: str, extensions: Sequence[str] = SOURCE_EXTENSIONS) -> str:
    """Code-split chunk name, e.g. ``components/Button.tsx`` -> ``components_button``."""
    return "".join(
        c.lower() if c.isalnum() else "_" for c in _strip_extension(relative_path, extensions)
    )


def compile_pattern(relative_path: str) -> tuple[str, RouteKind]:
    """Compile a page's relative path into a URL pattern.

    >>> compile_pattern("blog/[slug]/page.tsx")
    ('/blog/:slug', <RouteKind.DYNAMIC: 'dynamic'>)
    """
    parent = PurePosixPath(relative_path.replace("\\", "/")).parent
    kind = RouteKind.STATIC
    parts: list[str] = []

    for segment in parent.parts:
        if segment in ("", "."):
            continue
        label, segment_kind = classify_segment(segment)
        if segment_kind == SegmentKind.GROUP:
            continue
        if segment_kind == SegmentKind.CATCH_ALL:
            parts.append(f":{label}*")
            kind = RouteKind.CATCH_ALL
        elif segment_kind == SegmentKind.DYNAMIC:
            parts.append(f":{label}")
            if kind != RouteKind.CATCH_ALL:
                kind = RouteKind.DYNAMIC
        else:
            parts.append(label)

    return "/" + "/".join(parts), kind


def _parent_dir(component: ScannedComponent) -> PurePosixPath:
    return PurePosixPath(component.relative_path).parent


def _enclosing_dirs(page: ScannedComponent) -> list[PurePosixPath]:
    """Directories from the page's own directory up to the app root, inclusive."""
    current = _parent_dir(page)
    dirs = [current]
    while current != PurePosixPath("."):
        current = current.parent
        dirs.append(current)
    return dirs


def resolve_layouts(page: ScannedComponent, layouts: list[ScannedComponent]) -> list[str]:
    """Absolute paths of the layouts enclosing a page, root layout first.

    At most one layout is taken per directory level.
    """
    chain: list[str] = []
    for directory in _enclosing_dirs(page):
        for layout in layouts:
            if _parent_dir(layout) == directory:
                chain.insert(0, layout.absolute_path)
                break
    return chain


def resolve_nearest(
    page: ScannedComponent, candidates: list[ScannedComponent]
) -> str | None:
    """Absolute path of the closest enclosing candidate, if any."""
    for directory in _enclosing_dirs(page):
        for candidate in candidates:
            if _parent_dir(candidate) == directory:
                return candidate.absolute_path
    return None


def build_routes(scan_result: ScanResult) -> list[RouteEntry]:
    """Build the sorted route table from the scanned pages."""
    layouts = scan_result.layouts
    loadings = scan_result.of_kind(ComponentKind.LOADING)
    error_boundaries = scan_result.of_kind(ComponentKind.ERROR)

    routes = []
    for page in scan_result.pages:
        pattern, kind = compile_pattern(page.relative_path)
        routes.append(
            RouteEntry(
                pattern=pattern,
                page_path=page.absolute_path,
                layout_paths=tuple(resolve_layouts(page, layouts)),
                loading_path=resolve_nearest(page, loadings),
                error_path=resolve_nearest(page, error_boundaries),
                route_type=kind,
            )
        )

    routes.sort(key=lambda r: (r.route_type.rank, r.pattern))
    return routes


def _scan_if_needed(
    app_dir: Path | str, scan_result: ScanResult | None, config: VistaConfig | None
) -> ScanResult:
    return scan_result if scan_result is not None else scan(app_dir, config)


def generate_client_manifest(
    app_dir: Path | str,
    build_id: str,
    scan_result: ScanResult | None = None,
    config: VistaConfig | None = None,
) -> ClientManifest:
    """Generate the client manifest for an app directory."""
    config = config or VistaConfig()
    extensions = config.scanner.extensions
    result = _scan_if_needed(app_dir, scan_result, config)
    manifest = ClientManifest(build_id=build_id)

    for component in result.client_components:
        mid = module_id(component.relative_path, is_client=True, extensions=extensions)
        chunk = chunk_name(component.relative_path, extensions=extensions)

        manifest.client_modules[mid] = ClientModuleEntry(
            id=mid,
            path=component.relative_path,
            absolute_path=component.absolute_path,
            chunk_name=chunk,
            exports=list(component.exports),
        )
        manifest.path_to_id[component.relative_path] = mid
        manifest.path_to_id[component.absolute_path] = mid
        manifest.ssr_module_mapping[component.absolute_path] = chunk_url(chunk)

    get_logger().debug(f"Client manifest: {len(manifest.client_modules)} modules")
    return manifest


def generate_server_manifest(
    app_dir: Path | str,
    build_id: str,
    scan_result: ScanResult | None = None,
    config: VistaConfig | None = None,
) -> ServerManifest:
    """Generate the server manifest (modules and routes) for an app directory."""
    config = config or VistaConfig()
    extensions = config.scanner.extensions
    result = _scan_if_needed(app_dir, scan_result, config)
    manifest = ServerManifest(build_id=build_id)

    for component in result.server_components:
        mid = module_id(component.relative_path, is_client=False, extensions=extensions)
        manifest.server_modules[mid] = ServerModuleEntry(
            id=mid,
            path=component.relative_path,
            absolute_path=component.absolute_path,
            component_type=component.kind.value,
            has_metadata=component.has_metadata,
            has_generate_metadata=component.has_generate_metadata,
        )
        manifest.path_to_id[component.relative_path] = mid
        manifest.path_to_id[component.absolute_path] = mid

    manifest.routes = build_routes(result)

    get_logger().debug(
        f"Server manifest: {len(manifest.server_modules)} modules, {len(manifest.routes)} routes"
    )
    return manifest


def build_manifests(
    app_dir: Path | str,
    build_id: str,
    config: VistaConfig | None = None,
    scan_result: ScanResult | None = None,
) -> tuple[ClientManifest, ServerManifest]:
    """Generate both manifests from a single scan."""
    result = _scan_if_needed(app_dir, scan_result, config)
    return (
        generate_client_manifest(app_dir, build_id, scan_result=result, config=config),
        generate_server_manifest(app_dir, build_id, scan_result=result, config=config),
    )


__all__ = [
    "ClientManifest",
    "ClientModuleEntry",
    "RouteEntry",
    "RouteKind",
    "ServerManifest",
    "ServerModuleEntry",
    "build_manifests",
    "build_routes",
    "chunk_name",
    "compile_pattern",
    "generate_client_manifest",
    "generate_server_manifest",
    "module_id",
    "resolve_layouts",
    "resolve_nearest",
]
