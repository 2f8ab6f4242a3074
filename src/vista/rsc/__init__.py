"""React Server Components build analysis.

Public entry points used by the host runtime:

    has_client_directive / analyze_directive / analyze_metadata
    scan
    build_route_tree
    generate_client_manifest / generate_server_manifest / build_manifests
    generate_mount_id / reset_mount_counter / MountIdSequence
    prerender_component / prerender_all
"""

from vista.rsc.directive import (
    CLIENT_DIRECTIVE,
    analyze_directive,
    analyze_metadata,
    has_client_directive,
    has_generate_metadata,
    has_metadata_export,
    opens_with_directive,
)
from vista.rsc.manifest import (
    ClientManifest,
    RouteEntry,
    RouteKind,
    ServerManifest,
    build_manifests,
    compile_pattern,
    generate_client_manifest,
    generate_server_manifest,
)
from vista.rsc.prerender import PrerenderedComponent, prerender_all, prerender_component
from vista.rsc.route_tree import RouteNode, build_route_tree
from vista.rsc.scanner import ComponentKind, ScannedComponent, ScanResult, scan
from vista.rsc.segments import SegmentKind, classify_segment
from vista.rsc.serializer import (
    ClientReference,
    MountIdSequence,
    RouteData,
    RSCPayload,
    create_client_reference,
    decode_payload,
    encode_payload,
    generate_hydration_script,
    generate_mount_id,
    reset_mount_counter,
    serialize_value,
)

__all__ = [
    "CLIENT_DIRECTIVE",
    "ClientManifest",
    "ClientReference",
    "ComponentKind",
    "MountIdSequence",
    "PrerenderedComponent",
    "RSCPayload",
    "RouteData",
    "RouteEntry",
    "RouteKind",
    "RouteNode",
    "ScanResult",
    "ScannedComponent",
    "SegmentKind",
    "ServerManifest",
    "analyze_directive",
    "analyze_metadata",
    "build_manifests",
    "build_route_tree",
    "classify_segment",
    "compile_pattern",
    "create_client_reference",
    "decode_payload",
    "encode_payload",
    "generate_client_manifest",
    "generate_hydration_script",
    "generate_mount_id",
    "generate_server_manifest",
    "has_client_directive",
    "has_generate_metadata",
    "has_metadata_export",
    "opens_with_directive",
    "prerender_all",
    "prerender_component",
    "reset_mount_counter",
    "scan",
    "serialize_value",
]
