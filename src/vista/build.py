"""Build orchestration - scan, validate and write manifests to .vista/."""

from __future__ import annotations

import json
import secrets
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from vista.config import VistaConfig
from vista.errors import BoundaryViolationError, ManifestWriteError
from vista.logging import get_logger
from vista.paths import (
    CACHE_DIR,
    CHUNKS_DIR,
    CSS_DIR,
    MEDIA_DIR,
    SERVER_DIR,
    STATIC_DIR,
    get_build_id_path,
    get_client_manifest_path,
    get_server_manifest_path,
    get_vista_dir,
)
from vista.rsc.manifest import build_manifests
from vista.rsc.scanner import ScanResult, scan

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass
class BuildReport:
    """Summary of a completed build."""

    build_id: str
    scan: ScanResult
    client_manifest_path: Path
    server_manifest_path: Path
    client_modules: int = 0
    server_modules: int = 0
    routes: int = 0
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "build_id": self.build_id,
            "client_manifest": str(self.client_manifest_path),
            "server_manifest": str(self.server_manifest_path),
            "client_modules": self.client_modules,
            "server_modules": self.server_modules,
            "routes": self.routes,
            "errors": [e.to_dict() for e in self.scan.errors],
            "warnings": self.warnings,
        }


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_build_id() -> str:
    """New build ID: base-36 millisecond timestamp plus 8 random hex chars."""
    return f"{_to_base36(int(time.time() * 1000))}-{secrets.token_hex(4)}"


def get_build_id(vista_dir: Path, force_new: bool = False) -> str:
    """Read the persisted BUILD_ID, or generate and persist a new one."""
    build_id_path = get_build_id_path(vista_dir)
    if not force_new and build_id_path.exists():
        existing = build_id_path.read_text(encoding="utf-8").strip()
        if existing:
            return existing

    build_id = generate_build_id()
    vista_dir.mkdir(parents=True, exist_ok=True)
    build_id_path.write_text(build_id, encoding="utf-8")
    return build_id


def create_vista_directories(vista_dir: Path) -> dict[str, Path]:
    """Create the .vista output tree and return its directories by name."""
    dirs = {
        "root": vista_dir,
        "cache": vista_dir / CACHE_DIR,
        "server": vista_dir / SERVER_DIR,
        "static": vista_dir / STATIC_DIR,
        "chunks": vista_dir / STATIC_DIR / CHUNKS_DIR,
        "css": vista_dir / STATIC_DIR / CSS_DIR,
        "media": vista_dir / STATIC_DIR / MEDIA_DIR,
    }
    for directory in dirs.values():
        directory.mkdir(parents=True, exist_ok=True)
    return dirs


def _write_json(path: Path, data: dict[str, Any]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        raise ManifestWriteError(f"Failed to write {path.name}: {e}", path=str(path)) from e


def run_build(
    project_root: Path | str,
    config: VistaConfig | None = None,
    dev: bool = False,
    new_build_id: bool | None = None,
) -> BuildReport:
    """Scan the app directory and write client and server manifests.

    Args:
        project_root: Directory containing the app directory
        config: Vista configuration (defaults when omitted)
        dev: Development mode - violations are reported but not fatal,
            and the persisted build ID is reused
        new_build_id: Force (True) or suppress (False) a new build ID;
            defaults to a new ID for production builds

    Raises:
        BoundaryViolationError: Server components use client-only APIs
            (production builds only)
    """
    logger = get_logger()
    config = config or VistaConfig()
    root = Path(project_root).resolve()
    app_dir = root / config.build.app_dir
    vista_dir = get_vista_dir(root, config.build.out_dir)

    force_new = (not dev) if new_build_id is None else new_build_id
    create_vista_directories(vista_dir)
    build_id = get_build_id(vista_dir, force_new=force_new)
    logger.info(f"Build ID: {build_id}")

    result = scan(app_dir, config)
    warnings = []
    if not app_dir.is_dir():
        warnings.append(f"App directory not found: {app_dir}")

    if result.errors:
        for error in result.errors:
            logger.debug(f"{error.file}: {error.message}")
        if not dev:
            raise BoundaryViolationError(result.errors)
        warnings.extend(f"{e.file}: {e.message}" for e in result.errors)

    client_manifest, server_manifest = build_manifests(
        app_dir, build_id, config=config, scan_result=result
    )

    client_path = get_client_manifest_path(vista_dir)
    server_path = get_server_manifest_path(vista_dir)
    _write_json(client_path, client_manifest.to_dict())
    _write_json(server_path, server_manifest.to_dict())

    logger.info(f"Wrote {client_path.name} ({len(client_manifest.client_modules)} modules)")
    logger.info(
        f"Wrote {server_path.name} ({len(server_manifest.server_modules)} modules, "
        f"{len(server_manifest.routes)} routes)"
    )

    return BuildReport(
        build_id=build_id,
        scan=result,
        client_manifest_path=client_path,
        server_manifest_path=server_path,
        client_modules=len(client_manifest.client_modules),
        server_modules=len(server_manifest.server_modules),
        routes=len(server_manifest.routes),
        warnings=warnings,
    )


__all__ = [
    "BuildReport",
    "create_vista_directories",
    "generate_build_id",
    "get_build_id",
    "run_build",
]
