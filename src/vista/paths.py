"""Centralized path definitions for Vista build output.

All build artifacts are written to the .vista/ directory:

    .vista/
    ├── BUILD_ID               # Persisted build identifier
    ├── client-manifest.json   # Client component manifest
    ├── cache/                 # Build cache
    ├── server/
    │   └── server-manifest.json
    └── static/
        ├── chunks/            # Code-split client chunks
        ├── css/
        └── media/

The configuration file (.vistarc.toml) stays at project root
since it's user-editable configuration.
"""

from __future__ import annotations

from pathlib import Path

# Directory containing all Vista build output
VISTA_DIR = ".vista"

# Individual file/directory names within .vista/
BUILD_ID_FILE = "BUILD_ID"
CLIENT_MANIFEST_FILE = "client-manifest.json"
SERVER_MANIFEST_FILE = "server-manifest.json"
CACHE_DIR = "cache"
SERVER_DIR = "server"
STATIC_DIR = "static"
CHUNKS_DIR = "chunks"
CSS_DIR = "css"
MEDIA_DIR = "media"

# Public URL prefix for code-split client chunks
CHUNK_URL_PREFIX = "/_vista/static/chunks"

# Config file stays at project root (user-editable)
CONFIG_FILE = ".vistarc.toml"


def get_vista_dir(root: Path | str = ".", out_dir: str = VISTA_DIR) -> Path:
    """Get the .vista directory path for a project root.

    Args:
        root: Project root directory (default: current directory)
        out_dir: Name of the output directory

    Returns:
        Path to the .vista directory
    """
    return Path(root).resolve() / out_dir


def get_build_id_path(vista_dir: Path) -> Path:
    """Get the BUILD_ID file path inside a .vista directory."""
    return vista_dir / BUILD_ID_FILE


def get_client_manifest_path(vista_dir: Path) -> Path:
    """Get the client manifest path (.vista/client-manifest.json)."""
    return vista_dir / CLIENT_MANIFEST_FILE


def get_server_manifest_path(vista_dir: Path) -> Path:
    """Get the server manifest path (.vista/server/server-manifest.json)."""
    return vista_dir / SERVER_DIR / SERVER_MANIFEST_FILE


def chunk_url(chunk: str) -> str:
    """Public URL of a client chunk."""
    return f"{CHUNK_URL_PREFIX}/{chunk}.js"


__all__ = [
    # Constants
    "VISTA_DIR",
    "BUILD_ID_FILE",
    "CLIENT_MANIFEST_FILE",
    "SERVER_MANIFEST_FILE",
    "CACHE_DIR",
    "SERVER_DIR",
    "STATIC_DIR",
    "CHUNKS_DIR",
    "CSS_DIR",
    "MEDIA_DIR",
    "CHUNK_URL_PREFIX",
    "CONFIG_FILE",
    # Path getters
    "get_vista_dir",
    "get_build_id_path",
    "get_client_manifest_path",
    "get_server_manifest_path",
    # Helpers
    "chunk_url",
]
