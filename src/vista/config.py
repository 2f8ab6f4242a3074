"""Configuration models for Vista."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vista.errors import ConfigError
from vista.paths import CONFIG_FILE, VISTA_DIR


class ScannerConfig(BaseModel):
    """Scanner configuration."""

    extensions: list[str] = Field(
        default=[".ts", ".tsx", ".js", ".jsx"],
        description="Source file extensions analyzed by the scanner",
    )
    exclude_dirs: list[str] = Field(
        default=["node_modules"],
        description="Directory names never descended into",
    )
    include_hidden: bool = Field(
        default=False,
        description="Descend into directories whose name starts with '.'",
    )

    def is_excluded_dir(self, name: str) -> bool:
        """Check whether a directory name is skipped during walks."""
        if not self.include_hidden and name.startswith("."):
            return True
        return name in self.exclude_dirs

    def is_source_file(self, name: str) -> bool:
        """Check whether a file name carries a recognized extension."""
        suffix = Path(name).suffix
        return suffix in self.extensions


class DirectiveConfig(BaseModel):
    """Client directive configuration."""

    directive: str = Field(
        default="client load",
        description="Marker string literal that opts a file into client treatment",
    )


class BuildConfig(BaseModel):
    """Build output configuration."""

    app_dir: str = Field(
        default="app",
        description="Route tree directory (relative to project root)",
    )
    out_dir: str = Field(
        default=VISTA_DIR,
        description="Build output directory (relative to project root)",
    )


class VistaConfig(BaseSettings):
    """Main Vista configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VISTA_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    version: str = Field(default="1.0", description="Config version")
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    directive: DirectiveConfig = Field(default_factory=DirectiveConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> VistaConfig:
        """Load configuration from file and environment.

        The first file found is used: the provided path, then .vistarc.toml
        in the current directory, then in the home directory. Values the
        file leaves unset come from VISTA_* environment variables, then
        built-in defaults.

        Raises:
            ConfigError: The file is not valid TOML or holds invalid values
        """
        config_data: dict[str, Any] = {}

        locations = []
        if config_path:
            locations.append(config_path)
        locations.extend(
            [
                Path.cwd() / CONFIG_FILE,
                Path.home() / CONFIG_FILE,
            ]
        )

        for loc in locations:
            if loc.exists():
                try:
                    with open(loc, "rb") as f:
                        config_data = tomllib.load(f)
                except tomllib.TOMLDecodeError as e:
                    raise ConfigError(f"Invalid TOML in {loc}: {e}", path=str(loc)) from e
                break

        # The [vista] table carries top-level keys
        config_data.update(config_data.pop("vista", {}))
        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e.error_count()} error(s)") from e


def get_default_config_toml() -> str:
    """Generate default .vistarc.toml content."""
    return f"""# Vista Configuration

[vista]
version = "1.0"

[scanner]
extensions = [".ts", ".tsx", ".js", ".jsx"]
exclude_dirs = ["node_modules"]
include_hidden = false

[directive]
directive = "client load"

[build]
app_dir = "app"
out_dir = "{VISTA_DIR}"
"""
