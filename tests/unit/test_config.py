"""Tests for Vista configuration."""

import tempfile
import tomllib
from pathlib import Path

import pytest

from vista.config import ScannerConfig, VistaConfig, get_default_config_toml
from vista.errors import ConfigError, ExitCode


class TestVistaConfig:
    """Test configuration loading and defaults."""

    def test_default_config(self):
        """Test that default config loads without errors."""
        config = VistaConfig()
        assert config.version == "1.0"
        assert config.directive.directive == "client load"
        assert config.build.app_dir == "app"
        assert config.build.out_dir == ".vista"

    def test_scanner_defaults(self):
        """Test scanner default values."""
        config = VistaConfig()
        assert config.scanner.extensions == [".ts", ".tsx", ".js", ".jsx"]
        assert config.scanner.exclude_dirs == ["node_modules"]
        assert config.scanner.include_hidden is False

    def test_load_from_toml(self):
        """Test loading config from TOML file."""
        toml_content = """
[vista]
version = "2.0"

[scanner]
extensions = [".tsx"]
include_hidden = true

[directive]
directive = "use client"
"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".vistarc.toml"
            path.write_text(toml_content)

            config = VistaConfig.load(path)
            assert config.version == "2.0"
            assert config.scanner.extensions == [".tsx"]
            assert config.scanner.include_hidden is True
            assert config.directive.directive == "use client"
            assert config.build.app_dir == "app"

    def test_load_from_cwd(self, tmp_path, monkeypatch):
        """Test .vistarc.toml in the current directory is picked up."""
        (tmp_path / ".vistarc.toml").write_text('[build]\napp_dir = "src/app"\n')
        monkeypatch.chdir(tmp_path)
        assert VistaConfig.load().build.app_dir == "src/app"

    def test_env_override(self, monkeypatch):
        """Test VISTA_ environment variables fill nested settings."""
        monkeypatch.setenv("VISTA_DIRECTIVE__DIRECTIVE", "use client")
        assert VistaConfig().directive.directive == "use client"

    def test_invalid_toml(self, tmp_path):
        """Test unparseable TOML raises ConfigError."""
        path = tmp_path / "bad.toml"
        path.write_text("[scanner\nextensions = ")
        with pytest.raises(ConfigError) as exc_info:
            VistaConfig.load(path)
        assert exc_info.value.exit_code == ExitCode.CONFIG_ERROR
        assert exc_info.value.to_dict()["path"] == str(path)

    def test_invalid_values(self, tmp_path):
        """Test invalid values raise ConfigError."""
        path = tmp_path / "bad.toml"
        path.write_text("[scanner]\ninclude_hidden = [1, 2]\n")
        with pytest.raises(ConfigError):
            VistaConfig.load(path)

    def test_default_config_toml_is_valid(self):
        """Test that default config TOML can be parsed."""
        toml_content = get_default_config_toml()
        assert "[scanner]" in toml_content
        assert "[directive]" in toml_content

        data = tomllib.loads(toml_content)
        assert data["directive"]["directive"] == "client load"
        assert data["build"]["out_dir"] == ".vista"


class TestScannerConfig:
    """Test scanner filters."""

    def test_excluded_dirs(self):
        """Test excluded and hidden directory names."""
        scanner = ScannerConfig()
        assert scanner.is_excluded_dir("node_modules") is True
        assert scanner.is_excluded_dir(".git") is True
        assert scanner.is_excluded_dir("components") is False

    def test_include_hidden(self):
        """Test hidden directories allowed when configured."""
        assert ScannerConfig(include_hidden=True).is_excluded_dir(".well-known") is False

    def test_source_files(self):
        """Test extension matching."""
        scanner = ScannerConfig()
        assert scanner.is_source_file("page.tsx") is True
        assert scanner.is_source_file("route.ts") is True
        assert scanner.is_source_file("styles.css") is False
        assert scanner.is_source_file("types.d.ts") is True
        assert scanner.is_source_file("README") is False
