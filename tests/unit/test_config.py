"""
Unit tests for the configuration module.

Tests cover:
- Default values
- Constraint validation
- Environment variable overrides
- Configuration file parsing and discovery
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from impact_radar.config import Config, GraphConfig, ScanConfig, load_config
from impact_radar.exceptions import ConfigurationError


class TestScanConfig:
    """Tests for ScanConfig."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        config = ScanConfig()

        assert config.include_globs == []
        assert "**/node_modules/**" in config.exclude_globs
        assert config.max_files == 5000
        assert config.source_extensions == [".py", ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"]
        assert config.use_gitignore is True

    def test_max_files_bounds(self):
        """Test max_files validation bounds."""
        assert ScanConfig(max_files=200).max_files == 200
        assert ScanConfig(max_files=50000).max_files == 50000

        with pytest.raises(ValidationError):
            ScanConfig(max_files=199)
        with pytest.raises(ValidationError):
            ScanConfig(max_files=50001)

    def test_extensions_normalized(self):
        """Test extensions gain a dot and are lowercased."""
        assert ScanConfig(source_extensions=["PY", ".Ts"]).source_extensions == [".py", ".ts"]


class TestGraphConfig:
    """Tests for GraphConfig."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        config = GraphConfig()

        assert config.max_depth == 4
        assert config.max_workers == 8
        assert config.encoding == "utf-8"
        assert config.internal_python_packages == []

    @pytest.mark.parametrize("depth", [0, 13])
    def test_max_depth_bounds(self, depth):
        """Test max_depth outside 1..12 is rejected."""
        with pytest.raises(ValidationError):
            GraphConfig(max_depth=depth)

    def test_max_workers_bounds(self):
        """Test max_workers must be positive."""
        with pytest.raises(ValidationError):
            GraphConfig(max_workers=0)


class TestConfig:
    """Tests for the main Config."""

    def test_project_root_resolved(self, tmp_path: Path):
        """Test project_root is made absolute."""
        config = Config(project_root=str(tmp_path / "x" / ".."))
        assert config.project_root == tmp_path.resolve()

    def test_env_overrides(self, monkeypatch, tmp_path: Path):
        """Test IMPACT_RADAR_ environment variables."""
        monkeypatch.setenv("IMPACT_RADAR_DEBUG", "true")
        monkeypatch.setenv("IMPACT_RADAR_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("IMPACT_RADAR_GRAPH__MAX_DEPTH", "7")

        config = Config(project_root=tmp_path)

        assert config.debug is True
        assert config.log_level == "WARNING"
        assert config.graph.max_depth == 7

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Config(log_level="VERBOSE")

    def test_to_dict(self, tmp_path: Path):
        """Test dictionary export includes sub-configs."""
        data = Config(project_root=tmp_path).to_dict()

        assert data["graph"]["max_depth"] == 4
        assert data["scan"]["max_files"] == 5000


class TestConfigFiles:
    """Tests for file-based configuration."""

    def test_from_toml(self, tmp_path: Path):
        """Test TOML configuration."""
        path = tmp_path / "impact-radar.toml"
        path.write_text('debug = true\n[graph]\nmax_depth = 2\n[scan]\ninclude_globs = ["src"]\n')

        config = Config.from_file(path)

        assert config.debug is True
        assert config.graph.max_depth == 2
        assert config.scan.include_globs == ["src"]

    def test_from_yaml(self, tmp_path: Path):
        """Test YAML configuration."""
        path = tmp_path / "config.yaml"
        path.write_text("graph:\n  internal_python_packages: [core]\n")

        config = Config.from_file(path)

        assert config.graph.internal_python_packages == ["core"]

    def test_from_empty_yaml(self, tmp_path: Path):
        """Test an empty YAML file yields defaults."""
        path = tmp_path / "config.yml"
        path.write_text("")

        assert Config.from_file(path).graph.max_depth == 4

    def test_from_json(self, tmp_path: Path):
        """Test JSON configuration."""
        path = tmp_path / "config.json"
        path.write_text('{"scan": {"max_files": 300}}')

        assert Config.from_file(path).scan.max_files == 300

    def test_missing_file(self, tmp_path: Path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Config.from_file(tmp_path / "nope.toml")

    def test_unsupported_format(self, tmp_path: Path):
        """Test unknown suffixes raise ConfigurationError."""
        path = tmp_path / "config.ini"
        path.write_text("[graph]\n")

        with pytest.raises(ConfigurationError):
            Config.from_file(path)

    def test_malformed_file(self, tmp_path: Path):
        """Test syntax errors raise ConfigurationError."""
        path = tmp_path / "impact-radar.toml"
        path.write_text("graph = [\n")

        with pytest.raises(ConfigurationError):
            Config.from_file(path)

    def test_out_of_range_value(self, tmp_path: Path):
        """Test a value outside its bounds raises ConfigurationError."""
        path = tmp_path / "impact-radar.toml"
        path.write_text("[scan]\nmax_files = 10\n")

        with pytest.raises(ConfigurationError, match="max_files"):
            Config.from_file(path)


class TestLoadConfig:
    """Tests for load_config discovery."""

    def test_defaults_without_files(self, tmp_path: Path):
        """Test defaults when nothing is found."""
        config = load_config(project_root=tmp_path)

        assert config.project_root == tmp_path.resolve()
        assert config.graph.max_depth == 4

    def test_discovers_root_toml(self, tmp_path: Path):
        """Test impact-radar.toml in the project root is used."""
        (tmp_path / "impact-radar.toml").write_text("[graph]\nmax_depth = 9\n")

        config = load_config(project_root=tmp_path)

        assert config.graph.max_depth == 9
        assert config.project_root == tmp_path.resolve()

    def test_discovers_nested_yaml(self, tmp_path: Path):
        """Test .impact-radar/config.yaml is used."""
        (tmp_path / ".impact-radar").mkdir()
        (tmp_path / ".impact-radar" / "config.yaml").write_text("debug: true\n")

        assert load_config(project_root=tmp_path).debug is True

    def test_invalid_env_value(self, monkeypatch, tmp_path: Path):
        """Test a bad environment override raises ConfigurationError."""
        monkeypatch.setenv("IMPACT_RADAR_GRAPH__MAX_DEPTH", "99")

        with pytest.raises(ConfigurationError):
            load_config(project_root=tmp_path)

    def test_explicit_path_wins(self, tmp_path: Path):
        """Test an explicit config path takes priority."""
        (tmp_path / "impact-radar.toml").write_text("[graph]\nmax_depth = 9\n")
        explicit = tmp_path / "other.json"
        explicit.write_text('{"graph": {"max_depth": 3}}')

        config = load_config(config_path=explicit, project_root=tmp_path)

        assert config.graph.max_depth == 3
