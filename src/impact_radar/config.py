"""
Configuration module for impact-radar.

Provides strongly-typed configuration with pydantic, supporting both
file-based and environment variable configuration.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from impact_radar.exceptions import ConfigurationError
from impact_radar.graph.extractor import SOURCE_EXTENSIONS


class ScanConfig(BaseModel):
    """Repository scan configuration."""

    include_globs: list[str] = Field(
        default_factory=list,
        description="Glob patterns to include (empty means everything)",
    )
    exclude_globs: list[str] = Field(
        default_factory=lambda: [
            "**/node_modules/**",
            "**/__pycache__/**",
            "**/venv/**",
            "**/.venv/**",
            "**/dist/**",
            "**/build/**",
            "**/coverage/**",
            "**/*.egg-info/**",
            "**/.git/**",
        ],
        description="Glob patterns to exclude",
    )
    max_files: int = Field(
        default=5000,
        ge=200,
        le=50000,
        description="Maximum number of candidate files handed to the graph builder",
    )
    source_extensions: list[str] = Field(
        default_factory=lambda: list(SOURCE_EXTENSIONS),
        description="File extensions considered for dependency parsing",
    )
    use_gitignore: bool = Field(
        default=True,
        description="Also exclude patterns from .gitignore and .impactignore",
    )

    @field_validator("source_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lowercase extensions and ensure a leading dot."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]


class GraphConfig(BaseModel):
    """Dependency graph build configuration."""

    max_depth: int = Field(
        default=4,
        ge=1,
        le=12,
        description="Maximum traversal depth for blast-radius analysis",
    )
    max_workers: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Worker threads for per-file read/extract/resolve",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read source files",
    )
    internal_python_packages: list[str] = Field(
        default_factory=list,
        description=(
            "Top-level Python packages known to be internal; unmatched "
            "absolute imports of these count as unresolved, not external"
        ),
    )


class Config(BaseSettings):
    """
    Main impact-radar configuration.

    Can be configured via:
    1. Configuration file (impact-radar.toml or impact-radar.yaml)
    2. Environment variables with IMPACT_RADAR_ prefix
    3. Programmatic overrides
    """

    model_config = SettingsConfigDict(
        env_prefix="IMPACT_RADAR_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    project_root: Path = Field(
        default_factory=lambda: Path.cwd(),
        description="Repository root directory",
    )
    debug: bool = Field(
        default=False,
        description="Emit diagnostic summaries",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    scan: ScanConfig = Field(default_factory=ScanConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)

    @field_validator("project_root", mode="before")
    @classmethod
    def resolve_project_root(cls, v: Path | str) -> Path:
        """Resolve project root to absolute path."""
        path = Path(v) if isinstance(v, str) else v
        return path.resolve()

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML, YAML or JSON file."""
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        content = path.read_text()

        try:
            if suffix == ".toml":
                data = tomllib.loads(content)
            elif suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif suffix == ".json":
                data = json.loads(content)
            else:
                raise ConfigurationError(f"Unsupported config format: {suffix}")
        except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return self.model_dump()


def load_config(
    config_path: Path | None = None,
    project_root: Path | None = None,
) -> Config:
    """
    Load configuration with automatic discovery.

    Priority:
    1. Explicit config_path if provided
    2. impact-radar.toml in project_root
    3. .impact-radar/config.toml in project_root
    4. impact-radar.yaml / .impact-radar/config.yaml in project_root
    5. Default configuration
    """
    root = project_root or Path.cwd()

    if config_path is not None:
        config = Config.from_file(config_path)
        return config.model_copy(update={"project_root": root.resolve()})

    candidates = [
        root / "impact-radar.toml",
        root / ".impact-radar" / "config.toml",
        root / "impact-radar.yaml",
        root / ".impact-radar" / "config.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            config = Config.from_file(candidate)
            return config.model_copy(update={"project_root": root.resolve()})

    try:
        return Config(project_root=root)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
