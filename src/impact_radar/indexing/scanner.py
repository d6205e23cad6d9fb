"""
Repository scanner.

Enumerates candidate source files for the graph builder: walks the project
root, applies include/exclude globs and ignore files, keeps recognized source
extensions, and caps the result.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from impact_radar.exceptions import ScanError
from impact_radar.graph.extractor import SOURCE_EXTENSIONS
from impact_radar.indexing.ignore_parser import load_ignore_patterns, matches_any

if TYPE_CHECKING:
    from impact_radar.config import Config

logger = structlog.get_logger(__name__)


def expand_include_glob(pattern: str) -> str:
    """Treat a pattern without wildcards as a directory: ``src`` -> ``src/**/*``."""
    if "*" in pattern:
        return pattern
    return f"{pattern.strip('/')}/**/*"


class RepoScanner:
    """Finds candidate source files under a project root."""

    def __init__(
        self,
        project_root: Path | str,
        *,
        include_globs: list[str] | None = None,
        exclude_globs: list[str] | None = None,
        max_files: int = 5000,
        source_extensions: tuple[str, ...] | list[str] = SOURCE_EXTENSIONS,
        use_gitignore: bool = True,
        debug: bool = False,
    ) -> None:
        self.project_root = Path(project_root)
        self.include_globs = [expand_include_glob(g) for g in include_globs or []]
        self.exclude_globs = list(exclude_globs or [])
        self.max_files = max_files
        self.source_extensions = tuple(ext.lower() for ext in source_extensions)
        self.use_gitignore = use_gitignore
        self.debug = debug

    @classmethod
    def from_config(cls, config: "Config") -> "RepoScanner":
        return cls(
            config.project_root,
            include_globs=config.scan.include_globs,
            exclude_globs=config.scan.exclude_globs,
            max_files=config.scan.max_files,
            source_extensions=config.scan.source_extensions,
            use_gitignore=config.scan.use_gitignore,
            debug=config.debug,
        )

    def scan(self) -> list[str]:
        """
        Scan the project root.

        Returns:
            Sorted repository-relative POSIX paths, at most ``max_files``.

        Raises:
            ScanError: If the project root is missing or not a directory.
        """
        if not self.project_root.is_dir():
            raise ScanError(f"Project root is not a directory: {self.project_root}")

        excludes = list(self.exclude_globs)
        if self.use_gitignore:
            excludes.extend(load_ignore_patterns(self.project_root))

        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self.project_root):
            rel_dir = Path(dirpath).relative_to(self.project_root).as_posix()
            rel_dir = "" if rel_dir == "." else rel_dir

            # Prune hidden and excluded directories in place
            dirnames[:] = sorted(
                d
                for d in dirnames
                if not d.startswith(".")
                and not matches_any(f"{_join(rel_dir, d)}/", excludes)
            )

            for name in filenames:
                if name.startswith("."):
                    continue
                if not name.lower().endswith(self.source_extensions):
                    continue

                rel = _join(rel_dir, name)
                if self.include_globs and not matches_any(rel, self.include_globs):
                    continue
                if matches_any(rel, excludes):
                    continue
                found.append(rel)

        found.sort()

        if len(found) > self.max_files:
            capped = found[: self.max_files]
            if self.debug:
                logger.info("Repo scan capped", found=len(found), kept=len(capped))
            return capped

        logger.debug("Repo scan complete", files=len(found))
        return found


def _join(directory: str, name: str) -> str:
    return f"{directory}/{name}" if directory else name


def scan_repo_files(project_root: Path | str, **kwargs) -> list[str]:
    """Scan a repository in one call. See RepoScanner for options."""
    return RepoScanner(project_root, **kwargs).scan()
