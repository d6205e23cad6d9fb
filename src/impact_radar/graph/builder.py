"""
Dependency graph builder.

Builds a file-level import graph for a repository in two phases:
1. Seed every candidate file as a node and index Python modules over the
   full candidate set (resolution is repo-global, so this must finish first)
2. For each file: read, extract import specifiers, resolve each one, and
   record an edge or count it as external/unresolved

Per-file work in phase 2 is independent and runs on a bounded thread pool.
Each step returns its own FileOutcome; outcomes are applied to the graph on
the calling thread in candidate order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from impact_radar.graph.dependency_graph import DependencyGraph
from impact_radar.graph.extractor import detect_language_family, extract_imports
from impact_radar.graph.module_index import build_module_index
from impact_radar.graph.paths import normalize_path
from impact_radar.graph.resolver import ImportResolver, ResolutionKind

if TYPE_CHECKING:
    from impact_radar.config import Config

logger = structlog.get_logger(__name__)

ReadFile = Callable[[str], str]


@dataclass(frozen=True)
class BuildStats:
    """Counters for one graph build."""

    parsed_files: int = 0
    external_imports: int = 0
    unresolved_imports: int = 0

    def __add__(self, other: "BuildStats") -> "BuildStats":
        return BuildStats(
            parsed_files=self.parsed_files + other.parsed_files,
            external_imports=self.external_imports + other.external_imports,
            unresolved_imports=self.unresolved_imports + other.unresolved_imports,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "parsed_files": self.parsed_files,
            "external_imports": self.external_imports,
            "unresolved_imports": self.unresolved_imports,
        }


@dataclass
class FileOutcome:
    """Result of processing a single readable file."""

    path: str
    targets: list[str] = field(default_factory=list)
    stats: BuildStats = field(default_factory=BuildStats)


@dataclass(frozen=True)
class BuildResult:
    """Final graph and statistics of a build."""

    graph: DependencyGraph
    stats: BuildStats


class GraphBuilder:
    """
    Builds a DependencyGraph from candidate repository paths.

    Files are read relative to ``project_root`` unless a ``read_file``
    callable is supplied. A file that cannot be read is skipped: it stays an
    isolated node (unless others import it) and is not counted as parsed.
    """

    def __init__(
        self,
        project_root: Path | str = ".",
        *,
        max_workers: int = 8,
        encoding: str = "utf-8",
        internal_packages: Iterable[str] = (),
        read_file: ReadFile | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.max_workers = max(1, max_workers)
        self.encoding = encoding
        self.internal_packages = tuple(internal_packages)
        self._read_file = read_file or self._read_from_disk

    @classmethod
    def from_config(cls, config: "Config", read_file: ReadFile | None = None) -> "GraphBuilder":
        """Create a builder from the graph section of a Config."""
        return cls(
            config.project_root,
            max_workers=config.graph.max_workers,
            encoding=config.graph.encoding,
            internal_packages=config.graph.internal_python_packages,
            read_file=read_file,
        )

    def build(self, paths: Iterable[str], debug: bool = False) -> BuildResult:
        """
        Build the dependency graph.

        Args:
            paths: Candidate repository-relative file paths.
            debug: Log a one-line summary of the counters at info level.

        Returns:
            BuildResult with the graph and aggregate counters.
        """
        candidates = list(dict.fromkeys(p for p in map(normalize_path, paths) if p))

        graph = DependencyGraph()
        for path in candidates:
            graph.add_node(path)

        index = build_module_index(candidates)
        resolver = ImportResolver(candidates, index, self.internal_packages)

        stats = BuildStats()
        for outcome in self._process_all(candidates, resolver):
            if outcome is None:
                continue
            stats += outcome.stats
            for target in outcome.targets:
                graph.add_edge(outcome.path, target)

        log = logger.info if debug else logger.debug
        log(
            "Graph build complete",
            parsed_files=stats.parsed_files,
            external_imports=stats.external_imports,
            unresolved_imports=stats.unresolved_imports,
            nodes=len(graph),
            edges=graph.edge_count(),
        )

        return BuildResult(graph=graph, stats=stats)

    def _process_all(
        self, candidates: list[str], resolver: ImportResolver
    ) -> Iterator[FileOutcome | None]:
        """Process files, preserving candidate order in the results."""
        workers = min(self.max_workers, len(candidates))
        if workers <= 1:
            for path in candidates:
                yield self._process_file(path, resolver)
            return

        with ThreadPoolExecutor(max_workers=workers) as executor:
            yield from executor.map(lambda p: self._process_file(p, resolver), candidates)

    def _process_file(self, path: str, resolver: ImportResolver) -> FileOutcome | None:
        """Read, extract and resolve one file. None if it was skipped."""
        family = detect_language_family(path)
        if family is None:
            logger.debug("Skipping file with unknown language", path=path)
            return None

        content = self._read(path)
        if content is None:
            return None

        outcome = FileOutcome(path=path)
        external = 0
        unresolved = 0

        for specifier in extract_imports(content, family):
            resolution = resolver.resolve(path, specifier, family)
            if resolution.kind is ResolutionKind.INTERNAL:
                outcome.targets.append(resolution.target)
            elif resolution.kind is ResolutionKind.EXTERNAL:
                external += 1
            else:
                unresolved += 1

        outcome.stats = BuildStats(
            parsed_files=1,
            external_imports=external,
            unresolved_imports=unresolved,
        )
        return outcome

    def _read(self, path: str) -> str | None:
        try:
            return self._read_file(path)
        except OSError as e:
            logger.debug("Skipping unreadable file", path=path, error=str(e))
            return None

    def _read_from_disk(self, path: str) -> str:
        return (self.project_root / path).read_text(encoding=self.encoding, errors="replace")


def build_dependency_graph(
    repo_files: Iterable[str],
    project_root: Path | str = ".",
    debug: bool = False,
    **kwargs,
) -> BuildResult:
    """Build a dependency graph in one call. See GraphBuilder for options."""
    return GraphBuilder(project_root, **kwargs).build(repo_files, debug=debug)
