"""
Blast-radius traversal over a built dependency graph.

A change to a file can break every file that transitively imports it. The
analyzer walks reverse edges breadth-first from the changed files, up to a
depth limit, and reports which files are affected and how far away they are.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from impact_radar.graph.dependency_graph import DependencyGraph
from impact_radar.graph.paths import normalize_path

logger = structlog.get_logger(__name__)


@dataclass
class ImpactReport:
    """Files affected by a change set."""

    changed: list[str]
    affected: dict[str, int]  # path -> hops from the nearest changed file
    top_affected: list[str]
    top_dependents: list[str]
    max_depth: int
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "changed": self.changed,
            "affected": self.affected,
            "top_affected": self.top_affected,
            "top_dependents": self.top_dependents,
            "max_depth": self.max_depth,
            "warnings": self.warnings,
        }


class ImpactAnalyzer:
    """
    Depth-limited traversal of a DependencyGraph.

    Cycles are handled by a visited set, so every reachable file is reported
    once at its shortest distance.
    """

    def __init__(self, graph: DependencyGraph, max_depth: int = 4, top_n: int = 10) -> None:
        self.graph = graph
        self.max_depth = max_depth
        self.top_n = top_n

    def dependents(self, seeds: Iterable[str], max_depth: int | None = None) -> dict[str, int]:
        """Files that transitively import any seed, with their distance."""
        return self._walk(seeds, self.graph.in_neighbors, max_depth)

    def dependencies(self, seeds: Iterable[str], max_depth: int | None = None) -> dict[str, int]:
        """Files any seed transitively imports, with their distance."""
        return self._walk(seeds, self.graph.out_neighbors, max_depth)

    def _walk(
        self,
        seeds: Iterable[str],
        neighbors: Callable[[str], list[str]],
        max_depth: int | None,
    ) -> dict[str, int]:
        limit = self.max_depth if max_depth is None else max_depth
        start = [s for s in seeds if s in self.graph]

        visited: set[str] = set(start)
        found: dict[str, int] = {}
        queue: deque[tuple[str, int]] = deque((s, 0) for s in start)

        while queue:
            node, depth = queue.popleft()
            if depth >= limit:
                continue

            for neighbor in neighbors(node):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                found[neighbor] = depth + 1
                queue.append((neighbor, depth + 1))

        return found

    def analyze(self, changed_files: Iterable[str], max_depth: int | None = None) -> ImpactReport:
        """
        Compute the blast radius of a change set.

        Args:
            changed_files: Paths touched by the change.
            max_depth: Traversal limit (defaults to the analyzer's).

        Returns:
            ImpactReport with affected dependents and rankings.
        """
        limit = self.max_depth if max_depth is None else max_depth
        changed = list(dict.fromkeys(p for p in map(normalize_path, changed_files) if p))

        known = [p for p in changed if p in self.graph]
        warnings = [f"Not in dependency graph: {p}" for p in changed if p not in self.graph]

        affected = self.dependents(known, limit)

        top_affected = sorted(
            affected,
            key=lambda p: (affected[p], -self.graph.degree(p), p),
        )[: self.top_n]

        top_dependents = sorted(
            (p for p in known if self.graph.in_neighbors(p)),
            key=lambda p: (-len(self.graph.in_neighbors(p)), p),
        )[: self.top_n]

        logger.debug(
            "Impact analysis complete",
            changed=len(changed),
            affected=len(affected),
            max_depth=limit,
        )

        return ImpactReport(
            changed=changed,
            affected=affected,
            top_affected=top_affected,
            top_dependents=top_dependents,
            max_depth=limit,
            warnings=warnings,
        )
