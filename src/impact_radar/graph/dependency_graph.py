"""
File-level dependency graph.

Nodes are normalized repository-relative paths. Edges point from the
importing file to the imported file. Forward and reverse adjacency are kept
under one mutation contract so that

    v in forward[u]  <=>  u in reverse[v]

holds after every call, and every node has an entry in both maps.
"""

from __future__ import annotations

from typing import Any


class DependencyGraph:
    """
    Directed file dependency graph with O(1) lookups in both directions.

    The graph is a general directed graph: cycles and self-loops are stored
    like any other edge. Nodes and edges are never removed.
    """

    def __init__(self) -> None:
        self.nodes: set[str] = set()
        self.forward: dict[str, set[str]] = {}
        self.reverse: dict[str, set[str]] = {}

    def add_node(self, path: str) -> None:
        """Ensure ``path`` is a node. Idempotent."""
        self.nodes.add(path)
        self.forward.setdefault(path, set())
        self.reverse.setdefault(path, set())

    def add_edge(self, src: str, dst: str) -> None:
        """Record that ``src`` imports ``dst``. Idempotent."""
        self.add_node(src)
        self.add_node(dst)
        self.forward[src].add(dst)
        self.reverse[dst].add(src)

    def out_neighbors(self, path: str) -> list[str]:
        """Files imported by ``path``."""
        return sorted(self.forward.get(path, ()))

    def in_neighbors(self, path: str) -> list[str]:
        """Files importing ``path``."""
        return sorted(self.reverse.get(path, ()))

    def degree(self, path: str) -> int:
        return len(self.forward.get(path, ())) + len(self.reverse.get(path, ()))

    def edge_count(self) -> int:
        """Total number of distinct directed edges."""
        return sum(len(targets) for targets in self.forward.values())

    def edges(self) -> list[tuple[str, str]]:
        """All edges as sorted ``(importer, imported)`` pairs."""
        return sorted((src, dst) for src, targets in self.forward.items() for dst in targets)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly export of nodes and forward adjacency."""
        return {
            "nodes": sorted(self.nodes),
            "edges": {path: sorted(self.forward[path]) for path in sorted(self.nodes)},
        }

    def __contains__(self, path: object) -> bool:
        return path in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self.nodes)}, edges={self.edge_count()})"
