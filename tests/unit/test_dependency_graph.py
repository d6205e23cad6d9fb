"""
Unit tests for DependencyGraph.

Tests cover:
- Forward/reverse duality
- Idempotent node and edge insertion
- Isolated nodes, self-loops and cycles
- Degree and edge count identities
"""

from __future__ import annotations

import pytest

from impact_radar.graph.dependency_graph import DependencyGraph


@pytest.fixture
def diamond() -> DependencyGraph:
    graph = DependencyGraph()
    graph.add_edge("app.py", "a.py")
    graph.add_edge("app.py", "b.py")
    graph.add_edge("a.py", "core.py")
    graph.add_edge("b.py", "core.py")
    return graph


class TestDependencyGraph:
    """Tests for DependencyGraph."""

    def test_add_node_idempotent(self):
        """Test repeated add_node keeps one empty entry."""
        graph = DependencyGraph()
        graph.add_node("x.py")
        graph.add_node("x.py")

        assert len(graph) == 1
        assert graph.forward["x.py"] == set()
        assert graph.reverse["x.py"] == set()

    def test_add_edge_creates_nodes(self):
        """Test edges implicitly add both endpoints."""
        graph = DependencyGraph()
        graph.add_edge("a.ts", "b.ts")

        assert "a.ts" in graph
        assert "b.ts" in graph
        assert graph.out_neighbors("a.ts") == ["b.ts"]
        assert graph.in_neighbors("b.ts") == ["a.ts"]

    def test_add_edge_idempotent(self):
        """Test duplicate edges do not change counts."""
        graph = DependencyGraph()
        graph.add_edge("a", "b")
        graph.add_edge("a", "b")

        assert graph.edge_count() == 1
        assert len(graph.out_neighbors("a")) == 1
        assert len(graph.in_neighbors("b")) == 1

    def test_cycle(self, assert_duality):
        """Test mutual imports produce two opposite edges."""
        graph = DependencyGraph()
        graph.add_edge("a", "b")
        graph.add_edge("b", "a")

        assert graph.edge_count() == 2
        assert graph.out_neighbors("a") == ["b"]
        assert graph.out_neighbors("b") == ["a"]
        assert_duality(graph)

    def test_self_loop(self, assert_duality):
        """Test a self-loop is stored like any edge."""
        graph = DependencyGraph()
        graph.add_edge("pkg/__init__.py", "pkg/__init__.py")

        assert graph.edge_count() == 1
        assert graph.degree("pkg/__init__.py") == 2
        assert_duality(graph)

    def test_unknown_path_queries(self):
        """Test queries on unknown paths are empty, not errors."""
        graph = DependencyGraph()

        assert graph.out_neighbors("nope") == []
        assert graph.in_neighbors("nope") == []
        assert graph.degree("nope") == 0
        assert "nope" not in graph

    def test_isolated_node(self):
        """Test an isolated node has empty neighbor sets."""
        graph = DependencyGraph()
        graph.add_node("lonely.py")
        graph.add_edge("a.py", "b.py")

        assert graph.out_neighbors("lonely.py") == []
        assert graph.in_neighbors("lonely.py") == []
        assert graph.degree("lonely.py") == 0

    def test_degree_identity(self, diamond):
        """Test degree equals out + in neighbor counts for every node."""
        for node in diamond.nodes:
            expected = len(diamond.out_neighbors(node)) + len(diamond.in_neighbors(node))
            assert diamond.degree(node) == expected

        assert diamond.degree("core.py") == 2
        assert diamond.degree("a.py") == 2

    def test_edge_count(self, diamond, assert_duality):
        """Test edge count sums forward sets."""
        assert diamond.edge_count() == 4
        assert diamond.edges() == [
            ("a.py", "core.py"),
            ("app.py", "a.py"),
            ("app.py", "b.py"),
            ("b.py", "core.py"),
        ]
        assert_duality(diamond)

    def test_to_dict(self, diamond):
        """Test the JSON export."""
        data = diamond.to_dict()

        assert data["nodes"] == ["a.py", "app.py", "b.py", "core.py"]
        assert data["edges"]["app.py"] == ["a.py", "b.py"]
        assert data["edges"]["core.py"] == []
