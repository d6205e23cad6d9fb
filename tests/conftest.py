"""
Shared fixtures for the impact-radar test suite.

Provides:
- Temporary repository factories
- In-memory file readers for the graph builder
- Forward/reverse duality checker for built graphs
- structlog reset between tests
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from impact_radar.graph.dependency_graph import DependencyGraph


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration made by CLI tests."""
    yield
    structlog.reset_defaults()


# ==============================================================================
# Repository Fixtures
# ==============================================================================

@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory writing a {relative_path: content} mapping under a temp root."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "repo"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def memory_reader() -> Callable[[dict[str, str]], Callable[[str], str]]:
    """Factory for a read_file callable backed by a dict; unknown paths raise."""

    def _reader(files: dict[str, str]) -> Callable[[str], str]:
        def read(path: str) -> str:
            try:
                return files[path]
            except KeyError:
                raise FileNotFoundError(path) from None

        return read

    return _reader


@pytest.fixture
def mixed_repo_files() -> dict[str, str]:
    """A small repository mixing Python and TypeScript sources."""
    return {
        "app/__init__.py": "",
        "app/main.py": (
            "import os\n"
            "from app.services import billing\n"
            "from .util import helper\n"
        ),
        "app/util.py": "import json\n",
        "app/services/__init__.py": "",
        "app/services/billing.py": (
            "from ..util import helper\n"
            "from . import tax\n"
        ),
        "app/services/tax.py": "from .missing import nothing\n",
        "web/src/index.ts": (
            'import React from "react";\n'
            'import { api } from "./lib/api";\n'
            'import "./styles";\n'
        ),
        "web/src/lib/api.ts": 'export { client } from "./client";\n',
        "web/src/lib/client/index.ts": 'const axios = require("axios");\n',
    }


# ==============================================================================
# Graph Fixtures
# ==============================================================================

@pytest.fixture
def assert_duality() -> Callable[[DependencyGraph], None]:
    """Checker that every forward edge has its reverse entry and vice versa."""

    def _check(graph: DependencyGraph) -> None:
        for u in graph.nodes:
            for v in graph.out_neighbors(u):
                assert u in graph.in_neighbors(v)
            for v in graph.in_neighbors(u):
                assert u in graph.out_neighbors(v)
        assert set(graph.forward) == graph.nodes
        assert set(graph.reverse) == graph.nodes

    return _check
