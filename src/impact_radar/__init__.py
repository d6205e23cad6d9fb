"""
impact-radar - change blast-radius estimation.

Builds a cross-file import graph for Python and JavaScript/TypeScript
repositories and reports which files a change can affect.
"""

__version__ = "0.1.0"
__all__ = [
    "Config",
    "DependencyGraph",
    "GraphBuilder",
    "ImpactAnalyzer",
]

from impact_radar.config import Config
from impact_radar.graph import DependencyGraph, GraphBuilder, ImpactAnalyzer
