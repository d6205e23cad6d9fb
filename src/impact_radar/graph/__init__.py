"""
Dependency graph module for impact-radar.

Builds file-level import graphs from raw source text:
- Import extraction for Python and JavaScript/TypeScript
- Module resolution emulating each ecosystem's layout rules
- Bidirectional graph with dependent lookups
- Blast-radius traversal
"""

from impact_radar.graph.builder import BuildResult, BuildStats, GraphBuilder, build_dependency_graph
from impact_radar.graph.dependency_graph import DependencyGraph
from impact_radar.graph.extractor import LanguageFamily, detect_language_family, extract_imports
from impact_radar.graph.module_index import ModuleIndex, build_module_index
from impact_radar.graph.resolver import ImportResolver, Resolution, ResolutionKind
from impact_radar.graph.traversal import ImpactAnalyzer, ImpactReport

__all__ = [
    "BuildResult",
    "BuildStats",
    "DependencyGraph",
    "GraphBuilder",
    "ImpactAnalyzer",
    "ImpactReport",
    "ImportResolver",
    "LanguageFamily",
    "ModuleIndex",
    "Resolution",
    "ResolutionKind",
    "build_dependency_graph",
    "build_module_index",
    "detect_language_family",
    "extract_imports",
]
