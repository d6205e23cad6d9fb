"""
Repository indexing module for impact-radar.

Finds the candidate source files a dependency graph is built over.
"""

from impact_radar.indexing.ignore_parser import load_ignore_patterns, matches_any
from impact_radar.indexing.scanner import RepoScanner, scan_repo_files

__all__ = [
    "RepoScanner",
    "load_ignore_patterns",
    "matches_any",
    "scan_repo_files",
]
