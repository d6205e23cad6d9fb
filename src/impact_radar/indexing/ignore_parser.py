"""
Ignore file parser for .gitignore and .impactignore.

Parses ignore files into glob patterns and matches repository-relative paths
against them. Patterns use gitignore syntax; negations are not supported.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

IGNORE_FILES = (".gitignore", ".impactignore")


def parse_ignore_file(path: Path) -> list[str]:
    """
    Parse an ignore file (.gitignore or .impactignore format).

    Args:
        path: Path to the ignore file.

    Returns:
        List of glob patterns to ignore.
    """
    if not path.exists():
        return []

    patterns: list[str] = []

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse ignore file", path=str(path), error=str(e))
        return []

    for line in content.splitlines():
        line = line.strip()

        if not line or line.startswith("#"):
            continue

        if line.startswith("!"):
            logger.debug("Negation patterns not supported", pattern=line)
            continue

        patterns.append(gitignore_to_glob(line))

    return patterns


def gitignore_to_glob(pattern: str) -> str:
    """
    Convert a gitignore pattern to a glob pattern.

    - foo/ matches directories named foo anywhere
    - /foo matches foo only in root
    - *.py matches .py files anywhere
    """
    pattern = pattern.rstrip("/")

    if pattern.startswith("/"):
        return pattern[1:]
    if not pattern.startswith("**/"):
        return "**/" + pattern
    return pattern


def load_ignore_patterns(repo_root: Path) -> list[str]:
    """Combine patterns from every ignore file present at the repository root."""
    patterns: list[str] = []

    for name in IGNORE_FILES:
        loaded = parse_ignore_file(repo_root / name)
        if loaded:
            logger.debug("Loaded ignore patterns", file=name, count=len(loaded))
            patterns.extend(loaded)

    return patterns


def _match_segments(parts: list[str], pats: list[str]) -> bool:
    if not pats:
        return not parts
    head, rest = pats[0], pats[1:]
    if head == "**":
        return any(_match_segments(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatch(parts[0], head) and _match_segments(parts[1:], rest)


def glob_match(path: str, pattern: str) -> bool:
    """
    Match a forward-slash relative path against one glob pattern.

    Matching is per path segment: ``*`` and ``?`` never cross a ``/``, while a
    ``**`` segment spans zero or more directories.
    """
    parts = [p for p in path.split("/") if p]
    pats: list[str] = []
    for p in pattern.split("/"):
        if p and not (p == "**" and pats and pats[-1] == "**"):
            pats.append(p)
    return _match_segments(parts, pats)


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """
    Check a path against patterns, including each of its parent directories.

    A pattern naming a directory therefore also matches everything below it.
    """
    parts = path.strip("/").split("/")
    prefixes = ["/".join(parts[: i + 1]) for i in range(len(parts))]

    for pattern in patterns:
        if glob_match(path, pattern):
            return True
        if any(glob_match(prefix, pattern) for prefix in prefixes):
            return True

    return False
