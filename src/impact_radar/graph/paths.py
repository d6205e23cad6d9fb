"""Repository-relative path normalization shared by the graph components."""

from __future__ import annotations

import posixpath


def normalize_path(path: str) -> str:
    """
    Normalize a path to the forward-slash, repository-relative form.

    Backslashes become ``/``, ``.`` and ``..`` segments collapse, and leading
    ``./`` or ``/`` are stripped. The repository root normalizes to ``""``.
    A path escaping the root keeps its leading ``..`` segments, so it never
    equals a candidate file.
    """
    p = path.replace("\\", "/").strip()
    if not p:
        return ""
    p = posixpath.normpath(p).lstrip("/")
    return "" if p == "." else p


def parent_dir(path: str) -> str:
    """Directory containing ``path`` (``""`` for files at the root)."""
    return posixpath.dirname(path)


def join_path(*parts: str) -> str:
    """Join path segments, ignoring empty ones, and normalize the result."""
    segments = [p for p in parts if p]
    if not segments:
        return ""
    return normalize_path(posixpath.join(*segments))
