"""
Import specifier resolution.

Two strategies share one contract, ``resolve(from_file, specifier)``, which
returns a :class:`Resolution`: either a concrete repository file or a
classification as external (outside the repository) or unresolved (looks
internal, but no file matched).

Python follows package/module layout through the module index. JavaScript and
TypeScript follow a Node-style probe of extensions and ``index`` files for
relative and root-anchored specifiers only; bare specifiers are packages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from impact_radar.graph.extractor import JS_EXTENSIONS, LanguageFamily
from impact_radar.graph.module_index import ModuleIndex
from impact_radar.graph.paths import join_path, normalize_path, parent_dir


class ResolutionKind(str, Enum):
    """Outcome of resolving one specifier."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a specifier."""

    kind: ResolutionKind
    target: str | None = None

    @classmethod
    def internal(cls, target: str) -> "Resolution":
        return cls(ResolutionKind.INTERNAL, target)


EXTERNAL = Resolution(ResolutionKind.EXTERNAL)
UNRESOLVED = Resolution(ResolutionKind.UNRESOLVED)


class PythonResolver:
    """
    Resolves Python import specifiers against the module index.

    Relative imports (``.mod``, ``..pkg.mod``, ``.``) are resolved from the
    importing file's directory and are never external. Absolute imports try
    an exact index hit, then the dotted name as a direct path, then
    progressively shorter parent modules.
    """

    def __init__(
        self,
        index: ModuleIndex,
        internal_packages: Iterable[str] = (),
    ) -> None:
        self.index = index
        self.internal_packages = frozenset(internal_packages)

    def resolve(self, from_file: str, specifier: str) -> Resolution:
        if specifier.startswith("."):
            target = self._resolve_relative(from_file, specifier)
            return Resolution.internal(target) if target else UNRESOLVED

        target = self._resolve_absolute(specifier)
        if target:
            return Resolution.internal(target)

        if specifier.split(".")[0] in self.internal_packages:
            return UNRESOLVED
        return EXTERNAL

    def _resolve_relative(self, from_file: str, specifier: str) -> str | None:
        rest = specifier.lstrip(".")
        dots = len(specifier) - len(rest)

        segments = [s for s in parent_dir(from_file).split("/") if s]
        ascend = dots - 1
        if ascend > len(segments):
            return None
        base = "/".join(segments[: len(segments) - ascend])

        if not rest:
            candidates = [join_path(base, "__init__.py")]
        else:
            sub = rest.replace(".", "/")
            candidates = [
                join_path(base, sub + ".py"),
                join_path(base, sub, "__init__.py"),
            ]

        for candidate in candidates:
            if self.index.has_file(candidate):
                return candidate
        return None

    def _resolve_absolute(self, specifier: str) -> str | None:
        hit = self.index.get(specifier)
        if hit:
            return hit

        # Some repos are not laid out as packages: a.b.c -> a/b/c.py
        as_path = specifier.replace(".", "/")
        for candidate in (normalize_path(as_path + ".py"), normalize_path(as_path + "/__init__.py")):
            if self.index.has_file(candidate):
                return candidate

        # import x.y.z where only x/y/__init__.py exists
        parts = specifier.split(".")
        for k in range(len(parts) - 1, 0, -1):
            hit = self.index.get(".".join(parts[:k]))
            if hit:
                return hit

        return None


def js_candidates(base: str) -> list[str]:
    """Files probed for a JS/TS base path, in resolution order."""
    if base.lower().endswith(JS_EXTENSIONS):
        return [base]

    candidates = [base + ext for ext in JS_EXTENSIONS]
    candidates.extend(join_path(base, "index" + ext) for ext in JS_EXTENSIONS)
    return candidates


class JsResolver:
    """Resolves JavaScript/TypeScript specifiers against the known file set."""

    def __init__(self, files: Iterable[str]) -> None:
        self.files = frozenset(files)

    def resolve(self, from_file: str, specifier: str) -> Resolution:
        if specifier.startswith("/"):
            base = normalize_path(specifier[1:])
        elif specifier.startswith("."):
            base = join_path(parent_dir(from_file), specifier)
        else:
            # react, lodash, @scope/pkg ...
            return EXTERNAL

        if not base:
            return UNRESOLVED

        for candidate in js_candidates(base):
            if candidate in self.files:
                return Resolution.internal(candidate)
        return UNRESOLVED


class ImportResolver:
    """Dispatches specifiers to the strategy for the importing file's family."""

    def __init__(
        self,
        files: Iterable[str],
        index: ModuleIndex,
        internal_packages: Iterable[str] = (),
    ) -> None:
        self.python = PythonResolver(index, internal_packages)
        self.javascript = JsResolver(files)

    def resolve(self, from_file: str, specifier: str, family: LanguageFamily) -> Resolution:
        if family is LanguageFamily.PYTHON:
            return self.python.resolve(from_file, specifier)
        return self.javascript.resolve(from_file, specifier)
