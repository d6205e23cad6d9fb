"""
Python module index.

Maps dotted module names to the files defining them:

    a/b.py           -> a.b
    a/b/__init__.py  -> a.b
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

logger = structlog.get_logger(__name__)


def module_name_for(path: str) -> str | None:
    """Dotted module name for a ``.py`` path, or None if it has none."""
    if not path.lower().endswith(".py"):
        return None

    parts = path[: -len(".py")].split("/")
    if parts[-1] == "__init__":
        parts.pop()

    name = ".".join(p for p in parts if p)
    return name or None


class ModuleIndex:
    """
    Read-only lookup from dotted module name to file path.

    Built once per graph run from the full candidate set. When two files map
    to the same dotted name the last one wins; both remain in ``files``.
    """

    def __init__(self, paths: Iterable[str]) -> None:
        self._modules: dict[str, str] = {}
        self._files: set[str] = set()

        for path in paths:
            name = module_name_for(path)
            if name is None:
                continue
            previous = self._modules.get(name)
            if previous is not None and previous != path:
                logger.debug(
                    "Ambiguous module name",
                    module=name,
                    shadowed=previous,
                    file=path,
                )
            self._modules[name] = path
            self._files.add(path)

    def get(self, module: str) -> str | None:
        """File defining ``module``, if indexed."""
        return self._modules.get(module)

    def has_file(self, path: str) -> bool:
        """Whether ``path`` is one of the indexed Python files."""
        return path in self._files

    @property
    def files(self) -> frozenset[str]:
        return frozenset(self._files)

    def __contains__(self, module: object) -> bool:
        return module in self._modules

    def __len__(self) -> int:
        return len(self._modules)


def build_module_index(paths: Iterable[str]) -> ModuleIndex:
    """Build the module index over a candidate path set."""
    return ModuleIndex(paths)
