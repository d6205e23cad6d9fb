"""
Import statement extraction for Python and JavaScript/TypeScript sources.

Extraction is a narrow text-pattern layer, not a parser. Each language family
has an enumerated set of recognized statement shapes:

Python:
- ``import a.b`` (also ``import a.b as c`` and ``import a, b``)
- ``from a.b import x``
- ``from ..a.b import x`` / ``from . import x`` (leading dots are kept)

JavaScript / TypeScript:
- ``import x from "spec"`` / ``import "spec"``
- ``export { x } from "spec"`` / ``export * from "spec"``
- ``const x = require("spec")``

Anything outside these shapes (dynamic ``import()``, bare ``require`` calls,
statements broken across lines in unusual ways) is an accepted miss.
"""

from __future__ import annotations

import os
import re
from enum import Enum


class LanguageFamily(str, Enum):
    """Module-resolution families recognized by the graph builder."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"


PYTHON_EXTENSIONS: tuple[str, ...] = (".py",)

# Probe order used by the JS resolver
JS_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

SOURCE_EXTENSIONS: tuple[str, ...] = PYTHON_EXTENSIONS + JS_EXTENSIONS

_EXT_FAMILY: dict[str, LanguageFamily] = {
    **{ext: LanguageFamily.PYTHON for ext in PYTHON_EXTENSIONS},
    **{ext: LanguageFamily.JAVASCRIPT for ext in JS_EXTENSIONS},
}


def detect_language_family(path: str) -> LanguageFamily | None:
    """Classify a path by its extension (case-insensitive)."""
    ext = os.path.splitext(path)[1].lower()
    return _EXT_FAMILY.get(ext)


# Python ---------------------------------------------------------------
_PY_IMPORT = re.compile(
    r"""
    ^[ \t]*
    (?:
        import [ \t]+
        (?P<modules>
            [A-Za-z_][\w.]* (?:[ \t]+ as [ \t]+ \w+)?
            (?: [ \t]*,[ \t]* [A-Za-z_][\w.]* (?:[ \t]+ as [ \t]+ \w+)? )*
        )
        [ \t\r]* (?: ;.* | \#.* )? $
      |
        from [ \t]+
        (?P<module> \.+ [\w.]* | [A-Za-z_][\w.]* )
        [ \t]+ import \b
    )
    """,
    re.VERBOSE | re.MULTILINE,
)

_PY_ALIAS = re.compile(r"\s+as\s+")

# JavaScript / TypeScript -----------------------------------------------
_JS_IMPORT = re.compile(
    r"""^[ \t]*import\b(?:[\s\w{}*$,]*?\bfrom)?\s*["'](?P<spec>[^"']+)["']""",
    re.MULTILINE,
)

_JS_EXPORT_FROM = re.compile(
    r"""^[ \t]*export\s+[\s\w{}*$,]*?\bfrom\s*["'](?P<spec>[^"']+)["']""",
    re.MULTILINE,
)

_JS_REQUIRE = re.compile(
    r"""^[ \t]*(?:const|let|var)\s+[\w{}\s,$:]*=\s*require\(\s*["'](?P<spec>[^"']+)["']\s*\)""",
    re.MULTILINE,
)


def _unique(specifiers: list[str]) -> list[str]:
    """Trim, drop empties, and deduplicate keeping first occurrence."""
    return list(dict.fromkeys(s.strip() for s in specifiers if s.strip()))


def parse_python_imports(content: str) -> list[str]:
    """Extract raw module specifiers from Python source text."""
    found: list[str] = []

    for match in _PY_IMPORT.finditer(content):
        if match.group("module") is not None:
            found.append(match.group("module"))
            continue
        for item in match.group("modules").split(","):
            found.append(_PY_ALIAS.split(item.strip())[0])

    return _unique(found)


def parse_js_imports(content: str) -> list[str]:
    """Extract quoted module specifiers from JavaScript/TypeScript text."""
    matches: list[tuple[int, str]] = []
    for pattern in (_JS_IMPORT, _JS_EXPORT_FROM, _JS_REQUIRE):
        matches.extend((m.start("spec"), m.group("spec")) for m in pattern.finditer(content))

    matches.sort(key=lambda item: item[0])
    return _unique([spec for _, spec in matches])


def extract_imports(content: str, family: LanguageFamily) -> list[str]:
    """
    Extract the raw import specifiers referenced by a source file.

    Args:
        content: File text.
        family: Language family of the file.

    Returns:
        Deduplicated specifiers in document order. Never raises.
    """
    if family is LanguageFamily.PYTHON:
        return parse_python_imports(content)
    if family is LanguageFamily.JAVASCRIPT:
        return parse_js_imports(content)
    return []
