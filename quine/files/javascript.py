"""JavaScript modules; dependencies are their relative import specifiers."""

from __future__ import annotations

import posixpath
import re

from .base import ContentNode

_IMPORT_RES = (
    re.compile(r"""\bimport\s+[^"';]*?\bfrom\s*["']([^"']+)["']"""),
    re.compile(r"""\bexport\s+[^"';]*?\bfrom\s*["']([^"']+)["']"""),
    re.compile(r"""\bimport\s*["']([^"']+)["']"""),
    re.compile(r"""\bimport\s*\(\s*["']([^"']+)["']\s*\)"""),
)


def js_references(source: str) -> list[str]:
    """Relative or root-anchored specifiers; bare package names are skipped."""
    found: list[tuple[int, str]] = []
    for pattern in _IMPORT_RES:
        found.extend((match.start(), match.group(1)) for match in pattern.finditer(source))
    refs: list[str] = []
    for _, spec in sorted(found):
        if not spec.startswith(("./", "../", "/")):
            continue
        if not posixpath.splitext(spec)[1]:
            spec = f"{spec}.js"
        refs.append(spec)
    return refs


class JavaScriptFile(ContentNode):
    filetypes = ("js", "mjs")
    mime_type = "text/javascript"

    def references(self) -> list[str]:
        return js_references(self.text())


__all__ = ["JavaScriptFile", "js_references"]
