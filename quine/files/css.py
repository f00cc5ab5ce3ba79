"""Stylesheets; dependencies come from @import rules and url() values."""

from __future__ import annotations

import re

from .base import ContentNode

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_IMPORT_RE = re.compile(r"""@import\s+(?:url\(\s*)?["']?([^"')\s;]+)["']?""")
_URL_RE = re.compile(r"""url\(\s*["']?([^"')]+?)["']?\s*\)""")


def css_references(source: str) -> list[str]:
    source = _COMMENT_RE.sub("", source)
    refs = _IMPORT_RE.findall(source)
    refs.extend(_URL_RE.findall(source))
    return refs


class CssFile(ContentNode):
    filetypes = ("css",)
    mime_type = "text/css"

    def references(self) -> list[str]:
        return css_references(self.text())


__all__ = ["CssFile", "css_references"]
