"""HTML pages; dependencies are the local targets of href/src attributes."""

from __future__ import annotations

from html.parser import HTMLParser
from typing import TYPE_CHECKING

from .base import ContentNode
from .directory import DirectoryNode

if TYPE_CHECKING:
    from quine.config import SiteSettings

REFERENCE_ATTRIBUTES = frozenset({"href", "src", "poster", "data"})


class _ReferenceCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.references: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for name, value in attrs:
            if not value:
                continue
            if name in REFERENCE_ATTRIBUTES:
                self.references.append(value)
            elif name == "srcset":
                # "a.png 1x, b.png 2x"
                for candidate in value.split(","):
                    url = candidate.strip().split(" ")[0]
                    if url:
                        self.references.append(url)

    handle_startendtag = handle_starttag


def html_references(markup: str) -> list[str]:
    collector = _ReferenceCollector()
    collector.feed(markup)
    collector.close()
    return collector.references


class HtmlFile(ContentNode):
    filetypes = ("html", "htm")
    mime_type = "text/html"

    def references(self) -> list[str]:
        return html_references(self.text())

    def dependencies(self, settings: SiteSettings | None = None) -> list[ContentNode]:
        source = self.derived_from
        if isinstance(source, DirectoryNode):
            # a listing links its parent too; only the listed entries are walked
            return source.dependencies(settings)
        return super().dependencies(settings)


__all__ = ["HtmlFile", "html_references"]
