"""Directory nodes: child enumeration, recursive tree, HTML listing.

A directory node is a snapshot. Its contents, tree and listing are
computed on first use and never refreshed, so files created or removed
after that point are not seen by this node.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from jinja2 import DictLoader, Environment, select_autoescape

from quine.lib.log import get_logger
from quine.paths import SitePath

from .base import ContentNode, Derivation, Served

if TYPE_CHECKING:
    from quine.config import SiteSettings

    from .html import HtmlFile
    from .resolver import Resolver

logger = get_logger(__name__)

LISTING_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{{ title }}{% if site_name %} | {{ site_name }}{% endif %}</title>
  <style>
    body { font-family: ui-monospace, Menlo, monospace; max-width: 860px; margin: 2rem auto; padding: 0 1rem; }
    ul { list-style: none; padding-left: 0; }
    li { padding: 0.15rem 0; }
  </style>
</head>
<body>
  <h1>{{ title }}</h1>
  <ul>
    {% if parent_href %}<li><a href="{{ parent_href }}">../</a></li>{% endif %}
    {% for entry in entries %}
    <li><a href="{{ entry.href }}">{{ entry.name }}{% if entry.is_dir %}/{% endif %}</a></li>
    {% endfor %}
  </ul>
</body>
</html>
"""


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=DictLoader({"listing.html": LISTING_TEMPLATE}),
        autoescape=select_autoescape(["html"]),
    )


class DirectoryNode(ContentNode):
    """A directory of the source tree.

    Dependencies are the immediate children followed by the listing page,
    so building a directory walks everything below it (minus whatever the
    visited-set excludes).
    """

    filetypes = ("dir",)
    targets = ("html",)
    mime_type = "text/html"

    def __init__(
        self,
        location: SitePath,
        settings: SiteSettings,
        resolver: Resolver,
        derivation: Derivation | None = None,
    ) -> None:
        super().__init__(location, settings, resolver, derivation)
        self._contents: list[ContentNode] | None = None
        self._tree: list[ContentNode] | None = None
        self._listing: str | None = None

    @property
    def is_root(self) -> bool:
        return self.location == self.settings.source_dir

    def contents(self, settings: SiteSettings | None = None) -> list[ContentNode]:
        """Immediate children, resolved once."""
        settings = self._check_settings(settings)
        if self._contents is None:
            children: list[ContentNode] = []
            for entry in self.location.iterdir():
                node = self.resolver.resolve(entry, settings)
                if node is not None:
                    children.append(node)
            self._contents = children
        return self._contents

    def tree(self, settings: SiteSettings | None = None) -> list[ContentNode]:
        """Every descendant, depth-first, directories before their children."""
        settings = self._check_settings(settings)
        if self._tree is None:
            flattened: list[ContentNode] = []
            for child in self.contents(settings):
                flattened.append(child)
                if isinstance(child, DirectoryNode):
                    flattened.extend(child.tree(settings))
            self._tree = flattened
        return self._tree

    def listing(self, settings: SiteSettings | None = None) -> str:
        """Rendered HTML index of the immediate children."""
        settings = self._check_settings(settings)
        if self._listing is None:
            entries = []
            for child in self.contents(settings):
                is_dir = isinstance(child, DirectoryNode)
                entries.append(
                    {
                        "name": child.location.name,
                        "href": self._href(child.location, is_dir),
                        "is_dir": is_dir,
                    }
                )
            relative = self.location.relative_to(settings.source_dir)
            template = _environment().get_template("listing.html")
            self._listing = template.render(
                title=f"/{relative}",
                site_name=settings.site_name,
                parent_href=None if self.is_root else "/" + self.location.parent.relative_to(settings.source_dir),
                entries=entries,
            )
        return self._listing

    def _href(self, location: SitePath, is_dir: bool) -> str:
        href = "/" + location.relative_to(self.settings.source_dir)
        return href + "/" if is_dir else href

    # -- ContentNode contract ---------------------------------------------

    def _load(self) -> str:
        return self.listing()

    def sibling_location(self, extension: str) -> SitePath:
        return self.location.parent.join(f"{self.location.name}.{extension}")

    def listing_page(self, settings: SiteSettings | None = None) -> ContentNode | None:
        """The ``<dir>.html`` node carrying this directory's listing, if any.

        ``<dir>.html`` belongs to whatever the resolver produces for it: a
        real page, a compiled one such as ``<dir>.md``, or this directory's
        own ``html()`` derivation. Only in the last case is a listing page
        emitted. The source root never gets one.
        """
        settings = self._check_settings(settings)
        if self.is_root:
            return None
        claimant = self.resolver.resolve(self.sibling_location("html"), settings)
        if claimant is None:
            return None
        source = claimant.derived_from
        if isinstance(source, DirectoryNode) and source.location == self.location:
            return self.html()
        logger.debug("Listing superseded", path=str(self.location), by=str(claimant.location))
        return None

    def write(self, settings: SiteSettings | None = None) -> DirectoryNode:
        """Create the output directory; the listing page is a dependency."""
        self.output_path(settings).mkdir()
        return self

    def serve(self, settings: SiteSettings | None = None) -> Served:
        return Served(contents=self.listing(settings), mime_type="text/html")

    def dependencies(self, settings: SiteSettings | None = None) -> list[ContentNode]:
        nodes = list(self.contents(settings))
        page = self.listing_page(settings)
        if page is not None:
            nodes.append(page)
        return nodes

    def html(self) -> HtmlFile:
        return self.derive(lambda source: source.listing(), "html")  # type: ignore[return-value]


__all__ = ["DirectoryNode"]
