"""Content node contract shared by every file variant.

A ``ContentNode`` is one file (or directory) in the site graph. Nodes are
created on demand by the resolver, read lazily, and know how to persist
themselves under the configured target directory, how to hand their
contents to the development server, and which other nodes they reference.

Derived nodes are ordinary variant instances carrying a ``Derivation``:
their content comes from ``transform(source)`` instead of the disk, and
``derived_from`` points back at the source node.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from quine.errors import SettingsMismatchError
from quine.lib.log import get_logger
from quine.paths import SitePath

from .references import reference_path

if TYPE_CHECKING:
    from quine.config import SiteSettings

    from .resolver import Resolver

logger = get_logger(__name__)

_UNSET: Any = object()

Transform = Callable[["ContentNode"], "str | bytes"]


@dataclass(frozen=True)
class Derivation:
    """Provenance of a derived node: its source and the transform to apply."""

    source: ContentNode
    transform: Transform


@dataclass(frozen=True)
class Served:
    """Content handed to the development server."""

    contents: str | bytes
    mime_type: str


class ContentNode:
    """Base class for all content variants.

    Subclasses declare the extensions they claim in ``filetypes`` and the
    extensions they can be compiled into in ``targets``. Every target must
    be matched by a method of the same name returning the derived node.
    """

    filetypes: ClassVar[tuple[str, ...]] = ()
    targets: ClassVar[tuple[str, ...]] = ()
    mime_type: ClassVar[Optional[str]] = None
    binary: ClassVar[bool] = False

    def __init__(
        self,
        location: SitePath,
        settings: SiteSettings,
        resolver: Resolver,
        derivation: Derivation | None = None,
    ) -> None:
        self.location = location
        self.settings = settings
        self.resolver = resolver
        self.derivation = derivation
        self._content: Any = _UNSET

    @classmethod
    def create(cls, location: SitePath, settings: SiteSettings, resolver: Resolver) -> ContentNode:
        return cls(location, settings, resolver)

    def __repr__(self) -> str:
        suffix = f" <- {self.derived_from.location}" if self.derived_from else ""
        return f"{type(self).__name__}({str(self.location)!r}{suffix})"

    @property
    def path(self) -> SitePath:
        return self.location

    @property
    def derived_from(self) -> ContentNode | None:
        return self.derivation.source if self.derivation else None

    def _check_settings(self, settings: SiteSettings | None) -> SiteSettings:
        if settings is not None and settings != self.settings:
            raise SettingsMismatchError(
                f"{self.location} was created under different settings"
            )
        return self.settings

    # -- content ----------------------------------------------------------

    def _load(self) -> str | bytes:
        return self.location.read_text()

    def read(self, settings: SiteSettings | None = None) -> str | bytes:
        """Return the node's content, loading or computing it on first use."""
        self._check_settings(settings)
        if self._content is _UNSET:
            if self.derivation is not None:
                self._content = self.derivation.transform(self.derivation.source)
            else:
                self._content = self._load()
        return self._content

    def text(self, settings: SiteSettings | None = None) -> str:
        content = self.read(settings)
        if isinstance(content, bytes):
            return content.decode("utf-8", errors="replace")
        return content

    def content_type(self) -> str:
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.location.name)
        if guessed:
            return guessed
        return "application/octet-stream" if self.binary else "text/plain"

    # -- contract ---------------------------------------------------------

    def output_path(self, settings: SiteSettings | None = None) -> SitePath:
        return self._check_settings(settings).output_path(self.location)

    def write(self, settings: SiteSettings | None = None) -> ContentNode:
        """Persist the served content under the target directory."""
        target = self.output_path(settings)
        content = self.read(settings)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content)
        logger.debug("Wrote file", path=str(target))
        return self

    def serve(self, settings: SiteSettings | None = None) -> Served:
        return Served(contents=self.read(settings), mime_type=self.content_type())

    def references(self) -> Iterable[str]:
        """Raw reference strings found in the content (hrefs, imports, ...)."""
        return ()

    def dependencies(self, settings: SiteSettings | None = None) -> list[ContentNode]:
        """Resolve every reference to a node, dropping the ones that miss."""
        settings = self._check_settings(settings)
        nodes: list[ContentNode] = []
        seen: set[SitePath] = set()
        for ref in self.references():
            path = reference_path(self, ref)
            if path is None or path in seen:
                continue
            seen.add(path)
            node = self.resolver.resolve(path, settings)
            if node is None:
                logger.debug("Dropping missing reference", reference=ref, parent=str(self.location))
                continue
            nodes.append(node)
        return nodes

    def sibling_location(self, extension: str) -> SitePath:
        """Location of this node with its extension swapped for ``extension``."""
        return self.location.with_extension(extension)

    def derive(self, transform: Transform, extension: str) -> ContentNode:
        return derive(self, transform, extension)


def derive(source: ContentNode, transform: Transform, extension: str) -> ContentNode:
    """Wrap ``source`` as a node of another type.

    The returned node is an instance of the variant registered for
    ``extension``, located at the source path with that extension. Its
    content is ``transform(source)``, computed the first time it is read.
    """
    variant = source.resolver.registry.lookup(extension)
    location = source.sibling_location(extension)
    return variant(
        location,
        source.settings,
        source.resolver,
        derivation=Derivation(source=source, transform=transform),
    )


__all__ = ["ContentNode", "Derivation", "Served", "Transform", "derive"]
