"""Turn a requested path into a content node.

Resolution order:

1. An existing directory becomes a ``DirectoryNode``.
2. An existing file becomes the variant registered for its extension.
3. A missing file ``name.X`` is looked up as a compile target: every
   extension Y whose handler declares X is tried in registration order,
   and the first sibling ``name.Y`` that exists is built and asked for
   its ``X()`` derivation. Later candidates are never consulted, even if
   the chosen one fails to compile.
4. Otherwise there is nothing to build and ``None`` is returned.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from quine.lib.log import get_logger
from quine.paths import SitePath

from .base import ContentNode
from .directory import DirectoryNode
from .registry import DIRECTORY_EXTENSION, TypeRegistry

if TYPE_CHECKING:
    from quine.config import SiteSettings

logger = get_logger(__name__)


class Resolver:
    """Resolves paths against one registry; threaded through every node."""

    def __init__(self, registry: TypeRegistry | None = None) -> None:
        self.registry = registry if registry is not None else TypeRegistry.default()

    def resolve(self, path: str | os.PathLike[str] | SitePath, settings: SiteSettings) -> ContentNode | None:
        """Return the node for ``path`` or None when nothing can produce it.

        Args:
            path: Absolute, or relative to ``settings.source_dir``.
            settings: Settings the node will be bound to.
        """
        location = SitePath.create(path, settings.source_dir)

        if location.is_dir():
            return DirectoryNode.create(location, settings, self)

        if location.is_file():
            variant = self.registry.lookup(location.extension)
            if issubclass(variant, DirectoryNode):
                variant = self.registry.fallback
            return variant.create(location, settings, self)

        return self._resolve_compile_target(location, settings)

    def _resolve_compile_target(self, location: SitePath, settings: SiteSettings) -> ContentNode | None:
        target = location.extension
        if not target:
            return None
        for source_ext in self.registry.compile_sources_for(target):
            if source_ext == DIRECTORY_EXTENSION:
                candidate = location.with_extension("")
                if not candidate.is_dir():
                    continue
                source: ContentNode = DirectoryNode.create(candidate, settings, self)
            else:
                candidate = location.with_extension(source_ext)
                if not candidate.is_file():
                    continue
                source = self.registry.lookup(source_ext).create(candidate, settings, self)
            logger.debug(
                "Resolved compile target",
                path=str(location),
                source=str(candidate),
            )
            return getattr(source, target)()
        return None


__all__ = ["Resolver"]
