"""Extension-to-variant registry.

Handlers are listed explicitly in ``DEFAULT_VARIANTS``; nothing is
discovered at runtime. Each extension may be claimed by exactly one
variant, and a conflicting registration aborts registry construction.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from quine.errors import RegistryError
from quine.lib.log import get_logger

from .base import ContentNode
from .binary import BinaryFile
from .css import CssFile
from .directory import DirectoryNode
from .html import HtmlFile
from .javascript import JavaScriptFile
from .markdown import MarkdownFile
from .scss import ScssFile
from .text import TextFile
from .typescript import TypeScriptFile

logger = get_logger(__name__)

DIRECTORY_EXTENSION = "dir"

DEFAULT_VARIANTS: tuple[type[ContentNode], ...] = (
    TextFile,
    BinaryFile,
    HtmlFile,
    MarkdownFile,
    CssFile,
    ScssFile,
    JavaScriptFile,
    TypeScriptFile,
    DirectoryNode,
)


def _normalize(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


@dataclass(frozen=True)
class HandlerDescriptor:
    """Static metadata for one variant: what it claims and what it produces."""

    variant: type[ContentNode]
    filetypes: tuple[str, ...]
    targets: tuple[str, ...] = ()

    @classmethod
    def of(cls, variant: type[ContentNode]) -> HandlerDescriptor:
        return cls(
            variant=variant,
            filetypes=tuple(_normalize(ext) for ext in variant.filetypes),
            targets=tuple(_normalize(ext) for ext in variant.targets),
        )

    @property
    def name(self) -> str:
        return self.variant.__name__


Handler = Union[HandlerDescriptor, type[ContentNode]]


class TypeRegistry:
    """Maps extensions to variants and target extensions to their sources.

    Args:
        handlers: Variants (or descriptors) to register, in order. Order
            matters for compile-target fallback: sources are tried in the
            order their handlers were registered.
        fallback: Variant returned for unregistered extensions.
    """

    def __init__(self, handlers: Iterable[Handler] = (), fallback: type[ContentNode] = TextFile) -> None:
        self.fallback = fallback
        self._descriptors: list[HandlerDescriptor] = []
        self._by_extension: dict[str, HandlerDescriptor] = {}
        self._compile_map: dict[str, tuple[str, ...]] | None = None
        for handler in handlers:
            self.register(handler)

    @classmethod
    def default(cls) -> TypeRegistry:
        return cls(DEFAULT_VARIANTS)

    def register(self, handler: Handler) -> HandlerDescriptor:
        """Add a handler's extensions.

        Raises:
            RegistryError: if an extension is already claimed, if a declared
                target has no derivation method, or if the compile map has
                already been built.
        """
        descriptor = handler if isinstance(handler, HandlerDescriptor) else HandlerDescriptor.of(handler)
        if self._compile_map is not None:
            raise RegistryError(f"Cannot register {descriptor.name}: registry is already in use")
        if len(set(descriptor.filetypes)) != len(descriptor.filetypes):
            raise RegistryError(f"{descriptor.name} claims an extension more than once")
        for ext in descriptor.filetypes:
            existing = self._by_extension.get(ext)
            if existing is not None:
                raise RegistryError(
                    f"Extension '{ext}' claimed by both {existing.name} and {descriptor.name}"
                )
        for target in descriptor.targets:
            if not callable(getattr(descriptor.variant, target, None)):
                raise RegistryError(
                    f"{descriptor.name} declares target '{target}' but has no '{target}()' method"
                )
        for ext in descriptor.filetypes:
            self._by_extension[ext] = descriptor
        self._descriptors.append(descriptor)
        return descriptor

    def lookup(self, extension: str) -> type[ContentNode]:
        """Variant registered for ``extension``, or the fallback."""
        descriptor = self._by_extension.get(_normalize(extension))
        return descriptor.variant if descriptor else self.fallback

    def __contains__(self, extension: str) -> bool:
        return _normalize(extension) in self._by_extension

    def extensions(self) -> list[str]:
        return list(self._by_extension)

    def descriptors(self) -> list[HandlerDescriptor]:
        return list(self._descriptors)

    def _build_compile_map(self) -> dict[str, tuple[str, ...]]:
        compile_map: dict[str, list[str]] = {}
        for descriptor in self._descriptors:
            for target in descriptor.targets:
                compile_map.setdefault(target, []).extend(descriptor.filetypes)
        logger.debug("Built compile map", targets=sorted(compile_map))
        return {target: tuple(sources) for target, sources in compile_map.items()}

    def compile_sources_for(self, target: str) -> tuple[str, ...]:
        """Source extensions that can be compiled into ``target``, in registration order."""
        if self._compile_map is None:
            self._compile_map = self._build_compile_map()
        return self._compile_map.get(_normalize(target), ())


__all__ = [
    "DEFAULT_VARIANTS",
    "DIRECTORY_EXTENSION",
    "HandlerDescriptor",
    "TypeRegistry",
]
