"""Opaque files, also the registry fallback for unknown extensions."""

from __future__ import annotations

from .base import ContentNode


class TextFile(ContentNode):
    """Copied through byte for byte, with no dependencies.

    Content is only decoded on request (``text()``), so an unknown
    binary format reached through the fallback is never re-encoded.
    """

    filetypes = ("txt",)

    def _load(self) -> bytes:
        return self.location.read_bytes()


__all__ = ["TextFile"]
