"""Opaque binary assets: images, fonts, media, archives."""

from __future__ import annotations

from .base import ContentNode


class BinaryFile(ContentNode):
    filetypes = (
        "png", "jpg", "jpeg", "gif", "webp", "ico", "svg", "avif",
        "pdf",
        "woff", "woff2", "ttf", "otf",
        "mp3", "mp4", "wav", "webm",
        "zip",
    )
    binary = True

    def _load(self) -> bytes:
        return self.location.read_bytes()


__all__ = ["BinaryFile"]
