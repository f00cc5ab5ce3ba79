"""Filesystem path value used throughout the build engine.

``SitePath`` is an immutable, always-absolute, lexically normalized path.
Content nodes, the resolver and the visited-set all key on its string
form, so two spellings of the same location (``a/./b``, ``a/c/../b``)
must compare equal.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Iterator
from functools import total_ordering
from pathlib import Path


@total_ordering
class SitePath:
    """Normalized absolute path."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        # Use SitePath.create() for untrusted input; this assumes normalized.
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("SitePath is immutable")

    @classmethod
    def create(cls, raw: str | os.PathLike[str] | SitePath, base: SitePath | str | None = None) -> SitePath:
        """Build a path from user input.

        Args:
            raw: Absolute or relative path. ``~`` is expanded.
            base: Directory that relative input is anchored to; defaults
                to the current working directory.
        """
        if isinstance(raw, SitePath):
            return raw
        value = os.path.expanduser(os.fspath(raw))
        if not value.startswith("/"):
            anchor = str(base) if base is not None else os.getcwd()
            value = posixpath.join(anchor, value)
        value = posixpath.normpath(value)
        # normpath keeps a leading "//" as-is; collapse it.
        if value.startswith("//"):
            value = "/" + value.lstrip("/")
        return cls(value)

    # -- value semantics -------------------------------------------------

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"SitePath({self._value!r})"

    def __fspath__(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SitePath):
            return self._value == other._value
        return NotImplemented

    def __lt__(self, other: SitePath) -> bool:
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    # -- derivation ------------------------------------------------------

    def join(self, *parts: str) -> SitePath:
        """Append segments; a leading ``/`` in a part does not reset to root."""
        cleaned = [part.lstrip("/") for part in parts if part]
        return SitePath.create(posixpath.join(self._value, *cleaned))

    @property
    def parent(self) -> SitePath:
        return SitePath(posixpath.dirname(self._value) or "/")

    @property
    def name(self) -> str:
        return posixpath.basename(self._value)

    @property
    def stem(self) -> str:
        stem, _ = posixpath.splitext(self.name)
        return stem

    @property
    def extension(self) -> str:
        """Lowercase extension without the dot, ``""`` when there is none."""
        _, ext = posixpath.splitext(self.name)
        return ext[1:].lower()

    def with_extension(self, extension: str) -> SitePath:
        base, _ = posixpath.splitext(self._value)
        if not extension:
            return SitePath(base)
        return SitePath(f"{base}.{extension}")

    def relative_to(self, other: SitePath) -> str:
        """Return the POSIX relative path from ``other`` to this path.

        Raises:
            ValueError: if this path is not inside ``other``.
        """
        if not self.is_within(other):
            raise ValueError(f"{self._value} is not within {other}")
        if self == other:
            return ""
        prefix = other._value.rstrip("/") + "/"
        return self._value[len(prefix):]

    def is_within(self, root: SitePath) -> bool:
        if self == root:
            return True
        prefix = root._value.rstrip("/") + "/"
        return self._value.startswith(prefix)

    # -- filesystem ------------------------------------------------------

    def to_path(self) -> Path:
        return Path(self._value)

    def exists(self) -> bool:
        return os.path.exists(self._value)

    def is_dir(self) -> bool:
        return os.path.isdir(self._value)

    def is_file(self) -> bool:
        return os.path.isfile(self._value)

    def iterdir(self) -> Iterator[SitePath]:
        for entry in sorted(os.listdir(self._value)):
            yield SitePath(posixpath.join(self._value, entry))

    def read_text(self) -> str:
        return self.to_path().read_text(encoding="utf-8")

    def read_bytes(self) -> bytes:
        return self.to_path().read_bytes()

    def mkdir(self) -> None:
        self.to_path().mkdir(parents=True, exist_ok=True)

    def write_text(self, text: str) -> None:
        self.parent.mkdir()
        self.to_path().write_text(text, encoding="utf-8")

    def write_bytes(self, data: bytes) -> None:
        self.parent.mkdir()
        self.to_path().write_bytes(data)


__all__ = ["SitePath"]
