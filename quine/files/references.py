"""Turn reference strings found in content into source paths."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from quine.paths import SitePath

if TYPE_CHECKING:
    from .base import ContentNode

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def is_external(ref: str) -> bool:
    """True for references that do not point into the source tree."""
    ref = ref.strip()
    return (
        not ref
        or ref.startswith(("#", "//", "?"))
        or bool(_SCHEME_RE.match(ref))
    )


def strip_ref(ref: str) -> str:
    """Drop query string and fragment and decode percent-escapes."""
    parts = urlsplit(ref.strip())
    return unquote(parts.path)


def reference_path(node: ContentNode, ref: str) -> SitePath | None:
    """Resolve ``ref`` relative to ``node``.

    A leading ``/`` is anchored at the source directory, anything else at
    the directory containing the node. External references and references
    escaping the source directory resolve to None.
    """
    if is_external(ref):
        return None
    cleaned = strip_ref(ref)
    if not cleaned:
        return None
    source_dir = node.settings.source_dir
    if cleaned.startswith("/"):
        path = source_dir.join(cleaned)
    else:
        path = SitePath.create(cleaned, node.location.parent)
    if not path.is_within(source_dir):
        return None
    return path


__all__ = ["is_external", "reference_path", "strip_ref"]
