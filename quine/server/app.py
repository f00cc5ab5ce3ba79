"""Development server: serves every request straight from the source tree.

Nothing is written to disk. Each request is resolved through the same
resolver the builder uses, so compile targets (``style.css`` from
``style.scss``, ``page.html`` from ``page.md``) are produced on the fly.
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

from quine.builder import ROOT_DOCUMENT
from quine.config import SiteSettings
from quine.errors import CompileError
from quine.files.base import ContentNode
from quine.files.resolver import Resolver
from quine.lib.log import get_logger
from quine.version import QUINE_VERSION

logger = get_logger(__name__)


def lookup(request_path: str, settings: SiteSettings, resolver: Resolver) -> ContentNode | None:
    """Map a URL path onto the source tree.

    ``/`` serves the root page and ``/about`` falls back to ``about.html``
    the way static hosts do.
    """
    relative = request_path.strip("/")
    if not relative:
        relative = ROOT_DOCUMENT
    location = settings.source_dir.join(relative)
    if not location.is_within(settings.source_dir):
        return None
    node = resolver.resolve(location, settings)
    if node is None and not location.extension:
        node = resolver.resolve(location.with_extension("html"), settings)
    return node


def create_app(settings: SiteSettings, resolver: Resolver | None = None) -> FastAPI:
    app = FastAPI(title=settings.site_name, version=QUINE_VERSION)
    app.state.settings = settings
    app.state.resolver = resolver if resolver is not None else Resolver()

    @app.get("/{request_path:path}")
    def serve_file(request: Request, request_path: str) -> Response:
        state_settings: SiteSettings = request.app.state.settings
        node = lookup(request_path, state_settings, request.app.state.resolver)
        if node is None:
            raise HTTPException(status_code=404, detail=f"Not found: /{request_path}")
        try:
            served = node.serve(state_settings)
        except CompileError as exc:
            logger.error("Failed to compile", path=str(node.location), error=str(exc))
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return Response(content=served.contents, media_type=served.mime_type)

    return app


__all__ = ["create_app", "lookup"]
