"""Quine - a static site builder driven by the site's own dependency graph.

Example:
    from quine import SiteBuilder, load_config

    settings = load_config()
    result = SiteBuilder(settings).build()
    print(f"Wrote {len(result.written)} files")
"""

from quine.builder import BuildResult, SiteBuilder, build_site, initial_visited
from quine.config import SiteSettings, load_config
from quine.errors import QuineError
from quine.files import ContentNode, Resolver, TypeRegistry
from quine.paths import SitePath

__all__ = [
    "BuildResult",
    "ContentNode",
    "QuineError",
    "Resolver",
    "SitePath",
    "SiteBuilder",
    "SiteSettings",
    "TypeRegistry",
    "build_site",
    "initial_visited",
    "load_config",
]
