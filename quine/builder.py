"""Static site builder.

Starting from ``<source>/index.html``, the builder writes each node and
then recurses into its dependencies, depth-first. A visited-set of
absolute path strings guarantees every path is processed at most once,
which also breaks reference cycles.

Failures are contained as close to their origin as possible:

- a node whose dependencies cannot be listed is treated as a leaf;
- a failing dependency subtree is logged and recorded, and its siblings
  are still built;
- only a failure to write the root (or a missing root) aborts the build.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from quine.config import SiteSettings
from quine.errors import BuildError
from quine.files.base import ContentNode
from quine.files.resolver import Resolver
from quine.lib.log import build_context, get_logger

logger = get_logger(__name__)

ROOT_DOCUMENT = "index.html"
ALWAYS_IGNORED = (".git", ".direnv", "node_modules")


@dataclass
class BuildFailure:
    """A recoverable failure recorded during a build."""

    path: str
    parent: str | None
    stage: str
    message: str


@dataclass
class BuildResult:
    """Outcome of one build run."""

    written: list[str] = field(default_factory=list)
    failures: list[BuildFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def initial_visited(settings: SiteSettings) -> set[str]:
    """Seed the visited-set so the build never enters excluded paths.

    Includes the configured ignore paths (and their ``.html`` siblings),
    the target directory, so a target inside the source tree is never
    built into itself, and version-control / dependency directories.
    """
    ignore = list(settings.ignore_paths)
    target = str(settings.target_dir)
    seeded = {
        *ignore,
        *(f"{path}.html" for path in ignore),
        target,
        f"{target}.html",
        str(settings.target_dir.join(ROOT_DOCUMENT)),
    }
    seeded.update(str(settings.source_dir.join(name)) for name in ALWAYS_IGNORED)
    return seeded


class SiteBuilder:
    """Build a static site by walking the dependency graph from the root page.

    Args:
        settings: Build configuration; never mutated.
        resolver: Resolver (and registry) every node is created through.
    """

    def __init__(self, settings: SiteSettings, resolver: Resolver | None = None) -> None:
        self.settings = settings
        self.resolver = resolver if resolver is not None else Resolver()

    def root(self) -> ContentNode:
        """Resolve the entry document.

        Raises:
            BuildError: if the source tree has no index page.
        """
        index_path = self.settings.source_dir.join(ROOT_DOCUMENT)
        node = self.resolver.resolve(index_path, self.settings)
        if node is None:
            raise BuildError(
                f"Failed to read source {ROOT_DOCUMENT} at {index_path}. "
                "Make sure the file exists and is readable."
            )
        return node

    def build(self, visited: set[str] | None = None) -> BuildResult:
        """Build the whole site from the root page.

        Args:
            visited: Optional pre-seeded visited-set; defaults to
                ``initial_visited(settings)``.

        Raises:
            BuildError: if the root is missing or cannot be written.
        """
        root = self.root()
        if visited is None:
            visited = initial_visited(self.settings)
        result = BuildResult()
        logger.info("Starting build", root=str(root.location), target=str(self.settings.target_dir))
        self.build_node(root, visited, result)
        logger.info(
            "Build completed",
            written=len(result.written),
            failures=len(result.failures),
        )
        return result

    def build_node(
        self,
        node: ContentNode,
        visited: set[str],
        result: BuildResult,
        parent: ContentNode | None = None,
    ) -> None:
        """Write ``node`` and recurse into its dependencies.

        Raises:
            BuildError: if ``node`` cannot be written.
        """
        key = str(node.location)
        if key in visited:
            return
        visited.add(key)

        with build_context(key, _location(parent)):
            self._build_visited(node, key, visited, result, parent)

    def _build_visited(
        self,
        node: ContentNode,
        key: str,
        visited: set[str],
        result: BuildResult,
        parent: ContentNode | None,
    ) -> None:
        try:
            node.write(self.settings)
        except Exception as exc:
            raise BuildError(f"Failed to write file {key}: {exc}") from exc
        result.written.append(key)

        try:
            dependencies = node.dependencies(self.settings)
        except Exception as exc:
            logger.warning("Failed to get dependencies", error=str(exc))
            result.failures.append(
                BuildFailure(path=key, parent=_location(parent), stage="dependencies", message=str(exc))
            )
            return

        for dependency in dependencies:
            try:
                self.build_node(dependency, visited, result, parent=node)
            except Exception as exc:
                logger.error(
                    "Failed to build dependency",
                    path=str(dependency.location),
                    parent=key,
                    error=str(exc),
                )
                result.failures.append(
                    BuildFailure(
                        path=str(dependency.location),
                        parent=key,
                        stage="build",
                        message=str(exc),
                    )
                )


def _location(node: ContentNode | None) -> str | None:
    return str(node.location) if node is not None else None


def build_site(settings: SiteSettings, resolver: Resolver | None = None) -> BuildResult:
    """Build the site described by ``settings``."""
    return SiteBuilder(settings, resolver).build()


__all__ = [
    "ALWAYS_IGNORED",
    "BuildFailure",
    "BuildResult",
    "ROOT_DOCUMENT",
    "SiteBuilder",
    "build_site",
    "initial_visited",
]
