from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError
from .lib.log import get_logger
from .paths import SitePath

logger = get_logger(__name__)

DEFAULT_CONFIG_NAME = "quine.config.json"

DEFAULTS: dict[str, Any] = {
    "siteName": "My Quine Site",
    "url": "http://localhost:4242",
    "host": "127.0.0.1",
    "port": 4242,
    "websocketPath": "/__devsocket",
    "sourceDir": "./",
    "targetDir": "./docs",
    "ignorePaths": [".git", "node_modules"],
}


@dataclass(frozen=True)
class SiteSettings:
    """Build configuration snapshot.

    Content nodes keep the settings they were created under; the build
    engine never mutates them. Use ``dataclasses.replace`` for variants.
    """

    source_dir: SitePath
    target_dir: SitePath
    site_name: str = DEFAULTS["siteName"]
    url: str = DEFAULTS["url"]
    ignore_paths: tuple[str, ...] = field(default_factory=tuple)
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]
    websocket_path: str = DEFAULTS["websocketPath"]

    def output_path(self, location: SitePath) -> SitePath:
        """Map a source location onto the mirrored location under target_dir."""
        return self.target_dir.join(location.relative_to(self.source_dir))

    def as_dict(self) -> dict:
        return {
            "siteName": self.site_name,
            "url": self.url,
            "host": self.host,
            "port": self.port,
            "websocketPath": self.websocket_path,
            "sourceDir": str(self.source_dir),
            "targetDir": str(self.target_dir),
            "ignorePaths": list(self.ignore_paths),
        }


def _config_path(explicit: Optional[Path] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    env_path = os.environ.get("QUINE_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _read_config_file(path: Path) -> dict:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to load config from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config at {path} must be a JSON object")
    return payload


def settings_from_mapping(raw: dict, *, base: SitePath | None = None) -> SiteSettings:
    """Build settings from a camelCase mapping, filling in defaults.

    Relative ``sourceDir``/``targetDir`` resolve against ``base``; relative
    ignore paths resolve against the source directory.
    """
    merged = {**DEFAULTS, **raw}
    source_dir = SitePath.create(str(merged["sourceDir"]), base)
    target_dir = SitePath.create(str(merged["targetDir"]), base)
    ignore_paths = tuple(
        str(SitePath.create(str(entry), source_dir)) for entry in merged.get("ignorePaths") or []
    )
    return SiteSettings(
        source_dir=source_dir,
        target_dir=target_dir,
        site_name=str(merged["siteName"]),
        url=str(merged["url"]).rstrip("/"),
        ignore_paths=ignore_paths,
        host=str(merged["host"]),
        port=int(merged["port"]),
        websocket_path=str(merged["websocketPath"]),
    )


def load_config(path: Optional[Path] = None) -> SiteSettings:
    """Load settings from quine.config.json, or defaults when there is none.

    Lookup order: explicit ``path``, ``$QUINE_CONFIG``, then the current
    directory. A file that exists but cannot be parsed raises ConfigError.
    """
    config_path = _config_path(path)
    if config_path.exists():
        raw = _read_config_file(config_path)
        base = SitePath.create(config_path.resolve().parent)
        logger.info("Loaded configuration", path=str(config_path))
    else:
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        raw = {}
        base = SitePath.create(Path.cwd())
        logger.info("No config file found, using defaults", path=str(config_path))
    return settings_from_mapping(raw, base=base)


__all__ = [
    "DEFAULTS",
    "DEFAULT_CONFIG_NAME",
    "SiteSettings",
    "load_config",
    "settings_from_mapping",
]
