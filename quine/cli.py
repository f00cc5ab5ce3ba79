"""Command-line entry point."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import click

from .builder import SiteBuilder
from .config import SiteSettings, load_config
from .errors import QuineError
from .files.resolver import Resolver
from .lib.log import configure_logging
from .version import QUINE_VERSION


@dataclass
class AppEnv:
    config_path: Optional[Path] = None

    def settings(self) -> SiteSettings:
        try:
            return load_config(self.config_path)
        except QuineError as exc:
            raise click.ClickException(str(exc)) from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config", "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to quine.config.json (default: $QUINE_CONFIG or ./quine.config.json)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.version_option(QUINE_VERSION, prog_name="quine")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool, json_logs: bool) -> None:
    """Build a static site from the dependency graph of its index page."""
    configure_logging(verbose=verbose, json_logs=json_logs)
    ctx.obj = AppEnv(config_path=config_path)


@cli.command("build")
@click.option("--json", "as_json", is_flag=True, help="Emit a machine-readable summary")
@click.pass_obj
def build_command(env: AppEnv, as_json: bool) -> None:
    """Build the site into the configured target directory.

    \b
    Examples:
        quine build
        quine --config site/quine.config.json build
    """
    settings = env.settings()
    try:
        result = SiteBuilder(settings, Resolver()).build()
    except QuineError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        payload = {
            "written": result.written,
            "failures": [asdict(failure) for failure in result.failures],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Built {len(result.written)} files into {settings.target_dir}")
    for failure in result.failures:
        origin = f" (from {failure.parent})" if failure.parent else ""
        click.echo(f"  failed: {failure.path}{origin}: {failure.message}", err=True)


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("--port", type=int, default=None, help="Port (default from config)")
@click.pass_obj
def serve_command(env: AppEnv, host: Optional[str], port: Optional[int]) -> None:
    """Serve the source tree, compiling files on request."""
    import uvicorn

    from .server import create_app

    settings = env.settings()
    app = create_app(settings, Resolver())
    bind_host = host or settings.host
    bind_port = port or settings.port
    click.echo(f"Serving {settings.source_dir} at http://{bind_host}:{bind_port}")
    uvicorn.run(app, host=bind_host, port=bind_port, log_level="warning")


@cli.command("inspect")
@click.argument("path")
@click.pass_obj
def inspect_command(env: AppEnv, path: str) -> None:
    """Show how PATH resolves and what it depends on."""
    settings = env.settings()
    node = Resolver().resolve(path, settings)
    if node is None:
        raise click.ClickException(f"Nothing resolves to {path}")

    click.echo(f"{node.location} [{type(node).__name__}]")
    if node.derived_from is not None:
        click.echo(f"  derived from {node.derived_from.location} [{type(node.derived_from).__name__}]")
    try:
        dependencies = node.dependencies(settings)
    except QuineError as exc:
        raise click.ClickException(str(exc)) from exc
    for dependency in dependencies:
        click.echo(f"  -> {dependency.location} [{type(dependency).__name__}]")


def main() -> None:
    cli()


__all__ = ["cli", "main"]
