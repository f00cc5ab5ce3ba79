"""structlog setup shared by the CLI, the builder and the dev server."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import Processor


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger so CliRunner and capsys swaps are honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Route structlog to stderr, as console lines or JSON lines."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.INFO),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


@contextmanager
def build_context(path: str, parent: str | None = None) -> Iterator[None]:
    """Tag every log line emitted while building ``path``.

    Contexts nest with the recursion: leaving one restores the enclosing
    node's ``path`` and ``parent``.
    """
    with structlog.contextvars.bound_contextvars(path=path, parent=parent):
        yield


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


__all__ = ["build_context", "configure_logging", "get_logger"]
