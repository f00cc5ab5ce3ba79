"""Tests for logging setup and build context."""

from __future__ import annotations

import json

import pytest
import structlog

from quine.builder import build_site
from quine.files.base import ContentNode
from quine.files.registry import DEFAULT_VARIANTS, TypeRegistry
from quine.files.resolver import Resolver
from quine.lib.log import build_context, configure_logging, get_logger


class UnparseableFile(ContentNode):
    filetypes = ("broken",)

    def references(self):
        raise ValueError("unbalanced tag")


@pytest.fixture
def json_logs():
    configure_logging(verbose=True, json_logs=True)
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def _events(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.startswith("{")]


class TestBuildContext:
    def test_binds_and_restores(self):
        with build_context("/site/a.html", "/site/index.html"):
            assert structlog.contextvars.get_contextvars() == {
                "path": "/site/a.html",
                "parent": "/site/index.html",
            }
            with build_context("/site/b.css", "/site/a.html"):
                assert structlog.contextvars.get_contextvars()["path"] == "/site/b.css"
            assert structlog.contextvars.get_contextvars()["path"] == "/site/a.html"
        assert structlog.contextvars.get_contextvars() == {}

    def test_json_lines_carry_context(self, json_logs, capsys):
        with build_context("/site/a.html"):
            get_logger("test").info("hello", extra=1)
        (event,) = [e for e in _events(capsys.readouterr().err) if e["event"] == "hello"]
        assert event["path"] == "/site/a.html"
        assert event["level"] == "info"
        assert event["extra"] == 1

    def test_failure_logged_with_node_and_parent(self, json_logs, capsys, write_files, settings):
        write_files({"index.html": '<a href="x.broken"></a>', "x.broken": "<"})
        registry = TypeRegistry([*DEFAULT_VARIANTS, UnparseableFile])
        build_site(settings, Resolver(registry))
        events = _events(capsys.readouterr().err)
        (warning,) = [e for e in events if e["event"] == "Failed to get dependencies"]
        assert warning["path"].endswith("x.broken")
        assert warning["parent"].endswith("index.html")
        assert warning["error"] == "unbalanced tag"


def test_verbose_flag_controls_debug(capsys):
    configure_logging(verbose=False)
    try:
        get_logger("test").debug("hidden")
        get_logger("test").info("shown")
    finally:
        structlog.reset_defaults()
    err = capsys.readouterr().err
    assert "shown" in err
    assert "hidden" not in err
