"""Markdown documents, compiled to HTML pages.

Rendering uses markdown-it (commonmark plus tables) with Pygments for
fenced code, front matter for page metadata, and a Jinja2 page shell.
Relative links to other Markdown files are rewritten to their ``.html``
counterparts, so the built site links to the compiled pages.
"""

from __future__ import annotations

import posixpath
from functools import lru_cache
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import frontmatter
from jinja2 import DictLoader, Environment, select_autoescape
from markdown_it import MarkdownIt
from markdown_it.token import Token
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .base import ContentNode
from .html import HtmlFile
from .references import is_external

MARKDOWN_EXTENSIONS = frozenset({"md", "markdown"})

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{{ title }}{% if site_name %} | {{ site_name }}{% endif %}</title>
  <style>
    body {
      font-family: system-ui, Segoe UI, Roboto, sans-serif;
      max-width: 860px;
      margin: 2rem auto;
      line-height: 1.6;
      padding: 0 1rem;
    }
    pre { padding: 1rem; overflow-x: auto; border-radius: 0.5rem; background: #f6f8fa; }
    code { font-family: ui-monospace, Menlo, monospace; }
    {{ highlight_css|safe }}
  </style>
</head>
<body>
  <main>
    {{ body|safe }}
  </main>
</body>
</html>
"""


def _highlight(code: str, lang: str, _attrs: Any) -> str:
    if not lang:
        return ""
    try:
        lexer = get_lexer_by_name(lang)
    except ClassNotFound:
        return ""
    return highlight(code, lexer, HtmlFormatter(nowrap=True))


@lru_cache(maxsize=1)
def _highlight_css() -> str:
    return HtmlFormatter().get_style_defs("pre code")


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=DictLoader({"page.html": PAGE_TEMPLATE}),
        autoescape=select_autoescape(["html"]),
    )


def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark", {"html": True, "highlight": _highlight}).enable("table")


def markdown_href(href: str) -> str:
    """Point a relative ``.md`` link at the compiled ``.html`` page."""
    if is_external(href):
        return href
    parts = urlsplit(href)
    base, ext = posixpath.splitext(parts.path)
    if ext[1:].lower() not in MARKDOWN_EXTENSIONS:
        return href
    return urlunsplit(parts._replace(path=f"{base}.html"))


def _walk(tokens: list[Token]):
    for token in tokens:
        yield token
        if token.children:
            yield from _walk(token.children)


def _rewrite_links(tokens: list[Token]) -> list[str]:
    """Rewrite link targets in place and return every link/image target."""
    refs: list[str] = []
    for token in _walk(tokens):
        if token.type == "link_open":
            href = token.attrGet("href")
            if isinstance(href, str):
                href = markdown_href(href)
                token.attrSet("href", href)
                refs.append(href)
        elif token.type == "image":
            src = token.attrGet("src")
            if isinstance(src, str):
                refs.append(src)
    return refs


def _first_heading(tokens: list[Token]) -> str | None:
    for index, token in enumerate(tokens):
        if token.type == "heading_open" and token.tag == "h1" and index + 1 < len(tokens):
            return tokens[index + 1].content.strip() or None
    return None


class MarkdownFile(ContentNode):
    """Markdown source; ``html()`` exposes the rendered page."""

    filetypes = ("md", "markdown")
    targets = ("html",)
    mime_type = "text/markdown"

    def document(self) -> frontmatter.Post:
        return frontmatter.loads(self.text())

    def references(self) -> list[str]:
        tokens = _parser().parse(self.document().content)
        return _rewrite_links(tokens)

    def render(self) -> str:
        """Render the document body into the page template."""
        post = self.document()
        md = _parser()
        tokens = md.parse(post.content)
        _rewrite_links(tokens)
        body = md.renderer.render(tokens, md.options, {})
        title = post.metadata.get("title") or _first_heading(tokens) or self.location.stem
        template = _environment().get_template("page.html")
        return template.render(
            title=str(title),
            site_name=self.settings.site_name,
            body=body,
            highlight_css=_highlight_css(),
        )

    def html(self) -> HtmlFile:
        return self.derive(lambda source: source.render(), "html")  # type: ignore[return-value]


__all__ = ["MarkdownFile", "markdown_href"]
