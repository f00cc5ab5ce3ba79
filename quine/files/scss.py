"""SCSS/Sass stylesheets compiled to CSS with libsass."""

from __future__ import annotations

import sass

from quine.errors import CompileError

from .base import ContentNode
from .css import CssFile


def compile_scss(source: str, include_dir: str, *, indented: bool = False) -> str:
    """Compile Sass source to CSS.

    Raises:
        CompileError: if libsass rejects the input.
    """
    try:
        return sass.compile(
            string=source,
            include_paths=[include_dir],
            indented=indented,
            output_style="expanded",
        )
    except sass.CompileError as exc:
        raise CompileError(str(exc)) from exc


def scss_to_css(node: ContentNode) -> str:
    return compile_scss(
        node.text(),
        str(node.location.parent),
        indented=node.location.extension == "sass",
    )


class ScssFile(ContentNode):
    """Sass source; ``css()`` exposes the compiled stylesheet.

    Imports are inlined by the compiler, so the source itself references
    nothing. The compiled CssFile reports whatever url() values survive.
    """

    filetypes = ("scss", "sass")
    targets = ("css",)
    mime_type = "text/x-scss"

    def css(self) -> CssFile:
        return self.derive(scss_to_css, "css")  # type: ignore[return-value]


__all__ = ["ScssFile", "compile_scss", "scss_to_css"]
