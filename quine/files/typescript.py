"""TypeScript modules transpiled to JavaScript with esbuild."""

from __future__ import annotations

import shutil
import subprocess

from quine.errors import CompileError

from .base import ContentNode
from .javascript import JavaScriptFile

ESBUILD = "esbuild"


def transpile_typescript(source: str, *, loader: str = "ts", filename: str | None = None) -> str:
    """Strip types from TypeScript source, keeping ES module syntax.

    Raises:
        CompileError: if esbuild is missing or rejects the input.
    """
    executable = shutil.which(ESBUILD)
    if executable is None:
        raise CompileError(f"{ESBUILD} not found on PATH; cannot compile {filename or 'TypeScript'}")
    cmd = [executable, f"--loader={loader}", "--format=esm", "--target=esnext", "--log-level=error"]
    if filename:
        cmd.append(f"--sourcefile={filename}")
    try:
        proc = subprocess.run(
            cmd,
            input=source,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        raise CompileError(exc.stderr.strip() or f"{ESBUILD} exited with {exc.returncode}") from exc
    return proc.stdout


def ts_to_js(node: ContentNode) -> str:
    loader = "tsx" if node.location.extension == "tsx" else "ts"
    return transpile_typescript(node.text(), loader=loader, filename=node.location.name)


class TypeScriptFile(ContentNode):
    filetypes = ("ts", "tsx")
    targets = ("js",)
    mime_type = "text/x-typescript"

    def js(self) -> JavaScriptFile:
        return self.derive(ts_to_js, "js")  # type: ignore[return-value]


__all__ = ["TypeScriptFile", "transpile_typescript", "ts_to_js"]
