import re
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quine.config import settings_from_mapping
from quine.files import typescript as typescript_module
from quine.files.resolver import Resolver
from quine.files.registry import TypeRegistry

_TYPE_ANNOTATION_RE = re.compile(r":\s*(string|number|boolean|void)\b")


def fake_transpile(source: str, *, loader: str = "ts", filename: str | None = None) -> str:
    """Deterministic stand-in for esbuild: strips simple annotations."""
    return _TYPE_ANNOTATION_RE.sub("", source)


@pytest.fixture(autouse=True)
def no_esbuild(monkeypatch):
    """Tests never shell out to esbuild."""
    monkeypatch.setattr(typescript_module, "transpile_typescript", fake_transpile)


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "site"
    path.mkdir()
    return path


@pytest.fixture
def write_files(source_dir):
    """Write ``{relative_path: content}`` into the source tree."""

    def _write(files: dict[str, str | bytes]) -> Path:
        for relative, content in files.items():
            target = source_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return source_dir

    return _write


@pytest.fixture
def settings(source_dir, tmp_path):
    return settings_from_mapping(
        {
            "siteName": "Test Site",
            "sourceDir": str(source_dir),
            "targetDir": str(tmp_path / "out"),
            "ignorePaths": [],
        }
    )


@pytest.fixture
def resolver():
    return Resolver(TypeRegistry.default())


@pytest.fixture
def out_files(settings):
    """Relative paths of every file currently under the target directory."""

    def _list() -> set[str]:
        root = Path(str(settings.target_dir))
        if not root.exists():
            return set()
        return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}

    return _list
