"""Tests for the SitePath value type."""

from __future__ import annotations

import pytest

from quine.paths import SitePath


class TestCreate:
    """Normalization on construction."""

    def test_relative_input_is_anchored_at_base(self):
        """Relative paths resolve against the given base."""
        assert str(SitePath.create("a/b.txt", "/srv/site")) == "/srv/site/a/b.txt"

    def test_dot_segments_are_collapsed(self):
        """Different spellings of one location compare equal."""
        assert SitePath.create("/srv/./site/x/../index.html") == SitePath.create("/srv/site/index.html")

    def test_double_leading_slash_collapsed(self):
        assert str(SitePath.create("//srv/site")) == "/srv/site"

    def test_relative_without_base_uses_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert SitePath.create("page.md") == SitePath.create(str(tmp_path / "page.md"))

    def test_create_is_idempotent_for_sitepath(self):
        path = SitePath.create("/a/b")
        assert SitePath.create(path) is path

    def test_immutable(self):
        path = SitePath.create("/a")
        with pytest.raises(AttributeError):
            path._value = "/b"  # type: ignore[misc]


class TestDerivation:
    """join / parent / extension helpers."""

    def test_join_treats_leading_slash_as_relative(self):
        """join('/index.html') appends rather than resetting to root."""
        assert str(SitePath.create("/srv/site").join("/index.html")) == "/srv/site/index.html"

    def test_parent_and_name(self):
        path = SitePath.create("/srv/site/css/style.scss")
        assert str(path.parent) == "/srv/site/css"
        assert path.name == "style.scss"
        assert path.stem == "style"

    def test_parent_of_root_is_root(self):
        assert str(SitePath.create("/").parent) == "/"

    def test_extension_is_lowercase_without_dot(self):
        assert SitePath.create("/a/Photo.JPG").extension == "jpg"

    def test_extension_empty_when_missing(self):
        assert SitePath.create("/a/Makefile").extension == ""

    def test_with_extension(self):
        path = SitePath.create("/a/style.scss")
        assert str(path.with_extension("css")) == "/a/style.css"
        assert str(path.with_extension("")) == "/a/style"

    def test_relative_to(self):
        root = SitePath.create("/srv/site")
        assert SitePath.create("/srv/site/a/b.md").relative_to(root) == "a/b.md"
        assert root.relative_to(root) == ""

    def test_relative_to_outside_raises(self):
        with pytest.raises(ValueError):
            SitePath.create("/srv/other/a").relative_to(SitePath.create("/srv/site"))

    def test_is_within_requires_segment_boundary(self):
        """/srv/site-old is not inside /srv/site."""
        root = SitePath.create("/srv/site")
        assert not SitePath.create("/srv/site-old/a").is_within(root)
        assert SitePath.create("/srv/site/a").is_within(root)


class TestFilesystem:
    """Reading and writing through SitePath."""

    def test_write_text_creates_parents(self, tmp_path):
        target = SitePath.create(str(tmp_path)).join("deep", "nested", "file.txt")
        target.write_text("hello")
        assert (tmp_path / "deep" / "nested" / "file.txt").read_text() == "hello"

    def test_iterdir_is_sorted(self, tmp_path):
        for name in ("b.txt", "a.txt", "c"):
            (tmp_path / name).write_text("x")
        names = [p.name for p in SitePath.create(str(tmp_path)).iterdir()]
        assert names == ["a.txt", "b.txt", "c"]

    def test_hash_and_ordering_follow_string(self):
        a, b = SitePath.create("/a"), SitePath.create("/b")
        assert a < b
        assert {a, SitePath.create("/a/../a")} == {a}
