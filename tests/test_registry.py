"""Tests for the extension registry and the compile map."""

from __future__ import annotations

import pytest

from quine.errors import RegistryError
from quine.files import (
    CssFile,
    DirectoryNode,
    HtmlFile,
    MarkdownFile,
    ScssFile,
    TextFile,
    TypeScriptFile,
)
from quine.files.base import ContentNode
from quine.files.registry import DEFAULT_VARIANTS, HandlerDescriptor, TypeRegistry


class FooFile(ContentNode):
    filetypes = ("foo",)


class OtherFooFile(ContentNode):
    filetypes = ("bar", "foo")


class BrokenTargetFile(ContentNode):
    filetypes = ("brk",)
    targets = ("css",)


class TestRegister:
    """Registration invariants."""

    def test_collision_raises(self):
        """Two handlers claiming 'foo' abort construction."""
        with pytest.raises(RegistryError, match="'foo'"):
            TypeRegistry([FooFile, OtherFooFile])

    def test_collision_leaves_registry_untouched(self):
        """A rejected handler registers none of its extensions."""
        registry = TypeRegistry([FooFile])
        with pytest.raises(RegistryError):
            registry.register(OtherFooFile)
        assert "bar" not in registry

    def test_target_without_method_raises(self):
        with pytest.raises(RegistryError, match="no 'css\\(\\)' method"):
            TypeRegistry([BrokenTargetFile])

    def test_register_after_compile_map_built_raises(self):
        registry = TypeRegistry([ScssFile])
        registry.compile_sources_for("css")
        with pytest.raises(RegistryError):
            registry.register(FooFile)

    def test_descriptor_normalizes_extensions(self):
        descriptor = HandlerDescriptor(variant=FooFile, filetypes=("foo",))
        registry = TypeRegistry([descriptor])
        assert registry.lookup(".FOO") is FooFile

    def test_default_registry_has_no_collisions(self):
        registry = TypeRegistry.default()
        assert len(registry.descriptors()) == len(DEFAULT_VARIANTS)


class TestLookup:
    """Extension lookup."""

    def test_registered_extension(self):
        registry = TypeRegistry.default()
        assert registry.lookup("html") is HtmlFile
        assert registry.lookup("scss") is ScssFile
        assert registry.lookup("dir") is DirectoryNode

    def test_unknown_extension_falls_back_to_text(self):
        registry = TypeRegistry.default()
        assert registry.lookup("unknownext") is TextFile
        assert registry.lookup("") is TextFile

    def test_custom_fallback(self):
        registry = TypeRegistry([], fallback=FooFile)
        assert registry.lookup("anything") is FooFile


class TestCompileSources:
    """Target extension to source extensions."""

    def test_css_sources(self):
        assert TypeRegistry.default().compile_sources_for("css") == ("scss", "sass")

    def test_js_sources(self):
        assert TypeRegistry.default().compile_sources_for("js") == ("ts", "tsx")

    def test_html_sources_in_registration_order(self):
        """Markdown is registered before directories, so it is tried first."""
        assert TypeRegistry.default().compile_sources_for("html") == ("md", "markdown", "dir")

    def test_registration_order_is_respected(self):
        registry = TypeRegistry([DirectoryNode, MarkdownFile])
        assert registry.compile_sources_for("html") == ("dir", "md", "markdown")

    def test_unknown_target_is_empty(self):
        assert TypeRegistry.default().compile_sources_for("png") == ()

    def test_plain_types_declare_no_targets(self):
        registry = TypeRegistry([CssFile, TypeScriptFile])
        assert registry.compile_sources_for("css") == ()
