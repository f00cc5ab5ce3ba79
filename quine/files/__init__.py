"""Content variants, the type registry and the resolver."""

from .base import ContentNode, Derivation, Served, derive
from .binary import BinaryFile
from .css import CssFile
from .directory import DirectoryNode
from .html import HtmlFile
from .javascript import JavaScriptFile
from .markdown import MarkdownFile
from .registry import DEFAULT_VARIANTS, HandlerDescriptor, TypeRegistry
from .resolver import Resolver
from .scss import ScssFile
from .text import TextFile
from .typescript import TypeScriptFile

__all__ = [
    "DEFAULT_VARIANTS",
    "BinaryFile",
    "ContentNode",
    "CssFile",
    "Derivation",
    "DirectoryNode",
    "HandlerDescriptor",
    "HtmlFile",
    "JavaScriptFile",
    "MarkdownFile",
    "Resolver",
    "ScssFile",
    "Served",
    "TextFile",
    "TypeRegistry",
    "TypeScriptFile",
    "derive",
]
