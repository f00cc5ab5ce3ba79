"""Quine error hierarchy.

All project exceptions inherit from QuineError, enabling:
- ``except QuineError`` at top-level boundaries (CLI, dev server)
- Fine-grained catches deeper in the stack (``except CompileError``)

Hierarchy:
    QuineError
    ├── ConfigError               config file unreadable or malformed
    ├── RegistryError             two handlers claim one extension
    ├── SettingsMismatchError     node reused under another settings snapshot
    ├── CompileError              a source-to-target transform failed
    └── BuildError                output could not be written / no root entry

A path that resolves to nothing is not an error: the resolver returns
``None`` and the caller decides.
"""

from __future__ import annotations


class QuineError(Exception):
    """Base class for all quine errors."""


class ConfigError(QuineError):
    """Configuration could not be loaded."""


class RegistryError(QuineError):
    """The type registry could not be constructed."""


class SettingsMismatchError(QuineError):
    """A content node was asked to act under settings it was not created with."""


class CompileError(QuineError):
    """A source file could not be compiled into its target type."""


class BuildError(QuineError):
    """Fatal build failure."""


__all__ = [
    "BuildError",
    "CompileError",
    "ConfigError",
    "QuineError",
    "RegistryError",
    "SettingsMismatchError",
]
