"""Development server for previewing a site without building it."""

from .app import create_app

__all__ = ["create_app"]
