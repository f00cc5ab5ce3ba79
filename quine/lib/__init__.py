"""Shared helpers used across the quine package."""
