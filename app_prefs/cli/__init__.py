"""
Command-Line Interface.

This package exposes the `app-prefs` tool for inspecting and editing a JSON
preference file.
"""

from .app import app

__all__ = ["app"]
