"""CLI commands module."""

from . import config, copy, folders, init, search

__all__ = ["init", "search", "copy", "folders", "config"]
