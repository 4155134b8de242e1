"""Render Markdown wiki pages into HTML.

This package exposes the ``wiki-pages`` CLI that renders single pages, source
files, the generated site index and search results, and exports a whole wiki
as static HTML.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that configures logging and invokes the app.

Examples
--------
>>> from wiki_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
