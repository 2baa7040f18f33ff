"""Assemble pattern-library toolkits from layouts, materials, views, and docs.

This package exposes the CLI entry points used by the ``toolkit-pages``
console script.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from toolkit_pages import main
>>> main()  # doctest: +SKIP
>>> from toolkit_pages import app
>>> "toolkit-pages" in app.name
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
