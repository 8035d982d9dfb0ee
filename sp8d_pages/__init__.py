"""Build helpers for the SP8D documentation site.

This package assembles the navigation route tree consumed by the site
renderer and post-processes the static export once rendering is done.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sp8d_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
