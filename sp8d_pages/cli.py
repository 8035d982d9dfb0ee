"""Cyclopts CLI entrypoint for the SP8D documentation build helpers.

The ``sp8d-pages`` console script assembles the navigation route tree from the
``pages/`` content directory, writes crawler metadata for the rendered site,
and post-processes the static export to strip generator artifacts from the
rendered HTML. Typical usage runs ``sp8d-pages routes`` before rendering and
``sp8d-pages postbuild`` once the renderer has written ``out/``.

Examples
--------
Assemble the page map for the renderer:

>>> from sp8d_pages.cli import app
>>> app(["routes"])  # doctest: +SKIP

Clean a custom export directory:

>>> app(["sanitize", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, load_site_config
from .navigation import build_site_tree
from .routes import write_route_map
from .sanitizer import OutputSanitizer
from .sitemap import SitemapBuilder

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="sp8d-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(config: Path) -> SiteConfig:
    """Return the site config, falling back to defaults when the file is absent."""
    if config == DEFAULT_CONFIG and not config.exists():
        return SiteConfig()
    return load_site_config(config)


def _sanitize(site_config: SiteConfig, output_dir: Path) -> None:
    sanitizer = OutputSanitizer(
        site_config.sanitizer.rules, suffix=site_config.sanitizer.suffix
    )
    for path in sanitizer.run(output_dir):
        print(f"patched {_format_path(path)}")


def _write_sitemap(site_config: SiteConfig, output_dir: Path, *, lenient: bool) -> None:
    tree = build_site_tree(site_config, strict=False if lenient else None)
    for path in SitemapBuilder(site_config, tree, output_dir=output_dir).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Assemble the navigation route tree and write the page map.")
def routes(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    content_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the content folder", env_var="INPUT_CONTENT_DIR"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the page map path", env_var="INPUT_OUTPUT"),
    ] = None,
    lenient: typ.Annotated[
        bool, Parameter(help="Omit declared slugs that have no page or section")
    ] = False,
) -> None:
    """Build the route tree and persist it as JSON for the renderer.

    Parameters
    ----------
    config : Path, optional
        Path to ``site.yaml``; defaults apply when the default path is absent.
    content_dir : Path or None, optional
        Content directory override (``_meta.yaml`` files and Markdown pages).
    output : Path or None, optional
        Page map destination override.
    lenient : bool, optional
        Skip unresolved slugs instead of failing the build.

    Raises
    ------
    RouteTreeError
        If a declared slug has no page or section and ``lenient`` is unset.
    """
    site_config = _load_config(config)
    if content_dir is not None:
        site_config.content_dir = content_dir
    tree = build_site_tree(site_config, strict=False if lenient else None)
    written = write_route_map(tree, output or site_config.route_map)
    print(f"wrote {_format_path(written)}")


@app.command(help="Strip generator artifacts from rendered HTML files.")
def sanitize(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the export folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Rewrite every rendered file in place and list the patched paths.

    Raises
    ------
    FileNotFoundError
        If the export directory does not exist.
    OSError
        On the first file that cannot be read or written.
    """
    site_config = _load_config(config)
    _sanitize(site_config, output_dir or site_config.output_dir)


@app.command(help="Write sitemap.xml and robots.txt for the rendered site.")
def sitemap(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the export folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    lenient: bool = False,
) -> None:
    """Write crawler metadata for every page in the route tree."""
    site_config = _load_config(config)
    _write_sitemap(site_config, output_dir or site_config.output_dir, lenient=lenient)


@app.command(help="Run the post-render steps: sitemap, then sanitize.")
def postbuild(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the export folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    lenient: bool = False,
) -> None:
    """Write crawler metadata and then sanitize the rendered export."""
    site_config = _load_config(config)
    target = output_dir or site_config.output_dir
    _write_sitemap(site_config, target, lenient=lenient)
    _sanitize(site_config, target)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sp8d-pages`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
