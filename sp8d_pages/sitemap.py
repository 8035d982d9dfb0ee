"""Render ``sitemap.xml`` and ``robots.txt`` from the navigation route tree.

The sitemap lists every page node of a built
:class:`~sp8d_pages.routes.RouteNode` tree as an absolute URL on the configured
site. The tree itself never carries trailing slashes; the public URL policy
(``trailing_slash`` and ``index`` pages mapping onto their section URL) is
applied here, at the boundary where routes become URLs.

>>> from pathlib import Path
>>> from sp8d_pages.config import load_site_config
>>> from sp8d_pages.sitemap import SitemapBuilder
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> SitemapBuilder(site, tree).run()  # doctest: +SKIP
[PosixPath('out/sitemap.xml'), PosixPath('out/robots.txt')]
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import ROBOTS_FILENAME, SITEMAP_FILENAME
from .routes import NodeKind, RouteNode, iter_nodes

if typ.TYPE_CHECKING:
    from .config import SiteConfig

INDEX_SLUG = "index"


def public_path(node: RouteNode, *, trailing_slash: bool) -> str:
    """Return the URL path a renderer publishes ``node`` under.

    Parameters
    ----------
    node : RouteNode
        Page or section node with a local route.
    trailing_slash : bool
        Append ``/`` to every path other than the site root.

    Raises
    ------
    ValueError
        If ``node`` is an external link and therefore has no local path.
    """
    if node.route is None:
        msg = f"Link node '{node.name}' has no local path."
        raise ValueError(msg)
    path = node.route
    if node.kind is NodeKind.PAGE and node.name == INDEX_SLUG:
        path = path.removesuffix(f"/{INDEX_SLUG}") or "/"
    if trailing_slash and path != "/":
        path = f"{path}/"
    return path


class SitemapBuilder:
    """Write crawler metadata for the pages in a route tree."""

    def __init__(
        self,
        site_config: SiteConfig,
        root: RouteNode,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        self.site_config = site_config
        self.root = root
        self.output_dir = output_dir or site_config.output_dir
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["xml", "xml.jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def urls(self) -> list[str]:
        """Return absolute page URLs in tree order, without duplicates."""
        urls: list[str] = []
        for node in iter_nodes(self.root):
            if node.kind is not NodeKind.PAGE:
                continue
            path = public_path(node, trailing_slash=self.site_config.trailing_slash)
            url = f"{self.site_config.site_url}{path}"
            if url not in urls:
                urls.append(url)
        return urls

    def run(self) -> list[Path]:
        """Render the sitemap, plus ``robots.txt`` when enabled."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        lastmod = dt.datetime.now(dt.UTC).isoformat(timespec="milliseconds")
        sitemap_path = self.output_dir / SITEMAP_FILENAME
        xml = self.env.get_template("sitemap.xml.jinja").render(
            entries=[{"loc": url} for url in self.urls()],
            lastmod=lastmod.replace("+00:00", "Z"),
            sitemap=self.site_config.sitemap,
        )
        sitemap_path.write_text(xml, encoding="utf-8")
        written = [sitemap_path]

        if self.site_config.sitemap.generate_robots_txt:
            robots_path = self.output_dir / ROBOTS_FILENAME
            robots = self.env.get_template("robots.txt.jinja").render(
                site_url=self.site_config.site_url,
                sitemap_url=f"{self.site_config.site_url}/{SITEMAP_FILENAME}",
            )
            robots_path.write_text(robots, encoding="utf-8")
            written.append(robots_path)
        return written


__all__ = ["SitemapBuilder", "public_path"]
